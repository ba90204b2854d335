"""
Student persistence: list and create against one MongoDB collection.
Each call runs under its own pymongo.timeout scope; nothing is retried.
"""

import base64
from typing import Any

import pymongo
from bson import Binary, Decimal128, ObjectId
from bson.errors import InvalidBSON
from fastapi.encoders import jsonable_encoder
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from core.exceptions import DecodeDocumentsError, FetchDocumentsError, InsertDocumentError
from models.schemas import Document, StudentCreate
from utils.logging import get_logger

logger = get_logger(__name__)

LIST_TIMEOUT_SECONDS = 10
INSERT_TIMEOUT_SECONDS = 5


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


# ObjectId renders as its hex string, binary data as base64, decimals as text.
_BSON_ENCODERS = {
    ObjectId: str,
    Binary: _b64,
    bytes: _b64,
    Decimal128: str,
}


class StudentService:
    """
    Thin wrapper around the shared collection handle.
    Built once at app creation; holds no per-request state.
    """

    def __init__(self, collection: Collection):
        self._collection = collection

    def list_documents(self) -> list[Document]:
        """
        Return every stored document, JSON-ready, in cursor order.
        Raises FetchDocumentsError or DecodeDocumentsError.
        """
        with pymongo.timeout(LIST_TIMEOUT_SECONDS):
            try:
                cursor = self._collection.find({})
            except PyMongoError as exc:
                logger.warning("find_failed", extra={"error": str(exc)})
                raise FetchDocumentsError() from exc
            with cursor:
                try:
                    documents: list[Document] = list(cursor)
                except InvalidBSON as exc:
                    logger.warning("decode_failed", extra={"error": str(exc)})
                    raise DecodeDocumentsError() from exc
                except PyMongoError as exc:
                    logger.warning("find_failed", extra={"error": str(exc)})
                    raise FetchDocumentsError() from exc
        return _encode_documents(documents)

    def create(self, student: StudentCreate) -> Any:
        """Insert one student; return the database-assigned _id."""
        document = student.model_dump()
        with pymongo.timeout(INSERT_TIMEOUT_SECONDS):
            try:
                result = self._collection.insert_one(document)
            except PyMongoError as exc:
                logger.warning("insert_failed", extra={"error": str(exc)})
                raise InsertDocumentError() from exc
        logger.info("student_inserted", extra={"inserted_id": str(result.inserted_id)})
        return result.inserted_id


def _encode_documents(documents: list[Document]) -> list[Document]:
    try:
        return jsonable_encoder(documents, custom_encoder=_BSON_ENCODERS)
    except (TypeError, ValueError) as exc:
        logger.warning("decode_failed", extra={"error": str(exc)})
        raise DecodeDocumentsError() from exc
