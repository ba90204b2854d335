"""
MongoDB connection: one client per process, verified with a ping at startup.
The returned collection handle is shared by all request handlers; pymongo
pools connections internally and is safe for concurrent use.
"""

import pymongo
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from core.config import Settings
from core.exceptions import DatabaseUnavailableError
from utils.logging import get_logger

logger = get_logger(__name__)

DATABASE_NAME = "students"
COLLECTION_NAME = "theirdata"

PING_TIMEOUT_SECONDS = 15


def connect_students_collection(settings: Settings) -> Collection:
    """
    Connect, ping the primary, and return the students collection.
    Raises DatabaseUnavailableError if the client cannot be built or the
    ping fails within PING_TIMEOUT_SECONDS.
    """
    try:
        client: MongoClient = MongoClient(settings.MONGODB_URI, server_api=ServerApi("1"))
    except PyMongoError as exc:
        logger.error("mongodb_connection_error", extra={"error": str(exc)})
        raise DatabaseUnavailableError(f"MongoDB connection error: {exc}") from exc

    try:
        with pymongo.timeout(PING_TIMEOUT_SECONDS):
            client.admin.command("ping")
    except PyMongoError as exc:
        logger.error("mongodb_ping_failed", extra={"error": str(exc)})
        client.close()
        raise DatabaseUnavailableError(f"MongoDB ping failed: {exc}") from exc

    logger.info("Pinged your deployment. You successfully connected to MongoDB!")
    return client[DATABASE_NAME][COLLECTION_NAME]


def close_client(collection: Collection) -> None:
    """Close the client owning this collection."""
    collection.database.client.close()
    logger.info("mongodb_client_closed")
