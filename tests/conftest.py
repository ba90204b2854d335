"""
Pytest fixtures: in-memory collection, test settings, test client, log capture.
"""

import logging
from typing import Any

import pytest
from bson import ObjectId
from bson.errors import InvalidBSON
from fastapi.testclient import TestClient
from pymongo.errors import OperationFailure
from pymongo.results import InsertOneResult

from core.config import Settings
from main import create_app
from utils.logging import get_logger


class FakeCursor:
    """Iterable cursor stand-in; optionally fails while iterating."""

    def __init__(self, documents: list[dict[str, Any]], error: Exception | None = None):
        self._documents = documents
        self._error = error
        self.closed = False

    def __iter__(self):
        if self._error is not None:
            raise self._error
        return iter(self._documents)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True
        return False


class FakeCollection:
    """
    Minimal in-memory stand-in for pymongo Collection.
    Set fail_find / fail_iterate / fail_insert to simulate driver errors.
    """

    def __init__(self) -> None:
        self.documents: list[dict[str, Any]] = []
        self.cursors: list[FakeCursor] = []
        self.fail_find: Exception | None = None
        self.fail_iterate: Exception | None = None
        self.fail_insert: Exception | None = None

    def find(self, filter: dict[str, Any]) -> FakeCursor:
        assert filter == {}
        if self.fail_find is not None:
            raise self.fail_find
        cursor = FakeCursor([dict(d) for d in self.documents], self.fail_iterate)
        self.cursors.append(cursor)
        return cursor

    def insert_one(self, document: dict[str, Any]) -> InsertOneResult:
        if self.fail_insert is not None:
            raise self.fail_insert
        document.setdefault("_id", ObjectId())
        self.documents.append(dict(document))
        return InsertOneResult(document["_id"], acknowledged=True)


@pytest.fixture
def settings() -> Settings:
    return Settings(MONGODB_URI="mongodb://localhost:27017", _env_file=None)


@pytest.fixture
def collection() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def client(collection: FakeCollection, settings: Settings) -> TestClient:
    """Test client wired to the in-memory collection."""
    return TestClient(create_app(collection, settings))


@pytest.fixture
def query_error() -> Exception:
    return OperationFailure("not authorized on students to execute command")


@pytest.fixture
def decode_error() -> Exception:
    return InvalidBSON("bad document length")


class _ListHandler(logging.Handler):
    def __init__(self, records: list[logging.LogRecord]):
        super().__init__()
        self.records = records

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def log_records():
    """
    Return a function that starts collecting records from a named app logger.
    App loggers do not propagate, so caplog cannot see them.
    """
    attached: list[tuple[logging.Logger, logging.Handler]] = []

    def collect(name: str) -> list[logging.LogRecord]:
        logger = get_logger(name)
        records: list[logging.LogRecord] = []
        handler = _ListHandler(records)
        logger.addHandler(handler)
        attached.append((logger, handler))
        return records

    yield collect
    for logger, handler in attached:
        logger.removeHandler(handler)
