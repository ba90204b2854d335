"""
Error taxonomy: fatal startup errors and per-request downstream errors.
Request errors carry their status code and the fixed message sent to clients.
"""

from fastapi import status


class StartupError(Exception):
    """Raised only during process startup; the entry point logs it and exits."""


class ConfigurationError(StartupError):
    """Required configuration is missing or invalid."""


class DatabaseUnavailableError(StartupError):
    """The database could not be reached at startup."""


class StudentsAPIError(Exception):
    """Base for errors rendered as {"error": message}. Cause is never exposed."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class FetchDocumentsError(StudentsAPIError):
    message = "Failed to fetch documents"


class DecodeDocumentsError(StudentsAPIError):
    message = "Failed to decode documents"


class InsertDocumentError(StudentsAPIError):
    message = "Failed to insert document"
