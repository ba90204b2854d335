"""
Middleware: per-request access logging and CORS.
Order matters: access logging wraps everything, including CORS preflights.
"""

import time
from typing import Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from core.config import Settings
from utils.logging import get_logger

logger = get_logger(__name__)

CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE"]
CORS_ALLOW_HEADERS = ["Origin", "Content-Type"]

SLOW_REQUEST_MS = 500


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request with status and duration.
    Slow requests are logged at WARNING, failed ones at ERROR.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # The recovery handler answers 500 further out; log it here too.
            _log_request(request, status.HTTP_500_INTERNAL_SERVER_ERROR, start)
            raise
        _log_request(request, response.status_code, start)
        return response


def _log_request(request: Request, status_code: int, start: float) -> None:
    duration_ms = round((time.perf_counter() - start) * 1000, 2)
    fields = {
        "method": request.method,
        "path": request.url.path,
        "status": status_code,
        "duration_ms": duration_ms,
        "client_ip": request.client.host if request.client else "unknown",
    }
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("request", extra=fields)
    elif duration_ms > SLOW_REQUEST_MS:
        logger.warning("slow_request", extra=fields)
    else:
        logger.info("request", extra=fields)


def install_middleware(app: FastAPI, settings: Settings) -> None:
    """Attach CORS (static allow-list) and request logging."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
        allow_credentials=True,
    )
    app.add_middleware(RequestLoggingMiddleware)
