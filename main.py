"""
Application entry point. FastAPI app with middleware and routers.
Run: python main.py  (or the students-api console script)
"""

import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.collection import Collection

from api.routes import students_router
from core.config import Settings, get_settings, load_settings
from core.database import close_client, connect_students_collection
from core.exceptions import StartupError, StudentsAPIError
from core.middleware import install_middleware
from services.student_service import StudentService
from utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info(
        "startup",
        extra={
            "app": settings.APP_NAME,
            "env": settings.ENVIRONMENT,
            "port": settings.PORT,
            "log_level": settings.LOG_LEVEL,
        },
    )
    yield
    logger.info("shutdown", extra={"app": settings.APP_NAME})


def binding_error_text(exc: RequestValidationError) -> str:
    """Flatten pydantic errors to 'field: message' entries joined by '; '."""
    parts = []
    for error in exc.errors():
        field = ".".join(str(x) for x in error["loc"] if x != "body")
        parts.append(f"{field}: {error['msg']}" if field else error["msg"])
    return "; ".join(parts)


def create_app(collection: Collection, settings: Settings | None = None) -> FastAPI:
    """
    Factory for FastAPI app. The collection handle is injected here so tests
    can pass an in-memory stand-in.
    """
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.APP_NAME,
        description="Students REST API backed by MongoDB",
        version="1.0.0",
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.student_service = StudentService(collection)

    install_middleware(app, settings)

    app.include_router(students_router)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": binding_error_text(exc)},
        )

    @app.exception_handler(StudentsAPIError)
    async def students_api_exception_handler(request: Request, exc: StudentsAPIError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("unhandled_exception", extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    return app


def main() -> None:
    """Load config, connect and ping MongoDB, then serve. Exits 1 on startup failure."""
    try:
        settings = load_settings()
        collection = connect_students_collection(settings)
    except StartupError as exc:
        logger.critical("startup_failed", extra={"error": str(exc)})
        sys.exit(1)

    app = create_app(collection, settings)
    try:
        uvicorn.run(
            app,
            host=settings.HOST,
            port=settings.PORT,
            log_level=settings.LOG_LEVEL.lower(),
        )
    finally:
        close_client(collection)


if __name__ == "__main__":
    main()
