"""Application configuration via environment variables and an optional .env file."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.exceptions import ConfigurationError

ENV_FILE = ".env"

# Local dev server plus the deployed front-end. Overridable via CORS_ORIGINS.
DEFAULT_CORS_ORIGINS = "http://localhost:5173,https://your-render-service.onrender.com"


class LoggingSettings(BaseSettings):
    """Subset needed to build loggers. Never fails on missing database config."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    LOG_LEVEL: str = Field(default="INFO")
    LOG_JSON: bool = Field(default=False, description="JSON logs for cloud aggregators")


class Settings(LoggingSettings):
    """Environment-based configuration. Validated at startup."""

    APP_NAME: str = Field(default="students-api", description="Service name for logs and docs")
    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development", description="Deployment environment"
    )

    HOST: str = Field(default="0.0.0.0", description="Bind address; 0.0.0.0 for containers")
    PORT: int = Field(default=8080, ge=1, le=65535)

    MONGODB_URI: str = Field(..., min_length=1, description="MongoDB connection string")

    CORS_ORIGINS: str = Field(
        default=DEFAULT_CORS_ORIGINS, description="Comma-separated allow-listed origins"
    )

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


def _env_file_error() -> str | None:
    """Why an existing .env file cannot be read, or None. A missing file is not an error."""
    path = Path(ENV_FILE)
    if not path.is_file():
        return None
    try:
        path.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as exc:
        return str(exc)
    return None


def _env_file_arg() -> str | None:
    return None if _env_file_error() else ENV_FILE


@lru_cache
def get_logging_settings() -> LoggingSettings:
    return LoggingSettings(_env_file=_env_file_arg())


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance. Use for DI; avoids re-reading env on every request."""
    return Settings(_env_file=_env_file_arg())


def load_settings() -> Settings:
    """
    Resolve settings for process startup.
    A missing or unreadable .env file is reported and skipped; invalid or
    missing required variables raise ConfigurationError.
    """
    # Imported here: utils.logging depends on this module.
    from utils.logging import get_logger

    logger = get_logger(__name__)
    if not Path(ENV_FILE).is_file():
        logger.info("no .env file found, using process environment")
    else:
        error = _env_file_error()
        if error:
            logger.warning(
                "unreadable .env file, using process environment", extra={"error": error}
            )
    try:
        settings = get_settings()
    except ValidationError as exc:
        fields = [".".join(str(p) for p in e["loc"]) for e in exc.errors()]
        if "MONGODB_URI" in fields:
            raise ConfigurationError("You must set MONGODB_URI environment variable") from exc
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
    logger.info("config_loaded", extra={"port": settings.PORT, "env": settings.ENVIRONMENT})
    return settings
