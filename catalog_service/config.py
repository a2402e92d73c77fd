"""Configuration management using pydantic-settings."""

import logging
import sys

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class ServiceSettings(BaseSettings):
    """Catalog service configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", description="Interface to listen on")
    port: int = Field(default=5000, description="Port to listen on", ge=1, le=65535)

    # Empty means the in-memory collection is used
    database_url: str = Field(
        default="",
        description="SQLAlchemy connection string for the product collection",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format string",
    )


def get_settings() -> ServiceSettings:
    """Get the service settings instance."""
    return ServiceSettings()


def setup_logging(settings: ServiceSettings) -> None:
    """Configure logging for the service."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=settings.log_format,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logger.info(f"Logging configured at {settings.log_level} level")
