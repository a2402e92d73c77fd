"""Storefront configuration loaded from the environment."""

import logging
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorefrontSettings(BaseSettings):
    """Terminal storefront settings (``STOREFRONT_*`` environment variables)."""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_url: str = Field(
        default="http://127.0.0.1:5000",
        description="Base URL of the catalog service",
    )
    storage_path: Path = Field(
        default=Path.home() / ".farmstore" / "storage.json",
        description="File holding the persisted cart and session",
    )
    timeout: float = Field(default=10.0, description="HTTP timeout in seconds", gt=0)
    log_level: str = Field(default="WARNING")


def get_settings() -> StorefrontSettings:
    return StorefrontSettings()


def setup_logging(settings: StorefrontSettings) -> None:
    # stderr keeps log lines out of the rendered views
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
