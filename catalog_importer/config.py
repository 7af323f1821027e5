from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings, read from IMPORTER_* environment variables or a .env file."""

    model_config = SettingsConfigDict(env_prefix="IMPORTER_", env_file=".env", extra="ignore")

    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]
    max_upload_bytes: int = 20 * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    return Settings()
