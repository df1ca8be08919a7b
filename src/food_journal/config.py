"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "food_journal.db"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="FOOD_JOURNAL_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
