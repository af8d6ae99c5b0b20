"""
Settings - Application configuration using Pydantic Settings.

Loads from environment variables and .env files.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Paths
    db_path: Path = Path("data/sitedocs.db")

    # Logging
    log_level: str = "INFO"

    # Search
    search_default_limit: int = 50
    search_history_size: int = 10
    suggestion_limit: int = 10
    max_concurrent_scoring: int = 8

    # Content provider
    content_types: list[str] = ["pdf", "doc", "docx"]
    content_timeout_seconds: float = 5.0

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_rate_limit_rpm: int = 120

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
