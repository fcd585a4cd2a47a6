"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database configuration (no default: absence is a configuration error)
    database_url: str | None = None
    pool_min_size: int = 1  # Minimum connections in pool
    pool_max_size: int = 5  # Maximum connections in pool
    pool_timeout_seconds: float = 10.0  # Wait for a connection before failing

    # CORS headers sent on every response
    cors_allow_origin: str = "*"
    cors_allow_methods: str = "POST, OPTIONS"
    cors_allow_headers: str = "Content-Type"

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
