"""Configuration management for SMS Thread Index.

This module handles application configuration using Pydantic settings.
Configuration can be loaded from environment variables or .env files.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with
    the SMS_INDEX_ prefix (e.g., SMS_INDEX_PLATFORM_API_LEVEL).
    """

    model_config = SettingsConfigDict(
        env_prefix="SMS_INDEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Message store configuration
    store_db_path: Path = Field(
        default=Path("mmssms.db"),
        description="Path to the SQLite database holding the SMS message store",
    )
    platform_api_level: int = Field(
        default=19,
        ge=1,
        description=(
            "Platform capability level reported by the device. Levels below 19 "
            "use the legacy, undocumented store addresses."
        ),
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
