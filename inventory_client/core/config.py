"""
Configuration management for the inventory client.

Provides centralized, validated configuration from environment variables
with proper type checking and defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENCRYPTION_KEY = "luka-dev-inventory"


class ApiConfig(BaseSettings):
    """Inventory API configuration."""

    base_url: str = Field(default="http://localhost:5050/api", alias="INVENTORY_API_URL")
    request_timeout: float = Field(default=30.0, alias="REQUEST_TIMEOUT")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    model_config = SettingsConfigDict(env_prefix="", extra="ignore", populate_by_name=True)


class StorageConfig(BaseSettings):
    """Local credential storage configuration."""

    path: Path = Field(
        default_factory=lambda: Path.home() / ".inventory_client" / "storage.json",
        alias="INVENTORY_STORAGE_PATH",
    )
    # Shared application secret, not a confidentiality boundary.
    encryption_key: str = Field(default=DEFAULT_ENCRYPTION_KEY, alias="INVENTORY_ENCRYPTION_KEY")

    model_config = SettingsConfigDict(env_prefix="", extra="ignore", populate_by_name=True)


class Settings(BaseSettings):
    """Main application settings."""

    debug: bool = Field(default=False, alias="DEBUG")
    json_logs: bool = Field(default=False, alias="JSON_LOGS")

    # Listing
    items_per_page: int = Field(default=10, alias="ITEMS_PER_PAGE")

    # Component configurations
    api: ApiConfig = Field(default_factory=ApiConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    @field_validator("debug", "json_logs", mode="before")
    @classmethod
    def parse_flag(cls, v):
        if isinstance(v, str):
            return v.lower() in ("1", "true", "yes")
        return bool(v)

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


# Global settings instance
settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global settings
    settings = None


def validate_required_settings(config: Optional[Settings] = None) -> List[str]:
    """
    Validate the loaded settings.

    Args:
        config: Settings to check, defaults to the global instance

    Returns:
        List of problems found, empty when the configuration is usable
    """
    problems = []
    try:
        config = config or get_settings()

        if not config.api.base_url.startswith(("http://", "https://")):
            problems.append("INVENTORY_API_URL must be an http(s) URL")
        if config.items_per_page <= 0:
            problems.append("ITEMS_PER_PAGE must be positive")
        if config.api.request_timeout <= 0:
            problems.append("REQUEST_TIMEOUT must be positive")
        if not config.storage.encryption_key:
            problems.append("INVENTORY_ENCRYPTION_KEY must not be empty")

    except Exception as e:
        problems.append(f"Configuration error: {e}")

    return problems

