"""
Configuration Management for Finance Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The only external dependency of the engine is where the ledger snapshot
lives, so most settings describe the storage backend.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Snapshot storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_TRACKER_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path(".finance_tracker"),
        description="Directory holding the JSON snapshot files"
    )
    snapshot_key: str = Field(
        default="transactions",
        min_length=1,
        pattern=r"^[A-Za-z0-9_.-]+$",
        description="Name of the record the ledger is stored under"
    )
    write_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times a snapshot write is attempted"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    currency_symbol: str = Field(
        default="₹",
        min_length=1,
        max_length=5,
        description="Symbol shown in front of formatted amounts"
    )
    log_level: str = Field(
        default="INFO",
        description="Standard logging level name"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings are loaded lazily to allow partial configuration

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
