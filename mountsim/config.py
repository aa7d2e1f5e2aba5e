"""Configuration loading for the mountsim fixture.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Fixture configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support. Variables are prefixed with ``MOUNTSIM_``.
    """

    model_config = SettingsConfigDict(
        env_prefix="MOUNTSIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Archive source configuration
    archive_source: Literal["http", "directory"] = Field(
        default="http",
        description="Where test archives are acquired from",
    )
    archive_base_url: str = Field(
        default="http://localhost:9876/base-test/archives/",
        description="Base URL under which test archives are served",
    )
    archive_dir: str = Field(
        default="./archives",
        description="Directory holding test archives for the directory source",
    )
    fetch_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for a single archive download in seconds",
    )

    # Simulated platform
    storage_key: str = Field(
        default="state",
        description="Top-level key of the persisted volume state",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("archive_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure the base URL is an http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("archive_base_url must start with http:// or https://")
        return v

    @field_validator("fetch_timeout_seconds")
    @classmethod
    def validate_fetch_timeout(cls, v: float) -> float:
        """Ensure fetch timeout is positive."""
        if v <= 0:
            raise ValueError("fetch_timeout_seconds must be positive")
        return v

    @field_validator("storage_key")
    @classmethod
    def validate_storage_key(cls, v: str) -> str:
        """Ensure the storage key is non-empty."""
        if not v or not v.strip():
            raise ValueError("storage_key must be a non-empty string")
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load fixture settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
