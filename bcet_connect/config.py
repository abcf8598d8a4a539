"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    environment: Literal["development", "production", "test"] = Field(
        default="development",
        description="Deployment environment; production hides internal error details",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone used when rendering timestamps (defaults to UTC)",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )
    notifications_default_page_size: int = Field(default=20, gt=0)
    notifications_max_page_size: int = Field(default=100, gt=0)
    feed_default_page_size: int = Field(default=20, gt=0)
    feed_max_page_size: int = Field(default=50, gt=0)
    azure_storage_connection_string: str | None = Field(
        default=None,
        description="Connection string of the blob account holding feed media",
    )
    azure_storage_container_name: str | None = Field(
        default=None,
        description="Blob container that stores uploaded feed media",
    )

    @model_validator(mode="after")
    def _validate_page_sizes(self) -> "Settings":
        if self.notifications_default_page_size > self.notifications_max_page_size:
            raise ValueError(
                "NOTIFICATIONS_DEFAULT_PAGE_SIZE cannot exceed NOTIFICATIONS_MAX_PAGE_SIZE"
            )
        if self.feed_default_page_size > self.feed_max_page_size:
            raise ValueError("FEED_DEFAULT_PAGE_SIZE cannot exceed FEED_MAX_PAGE_SIZE")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
