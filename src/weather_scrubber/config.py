"""
Application settings.

Values come from environment variables prefixed with ``WEATHER_SCRUBBER_``
(or a local ``.env`` file), falling back to the defaults below.

Usage::

    from weather_scrubber.config import get_settings

    settings = get_settings()
    print(settings.lat, settings.lon)
"""

from __future__ import annotations

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the scrubber."""

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_SCRUBBER_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "weather-scrubber"
    app_env: str = "development"
    debug: bool = False

    # Fixed point of interest (Tokyo)
    lat: float = Field(default=35.6895, ge=-90, le=90)
    lon: float = Field(default=139.6917, ge=-180, le=180)

    # Display timezone for weather hours and radar frame times
    timezone: str = "UTC"

    http_timeout: float = 30
    serve_port: int = 8000
    site_dir: str = "site"

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {value!r}") from exc
        return value


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
