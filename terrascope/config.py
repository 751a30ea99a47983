"""
Application settings via pydantic-settings.

Values come from environment variables (or a local .env file) with
development defaults that work against the public, key-less endpoints.
Only the Gemini key has no usable default.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """TerraScope configuration with env-var binding."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Gemini --
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    gemini_timeout: float = 60.0

    # -- HTTP providers --
    provider_timeout: float = 20.0
    weather_base_url: str = "https://api.open-meteo.com/v1/forecast"
    exchangerate_base_url: str = "https://open.er-api.com/v6/latest"
    travel_advisory_base_url: str = "https://www.travel-advisory.info/api"

    # -- View state --
    app_base_url: str = "http://localhost:5173/"
    default_language: str = "English"
    default_theme: Literal["light", "dark"] = "dark"
    preferences_path: str = "~/.terrascope/preferences.json"

    # -- Logging --
    log_level: str = "INFO"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return a cached singleton Settings instance."""
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = Settings()
    return _settings
