"""Environment-driven configuration helpers for ParlayVig."""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database_url: AnyUrl | str = Field(default="sqlite:///./parlayvig.db")

    default_stake: str = Field(default="10")
    default_leg_odds: str = Field(default="-110")
    pricing_scale_cap_pct: float = Field(default=30.0, ge=5.0, le=100.0)
    session_name: str = Field(default="default")

    log_level: str = Field(default="INFO")

    parlayvig_api_key: str = Field(default="", validation_alias="PARLAYVIG_API_KEY")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # type: ignore[call-arg]


def get_api_access_key() -> str | None:
    """Return the configured API key, or ``None`` when the API is open."""

    key = os.getenv("PARLAYVIG_API_KEY") or get_settings().parlayvig_api_key
    return key or None


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for CLI and server entry points."""

    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
