"""
StudentHub Tracker — Centralized configuration.

Loads all settings from .env and validates them.
This module is the foundation for every other module in the project.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Load .env from project root (two levels up from studenthub/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Prefix of the per-user storage key: "{APP_NAMESPACE}_{userId}"
    APP_NAMESPACE: str = "studentHub"

    # Storage backend: "file" | "memory"
    STORAGE_BACKEND: str = "file"
    DATA_DIR: str = "data"

    # Empty → system local time
    TIMEZONE: str = ""

    # User signed in by the local auth provider
    LOCAL_USER_ID: str = "local-user"

    LOG_LEVEL: str = "INFO"

    @field_validator("STORAGE_BACKEND", mode="before")
    @classmethod
    def normalize_backend(cls, v: str) -> str:
        return (v or "file").strip().lower()

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return (v or "INFO").strip().upper()


def _load_settings() -> Settings:
    """Load settings from environment, validating the timezone."""
    timezone = os.getenv("TIMEZONE", "")

    if timezone:
        try:
            ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError):
            print(f"ERROR: TIMEZONE {timezone!r} is not a known IANA zone", file=sys.stderr)
            sys.exit(1)

    return Settings(
        APP_NAMESPACE=os.getenv("APP_NAMESPACE", "studentHub"),
        STORAGE_BACKEND=os.getenv("STORAGE_BACKEND", "file"),
        DATA_DIR=os.getenv("DATA_DIR", "data"),
        TIMEZONE=timezone,
        LOCAL_USER_ID=os.getenv("LOCAL_USER_ID", "local-user"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
    )


# Singleton — imported by all other modules as:
#   from studenthub.config import settings
settings = _load_settings()
