"""
StudentHub Tracker — Clock helpers.

"Today" is the local calendar date in the configured TIMEZONE (system local
time when TIMEZONE is empty). Timestamps are ISO-8601 with offset.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from studenthub.config import settings


def _tz():
    if settings.TIMEZONE:
        return ZoneInfo(settings.TIMEZONE)
    return None


def now() -> datetime:
    """Current aware datetime in the configured zone."""
    tz = _tz()
    if tz is None:
        return datetime.now(timezone.utc).astimezone()
    return datetime.now(tz)


def today() -> date:
    return now().date()


def today_iso() -> str:
    """Today as YYYY-MM-DD."""
    return today().isoformat()


def parse_day(value: str | None) -> date | None:
    """Parse the date part of an ISO date or datetime string.

    Returns None for empty or unparseable values.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except (ValueError, TypeError):
        return None
