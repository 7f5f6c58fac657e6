"""Timestamps in the configured ``TIMEZONE``."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from app.packages.explorer.core.config import get_settings


def now() -> datetime:
    """Aware current time in the configured zone."""
    return datetime.now(get_settings().timezone_info)


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 with seconds precision, shifted to the configured zone.

    Naive values come from backends that drop the offset (SQLite) and are
    read as UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(get_settings().timezone_info).isoformat(timespec="seconds")
