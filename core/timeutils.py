"""
Timestamp helpers shared by schemas and the risk engine
"""
import math
from datetime import datetime, timezone
from typing import Any, Optional

SECONDS_PER_DAY = 86400.0


def ensure_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC, convert aware ones to UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an event timestamp into an aware UTC datetime.

    Accepts datetimes, ISO-8601 strings (with or without a trailing 'Z')
    and Unix epoch seconds. Returns None when the value cannot be parsed.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        try:
            return ensure_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def days_between(start: datetime, end: datetime) -> float:
    """Exact number of days from start to end (negative when end is earlier)"""
    return (end - start).total_seconds() / SECONDS_PER_DAY


def truncate_days(value: float) -> float:
    """One-decimal display value, truncated toward zero"""
    return math.trunc(value * 10) / 10


def floor_days(value: float) -> float:
    """One-decimal display value, floored so any negative amount stays negative"""
    return math.floor(value * 10) / 10
