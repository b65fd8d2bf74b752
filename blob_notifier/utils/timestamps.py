"""Timestamp utilities for UTC handling and human-readable durations.

This module provides utilities for working with timestamps in UTC:
- Getting current UTC time
- Converting timezone-naive to timezone-aware UTC
- Describing a validity window in words for email copy
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Current UTC time with timezone info

    Example:
        >>> now = utc_now()
        >>> now.tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware and in UTC.

    If the datetime is timezone-naive, it's treated as UTC.
    If the datetime has a different timezone, it's converted to UTC.

    Args:
        dt: Datetime to convert (can be None)

    Returns:
        Timezone-aware datetime in UTC, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def format_duration(duration: timedelta) -> str:
    """Describe a duration in the largest whole unit that fits it exactly.

    Args:
        duration: Positive duration

    Returns:
        Phrase such as "1 hour", "90 minutes" or "2 days"

    Raises:
        ValueError: If duration is not positive

    Example:
        >>> format_duration(timedelta(hours=1))
        '1 hour'
        >>> format_duration(timedelta(minutes=90))
        '90 minutes'
    """
    total_seconds = int(duration.total_seconds())
    if total_seconds <= 0:
        raise ValueError(f"Duration must be positive, got {duration}")

    for unit, seconds in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if total_seconds % seconds == 0:
            count = total_seconds // seconds
            return f"{count} {unit}" if count == 1 else f"{count} {unit}s"

    return "1 second" if total_seconds == 1 else f"{total_seconds} seconds"
