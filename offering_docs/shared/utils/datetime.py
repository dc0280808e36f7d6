"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository/persistence boundaries to normalize datetimes.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def epoch_ms(dt: datetime | None = None) -> int:
    """Milliseconds since the Unix epoch for dt (default: now).

    Used as the ordering prefix of stored document filenames.
    """
    return int((dt or utc_now()).timestamp() * 1000)


def expires_at(seconds: int, start: datetime | None = None) -> datetime:
    """Return the UTC instant `seconds` after start (default: now)."""
    return (start or utc_now()) + timedelta(seconds=seconds)
