"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the service are timezone-aware UTC. Use these
helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    The graph executor, recorder and condition evaluator take this as their
    default clock so tests can inject a fixed one.

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

    Use at repository/persistence boundaries to normalize datetimes
    (SQLite drops tzinfo on round-trip).

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume it's UTC and attach timezone
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def hours_between(start: datetime, end: datetime) -> float:
    """
    Return the elapsed hours from start to end (negative if end is earlier).

    Both values are normalized to UTC first, so naive values from the store
    compare correctly against utc_now().
    """
    start_utc = start.replace(tzinfo=UTC) if start.tzinfo is None else start
    end_utc = end.replace(tzinfo=UTC) if end.tzinfo is None else end
    return (end_utc - start_utc).total_seconds() / 3600
