"""
UTC datetime utilities for consistent timezone handling.

Appwrite stores datetime attributes as ISO 8601 strings; use these
helpers instead of datetime.now() when building document payloads.
"""

from datetime import UTC, datetime, time


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def iso_now() -> str:
    """Return the current UTC time as an ISO 8601 string (Appwrite datetime format)."""
    return to_iso(utc_now())


def to_iso(dt: datetime) -> str:
    """Serialize a datetime as ISO 8601; naive values are assumed to be UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="milliseconds")


def day_bounds_utc(day: datetime | None = None) -> tuple[datetime, datetime]:
    """Return (start, end) of the UTC calendar day containing day (default: today)."""
    day = (day or utc_now()).astimezone(UTC)
    start = datetime.combine(day.date(), time.min, tzinfo=UTC)
    end = datetime.combine(day.date(), time.max, tzinfo=UTC)
    return start, end
