from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from stadium_orders.core.config import settings


def venue_tz():
    """Return the configured venue timezone, falling back to UTC for unknown names."""
    try:
        return ZoneInfo(settings.VENUE_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo) and convert aware ones.

    Returns None for None.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_venue_time(dt: datetime) -> datetime:
    """Convert a stored timestamp to the venue timezone for API responses.

    Naive values are assumed to be UTC, which is how ``created_at`` is written.
    """
    if dt is None:
        return None
    return ensure_utc(dt).astimezone(venue_tz())
