"""Helper utilities for the SMS Reply Pipeline."""

from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def normalize_reply(text: Optional[str]) -> str:
    """
    Normalize SMS reply text for keyword matching.

    Uppercases, trims, and collapses internal whitespace runs.

    Args:
        text: Raw reply text (may be None).

    Returns:
        Normalized string, empty string if None.

    Examples:
        >>> normalize_reply("  tomorrow   2pm ")
        'TOMORROW 2PM'
        >>> normalize_reply(None)
        ''
    """
    if text is None:
        return ""
    return " ".join(str(text).split()).upper()


def resolve_reference(now: datetime, tz: Optional[str] = None) -> datetime:
    """
    Place the reference instant in the requested timezone.

    An aware instant is converted; a naive instant is taken as wall time
    in the zone. Without a zone the instant is returned unchanged.

    Args:
        now: Caller-supplied reference instant.
        tz: Optional IANA timezone name.

    Returns:
        Reference instant to resolve expressions against.

    Raises:
        TypeError: If now is not a datetime.
        ValueError: If tz is not a known timezone.
    """
    if not isinstance(now, datetime):
        raise TypeError(f"Reference instant must be a datetime, got {type(now).__name__}")
    if not tz:
        return now

    try:
        zone = ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {tz!r}") from e

    if now.tzinfo is None:
        return now.replace(tzinfo=zone)
    return now.astimezone(zone)


def at_time(day: datetime, hour: int, minute: int = 0) -> datetime:
    """Return the same calendar day at hour:minute, seconds cleared."""
    return day.replace(hour=hour, minute=minute, second=0, microsecond=0)


def add_elapsed(now: datetime, delta: timedelta) -> datetime:
    """
    Add real elapsed time to an instant.

    Aware instants are shifted in UTC and converted back so DST
    transitions don't stretch or shrink the offset. Naive instants use
    plain wall-clock addition.
    """
    if now.tzinfo is None:
        return now + delta
    return (now.astimezone(timezone.utc) + delta).astimezone(now.tzinfo)
