"""Human-readable formatting for SMS reply confirmations."""

from datetime import datetime
from typing import Optional


def pluralize(count: int, unit: str) -> str:
    """
    Format a count with its unit, pluralized.

    Examples:
        >>> pluralize(1, "hour")
        '1 hour'
        >>> pluralize(3, "hour")
        '3 hours'
    """
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_clock(dt: datetime) -> str:
    """
    Format the time of day on a 12-hour clock.

    Examples:
        >>> format_clock(datetime(2024, 12, 21, 14, 0))
        '2:00 PM'
        >>> format_clock(datetime(2024, 12, 21, 0, 5))
        '12:05 AM'
    """
    hour = dt.hour % 12 or 12
    period = "AM" if dt.hour < 12 else "PM"
    return f"{hour}:{dt.minute:02d} {period}"


def format_hour_label(hour: int) -> str:
    """Format a whole hour as "9 AM" / "2 PM"."""
    period = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12} {period}"


def format_for_confirmation(dt: datetime, now: Optional[datetime] = None) -> str:
    """
    Format a date-time for an SMS confirmation.

    Uses "Today at 2:00 PM" when a reference instant is supplied and falls
    on the same calendar date; otherwise "Sat, Dec 21 at 2:00 PM". Never
    reads the clock.

    Args:
        dt: Instant to format (wall time is used as-is).
        now: Optional reference instant.

    Returns:
        Display string.
    """
    if now is not None:
        if now.tzinfo is not None and dt.tzinfo is not None:
            now = now.astimezone(dt.tzinfo)
        if now.date() == dt.date():
            return f"Today at {format_clock(dt)}"
    return f"{dt:%a}, {dt:%b} {dt.day} at {format_clock(dt)}"


def format_booking_confirmation(
    customer_name: str,
    date_time: datetime,
    now: Optional[datetime] = None,
) -> str:
    """
    Build the SMS sent after a booking reply is accepted.

    Args:
        customer_name: Lead's display name.
        date_time: Booked instant.
        now: Optional reference instant for "Today at ..." wording.

    Returns:
        Three-line confirmation message.
    """
    display_time = format_for_confirmation(date_time, now)
    return f"Booked: {customer_name}\n{display_time}\nAdded to your calendar"


def format_snooze_confirmation(
    customer_name: str,
    until: datetime,
    now: Optional[datetime] = None,
) -> str:
    """Build the SMS sent after a snooze reply is accepted."""
    display_time = format_for_confirmation(until, now)
    return f"Snoozed: {customer_name}\nReminder: {display_time}"
