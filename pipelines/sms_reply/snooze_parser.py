"""
SMS Snooze Parser.

Parses snooze durations from SMS replies: 1H, 3 HOURS, 30M, 15 MIN,
a bare hour count, TOMORROW, TOMORROW AM, TOMORROW PM.

Bounds keep the two snooze mechanisms apart: relative durations run from
snooze_min_minutes up to snooze_max_hours; anything longer should use the
TOMORROW forms.
"""

import re
from datetime import datetime, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from core.contracts.sms_reply import (
    ParserSettings,
    SnoozeResult,
    snooze_rejected,
    snoozed,
)
from core.logger import get_logger
from pipelines.sms_reply.config import AFTERNOON_HOUR, DEFAULT_SETTINGS, MORNING_HOUR
from pipelines.sms_reply.formatting import format_hour_label, pluralize
from pipelines.sms_reply.utils.helpers import (
    add_elapsed,
    at_time,
    normalize_reply,
    resolve_reference,
)

logger = get_logger(__name__)


_HOURS_RE = re.compile(r"^(\d+)\s*(?:H|HR|HRS|HOUR|HOURS)$")
_MINUTES_RE = re.compile(r"^(\d+)\s*(?:M|MIN|MINS|MINUTE|MINUTES)$")
_BARE_NUMBER_RE = re.compile(r"^(\d+)$")
_TOMORROW_RE = re.compile(r"^(?:TOMORROW|TMRW|TMR)(?:\s+(AM|PM|MORNING|AFTERNOON))?$")

_TOMORROW_HOURS = {
    None: MORNING_HOUR,
    "AM": MORNING_HOUR,
    "MORNING": MORNING_HOUR,
    "PM": AFTERNOON_HOUR,
    "AFTERNOON": AFTERNOON_HOUR,
}

INVALID_FORMAT_ERROR = "Invalid snooze format. Try: 1H, 3H, 30M, TOMORROW, TOMORROW AM"

# Longer digit runs are rejected as too long without converting them
MAX_DURATION_DIGITS = 6


def _too_short(settings: ParserSettings) -> SnoozeResult:
    minimum = pluralize(settings["snooze_min_minutes"], "minute")
    return snooze_rejected("too_short", f"Snooze is too short. Minimum is {minimum}.")


def _too_long(settings: ParserSettings) -> SnoozeResult:
    maximum = pluralize(settings["snooze_max_hours"], "hour")
    return snooze_rejected(
        "too_long",
        f"Snooze is too long. Maximum is {maximum}; use SNOOZE TOMORROW instead.",
    )


def _snooze_minutes(digits: str, now: datetime, settings: ParserSettings) -> SnoozeResult:
    """Validate a duration in minutes and resolve it against now."""
    significant = digits.lstrip("0") or "0"
    if len(significant) > MAX_DURATION_DIGITS:
        return _too_long(settings)
    minutes = int(significant)
    if minutes < settings["snooze_min_minutes"]:
        return _too_short(settings)
    if minutes > settings["snooze_max_hours"] * 60:
        return _too_long(settings)
    return snoozed(add_elapsed(now, timedelta(minutes=minutes)), pluralize(minutes, "minute"))


def _snooze_hours(digits: str, now: datetime, settings: ParserSettings) -> SnoozeResult:
    """Validate a duration in hours and resolve it against now."""
    significant = digits.lstrip("0") or "0"
    if len(significant) > MAX_DURATION_DIGITS:
        return _too_long(settings)
    hours = int(significant)
    if hours < 1 or hours * 60 < settings["snooze_min_minutes"]:
        return _too_short(settings)
    if hours > settings["snooze_max_hours"]:
        return _too_long(settings)
    return snoozed(add_elapsed(now, timedelta(hours=hours)), pluralize(hours, "hour"))


def parse_snooze(
    text: Optional[str],
    now: datetime,
    tz: Optional[str] = None,
    settings: Optional[ParserSettings] = None,
) -> SnoozeResult:
    """
    Parse a snooze duration from an SMS reply.

    Args:
        text: Free-text duration (case-insensitive).
        now: Reference instant the snooze is measured from.
        tz: Optional IANA timezone; overrides settings["timezone"].
        settings: Optional parser settings (defaults to DEFAULT_SETTINGS).

    Returns:
        SnoozeResult with until and display_text on success, or error
        and reason ("too_short", "too_long", "unrecognized") on failure.

    Raises:
        TypeError: If now is not a datetime.
        ValueError: If the timezone is unknown.
    """
    settings = settings or DEFAULT_SETTINGS
    now = resolve_reference(now, tz or settings["timezone"])
    normalized = normalize_reply(text)

    hours_match = _HOURS_RE.match(normalized) or _BARE_NUMBER_RE.match(normalized)
    minutes_match = _MINUTES_RE.match(normalized)
    tomorrow_match = _TOMORROW_RE.match(normalized)

    if hours_match:
        result = _snooze_hours(hours_match.group(1), now, settings)
    elif minutes_match:
        result = _snooze_minutes(minutes_match.group(1), now, settings)
    elif tomorrow_match:
        hour = _TOMORROW_HOURS[tomorrow_match.group(1)]
        until = at_time(now + relativedelta(days=+1), hour)
        result = snoozed(until, f"Tomorrow at {format_hour_label(hour)}")
    else:
        result = snooze_rejected("unrecognized", INVALID_FORMAT_ERROR)

    logger.debug(f"Snooze '{normalized}' parsed: {result}")
    return result
