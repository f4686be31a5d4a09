"""
SMS Time Parser.

Converts free-text SMS replies into absolute date-times so operators can
book appointments by text without opening the app.

Supported formats:
    - "TUE 2PM" / "TUE 2:00PM" / "NEXT MONDAY 3PM"
    - "TOMORROW 9AM" / "TOMORROW MORNING" / "TMRW"
    - "TODAY 3PM" / "TODAY AFTERNOON"
    - "12/20 2PM" / "12-20 2PM"
    - "2PM" / "10:30AM" / "14:00"
    - "ASAP" / "NOW" / "MORNING" / "AFTERNOON" / "EVENING"

CRITICAL INVARIANTS:
- The reference instant is always a parameter (no clock reads)
- Parsing is total: every string yields a ParseResult, nothing raises
- Matchers are tried in a fixed order; first match wins
- Deterministic (same text + now → same result)
"""

import re
from datetime import date, datetime, timedelta
from typing import Callable, Dict, Optional, Tuple

from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta, weekday

from core.contracts.sms_reply import ParseResult, ParserSettings, clarification, parsed
from core.logger import get_logger
from pipelines.sms_reply.config import (
    AFTERNOON_HOUR,
    ASAP_OFFSET_HOURS,
    DEFAULT_SETTINGS,
    EVENING_HOUR,
    MORNING_HOUR,
    NOON_HOUR,
)
from pipelines.sms_reply.formatting import format_for_confirmation
from pipelines.sms_reply.utils.helpers import (
    add_elapsed,
    at_time,
    normalize_reply,
    resolve_reference,
)

logger = get_logger(__name__)

Clock = Tuple[int, int]


# =============================================================================
# VOCABULARY
# =============================================================================

DAY_NAMES: Dict[str, weekday] = {
    "SUN": SU, "SUNDAY": SU,
    "MON": MO, "MONDAY": MO,
    "TUE": TU, "TUES": TU, "TUESDAY": TU,
    "WED": WE, "WEDNESDAY": WE,
    "THU": TH, "THUR": TH, "THURS": TH, "THURSDAY": TH,
    "FRI": FR, "FRIDAY": FR,
    "SAT": SA, "SATURDAY": SA,
}

TIME_OF_DAY: Dict[str, Clock] = {
    "MORNING": (MORNING_HOUR, 0),
    "AM": (MORNING_HOUR, 0),
    "NOON": (NOON_HOUR, 0),
    "AFTERNOON": (AFTERNOON_HOUR, 0),
    "PM": (AFTERNOON_HOUR, 0),
    "EVENING": (EVENING_HOUR, 0),
    "EOD": (EVENING_HOUR, 0),
}

ASAP_KEYWORDS = frozenset({"ASAP", "SOON"})
NOW_KEYWORD = "NOW"


# =============================================================================
# PROMPTS
# =============================================================================

EMPTY_PROMPT = "When? Reply with day & time (e.g., TUE 2PM, TOMORROW 9AM)"
UNRECOGNIZED_PROMPT = "Couldn't understand that time. Try: TUE 2PM, TOMORROW 9AM, or MORNING"
TODAY_PROMPT = "What time today? Reply with time (e.g., 2PM, 10:30AM)"
INVALID_DATE_PROMPT = "That date doesn't exist. Reply with a date & time (e.g., 12/20 2PM)"


# =============================================================================
# PATTERNS
# =============================================================================

_RELATIVE_DAY_RE = re.compile(r"^(TODAY|TOMORROW|TMRW|TMR)\b\s*(.*)$")
_DAY_OF_WEEK_RE = re.compile(r"^(?:(?:NEXT|THIS)\s+)?([A-Z]+)\b\s*(.*)$")
_EXPLICIT_DATE_RE = re.compile(r"^(\d{1,2})[/\-](\d{1,2})\b\s*(.*)$")
_TWELVE_HOUR_RE = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*([AP])\.?M\.?$")
_TWENTY_FOUR_HOUR_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_BARE_HOUR_RE = re.compile(r"^(\d{1,2})$")
_AT_PREFIX_RE = re.compile(r"^(?:AT\b|@)\s*")


# =============================================================================
# CLOCK PARSING
# =============================================================================

def parse_clock(text: str) -> Optional[Clock]:
    """
    Parse a numeric time of day.

    Accepts "2PM", "2:30PM", "2:30 P.M.", "14:00", and a bare hour. Bare
    hours follow business hours: 1-6 are afternoon, 7-12 as given, 0 and
    13-23 as 24-hour.

    Args:
        text: Normalized (uppercased, trimmed) text.

    Returns:
        (hour, minute) in 24-hour form, or None if not a valid time.

    Examples:
        >>> parse_clock("12PM")
        (12, 0)
        >>> parse_clock("12AM")
        (0, 0)
        >>> parse_clock("3")
        (15, 0)
    """
    match = _TWELVE_HOUR_RE.match(text)
    if match:
        hour = int(match.group(1))
        minute = int(match.group(2) or 0)
        if not 1 <= hour <= 12 or minute > 59:
            return None
        if match.group(3) == "P" and hour != 12:
            hour += 12
        elif match.group(3) == "A" and hour == 12:
            hour = 0
        return hour, minute

    match = _TWENTY_FOUR_HOUR_RE.match(text)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour > 23 or minute > 59:
            return None
        return hour, minute

    match = _BARE_HOUR_RE.match(text)
    if match:
        hour = int(match.group(1))
        if 1 <= hour <= 6:
            hour += 12
        if hour > 23:
            return None
        return hour, 0

    return None


def parse_time_of_day(text: str) -> Optional[Clock]:
    """Parse a day-part keyword ("MORNING") or a numeric time."""
    text = _AT_PREFIX_RE.sub("", text).strip()
    if text in TIME_OF_DAY:
        return TIME_OF_DAY[text]
    return parse_clock(text)


def _time_or_default(rest: str, default_hour: int) -> Optional[Clock]:
    """
    Resolve the time part following a date.

    Returns:
        The parsed clock, the default hour when rest is empty, or None
        when rest is present but not a time.
    """
    if not rest:
        return default_hour, 0
    return parse_time_of_day(rest)


def _resolved(dt: datetime, now: datetime) -> ParseResult:
    return parsed(dt, format_for_confirmation(dt, now))


# =============================================================================
# MATCHERS
# =============================================================================

Matcher = Callable[[str, datetime, ParserSettings], Optional[ParseResult]]


def _match_relative_day(
    text: str, now: datetime, settings: ParserSettings
) -> Optional[ParseResult]:
    """TODAY [time], TOMORROW / TMRW / TMR [time]."""
    match = _RELATIVE_DAY_RE.match(text)
    if not match:
        return None

    keyword, rest = match.group(1), match.group(2)

    if keyword == "TODAY":
        # An unqualified "today" is too vague to schedule
        clock = parse_time_of_day(rest) if rest else None
        if clock is None:
            return clarification(TODAY_PROMPT)
        return _resolved(at_time(now, *clock), now)

    clock = _time_or_default(rest, settings["default_hour"])
    if clock is None:
        return clarification(UNRECOGNIZED_PROMPT)
    tomorrow = now + relativedelta(days=+1)
    return _resolved(at_time(tomorrow, *clock), now)


def _match_day_of_week(
    text: str, now: datetime, settings: ParserSettings
) -> Optional[ParseResult]:
    """[NEXT|THIS] MON..SUN [time], resolved strictly after today."""
    match = _DAY_OF_WEEK_RE.match(text)
    if not match or match.group(1) not in DAY_NAMES:
        return None

    clock = _time_or_default(match.group(2), settings["default_hour"])
    if clock is None:
        return clarification(UNRECOGNIZED_PROMPT)

    target = now + relativedelta(days=+1, weekday=DAY_NAMES[match.group(1)](+1))
    return _resolved(at_time(target, *clock), now)


def _next_valid_date(month: int, day: int, today: date) -> Optional[date]:
    """
    First occurrence of month/day on or after today.

    Looks up to four years ahead so Feb 29 lands on the next leap year.
    """
    for year in range(today.year, today.year + 5):
        try:
            candidate = date(year, month, day)
        except ValueError:
            continue
        if candidate >= today:
            return candidate
    return None


def _match_explicit_date(
    text: str, now: datetime, settings: ParserSettings
) -> Optional[ParseResult]:
    """MM/DD or MM-DD [time]; rolls into next year once the date has passed."""
    match = _EXPLICIT_DATE_RE.match(text)
    if not match:
        return None

    clock = _time_or_default(match.group(3), settings["default_hour"])
    if clock is None:
        return clarification(UNRECOGNIZED_PROMPT)

    target = _next_valid_date(int(match.group(1)), int(match.group(2)), now.date())
    if target is None:
        return clarification(INVALID_DATE_PROMPT)

    dt = now.replace(year=target.year, month=target.month, day=target.day)
    return _resolved(at_time(dt, *clock), now)


def _match_time_only(
    text: str, now: datetime, settings: ParserSettings
) -> Optional[ParseResult]:
    """Numeric time with no date; resolves on today's date."""
    clock = parse_clock(_AT_PREFIX_RE.sub("", text))
    if clock is None:
        return None
    return _resolved(at_time(now, *clock), now)


def _match_preset(
    text: str, now: datetime, settings: ParserSettings
) -> Optional[ParseResult]:
    """ASAP / SOON, NOW, and day-part keywords for today."""
    if text in ASAP_KEYWORDS:
        return _resolved(add_elapsed(now, timedelta(hours=ASAP_OFFSET_HOURS)), now)

    if text == NOW_KEYWORD:
        return _resolved(now, now)

    if text in TIME_OF_DAY:
        return _resolved(at_time(now, *TIME_OF_DAY[text]), now)

    return None


# Evaluation order; first non-None result wins
TIME_MATCHERS: Tuple[Matcher, ...] = (
    _match_relative_day,
    _match_day_of_week,
    _match_explicit_date,
    _match_time_only,
    _match_preset,
)


# =============================================================================
# PUBLIC API
# =============================================================================

def parse_time(
    text: Optional[str],
    now: datetime,
    tz: Optional[str] = None,
    settings: Optional[ParserSettings] = None,
) -> ParseResult:
    """
    Parse an SMS time expression into an absolute date-time.

    Args:
        text: Free-text reply (case-insensitive).
        now: Reference instant all relative expressions resolve against.
        tz: Optional IANA timezone; overrides settings["timezone"].
        settings: Optional parser settings (defaults to DEFAULT_SETTINGS).

    Returns:
        ParseResult with date_time and display_text on success, or
        needs_clarification and clarification_prompt on failure.

    Raises:
        TypeError: If now is not a datetime.
        ValueError: If the timezone is unknown.
    """
    settings = settings or DEFAULT_SETTINGS
    now = resolve_reference(now, tz or settings["timezone"])
    normalized = normalize_reply(text)

    if not normalized:
        return clarification(EMPTY_PROMPT)

    for matcher in TIME_MATCHERS:
        result = matcher(normalized, now, settings)
        if result is not None:
            logger.debug(f"Time '{normalized}' handled by {matcher.__name__}: {result}")
            return result

    logger.debug(f"Time '{normalized}' not recognized")
    return clarification(UNRECOGNIZED_PROMPT)
