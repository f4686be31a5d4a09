"""
SMS Reply Contracts.

Defines the value types exchanged between the reply parsers, the command
classifier, and the SMS reply pipeline agents. Pure schema definitions.

CRITICAL INVARIANTS:
- Results are plain dicts (compare by value, merge into pipeline context)
- A ParseResult is never both successful and carrying a clarification prompt
- Absolute instants are always derived from a caller-supplied reference time
- No provider references (Twilio, Supabase, etc.)
"""

from datetime import datetime
from typing import Literal, Optional, TypedDict


# =============================================================================
# LITERALS
# =============================================================================

SnoozeFailure = Literal[
    "too_short",     # Below the minimum snooze duration
    "too_long",      # Above the maximum snooze duration
    "unrecognized",  # Did not match any snooze grammar
]

CommandKind = Literal[
    "subscription",  # STOP / START
    "lead_status",   # 1, 2, 4, 5, CONTACTED, BOOKED, LOST...
    "note",          # 3 <text>, NOTE: <text>, free text
    "booking",       # 4 <time>, BOOK <time>
    "snooze",        # SNOOZE <duration>
    "confirm",       # OK / YES
    "job_action",    # CALL, DONE
    "help",          # HELP / ?
    "unknown",       # Nothing matched
]

ReplyAction = Literal[
    "book",
    "snooze",
    "clarify",
    "status_update",
    "note",
    "confirm",
    "job_action",
    "subscription",
    "help",
    "ignore",
]


# =============================================================================
# PARSER RESULTS
# =============================================================================

class ParseResult(TypedDict, total=False):
    """
    Result of time expression parsing.

    Success:
        {"success": True, "date_time": datetime, "display_text": str}
    Failure:
        {"success": False, "needs_clarification": True,
         "clarification_prompt": str}
    """
    success: bool
    date_time: datetime
    display_text: str
    needs_clarification: bool
    clarification_prompt: str


class SnoozeResult(TypedDict, total=False):
    """Result of snooze duration parsing."""
    success: bool
    until: datetime
    display_text: str
    error: str
    reason: SnoozeFailure


# =============================================================================
# COMMANDS
# =============================================================================

class CommandMatch(TypedDict):
    """A classified inbound SMS reply."""
    name: str                # Handler name (e.g., "book-prefix")
    kind: CommandKind
    priority: int
    argument: str            # Text after the command prefix, original case
    code: Optional[str]      # Reply code for status codes ("1".."5")


# =============================================================================
# SETTINGS
# =============================================================================

class ParserSettings(TypedDict):
    """Tunables shared by the parsers."""
    timezone: Optional[str]   # IANA timezone (e.g., "America/New_York")
    default_hour: int         # Hour used when a date has no time part
    snooze_min_minutes: int
    snooze_max_hours: int


# =============================================================================
# CONSTRUCTORS
# =============================================================================

def parsed(date_time: datetime, display_text: str) -> ParseResult:
    """Build a successful ParseResult."""
    return ParseResult(success=True, date_time=date_time, display_text=display_text)


def clarification(prompt: str) -> ParseResult:
    """Build a ParseResult asking the sender to clarify."""
    return ParseResult(
        success=False,
        needs_clarification=True,
        clarification_prompt=prompt,
    )


def snoozed(until: datetime, display_text: str) -> SnoozeResult:
    """Build a successful SnoozeResult."""
    return SnoozeResult(success=True, until=until, display_text=display_text)


def snooze_rejected(reason: SnoozeFailure, error: str) -> SnoozeResult:
    """Build a failed SnoozeResult."""
    return SnoozeResult(success=False, error=error, reason=reason)
