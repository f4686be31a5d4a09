"""
Reply Composer Agent for the SMS Reply Pipeline.

Turns a classified command and its time resolution into the SMS text sent
back to the operator, plus an action label telling the caller what to
persist. Delivery and persistence stay with the caller.

Integration Position:
    ReplyClassifierAgent
           ↓
    TimeResolutionAgent
           ↓
    ReplyComposerAgent          ← THIS AGENT

Input: command, resolution, customer_name (optional), now (optional)
Output: reply (str | None), action
"""

from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from core.contracts.sms_reply import CommandMatch, ReplyAction
from core.logger import get_logger
from pipelines.core.base_agent import BaseAgent
from pipelines.sms_reply.commands import STATUS_CODES, WORD_STATUSES
from pipelines.sms_reply.config import DEFAULT_CUSTOMER_NAME
from pipelines.sms_reply.formatting import (
    format_booking_confirmation,
    format_snooze_confirmation,
)

logger = get_logger(__name__)


# =============================================================================
# MESSAGE TEMPLATES
# =============================================================================

HELP_TEXT = (
    "Codes: 1=Called 2=VM 3=Note 4=Booked 5=Lost\n"
    "Book: 4 TUE 2PM or BOOK TOMORROW 9AM\n"
    "Snooze: SNOOZE 1H, SNOOZE TOMORROW\n"
    "More: OK CALL STOP"
)
SNOOZE_USAGE = "Snooze format: SNOOZE 1H, SNOOZE 3H, SNOOZE TOMORROW, SNOOZE TOMORROW PM"
BOOKING_USAGE = {
    "code-4-booking": "When? Reply: 4 TUE 2PM, 4 TOMORROW 9AM",
    "book-prefix": "When? Reply: BOOK TUE 2PM, BOOK TOMORROW 9AM",
}
EMPTY_NOTE_PROMPTS = {
    "code-3-note": 'Please include a note after 3 (e.g., "3 Customer prefers mornings")',
    "note-prefix": "Please include a note after NOTE:",
}


def _status_label(command: CommandMatch) -> str:
    """Confirmation label for a lead status command."""
    if command["code"] in STATUS_CODES:
        return STATUS_CODES[command["code"]][2]
    return WORD_STATUSES[command["name"]][3]


def compose_reply(
    command: CommandMatch,
    resolution: Optional[Dict[str, Any]],
    customer_name: str = DEFAULT_CUSTOMER_NAME,
    now: Optional[datetime] = None,
) -> Tuple[Optional[str], ReplyAction]:
    """
    Build the operator-facing reply for a classified command.

    Args:
        command: Classified reply.
        resolution: ParseResult / SnoozeResult for booking / snooze, else None.
        customer_name: Lead's display name.
        now: Optional reference instant for "Today at ..." wording.

    Returns:
        (reply text or None, action label).
    """
    kind = command["kind"]

    if kind == "booking":
        if resolution and resolution.get("success"):
            return (
                format_booking_confirmation(customer_name, resolution["date_time"], now),
                "book",
            )
        prompt = (resolution or {}).get("clarification_prompt")
        return prompt or BOOKING_USAGE.get(command["name"], BOOKING_USAGE["book-prefix"]), "clarify"

    if kind == "snooze":
        if resolution and resolution.get("success"):
            return format_snooze_confirmation(customer_name, resolution["until"], now), "snooze"
        if resolution and resolution.get("reason") in ("too_short", "too_long"):
            return f"{resolution['error']}\n{SNOOZE_USAGE}", "clarify"
        return SNOOZE_USAGE, "clarify"

    if kind == "lead_status":
        return f"✓ {customer_name} marked {_status_label(command)}", "status_update"

    if kind == "note":
        if not command["argument"]:
            return EMPTY_NOTE_PROMPTS.get(command["name"], EMPTY_NOTE_PROMPTS["note-prefix"]), "clarify"
        return f"✓ Note added to {customer_name}", "note"

    if kind == "confirm":
        return f"Confirmed: {customer_name}. Good luck!", "confirm"

    if kind == "help":
        return HELP_TEXT, "help"

    if kind == "job_action":
        # Needs the operator's latest job; the caller builds that reply
        return None, "job_action"

    if kind == "subscription":
        # Carrier sends the opt-out/opt-in confirmation
        return None, "subscription"

    return None, "ignore"


class ReplyComposerAgent(BaseAgent):
    """
    Agent that composes the SMS reply for a classified command.

    Contract:
        Input: command, resolution, customer_name (optional), now (optional)
        Output: reply (str | None), action (ReplyAction)
    """

    required_keys = ("command", "resolution")

    def __init__(self) -> None:
        """Initialize the Reply Composer Agent."""
        super().__init__(name="ReplyComposerAgent")

    def run(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        """Compose the reply for the classified command."""
        customer_name = input_data.get("customer_name") or DEFAULT_CUSTOMER_NAME

        reply, action = compose_reply(
            input_data["command"],
            input_data["resolution"],
            customer_name=customer_name,
            now=input_data.get("now"),
        )

        logger.info(f"Reply composed: action={action}, has_reply={reply is not None}")
        return {"reply": reply, "action": action}
