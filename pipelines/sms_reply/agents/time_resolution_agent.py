"""
Time Resolution Agent for the SMS Reply Pipeline.

Runs the command argument of booking and snooze replies through the time
and snooze parsers. Pure: the reference instant comes from the context.

Integration Position:
    ReplyClassifierAgent
           ↓
    TimeResolutionAgent         ← THIS AGENT
           ↓
    ReplyComposerAgent

Input: command, now, timezone (optional)
Output: resolution (ParseResult | SnoozeResult | None)
"""

from datetime import datetime
from typing import Any, Dict, Optional

from core.contracts.sms_reply import ParserSettings
from core.logger import get_logger
from pipelines.core.base_agent import BaseAgent
from pipelines.sms_reply.snooze_parser import parse_snooze
from pipelines.sms_reply.time_parser import parse_time

logger = get_logger(__name__)


class TimeResolutionAgent(BaseAgent):
    """
    Agent that resolves booking times and snooze durations.

    Contract:
        Input: command (CommandMatch), now (datetime), timezone (optional str)
        Output: resolution
            - booking commands: ParseResult
            - snooze commands: SnoozeResult
            - anything else: None
    """

    required_keys = ("command", "now")

    def __init__(self, settings: Optional[ParserSettings] = None) -> None:
        """
        Initialize the Time Resolution Agent.

        Args:
            settings: Parser settings (default: module defaults).
        """
        super().__init__(name="TimeResolutionAgent")
        self.settings = settings

    def run(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Resolve the command argument into an instant.

        Raises:
            ValueError: If now is not a datetime.
        """
        command = input_data["command"]
        now = input_data["now"]
        tz = input_data.get("timezone")

        if not isinstance(now, datetime):
            raise ValueError(
                f"Pipeline contract violation: 'now' must be a datetime, "
                f"got {type(now).__name__}"
            )

        if command["kind"] == "booking":
            resolution = parse_time(command["argument"], now, tz=tz, settings=self.settings)
            outcome = "resolved" if resolution["success"] else "needs clarification"
            logger.info(f"Booking time {command['argument']!r} {outcome}")
        elif command["kind"] == "snooze":
            resolution = parse_snooze(command["argument"], now, tz=tz, settings=self.settings)
            outcome = resolution.get("display_text") or resolution.get("reason")
            logger.info(f"Snooze {command['argument']!r}: {outcome}")
        else:
            resolution = None

        return {"resolution": resolution}
