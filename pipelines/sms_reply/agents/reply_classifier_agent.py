"""
Reply Classifier Agent for the SMS Reply Pipeline.

Classifies an inbound operator SMS into a command and extracts the
command's free-text argument.

Integration Position:
    ReplyClassifierAgent        ← THIS AGENT
           ↓
    TimeResolutionAgent
           ↓
    ReplyComposerAgent

Input: body
Output: command
"""

from typing import Any, Dict, Optional

from core.logger import get_logger
from pipelines.core.base_agent import BaseAgent
from pipelines.sms_reply.commands import CommandRegistry, command_registry

logger = get_logger(__name__)


class ReplyClassifierAgent(BaseAgent):
    """
    Agent that maps an SMS body to a CommandMatch.

    Contract:
        Input: body (str, original case)
        Output: command (CommandMatch)
    """

    required_keys = ("body",)

    def __init__(self, registry: Optional[CommandRegistry] = None) -> None:
        """
        Initialize the Reply Classifier Agent.

        Args:
            registry: Command registry to classify with (default: shared).
        """
        super().__init__(name="ReplyClassifierAgent")
        self.registry = registry if registry is not None else command_registry

    def run(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Classify the reply body.

        Raises:
            ValueError: If body is not a string.
        """
        body = input_data["body"]
        if body is not None and not isinstance(body, str):
            raise ValueError(
                f"Pipeline contract violation: 'body' must be a string, "
                f"got {type(body).__name__}"
            )

        command = self.registry.classify(body)
        logger.info(f"Reply classified as '{command['name']}' ({command['kind']})")

        return {"command": command}
