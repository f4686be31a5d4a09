"""SMS Reply Pipeline construction.

    ReplyClassifierAgent → TimeResolutionAgent → ReplyComposerAgent

The pipeline is pure: it never sends SMS, touches storage, or reads the
clock. Callers supply the reference instant and act on 'action'/'reply'.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from core.contracts.sms_reply import ParserSettings
from core.logger import get_logger
from pipelines.core.runner import PipelineRunner
from pipelines.sms_reply.agents.reply_classifier_agent import ReplyClassifierAgent
from pipelines.sms_reply.agents.reply_composer_agent import ReplyComposerAgent
from pipelines.sms_reply.agents.time_resolution_agent import TimeResolutionAgent
from pipelines.sms_reply.commands import CommandRegistry
from pipelines.sms_reply.config import PIPELINE_NAME

logger = get_logger(__name__)


__all__ = [
    "build_pipeline",
    "process_reply",
    "PIPELINE_NAME",
]


def build_pipeline(
    registry: Optional[CommandRegistry] = None,
    settings: Optional[ParserSettings] = None,
) -> PipelineRunner:
    """
    Build the SMS reply pipeline.

    Args:
        registry: Optional command registry (default: shared registry).
        settings: Optional parser settings (default: module defaults).

    Returns:
        Configured PipelineRunner.
    """
    agents = [
        ReplyClassifierAgent(registry=registry),
        TimeResolutionAgent(settings=settings),
        ReplyComposerAgent(),
    ]
    return PipelineRunner(agents=agents, name=PIPELINE_NAME)


def process_reply(
    body: str,
    now: datetime,
    customer_name: Optional[str] = None,
    timezone: Optional[str] = None,
    settings: Optional[ParserSettings] = None,
) -> Dict[str, Any]:
    """
    Run one inbound reply through the pipeline.

    Args:
        body: Raw SMS body.
        now: Reference instant.
        customer_name: Lead's display name for confirmations.
        timezone: Optional IANA timezone for resolving times.
        settings: Optional parser settings.

    Returns:
        Final pipeline context: body, now, command, resolution, reply, action.
    """
    context: Dict[str, Any] = {
        "body": body,
        "now": now,
        "customer_name": customer_name,
        "timezone": timezone,
    }
    return build_pipeline(settings=settings).run(context)
