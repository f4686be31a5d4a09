"""Agents for the SMS Reply Pipeline."""

from pipelines.sms_reply.agents.reply_classifier_agent import ReplyClassifierAgent
from pipelines.sms_reply.agents.time_resolution_agent import TimeResolutionAgent
from pipelines.sms_reply.agents.reply_composer_agent import ReplyComposerAgent

__all__ = [
    "ReplyClassifierAgent",
    "TimeResolutionAgent",
    "ReplyComposerAgent",
]
