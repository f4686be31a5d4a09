"""Utility functions for the SMS Reply Pipeline."""

from pipelines.sms_reply.utils.helpers import (
    normalize_reply,
    resolve_reference,
    at_time,
    add_elapsed,
)

__all__ = ["normalize_reply", "resolve_reference", "at_time", "add_elapsed"]
