"""SMS Reply Pipeline - classify operator replies and resolve booking/snooze times."""

from pipelines.sms_reply.pipeline import build_pipeline, process_reply, PIPELINE_NAME
from pipelines.sms_reply.time_parser import parse_time
from pipelines.sms_reply.snooze_parser import parse_snooze
from pipelines.sms_reply.formatting import (
    format_booking_confirmation,
    format_snooze_confirmation,
)
from pipelines.sms_reply.commands import classify_reply

__all__ = [
    "build_pipeline",
    "process_reply",
    "PIPELINE_NAME",
    "parse_time",
    "parse_snooze",
    "format_booking_confirmation",
    "format_snooze_confirmation",
    "classify_reply",
]
