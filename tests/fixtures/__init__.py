"""
Fixtures package for SMS reply testing.

Provides fixed reference instants and sample operator replies.
"""

from fixtures.sample_replies import (
    FRIDAY_MORNING,
    TUESDAY_MORNING,
    DST_SPRING_FORWARD,
    GARBAGE_REPLIES,
)

__all__ = [
    "FRIDAY_MORNING",
    "TUESDAY_MORNING",
    "DST_SPRING_FORWARD",
    "GARBAGE_REPLIES",
]
