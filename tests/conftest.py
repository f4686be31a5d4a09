"""
Pytest configuration and fixtures.

Sets up import paths for the test suite and isolates tests from
SMS_REPLY_* environment overrides.
"""

import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Add tests directory to path for fixtures
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))

from fixtures.sample_replies import FRIDAY_MORNING  # noqa: E402


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Strip environment overrides so settings come from files and defaults."""
    for var in ("SMS_REPLY_TIMEZONE", "SMS_REPLY_CONFIG", "SMS_REPLY_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def now():
    """Reference instant: Friday 2024-12-20 10:00 (naive)."""
    return FRIDAY_MORNING
