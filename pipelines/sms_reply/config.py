"""Configuration constants and settings loader for the SMS Reply Pipeline."""

import os
from pathlib import Path
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.config_loader import load_config
from core.contracts.sms_reply import ParserSettings

# Pipeline identification
PIPELINE_NAME = "SMS_REPLY_PIPELINE"

# Hour used when a date is given without a time (9 AM)
DEFAULT_HOUR = 9

# Day-part hours
MORNING_HOUR = 9
NOON_HOUR = 12
AFTERNOON_HOUR = 14
EVENING_HOUR = 17

# ASAP lead time
ASAP_OFFSET_HOURS = 1

# Snooze bounds
SNOOZE_MIN_MINUTES = 10
SNOOZE_MAX_HOURS = 24

# Customer label when the alert context carries no name
DEFAULT_CUSTOMER_NAME = "Lead"

# Environment overrides
TIMEZONE_ENV = "SMS_REPLY_TIMEZONE"
CONFIG_PATH_ENV = "SMS_REPLY_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/sms_reply.yaml")

DEFAULT_SETTINGS: ParserSettings = {
    "timezone": None,
    "default_hour": DEFAULT_HOUR,
    "snooze_min_minutes": SNOOZE_MIN_MINUTES,
    "snooze_max_hours": SNOOZE_MAX_HOURS,
}


def validate_settings(raw: Dict[str, Any]) -> ParserSettings:
    """
    Validate a settings mapping and merge it over the defaults.

    Args:
        raw: Partial settings (e.g., the 'parser' block of a YAML file).

    Returns:
        Complete, validated ParserSettings.

    Raises:
        ValueError: On unknown keys, wrong types, out-of-range values,
            or an unknown timezone.
    """
    unknown = set(raw) - set(DEFAULT_SETTINGS)
    if unknown:
        raise ValueError(f"Unknown parser settings: {sorted(map(str, unknown))}")

    settings: ParserSettings = {**DEFAULT_SETTINGS, **raw}  # type: ignore[typeddict-item]

    for key in ("default_hour", "snooze_min_minutes", "snooze_max_hours"):
        value = settings[key]  # type: ignore[literal-required]
        # bool is an int subclass; reject it explicitly
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"'{key}' must be an integer, got {type(value).__name__}")

    if not 0 <= settings["default_hour"] <= 23:
        raise ValueError(f"'default_hour' must be 0-23, got {settings['default_hour']}")
    if settings["snooze_min_minutes"] < 1:
        raise ValueError("'snooze_min_minutes' must be at least 1")
    if settings["snooze_max_hours"] < 1:
        raise ValueError("'snooze_max_hours' must be at least 1")
    if settings["snooze_min_minutes"] > settings["snooze_max_hours"] * 60:
        raise ValueError("'snooze_min_minutes' exceeds 'snooze_max_hours'")

    tz = settings["timezone"]
    if tz is not None and not isinstance(tz, str):
        raise ValueError(f"'timezone' must be a string, got {type(tz).__name__}")
    if tz is not None:
        try:
            ZoneInfo(tz)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {tz!r}") from e

    return settings


def load_settings(path: Optional[str | Path] = None) -> ParserSettings:
    """
    Load parser settings from YAML and the environment.

    Priority order:
        1. SMS_REPLY_TIMEZONE environment variable (timezone only)
        2. 'parser' block of the YAML file
        3. Module defaults

    The YAML path is the explicit argument, else SMS_REPLY_CONFIG, else
    config/sms_reply.yaml. A missing default file is not an error; a
    missing explicitly requested file is.

    Args:
        path: Optional path to a YAML settings file.

    Returns:
        Validated ParserSettings.

    Raises:
        FileNotFoundError: If an explicitly requested file doesn't exist.
        ValueError: If the settings are invalid.
    """
    explicit = path or os.getenv(CONFIG_PATH_ENV)
    config_path = Path(explicit) if explicit else DEFAULT_CONFIG_PATH

    raw: Dict[str, Any] = {}
    if explicit or config_path.exists():
        config = load_config(config_path)
        block = config.get("parser") or {}
        if not isinstance(block, dict):
            raise ValueError(
                f"'parser' block in {config_path} must be a mapping, "
                f"got {type(block).__name__}"
            )
        raw = dict(block)

    env_tz = os.getenv(TIMEZONE_ENV)
    if env_tz:
        raw["timezone"] = env_tz.strip()

    return validate_settings(raw)
