"""Centralized logging utility with colored console output."""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "SMS_REPLY_LOG_LEVEL"

_loggers: dict[str, logging.Logger] = {}


def _default_level() -> int:
    """Level from SMS_REPLY_LOG_LEVEL (e.g. "DEBUG"), else INFO."""
    name = os.getenv(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.INFO
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get or create a logger that writes colored output to stderr.

    Loggers are cached per name; the level is only applied on first use.

    Args:
        name: Logger name (typically __name__ of calling module).
        level: Optional logging level. Defaults to SMS_REPLY_LOG_LEVEL or INFO.

    Returns:
        Configured logger instance.
    """
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    logger.setLevel(level or _default_level())

    if not logger.handlers:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    logger.propagate = False
    _loggers[name] = logger
    return logger
