"""Logger helpers for the Winnow package.

Winnow is a library: it never configures handlers beyond the
``NullHandler`` attached to the package logger in ``winnow/__init__.py``.
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "winnow"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_logger(name: str) -> logging.Logger:
    """Return the logger for module *name* (use ``__name__``)."""
    return logging.getLogger(name)


def set_log_level(level: str) -> None:
    """Set the level of the package logger, e.g. ``"DEBUG"``."""
    level = level.upper()
    if level not in VALID_LOG_LEVELS:
        raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}, got {level!r}")
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
