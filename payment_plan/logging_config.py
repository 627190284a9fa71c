"""Logging setup for the command-line interface."""

from __future__ import annotations

import logging

LOGGER_NAME = "payment_plan"
CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Args:
        level: Level name (``"DEBUG"``) or number. Unknown names fall back to
            ``WARNING``.

    Returns:
        The configured ``payment_plan`` logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    return logger
