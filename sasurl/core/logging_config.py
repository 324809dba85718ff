"""Logging configuration for the SAS URL service."""

from __future__ import annotations

import sys

from loguru import logger

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def setup_logging(*, level: str = "INFO", json_format: bool = False) -> None:
    """Configure the loguru sink used by the app and the CLI.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Emit one JSON object per record instead of coloured text.
    """
    logger.remove()

    if json_format:
        logger.add(sys.stderr, level=level.upper(), serialize=True)
        return

    logger.add(sys.stderr, format=_CONSOLE_FORMAT, level=level.upper(), colorize=True)
