"""
Loguru sink configuration shared by the API process.
"""

from __future__ import annotations

import sys

from loguru import logger

from app.core.config import settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} [{level}]: {message}"


def setup_logging() -> None:
    """Replace the default loguru sink with console and optional file sinks."""
    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)
    if settings.LOG_FILE:
        logger.add(
            settings.LOG_FILE,
            level=settings.LOG_LEVEL.upper(),
            format=LOG_FORMAT,
            encoding="utf-8",
            enqueue=True,
        )
