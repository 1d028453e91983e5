from __future__ import annotations

import sys
from typing import Optional

from loguru import logger

from .settings import get_settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Replace loguru's default handler with the application sinks.

    The console sink honours ``level`` (or ``Settings.log_level``); the optional
    file sink always records DEBUG so engine traces can be inspected later.
    """
    settings = get_settings()
    logger.remove()
    logger.add(
        sys.stderr,
        level=level or settings.log_level,
        format=CONSOLE_FORMAT,
        colorize=True,
    )
    target = log_file or settings.log_file
    if target:
        logger.add(
            target,
            rotation="10 MB",
            retention="30 days",
            level="DEBUG",
            format=FILE_FORMAT,
        )
