"""Loguru-based logging setup.

The package disables its own log records on import, as libraries using
loguru should. :func:`setup_logger` turns them back on and attaches sinks
that only receive ``android_location`` records, leaving the host
application's handlers alone.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

PACKAGE = "android_location"
LOG_FILE_NAME = "android-location.log"

_handler_ids: list[int] = []


def setup_logger(log_dir: Path | None = None, level: str = "INFO") -> None:
    """Enable package logging with console + rotating file output."""
    teardown_logger()
    logger.enable(PACKAGE)

    # Console
    _handler_ids.append(
        logger.add(
            sys.stderr,
            level=level,
            filter=PACKAGE,
            format="<green>{time:HH:mm:ss}</green> | <level>{level:<7}</level> | {message}",
            colorize=True,
        )
    )

    # File
    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        _handler_ids.append(
            logger.add(
                str(log_dir / LOG_FILE_NAME),
                level="DEBUG",
                filter=PACKAGE,
                format="{time:YYYY-MM-DD HH:mm:ss} | {level:<7} | {name}:{line} | {message}",
                rotation="5 MB",
                retention="7 days",
                encoding="utf-8",
            )
        )


def teardown_logger() -> None:
    """Remove the sinks added by :func:`setup_logger` and silence the package again."""
    while _handler_ids:
        logger.remove(_handler_ids.pop())
    logger.disable(PACKAGE)
