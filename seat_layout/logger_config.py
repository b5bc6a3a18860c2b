"""Logging setup shared by the CLI and the API."""

from __future__ import annotations

import os
import sys

from loguru import logger

log_format = " | ".join(
    (
        "<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>",
        "<lvl>{level:<8}</>",
        "<c>{name}:{function}:{line}</>",
        "{message}",
    )
)


def configure_logging(level: str | None = None) -> None:
    # Replace loguru's default DEBUG handler.
    logger.remove()
    logger.add(sys.stderr, format=log_format, level=(level or os.environ.get("SEAT_LAYOUT_LOG_LEVEL", "WARNING")).upper())
