"""Structured logging configuration for the TechDocs publisher."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

_TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def setup_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: Path | None = None,
) -> None:
    """Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Emit one JSON document per record (useful for production).
        log_file: Optional path to log file. If None, logs only to stderr.
    """
    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        format=_TEXT_FORMAT,
        level=level.upper(),
        colorize=not json_format,
        serialize=json_format,
    )

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=_TEXT_FORMAT,
            level=level.upper(),
            serialize=json_format,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
        )


__all__ = ["setup_logging"]
