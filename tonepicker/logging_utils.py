"""Logging setup for the tone picker service."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Libraries that log every outbound model request at INFO.
NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, level: str = "INFO", quiet: tuple[str, ...] = NOISY_LOGGERS) -> None:
    """Configure logging once at startup; ``quiet`` loggers are held at WARNING."""
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    for name in quiet:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)
