from __future__ import annotations

import logging
import logging.handlers
import os
from typing import Optional

from .config import LOG_FILE

LOGGER_NAME = "WindowViewer"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_level(level: Optional[str]) -> int:
    name = (level or "INFO").upper()
    if name not in LOG_LEVELS:
        return logging.INFO
    return logging.getLevelName(name)


def setup_logging(level: str = "INFO", console: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the application logger.

    The rotating file handler always records DEBUG. ``console`` adds a stderr
    handler at ``level``; it must stay off while the fullscreen viewer owns the
    terminal.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()
    logger.propagate = False

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    level_value = resolve_level(level)

    path = log_file or LOG_FILE
    os.makedirs(os.path.dirname(path), exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level_value)
        stream_handler.setFormatter(fmt)
        logger.addHandler(stream_handler)

    return logger


__all__ = ["setup_logging", "resolve_level", "LOGGER_NAME", "LOG_LEVELS"]
