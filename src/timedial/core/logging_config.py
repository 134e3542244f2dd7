"""Logging setup: one rotating log file under the ``timedial`` logger."""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable

from .paths import log_path

LOGGER_NAME = "timedial"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s"
LOG_LEVEL_ENV = "TIMEDIAL_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.INFO
MAX_LOG_BYTES = 5_000_000
LOG_BACKUPS = 5

_configured = False


def _level_from_env(default: int | str) -> int | str:
    value = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if value and isinstance(logging.getLevelName(value), int):
        return value
    return default


def configure_logging(
    level: int | str = DEFAULT_LOG_LEVEL,
    extra_handlers: Iterable[logging.Handler] | None = None,
    path: Path | None = None,
) -> logging.Logger:
    """Attach the file handler to the ``timedial`` logger once per process.

    Later calls only adjust the level. ``TIMEDIAL_LOG_LEVEL`` overrides ``level``.
    """
    global _configured
    logger = logging.getLogger(LOGGER_NAME)
    level = _level_from_env(level)
    logger.setLevel(level)
    if _configured:
        return logger

    file_handler = RotatingFileHandler(
        path or log_path(),
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
        delay=True,
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    for handler in (file_handler, *(extra_handlers or ())):
        logger.addHandler(handler)
    logger.propagate = False
    logging.captureWarnings(True)

    _configured = True
    logger.info("Logging initialized", extra={"event": "logging_configured", "level": level})
    return logger


def reset_logging(level: int | str = DEFAULT_LOG_LEVEL, *, reconfigure: bool = True) -> logging.Logger:
    """Close and detach every handler, then optionally configure again."""
    global _configured
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        try:
            handler.close()
        finally:
            logger.removeHandler(handler)
    _configured = False
    if reconfigure:
        return configure_logging(level)
    return logger
