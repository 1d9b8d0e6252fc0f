"""Logging setup for GameGrinding.

Every module logs through a child of the ``gamegrinding`` logger
(``gamegrinding.database``, ``gamegrinding.collection`` ...), so the
startup code configures the whole engine with one ``setup_logging()`` call
fed from ``config.LOG_LEVEL`` and ``config.LOG_FILE``.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

__all__ = ["get_logger", "level_from_name", "logger", "setup_logging"]

logger = logging.getLogger("gamegrinding")

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_LOG_FILE_MAX_BYTES = 1_000_000
_LOG_FILE_BACKUPS = 3


def get_logger(name: str) -> logging.Logger:
    """Return the ``gamegrinding.<name>`` child logger."""
    return logger.getChild(name)


def level_from_name(name: str | int | None, default: int = logging.INFO) -> int:
    """Translate a level from settings/env ("debug", "WARNING", 10) to a logging level.

    Unknown or empty values fall back to ``default``.
    """
    if isinstance(name, int):
        return name
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def _handler_of(kind: type[logging.Handler]) -> logging.Handler | None:
    return next((h for h in logger.handlers if type(h) is kind), None)


def setup_logging(level: str | int = logging.INFO, log_file: Path | None = None) -> None:
    """Configure the application logger.

    The console handler follows ``level``. A log file, if given, rotates
    and always records DEBUG. Calling it again re-applies the level and adds
    the file handler if it is still missing; it never duplicates handlers.

    Args:
        level: Level name from settings ("INFO") or a logging constant.
        log_file: Optional log file path.
    """
    console_level = level_from_name(level)
    formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt="%H:%M:%S")

    console = _handler_of(logging.StreamHandler)
    if console is None:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        logger.addHandler(console)
    console.setLevel(console_level)

    if log_file is not None and _handler_of(RotatingFileHandler) is None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=_LOG_FILE_MAX_BYTES, backupCount=_LOG_FILE_BACKUPS, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    has_file = _handler_of(RotatingFileHandler) is not None
    logger.setLevel(min(console_level, logging.DEBUG) if has_file else console_level)
