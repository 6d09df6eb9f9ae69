"""Logging setup for the trackergraph command line."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Union

__all__ = ["setup_logger"]

CONSOLE_FORMAT = "[%(levelname).1s] %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
MAX_LOG_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 2


def setup_logger(
    name: str = "trackergraph",
    verbose: bool = False,
    log_file: Union[str, Path, None] = None,
) -> logging.Logger:
    """Configure the package logger.

    Args:
        name: Logger to configure; child module loggers inherit from it.
        verbose: ``True`` shows DEBUG output, otherwise WARNING and above.
        log_file: Optional path for a rotating log file. ``None`` logs to the console only.
    """
    logger = logging.getLogger(name)
    level = logging.DEBUG if verbose else logging.WARNING

    # Calling twice must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(level)
    logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger
