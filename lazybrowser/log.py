"""File-based logging for the TUI.

The terminal belongs to the browser while it runs, so records go to a
rotating log file and never to stdout or stderr.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "lazybrowser"
_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 2
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int, log_file: Path | None) -> logging.Logger:
    """Attach a rotating file handler to the package logger.

    Calling it again replaces the previous handler. When ``log_file`` is
    ``None`` or its directory cannot be created, records are dropped.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)
    logger.propagate = False

    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return logger
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(log_file, maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT)
    except OSError:
        logger.addHandler(logging.NullHandler())
        return logger
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    return logger
