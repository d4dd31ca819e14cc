"""Application logger.

Everything taskpad logs goes to a size-rotated file under the platform's
user log directory; nothing is echoed to the terminal, which belongs to
the Rich output and the Textual board.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

LOGGER_NAME = "taskpad_cli"
LOG_FILE_NAME = "taskpad.log"
LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3

_logger: logging.Logger | None = None
_file_handler: logging.Handler | None = None


def log_file_path() -> Path:
    """Location of the active log file."""
    return Path(user_log_dir(LOGGER_NAME)) / LOG_FILE_NAME


def _open_file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler


def get_logger() -> logging.Logger:
    """Return the ``taskpad_cli`` logger, attaching the file handler once.

    Handlers installed by others (pytest's capture handlers, for one) are
    left alone; only this module's own file handler is checked for.
    """
    global _logger, _file_handler
    if _logger is not None:
        return _logger

    logger = logging.getLogger(LOGGER_NAME)
    if _file_handler is None or _file_handler not in logger.handlers:
        _file_handler = _open_file_handler(log_file_path())
        logger.addHandler(_file_handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    _logger = logger
    return _logger
