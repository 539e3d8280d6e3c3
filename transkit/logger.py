"""
Logging setup shared by every transkit module.

Records go to stderr (INFO and above, adjustable with set_console_level) so that CLI
output on stdout stays machine readable. Setting TRANSKIT_LOG_FILE additionally writes
everything down to DEBUG into that file.
"""
import logging
import os
import sys
from typing import List

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s() | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_ENV = "TRANSKIT_LOG_FILE"

_console_level = logging.INFO
_console_handlers: List[logging.Handler] = []


def _formatter() -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT, DATE_FORMAT)


def get_logger(name: str) -> logging.Logger:
    """
    Returns the logger for `name` (usually __name__), attaching handlers on first use.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(_console_level)
    console.setFormatter(_formatter())
    logger.addHandler(console)
    _console_handlers.append(console)

    log_file = os.environ.get(LOG_FILE_ENV)
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(_formatter())
        logger.addHandler(file_handler)

    return logger


def set_console_level(level: int):
    """Changes the stderr threshold of all transkit loggers, existing and future."""
    global _console_level
    _console_level = level
    for handler in _console_handlers:
        handler.setLevel(level)
