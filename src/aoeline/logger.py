"""Logging configuration for Aoeline with semantic verbosity levels."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

# Committed edits and lock changes sit between INFO and WARNING
CHANGES_LEVEL = 25
# Clamp decisions and rejected input sit between DEBUG and INFO
CHECKS_LEVEL = 15

logging.addLevelName(CHANGES_LEVEL, "CHANGES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

VERBOSITY_SILENT = 0
VERBOSITY_CHANGES = 1
VERBOSITY_CHECKS = 2
VERBOSITY_DEBUG = 3

_LEVELS = {
    VERBOSITY_SILENT: logging.ERROR,
    VERBOSITY_CHANGES: CHANGES_LEVEL,
    VERBOSITY_CHECKS: CHECKS_LEVEL,
    VERBOSITY_DEBUG: logging.DEBUG,
}


class AoelineLogger(logging.Logger):
    """Logger with one method per verbosity rung.

    - changes(): level 1, a time point date was committed or the board was locked
    - checks(): level 2, a candidate date was clamped or input was rejected
    - debug(): level 3, layout numbers
    """

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(CHANGES_LEVEL):
            self._log(CHANGES_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def get_logger() -> AoelineLogger:
    """Return the shared ``aoeline`` logger.

    The logger class is installed on first call, so every module can call this
    at import time without caring about ordering.
    """
    previous = logging.getLoggerClass()
    logging.setLoggerClass(AoelineLogger)
    try:
        logger = logging.getLogger("aoeline")
    finally:
        logging.setLoggerClass(previous)
    assert isinstance(logger, AoelineLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Configure the aoeline logger.

    Args:
        verbosity: 0=silent (errors only), 1=changes, 2=checks, 3=debug
        stream: Output stream, defaults to sys.stderr
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(_LEVELS.get(verbosity, logging.ERROR))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop handlers and go back to errors-only."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)


def checks_enabled() -> bool:
    """True when clamp decisions will be printed (verbosity >= 2)."""
    return get_logger().isEnabledFor(CHECKS_LEVEL)


def debug_enabled() -> bool:
    return get_logger().isEnabledFor(logging.DEBUG)
