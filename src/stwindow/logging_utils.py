"""
Logging utilities for stwindow.

Every module logs through the "STWindow" logger; the CLI tools attach a single
stderr handler with one of the formatters below.
"""

import logging
import sys
from logging import getLogger

LOGGER_NAME = "STWindow"


class SelectiveLevelFormatter(logging.Formatter):
    """Only prefix WARNING and above with the level name."""

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.WARNING:
            return f"{record.levelname}: {record.getMessage()}"
        return record.getMessage()


class VerboseFormatter(logging.Formatter):
    """
    Format: YYYY-MM-DD HH:MM:SS LEVEL [module:line]: Message
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        return f"{timestamp} {record.levelname} [{record.module}:{record.lineno}]: {record.getMessage()}"


def configure_enhanced_logging(verbose: bool = False, quiet: bool = False, logger_name: str = LOGGER_NAME) -> logging.Logger:
    """
    Configure the named logger to write to stderr.

    Args:
        verbose: Enable debug-level logging with detailed formatting
        quiet: Only show warnings and errors
        logger_name: Name of the logger to configure

    Returns:
        Configured logger instance
    """
    logger = getLogger(logger_name)

    # Remove existing handlers to avoid duplication
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    if quiet:
        logger.setLevel(logging.WARNING)
    elif verbose:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(VerboseFormatter() if verbose else SelectiveLevelFormatter())
    logger.addHandler(handler)

    return logger
