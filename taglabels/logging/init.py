from __future__ import annotations

import logging
import sys
from typing import IO

"""Labeled console logging for the tag generator.

Every line the tool prints goes through the "taglabels" logger:
- one line per record: "<LABEL> <message>", no timestamps
- labels INFO, WARN, ERROR, DEBUG plus the custom SUMMARY level
- module loggers (logging.getLogger(__name__)) propagate into it
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "enable_debug",
    "log_summary",
    "reset_logging",
]

LOGGER_NAME = "taglabels"
SUMMARY_LEVEL = 25  # INFO < SUMMARY < WARNING

_LABELS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    SUMMARY_LEVEL: "SUMMARY",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRITICAL",
}

_configured: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Prefix the message with a short level label."""

    def format(self, record: logging.LogRecord) -> str:
        label = _LABELS.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def _app_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def _drop_handlers(logger: logging.Logger) -> None:
    for h in list(logger.handlers):
        logger.removeHandler(h)


def setup_logging(stream: IO[str] | None = None) -> logging.Logger:
    """Attach one labeled handler to the "taglabels" logger (idempotent).

    stream defaults to the current sys.stdout.
    """
    global _configured
    if _configured is not None:
        return _configured

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    logger = _app_logger()
    _drop_handlers(logger)

    console = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console.setFormatter(LabeledFormatter())
    console.setLevel(logging.INFO)
    logger.addHandler(console)
    logger.setLevel(logging.INFO)
    # root に流すと二重出力になる
    logger.propagate = False

    _configured = logger
    return logger


def get_logger() -> logging.Logger:
    return _configured if _configured is not None else setup_logging()


def enable_debug() -> None:
    """Lower the application logger and its handlers to DEBUG."""
    logger = get_logger()
    logger.setLevel(logging.DEBUG)
    for h in logger.handlers:
        h.setLevel(logging.DEBUG)
    logger.debug("debug mode enabled")


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Undo setup_logging(); used between tests."""
    global _configured
    logger = _app_logger()
    _drop_handlers(logger)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    _configured = None
