"""Logging setup for sitemin.

Every module logs through ``get_logger(<module>)`` so that one call to
``configure_logging`` controls the whole ``sitemin`` tree. Per-file report
lines are logged with ``extra=FILE_LINE`` and reach the console exactly as
rendered by :func:`sitemin.report.format_file_line`.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "sitemin"
_FILE_LINE_ATTR = "file_line"

FILE_LINE = {_FILE_LINE_ATTR: True}

CONSOLE_FORMAT = "[sitemin] %(levelname)s %(message)s"
LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ConsoleFormatter(logging.Formatter):
    """Print report lines bare and prefix everything else with the tool name."""

    def __init__(self) -> None:
        super().__init__(CONSOLE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        if getattr(record, _FILE_LINE_ATTR, False):
            return record.getMessage()
        return super().format(record)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``sitemin.<name>``, or the package logger itself."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route the sitemin tree to stderr and, optionally, to ``log_file``.

    Safe to call repeatedly: handlers from an earlier call are closed and
    replaced rather than stacked.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(ConsoleFormatter())
    logger.addHandler(console)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(level)
        sink.setFormatter(logging.Formatter(LOG_FILE_FORMAT))
        logger.addHandler(sink)

    return logger


__all__ = ["FILE_LINE", "ConsoleFormatter", "configure_logging", "get_logger"]
