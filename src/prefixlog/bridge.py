"""
Standard-library bridge.

Third-party libraries log through `logging`; LoggerHandler routes those
records through a prefixlog Logger so they share its prefix, gates and
destinations.

Usage:
    log = new_logger("worker")
    install_handler(log, "urllib3")
"""

from __future__ import annotations

import logging

from prefixlog.core import Logger
from prefixlog.records import LogLevel, trim_path


def map_level(levelno: int) -> LogLevel:
    """Map a stdlib level number onto the nearest LogLevel at or below it."""
    if levelno >= logging.ERROR:
        return LogLevel.ERROR
    if levelno >= logging.WARNING:
        return LogLevel.WARN
    if levelno >= logging.INFO:
        return LogLevel.INFO
    if levelno >= logging.DEBUG:
        return LogLevel.DEBUG
    return LogLevel.TRACE


class LoggerHandler(logging.Handler):
    """
    logging.Handler that forwards records to a Logger.

    CRITICAL becomes ERROR: a library's critical message never panics
    the host.
    """

    def __init__(self, logger: Logger, level: int = logging.NOTSET):
        super().__init__(level)
        self.logger = logger

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record) if self.formatter else record.getMessage()
            caller = f"{trim_path(record.pathname)}:{record.lineno}"
            self.logger.log(map_level(record.levelno), message, caller=caller)
        except Exception:
            self.handleError(record)


def install_handler(logger: Logger, name: str | None = None) -> LoggerHandler:
    """Attach a LoggerHandler to the stdlib logger `name` (root when None)."""
    target = logging.getLogger(name)
    handler = LoggerHandler(logger)
    target.addHandler(handler)
    return handler
