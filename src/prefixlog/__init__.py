"""
prefixlog: leveled, prefix-tagged logging in front of a console/file sink.

A thin logger with a stable call-site API: construct it with a prefix,
adjust level/prefix/color fluently, call trace/debug/info/warn/error, or
panic() to record a stack trace and abort the current flow.
"""

from prefixlog.core import Logger, LoggerOptions, new_logger
from prefixlog.records import LogRecord, LogLevel
from prefixlog.errors import LoggerPanic
from prefixlog.config import LoggerSettings, SeverityGate, GLOBAL_GATE
from prefixlog.adapters import (
    LogAdapter,
    TerminalAdapter,
    FileAdapter,
    MemoryAdapter,
)
from prefixlog.sink import Sink, build_sink
from prefixlog.formatters import LogFormatter, ConsoleFormatter, JsonFormatter
from prefixlog.bridge import LoggerHandler, install_handler

__all__ = [
    "Logger",
    "LoggerOptions",
    "new_logger",
    "LogRecord",
    "LogLevel",
    "LoggerPanic",
    "LoggerSettings",
    "SeverityGate",
    "GLOBAL_GATE",
    "LogAdapter",
    "TerminalAdapter",
    "FileAdapter",
    "MemoryAdapter",
    "Sink",
    "build_sink",
    "LogFormatter",
    "ConsoleFormatter",
    "JsonFormatter",
    "LoggerHandler",
    "install_handler",
]
