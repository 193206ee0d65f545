"""
Log adapters (output destinations).

One logger, several adapters: the console is always present, an append-only
file is optional, and an in-memory ring buffer is available for callers
that want to inspect recent records.
"""

import sys
import threading
from abc import ABC, abstractmethod
from collections import deque
from pathlib import Path
from typing import TextIO

from colorama import just_fix_windows_console

from prefixlog.records import LogRecord, LogLevel
from prefixlog.formatters import LogFormatter, ConsoleFormatter, JsonFormatter


class LogAdapter(ABC):
    """Base adapter. Receives log records that passed the logger's gates."""

    def __init__(
        self,
        name: str,
        min_level: int = LogLevel.TRACE,
        formatter: LogFormatter | None = None,
    ):
        self.name = name
        self.min_level = min_level
        self._formatter = formatter

    @property
    def formatter(self) -> LogFormatter:
        if self._formatter is None:
            self._formatter = self._default_formatter()
        return self._formatter

    @formatter.setter
    def formatter(self, value: LogFormatter) -> None:
        self._formatter = value

    def _default_formatter(self) -> LogFormatter:
        """Subclass-specific default."""
        return ConsoleFormatter()

    @abstractmethod
    def emit(self, record: LogRecord) -> None:
        """Write a log record."""
        ...

    def flush(self) -> None:
        """Flush any buffered output. Override in buffered adapters."""
        pass

    def close(self) -> None:
        """Cleanup. Override if adapter holds resources."""
        self.flush()


class TerminalAdapter(LogAdapter):
    """
    Pretty console output, colorized unless the formatter says otherwise.

    The stream is looked up at emit time when none is given, so redirecting
    sys.stdout after construction still works.
    """

    def __init__(
        self,
        name: str = "console",
        min_level: int = LogLevel.TRACE,
        formatter: LogFormatter | None = None,
        color: bool = True,
        stream: TextIO | None = None,
    ):
        super().__init__(name, min_level, formatter)
        self.color = color
        self._stream = stream
        self._lock = threading.Lock()
        if color:
            # ANSI passthrough on legacy Windows consoles; no-op elsewhere
            just_fix_windows_console()

    def _default_formatter(self) -> LogFormatter:
        return ConsoleFormatter(color=self.color)

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def emit(self, record: LogRecord) -> None:
        formatted = self.formatter.format(record)
        with self._lock:
            stream = self.stream
            stream.write(formatted + "\n")
            stream.flush()


class FileAdapter(LogAdapter):
    """
    Append-only file destination, one JSON object per line.

    The file is opened (and created if missing) in the constructor, so an
    unwritable path fails here with OSError rather than on the first
    record. The handle stays open until close().
    """

    def __init__(
        self,
        path: str | Path,
        name: str = "file",
        min_level: int = LogLevel.TRACE,
        formatter: LogFormatter | None = None,
    ):
        super().__init__(name, min_level, formatter)
        self.path = Path(path)
        self._lock = threading.Lock()
        self._file = open(self.path, "a", encoding="utf-8")

    def _default_formatter(self) -> LogFormatter:
        return JsonFormatter()

    @property
    def closed(self) -> bool:
        return self._file is None

    def emit(self, record: LogRecord) -> None:
        formatted = self.formatter.format(record)
        with self._lock:
            if self._file:
                self._file.write(formatted + "\n")

    def flush(self) -> None:
        with self._lock:
            if self._file:
                self._file.flush()

    def close(self) -> None:
        self.flush()
        with self._lock:
            if self._file:
                self._file.close()
                self._file = None


class MemoryAdapter(LogAdapter):
    """
    Ring buffer of the last N records. Does not grow unbounded.
    Records are kept as LogRecord objects, not formatted text.
    """

    def __init__(
        self,
        name: str = "memory",
        min_level: int = LogLevel.TRACE,
        formatter: LogFormatter | None = None,
        size: int = 1000,
    ):
        super().__init__(name, min_level, formatter)
        self._buffer: deque[LogRecord] = deque(maxlen=size)
        self._lock = threading.Lock()

    def emit(self, record: LogRecord) -> None:
        with self._lock:
            self._buffer.append(record)

    def get_recent(self, n: int = 100, min_level: int | None = None) -> list[LogRecord]:
        """Get recent records, optionally only those at or above min_level."""
        with self._lock:
            records = list(self._buffer)

        if min_level is not None:
            records = [r for r in records if r.level >= min_level]

        return records[-n:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    @property
    def count(self) -> int:
        return len(self._buffer)
