"""
Log records and level definitions.

Levels keep Python-compatible numeric values so records bridged in from the
standard library line up with ours. DISABLED sits above every real level:
a threshold of DISABLED suppresses all output except panics.
"""

import os
import sys
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any


class LogLevel(IntEnum):
    """Ordered severities. Higher value = more severe."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    WARNING = 30     # alias, accepted by from_name()
    ERROR = 40
    PANIC = 50       # used for panic records only
    DISABLED = 100

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve level from string name, case-insensitive."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(
                f"Unknown log level '{name}'. "
                f"Valid levels: {', '.join(m.name for m in cls)}"
            )

    @classmethod
    def from_value(cls, value: "int | str | LogLevel") -> "LogLevel":
        """Resolve level from int or string."""
        if isinstance(value, str):
            return cls.from_name(value)
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(
                    f"No log level with value {value}. "
                    f"Valid values: {', '.join(f'{m.name}={m.value}' for m in cls)}"
                )
        raise TypeError(f"Expected int or str, got {type(value).__name__}")

    @classmethod
    def parse(cls, value: str | None) -> "LogLevel | None":
        """Lenient variant of from_name(): None for missing or unknown names."""
        if not value or not value.strip():
            return None
        try:
            return cls.from_name(value)
        except ValueError:
            return None


# Map for display: level int → name string (aliases excluded)
LEVEL_NAMES: dict[int, str] = {member.value: member.name for member in LogLevel}

# Three-letter tags used by the console formatter
LEVEL_ABBREVIATIONS: dict[int, str] = {
    LogLevel.TRACE: "TRC",
    LogLevel.DEBUG: "DBG",
    LogLevel.INFO: "INF",
    LogLevel.WARN: "WRN",
    LogLevel.ERROR: "ERR",
    LogLevel.PANIC: "PNC",
}


def level_name(level: int) -> str:
    """Get display name for a level value. Falls back to numeric string."""
    return LEVEL_NAMES.get(level, str(level))


def format_message(values: tuple[Any, ...]) -> str:
    """
    Render emit arguments as a single message.

    One value is rendered with str(). Several values are space-joined, then
    a single trailing ']' is trimmed (kept for compatibility with the format
    existing log consumers already parse).
    """
    if not values:
        return ""
    if len(values) == 1:
        return safe_str(values[0])
    message = " ".join(safe_str(v) for v in values)
    if message.endswith("]"):
        message = message[:-1]
    return message


def safe_str(value: Any) -> str:
    """str(value), or a placeholder when the value cannot render itself."""
    try:
        return str(value)
    except Exception as exc:
        return f"<unprintable {type(value).__name__}: {exc!r}>"


_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


def find_caller(skip_dirs: tuple[str, ...] = ()) -> str:
    """
    Return 'path:line' for the first frame outside this package.

    Paths under the working directory are shown relative to it; anything
    else is trimmed to 'parent/file.py'.
    """
    skip = tuple(d.rstrip(os.sep) + os.sep for d in (_PACKAGE_DIR,) + tuple(skip_dirs))
    frame = sys._getframe(1)
    while frame is not None:
        filename = os.path.abspath(frame.f_code.co_filename)
        if not filename.startswith(skip):
            return f"{trim_path(filename)}:{frame.f_lineno}"
        frame = frame.f_back
    return "???:0"


def trim_path(filename: str) -> str:
    cwd = os.getcwd()
    if filename.startswith(cwd + os.sep):
        return os.path.relpath(filename, cwd).replace(os.sep, "/")
    parent, base = os.path.split(filename)
    return f"{os.path.basename(parent)}/{base}" if parent else base


@dataclass(frozen=True)
class LogRecord:
    """
    Immutable log record. Created by the Logger, written by every adapter.

    `fields` keeps insertion order: the context label first, then any
    record-specific fields such as `stack`.
    """
    timestamp: datetime
    level: int
    level_name: str
    message: str
    fields: dict[str, Any] = field(default_factory=dict)
    caller: str = ""

    @classmethod
    def create(
        cls,
        level: int,
        message: str,
        caller: str = "",
        **fields: Any,
    ) -> "LogRecord":
        """Factory method with auto-timestamp and level name resolution."""
        return cls(
            timestamp=datetime.now().astimezone(),
            level=level,
            level_name=level_name(level),
            message=message,
            fields=fields,
            caller=caller,
        )
