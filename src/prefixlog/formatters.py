"""
Log formatters.

Each adapter can use a different formatter.
  - console: "{time} {LVL} {caller} > {message} {label}={value}"
  - json:    structured JSON, one object per line, for files
"""

import json
from abc import ABC, abstractmethod
from typing import Any

from colorama import Fore, Style

from prefixlog.records import LogRecord, LEVEL_ABBREVIATIONS

DEFAULT_TIME_FORMAT = "%H:%M:%S"


class LogFormatter(ABC):
    """Base formatter. Transforms LogRecord → string."""

    def __init__(self, time_format: str = DEFAULT_TIME_FORMAT):
        self.time_format = time_format

    def format_time(self, record: LogRecord) -> str:
        return record.timestamp.strftime(self.time_format)

    @abstractmethod
    def format(self, record: LogRecord) -> str: ...


class ConsoleFormatter(LogFormatter):
    """
    Human-readable single-line format for terminal display.
    Example: 14:32:05 INF app/main.py:12 > listening port=8080 prefix=api

    Multi-line field values (the panic stack) are printed on their own
    lines after the record.
    """

    LEVEL_COLORS = {
        5: Fore.MAGENTA,           # TRACE
        10: Fore.YELLOW,           # DEBUG
        20: Fore.GREEN,            # INFO
        30: Fore.RED,              # WARN
        40: Style.BRIGHT + Fore.RED,
        50: Style.BRIGHT + Fore.RED,
    }

    def __init__(self, time_format: str = DEFAULT_TIME_FORMAT, color: bool = True):
        super().__init__(time_format)
        self.color = color

    def _paint(self, text: str, code: str) -> str:
        if not self.color or not code:
            return text
        return f"{code}{text}{Style.RESET_ALL}"

    def _level_tag(self, level: int) -> str:
        tag = LEVEL_ABBREVIATIONS.get(level)
        if tag is None:
            tag = str(level)[:3].upper()
        return self._paint(tag, self._get_color(level))

    def _get_color(self, level: int) -> str:
        """Get color for level, falling back to nearest lower level."""
        for threshold in sorted(self.LEVEL_COLORS, reverse=True):
            if level >= threshold:
                return self.LEVEL_COLORS[threshold]
        return ""

    def format(self, record: LogRecord) -> str:
        parts = [
            self._paint(self.format_time(record), Style.DIM),
            self._level_tag(record.level),
        ]
        if record.caller:
            parts.append(self._paint(record.caller, Style.BRIGHT) + self._paint(" >", Fore.CYAN))
        if record.message:
            parts.append(record.message)

        trailing = []
        for key, value in record.fields.items():
            text = _format_value(value)
            if "\n" in text:
                trailing.append(text.rstrip("\n"))
                continue
            parts.append(f"{self._paint(key + '=', Fore.CYAN)}{text}")

        line = " ".join(parts)
        if trailing:
            line = "\n".join([line] + trailing)
        return line


class JsonFormatter(LogFormatter):
    """
    Structured JSON for file destinations and machine parsing.
    One JSON object per line, keys in a fixed order:
    level, fields..., time, caller, message.
    """

    def format(self, record: LogRecord) -> str:
        obj: dict[str, Any] = {"level": record.level_name.lower()}
        for key, value in record.fields.items():
            if key == "stack":
                continue
            obj[key] = _serialize_value(value)
        obj["time"] = self.format_time(record)
        if record.caller:
            obj["caller"] = record.caller
        obj["message"] = record.message
        if "stack" in record.fields:
            obj["stack"] = _serialize_value(record.fields["stack"])
        return json.dumps(obj, default=str)


def _format_value(v: Any) -> str:
    """Format a field value for console display; quote values with spaces."""
    text = str(v)
    if "\n" not in text and (" " in text or text == ""):
        return json.dumps(text)
    return text


def _serialize_value(v: Any) -> Any:
    """Make a value JSON-serializable."""
    if isinstance(v, (str, int, float, bool, type(None))):
        return v
    if isinstance(v, (list, tuple)):
        return [_serialize_value(i) for i in v]
    if isinstance(v, dict):
        return {str(k): _serialize_value(val) for k, val in v.items()}
    return str(v)
