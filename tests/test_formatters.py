"""
Tests for the console and JSON formatters.
"""

import json
from datetime import datetime, timezone

from prefixlog.formatters import ConsoleFormatter, JsonFormatter
from prefixlog.records import LogLevel, LogRecord, level_name


def _record(level=LogLevel.INFO, message="hello", **fields):
    ts = datetime(2026, 2, 12, 14, 32, 5, tzinfo=timezone.utc)
    return LogRecord(
        timestamp=ts, level=level, level_name=level_name(level),
        message=message, fields=fields, caller="app/main.py:12",
    )


class TestConsoleFormatter:
    def test_plain_layout(self):
        line = ConsoleFormatter(color=False).format(_record(prefix="api"))
        assert line == "14:32:05 INF app/main.py:12 > hello prefix=api"

    def test_values_with_spaces_quoted(self):
        line = ConsoleFormatter(color=False).format(_record(prefix="my api"))
        assert line.endswith('prefix="my api"')

    def test_level_abbreviations(self):
        fmt = ConsoleFormatter(color=False)
        assert " DBG " in fmt.format(_record(LogLevel.DEBUG))
        assert " ERR " in fmt.format(_record(LogLevel.ERROR))
        assert " PNC " in fmt.format(_record(LogLevel.PANIC))

    def test_color_codes(self):
        line = ConsoleFormatter(color=True).format(_record(LogLevel.WARN, prefix="api"))
        assert "\x1b[" in line
        assert "\x1b[0m" in line

    def test_multiline_field_on_own_lines(self):
        stack = 'File "a.py", line 1\n  call()\n'
        text = ConsoleFormatter(color=False).format(_record(LogLevel.PANIC, prefix="api", stack=stack))
        first, *rest = text.split("\n")
        assert first.endswith("prefix=api")
        assert "stack" not in first
        assert rest == ['File "a.py", line 1', "  call()"]

    def test_custom_time_format(self):
        fmt = ConsoleFormatter(time_format="%Y-%m-%d", color=False)
        assert fmt.format(_record()).startswith("2026-02-12 ")


class TestJsonFormatter:
    def test_field_order(self):
        obj = json.loads(JsonFormatter().format(_record(service="billing")))
        assert list(obj) == ["level", "service", "time", "caller", "message"]
        assert obj["time"] == "14:32:05"

    def test_stack_last(self):
        obj = json.loads(JsonFormatter().format(_record(LogLevel.PANIC, prefix="x", stack="trace")))
        assert list(obj)[-1] == "stack"
        assert obj["level"] == "panic"

    def test_non_serializable_field(self):
        obj = json.loads(JsonFormatter().format(_record(prefix=object())))
        assert obj["prefix"].startswith("<object")
