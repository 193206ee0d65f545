"""
Tests for log levels, records, message rendering and caller lookup.
"""

import os

import pytest

from prefixlog import records
from prefixlog.records import LogLevel, LogRecord, format_message, level_name, find_caller, safe_str


class TestLogLevel:
    def test_ordering(self):
        assert LogLevel.TRACE < LogLevel.DEBUG < LogLevel.INFO < LogLevel.WARN
        assert LogLevel.WARN < LogLevel.ERROR < LogLevel.PANIC < LogLevel.DISABLED

    def test_from_name_case_insensitive(self):
        assert LogLevel.from_name("debug") == LogLevel.DEBUG
        assert LogLevel.from_name("Disabled") == LogLevel.DISABLED

    def test_warning_is_alias(self):
        assert LogLevel.from_name("warning") is LogLevel.WARN
        assert level_name(30) == "WARN"

    def test_from_value(self):
        assert LogLevel.from_value(20) == LogLevel.INFO
        with pytest.raises(ValueError, match="No log level"):
            LogLevel.from_value(21)
        with pytest.raises(TypeError):
            LogLevel.from_value(2.5)

    def test_parse_lenient(self):
        assert LogLevel.parse("info") == LogLevel.INFO
        assert LogLevel.parse("nope") is None
        assert LogLevel.parse(None) is None

    def test_level_name_fallback(self):
        assert level_name(999) == "999"


class TestFormatMessage:
    def test_cases(self):
        assert format_message(()) == ""
        assert format_message(("solo",)) == "solo"
        assert format_message(("a", "b", "c")) == "a b c"
        assert format_message(("a", ["b"])) == "a ['b'"
        assert format_message(("x]", "y]]")) == "x] y]"


class TestLogRecord:
    def test_create(self):
        record = LogRecord.create(LogLevel.WARN, "msg", caller="f.py:1", prefix="svc")
        assert record.level_name == "WARN"
        assert record.fields == {"prefix": "svc"}
        assert record.timestamp.tzinfo is not None

    def test_immutable(self):
        record = LogRecord.create(LogLevel.INFO, "test")
        with pytest.raises(AttributeError):
            record.message = "changed"

    def test_find_caller_outside_package(self):
        assert "test_records.py:" in find_caller()


class _Unprintable:
    def __str__(self):
        raise RuntimeError("bad __str__")


class TestSafeStr:
    def test_plain_value(self):
        assert safe_str(42) == "42"

    def test_failing_str_placeholder(self):
        assert safe_str(_Unprintable()) == "<unprintable _Unprintable: RuntimeError('bad __str__')>"

    def test_format_message_uses_placeholder(self):
        assert format_message((_Unprintable(),)).startswith("<unprintable _Unprintable")
        assert format_message(("value", _Unprintable())).startswith("value <unprintable")


class TestFindCaller:
    def test_sibling_directory_not_skipped(self, monkeypatch):
        """A directory that merely shares the package's name prefix is user code."""
        here = os.path.dirname(os.path.abspath(__file__))
        monkeypatch.setattr(records, "_PACKAGE_DIR", here[:-1])
        assert "test_records.py:" in find_caller()

    def test_extra_skip_dirs(self):
        here = os.path.dirname(os.path.abspath(__file__))
        assert "test_records.py:" not in find_caller(skip_dirs=(here,))
