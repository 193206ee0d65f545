"""
Tests for the terminal, file and in-memory adapters.
"""

import io
import json
from datetime import datetime, timezone

import pytest

from prefixlog.adapters import TerminalAdapter, FileAdapter, MemoryAdapter
from prefixlog.records import LogLevel, LogRecord, level_name


def _record(level=LogLevel.INFO, message="hello", **fields):
    ts = datetime(2026, 2, 12, 14, 32, 5, tzinfo=timezone.utc)
    return LogRecord(
        timestamp=ts, level=level, level_name=level_name(level),
        message=message, fields=fields, caller="app/main.py:12",
    )


class TestTerminalAdapter:
    def test_writes_to_stdout(self, capsys):
        TerminalAdapter(color=False).emit(_record(message="to console"))
        assert "to console" in capsys.readouterr().out

    def test_explicit_stream(self):
        stream = io.StringIO()
        TerminalAdapter(color=False, stream=stream).emit(_record(message="captured"))
        assert "captured" in stream.getvalue()

    def test_default_formatter_follows_color(self):
        assert TerminalAdapter(color=False).formatter.color is False


class TestFileAdapter:
    def test_appends_json(self, tmp_path):
        path = tmp_path / "out.log"
        adapter = FileAdapter(path)
        adapter.emit(_record(message="one"))
        adapter.close()
        assert json.loads(path.read_text())["message"] == "one"
        assert adapter.closed

    def test_open_failure_raises_oserror(self, tmp_path):
        with pytest.raises(OSError):
            FileAdapter(tmp_path / "no" / "such" / "dir.log")

    def test_emit_after_close_ignored(self, tmp_path):
        adapter = FileAdapter(tmp_path / "out.log")
        adapter.close()
        adapter.emit(_record())


class TestMemoryAdapter:
    def test_ring_buffer(self):
        adapter = MemoryAdapter(size=3)
        for i in range(5):
            adapter.emit(_record(message=f"m{i}"))
        assert adapter.count == 3
        assert [r.message for r in adapter.get_recent()] == ["m2", "m3", "m4"]

    def test_min_level_filter(self):
        adapter = MemoryAdapter()
        adapter.emit(_record(LogLevel.INFO))
        adapter.emit(_record(LogLevel.ERROR))
        assert len(adapter.get_recent(min_level=LogLevel.WARN)) == 1
