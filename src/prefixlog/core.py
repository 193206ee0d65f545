"""
Logger: leveled, prefix-tagged front end over a console/file sink.

Usage:
    log = new_logger("api")
    log.info("listening on", 8080)
    log.set_level("debug").set_prefix("api.v2")
    log.debug("request", path)

Every mutator builds a new immutable LoggerOptions and a new sink, then
swaps both in with a single assignment; the previous sink is closed.

Mutators are not synchronized. Serialize set_level/set_prefix/set_color
calls on a shared Logger yourself; emit methods are safe to call from
several threads as long as no mutator runs at the same time.
"""

from __future__ import annotations

import dataclasses
import traceback
import weakref
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from prefixlog.adapters import LogAdapter
from prefixlog.config import GLOBAL_GATE, SeverityGate
from prefixlog.errors import LoggerPanic
from prefixlog.records import LogLevel, LogRecord, find_caller, format_message
from prefixlog.sink import Sink, build_sink

STACK_LIMIT = 2048


@dataclass(frozen=True)
class LoggerOptions:
    """Settings a sink is built from."""
    level: LogLevel = LogLevel.INFO
    prefix: str = ""
    color: bool = True
    field_name: str = "prefix"

    def replace(self, **changes: Any) -> "LoggerOptions":
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class _LoggerState:
    options: LoggerOptions
    sink: Sink


class _SinkCloser:
    """Holds the live sink so a finalizer can close it without the Logger."""

    def __init__(self) -> None:
        self.sink: Sink | None = None

    def close(self) -> None:
        if self.sink is not None:
            self.sink.close()
            self.sink = None


class Logger:
    """
    Leveled logger that tags every record with a prefix field.

    A record at severity S is written iff S >= the effective threshold
    resolved at the last rebuild and S passes the shared SeverityGate.
    panic() bypasses both.
    """

    TRACE = LogLevel.TRACE
    DEBUG = LogLevel.DEBUG
    INFO = LogLevel.INFO
    WARN = LogLevel.WARN
    ERROR = LogLevel.ERROR
    DISABLED = LogLevel.DISABLED

    def __init__(
        self,
        prefix: str = "",
        level: LogLevel | int | str = LogLevel.INFO,
        color: bool = True,
        field_name: str = "prefix",
        gate: SeverityGate | None = None,
        adapters: Sequence[LogAdapter] = (),
    ) -> None:
        self._gate = gate if gate is not None else GLOBAL_GATE
        self._extra_adapters = tuple(adapters)
        self._closer = _SinkCloser()
        self._finalizer = weakref.finalize(self, self._closer.close)
        self._state: Optional[_LoggerState] = None
        self._apply(LoggerOptions(
            level=LogLevel.from_value(level),
            prefix=prefix,
            color=color,
            field_name=field_name,
        ))

    # ── Rebuild ───────────────────────────────────────────────────

    def _apply(self, options: LoggerOptions) -> "Logger":
        sink = build_sink(
            level=options.level,
            prefix=options.prefix,
            color=options.color,
            gate=self._gate,
            field_name=options.field_name,
            extra_adapters=self._extra_adapters,
        )
        old = self._state
        self._state = _LoggerState(options=options, sink=sink)
        self._closer.sink = sink
        if not self._finalizer.alive:
            self._finalizer = weakref.finalize(self, self._closer.close)
        if old is not None:
            old.sink.close()
        return self

    # ── Mutators (fluent) ─────────────────────────────────────────

    def set_level(self, level: LogLevel | int | str) -> "Logger":
        """Change the threshold for subsequent calls. Rebuilds the sink."""
        return self._apply(self._state.options.replace(level=LogLevel.from_value(level)))

    def set_prefix(self, prefix: str) -> "Logger":
        """Change the tag attached to subsequent records. Rebuilds the sink."""
        return self._apply(self._state.options.replace(prefix=prefix))

    def set_color(self, disable: bool = True) -> "Logger":
        """Disable console color (or re-enable it with disable=False)."""
        return self._apply(self._state.options.replace(color=not disable))

    def reload(self) -> "Logger":
        """Rebuild the sink from the current environment without changing options."""
        return self._apply(self._state.options)

    # ── Accessors ─────────────────────────────────────────────────

    @property
    def level(self) -> LogLevel:
        return self._state.options.level

    @property
    def prefix(self) -> str:
        return self._state.options.prefix

    @property
    def color_enabled(self) -> bool:
        return self._state.options.color

    @property
    def field_name(self) -> str:
        return self._state.options.field_name

    @property
    def effective_level(self) -> LogLevel:
        """Threshold resolved at the last rebuild (environment included)."""
        return self._state.sink.level

    @property
    def gate(self) -> SeverityGate:
        return self._gate

    @property
    def sink(self) -> Sink:
        return self._state.sink

    def enabled_for(self, level: int) -> bool:
        return level >= self._state.sink.level and self._gate.allows(level)

    # ── Emission ──────────────────────────────────────────────────

    def log(self, level: int, *values: Any, caller: str | None = None) -> None:
        """Write one record at `level` if both gates let it through."""
        state = self._state
        if level < state.sink.level or not self._gate.allows(level):
            return
        options = state.options
        record = LogRecord.create(
            level,
            format_message(values),
            caller=caller if caller is not None else find_caller(),
            **{options.field_name: options.prefix},
        )
        state.sink.write(record)

    def trace(self, *values: Any) -> None:
        self.log(LogLevel.TRACE, *values)

    def debug(self, *values: Any) -> None:
        self.log(LogLevel.DEBUG, *values)

    def info(self, *values: Any) -> None:
        self.log(LogLevel.INFO, *values)

    def warn(self, *values: Any) -> None:
        self.log(LogLevel.WARN, *values)

    warning = warn

    def error(self, *values: Any) -> None:
        self.log(LogLevel.ERROR, *values)

    def panic(self, *values: Any) -> None:
        """
        Write a PANIC record with a stack trace, then raise LoggerPanic.

        Ignores every threshold, including DISABLED.
        """
        state = self._state
        options = state.options
        message = format_message(values)
        stack = capture_stack(skip=1)
        record = LogRecord.create(
            LogLevel.PANIC,
            message,
            caller=find_caller(),
            **{options.field_name: options.prefix, "stack": stack},
        )
        state.sink.write(record)
        state.sink.flush()
        raise LoggerPanic(message, prefix=options.prefix, stack=stack)

    # ── Status & cleanup ──────────────────────────────────────────

    def status(self) -> dict:
        state = self._state
        return {
            "level": state.options.level.name,
            "effective_level": state.sink.level.name,
            "gate_level": self._gate.level.name,
            "prefix": state.options.prefix,
            "color": state.options.color,
            "sink": state.sink.describe(),
        }

    def flush(self) -> None:
        self._state.sink.flush()

    def close(self) -> None:
        """Release the sink's file handle. Further records go nowhere useful."""
        self._finalizer()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        options = self._state.options
        return (
            f"Logger(prefix={options.prefix!r}, level={options.level.name}, "
            f"color={options.color})"
        )


def new_logger(prefix: str, **kwargs: Any) -> Logger:
    """Create a Logger with default level INFO and color enabled."""
    return Logger(prefix, **kwargs)


def capture_stack(skip: int = 0, limit: int = STACK_LIMIT) -> str:
    """
    Current stack, innermost frame first, at most `limit` characters.

    Outer frames are dropped once the limit is reached; a single frame
    longer than the limit is cut short.
    """
    frames = traceback.format_stack()[:-(skip + 1)]
    lines: list[str] = []
    used = 0
    for text in reversed(frames):
        if used + len(text) > limit:
            if not lines:
                lines.append(text[:limit])
            break
        lines.append(text)
        used += len(text)
    return "".join(lines)
