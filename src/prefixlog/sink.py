"""
Sink: the fan-out writer a Logger forwards records to, and the rebuild
algorithm that produces it.

A sink is a pure function of the logger's options plus an environment
snapshot. Loggers never patch a sink in place; they build a new one and
close the old.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from prefixlog.adapters import LogAdapter, TerminalAdapter, FileAdapter
from prefixlog.config import LoggerSettings, SeverityGate
from prefixlog.formatters import ConsoleFormatter, JsonFormatter
from prefixlog.records import LogRecord, LogLevel


@dataclass
class Sink:
    """
    Fan-out over every active adapter.

    `owned` adapters were opened by build_sink() and are closed with the
    sink; caller-supplied adapters outlive it.
    """
    adapters: list[LogAdapter]
    level: LogLevel
    field_name: str
    prefix: str
    time_format: str
    owned: list[LogAdapter] = field(default_factory=list)

    def write(self, record: LogRecord) -> None:
        for adapter in self.adapters:
            if record.level < adapter.min_level:
                continue
            try:
                adapter.emit(record)
            except Exception:
                # A failing destination must not block the others
                pass

    def flush(self) -> None:
        for adapter in self.adapters:
            try:
                adapter.flush()
            except Exception:
                pass

    def close(self) -> None:
        for adapter in self.owned:
            try:
                adapter.close()
            except Exception:
                pass
        self.owned = []

    def get_adapter(self, name: str) -> LogAdapter | None:
        for adapter in self.adapters:
            if adapter.name == name:
                return adapter
        return None

    def describe(self) -> dict:
        return {
            "level": self.level.name,
            "field_name": self.field_name,
            "prefix": self.prefix,
            "adapters": [
                {"name": a.name, "type": type(a).__name__} for a in self.adapters
            ],
        }


def build_sink(
    level: Optional[LogLevel],
    prefix: str,
    color: bool,
    gate: SeverityGate,
    field_name: str = "prefix",
    extra_adapters: Sequence[LogAdapter] = (),
    environ: Mapping[str, str] | None = None,
) -> Sink:
    """
    Build a fresh sink and install the effective threshold in `gate`.

    1. Resolve the threshold from the environment override and `level`.
    2. Console adapter, colorized unless `color` is False.
    3. Optional file adapter from LOG_FILE; an open failure is reported to
       the console and the sink is built without it.
    4. Fan-out over console, file and any caller-supplied adapters.
    """
    settings = LoggerSettings.from_env(environ)

    effective = settings.resolve_level(level)
    gate.level = effective

    console = TerminalAdapter(
        formatter=ConsoleFormatter(time_format=settings.time_format, color=color),
        color=color,
    )
    adapters: list[LogAdapter] = [console]
    owned: list[LogAdapter] = [console]

    if settings.file:
        try:
            file_adapter = FileAdapter(
                settings.file,
                formatter=JsonFormatter(time_format=settings.time_format),
            )
        except OSError as exc:
            report = LogRecord.create(
                LogLevel.ERROR,
                f"failed to open log file {settings.file}: {exc}",
                **{field_name: prefix},
            )
            try:
                console.emit(report)
            except Exception:
                # Console unusable as well; nothing left to report to
                pass
        else:
            adapters.append(file_adapter)
            owned.append(file_adapter)

    adapters.extend(extra_adapters)

    return Sink(
        adapters=adapters,
        level=effective,
        field_name=field_name,
        prefix=prefix,
        time_format=settings.time_format,
        owned=owned,
    )
