"""
Logger configuration.

LoggerSettings is a snapshot of the process environment, taken again on
every sink rebuild so external changes apply on the next rebuild.

SeverityGate is the process-wide minimum visible severity. Every Logger
holds a reference to one; by default they all share GLOBAL_GATE, so a
rebuild in one Logger changes what the others let through.

Environment variables:
    LOG_LEVEL             trace/debug/info/warn/error/panic/disabled
    LOG_FILE              append-only JSON-lines destination
    LOG_LEVEL_PRECEDENCE  'env' (LOG_LEVEL wins) or 'logger' (set_level wins)
    LOG_TIME_FORMAT       strftime format for timestamps
"""

from __future__ import annotations

import os
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from prefixlog.formatters import DEFAULT_TIME_FORMAT
from prefixlog.records import LogLevel

ENV_LEVEL = "LOG_LEVEL"
ENV_FILE = "LOG_FILE"
ENV_PRECEDENCE = "LOG_LEVEL_PRECEDENCE"
ENV_TIME_FORMAT = "LOG_TIME_FORMAT"


class LoggerSettings(BaseModel):
    """Environment-provided logger settings. Malformed input is tolerated."""

    model_config = ConfigDict(frozen=True)

    level: Optional[LogLevel] = None
    file: Optional[str] = None
    level_precedence: Literal["env", "logger"] = "env"
    time_format: str = DEFAULT_TIME_FORMAT

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, v: Any) -> Optional[LogLevel]:
        if v is None or isinstance(v, LogLevel):
            return v
        if isinstance(v, int):
            try:
                return LogLevel.from_value(v)
            except ValueError:
                return None
        return LogLevel.parse(str(v))

    @field_validator("file", mode="before")
    @classmethod
    def _blank_file(cls, v: Any) -> Optional[str]:
        if v is None or not str(v).strip():
            return None
        return str(v)

    @field_validator("level_precedence", mode="before")
    @classmethod
    def _parse_precedence(cls, v: Any) -> str:
        text = str(v or "").strip().lower()
        return text if text in ("env", "logger") else "env"

    @field_validator("time_format", mode="before")
    @classmethod
    def _default_time_format(cls, v: Any) -> str:
        return str(v) if v else DEFAULT_TIME_FORMAT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "LoggerSettings":
        """Read settings from `environ` (os.environ when omitted)."""
        env = os.environ if environ is None else environ
        return cls(
            level=env.get(ENV_LEVEL),
            file=env.get(ENV_FILE),
            level_precedence=env.get(ENV_PRECEDENCE),
            time_format=env.get(ENV_TIME_FORMAT),
        )

    def resolve_level(self, logger_level: Optional[LogLevel]) -> LogLevel:
        """
        Effective threshold for the shared gate.

        With 'env' precedence a parseable override wins over the logger's
        level; with 'logger' precedence the logger's level wins and the
        override only fills in when the logger has none. INFO otherwise.
        """
        if self.level_precedence == "env":
            candidates = (self.level, logger_level)
        else:
            candidates = (logger_level, self.level)
        for candidate in candidates:
            if candidate is not None:
                return candidate
        return LogLevel.INFO


class SeverityGate:
    """
    Minimum visible severity shared by every Logger that references it.

    Records must pass both this gate and the emitting Logger's own level.
    """

    def __init__(self, level: LogLevel = LogLevel.INFO):
        self.level = level

    def allows(self, level: int) -> bool:
        return level >= self.level

    def __repr__(self) -> str:
        return f"SeverityGate(level={self.level.name})"


GLOBAL_GATE = SeverityGate()
