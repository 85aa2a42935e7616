"""Structured logging for the MCP server.

stdout carries protocol frames, so every renderer writes to stderr. The
format and level come from `LoggingSettings` (GLEAN_LOG_FORMAT,
GLEAN_LOG_LEVEL) and are applied once at start-up by `configure_logging`.

Quick Start:
    >>> configure_logging(format="console", level="DEBUG")
    >>> log = get_logger("glean_mcp.server")
    >>> log.bind(tool="search").info("tool call", duration_ms=12.5)
    # => 10:30:45.120 [info] tool call duration_ms=12.5 logger=glean_mcp.server tool=search
"""

from __future__ import annotations

import logging
import sys
import time
import traceback
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Protocol, TextIO

import orjson


@dataclass(slots=True)
class LogEntry:
    timestamp: float
    level: str
    event: str
    context: dict[str, Any]

    @property
    def when(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=UTC)


class LogRenderer(Protocol):
    def render(self, entry: LogEntry) -> None: ...


# ─────────────────────────────────────────────────────────────────────────────
# Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class BoundLogger:
    """Logger carrying key/value context. bind() returns a copy with more context."""

    context: dict[str, Any] = field(default_factory=dict)

    def bind(self, **kw: Any) -> BoundLogger:
        return BoundLogger({**self.context, **kw})

    def _log(self, level: int, event: str, kw: dict[str, Any]) -> None:
        if level >= _level.get():
            _current_renderer().render(LogEntry(time.time(), logging.getLevelName(level).lower(), event,
                                                {**self.context, **kw}))

    def debug(self, event: str, **kw: Any) -> None: self._log(logging.DEBUG, event, kw)
    def info(self, event: str, **kw: Any) -> None: self._log(logging.INFO, event, kw)
    def warning(self, event: str, **kw: Any) -> None: self._log(logging.WARNING, event, kw)
    def error(self, event: str, **kw: Any) -> None: self._log(logging.ERROR, event, kw)

    def exception(self, event: str, **kw: Any) -> None:
        """Error-level entry with the active traceback under `exc_info`."""
        self._log(logging.ERROR, event, {**kw, "exc_info": traceback.format_exc()})


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class ConsoleRenderer:
    """One line per entry: `HH:MM:SS.mmm [level] event key=value ...`; tracebacks follow."""

    output: TextIO = field(default_factory=lambda: sys.stderr)

    def render(self, entry: LogEntry) -> None:
        ctx = dict(entry.context)
        tb = ctx.pop("exc_info", None)
        pairs = " ".join(f"{k}={v}" for k, v in sorted(ctx.items()))
        stamp = entry.when.strftime("%H:%M:%S.%f")[:-3]
        print(f"{stamp} [{entry.level}] {entry.event}{' ' + pairs if pairs else ''}", file=self.output, flush=True)
        if tb:
            print(tb.rstrip(), file=self.output, flush=True)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines, one object per entry."""

    output: TextIO = field(default_factory=lambda: sys.stderr)

    def render(self, entry: LogEntry) -> None:
        record = {"timestamp": entry.when.isoformat(), "level": entry.level, "event": entry.event, **entry.context}
        print(orjson.dumps(record, default=str).decode(), file=self.output, flush=True)


class NoOpRenderer:
    def render(self, entry: LogEntry) -> None:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Global configuration
# ─────────────────────────────────────────────────────────────────────────────


_renderer: ContextVar[LogRenderer | None] = ContextVar("glean_log_renderer", default=None)
_level: ContextVar[int] = ContextVar("glean_log_level", default=logging.INFO)


def configure_logging(format: str = "console", level: str = "INFO", *, output: TextIO | None = None) -> LogRenderer:  # noqa: A002
    """Install the renderer for "console", "json" or "none" and set the minimum level."""
    _level.set(getattr(logging, level.upper(), logging.INFO))
    match format:
        case "console": renderer: LogRenderer = ConsoleRenderer(output or sys.stderr)
        case "json": renderer = JsonRenderer(output or sys.stderr)
        case "none": renderer = NoOpRenderer()
        case _: raise ValueError(f"Unknown log format: {format}")
    _renderer.set(renderer)
    return renderer


def get_logger(name: str | None = None, **context: Any) -> BoundLogger:
    return BoundLogger({**context, "logger": name} if name else context)


def _current_renderer() -> LogRenderer:
    if (renderer := _renderer.get()) is None:
        _renderer.set(renderer := ConsoleRenderer())
    return renderer
