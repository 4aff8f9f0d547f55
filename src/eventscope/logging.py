"""Rendering raised events: formatter × destination, selected by config.

An event reaches a handler as an ordinary stdlib LogRecord whose message
is the event name. Everything else travels beside it:

    event_id / event_name   record attributes set by LoggerSink.log()
    merged properties       structlog contextvars bound by LoggerSink.begin_scope()

event_fields() collects both, and every formatter here renders them as
fields after the message:

    structlog  ProcessorFormatter; add_event_fields() runs in its pre-chain,
               output through JSONRenderer or ConsoleRenderer
    stdlib     EventJsonFormatter (one JSON object per line) or
               EventConsoleFormatter (message followed by key=value pairs)

Destinations decide where the handler writes: stderr or a JSONL file.
setup_logging() attaches exactly one handler of its own to the root logger
and leaves foreign handlers (pytest caplog, agents) alone.
"""

from __future__ import annotations

import json
import logging
import sys
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import structlog

if TYPE_CHECKING:
    from eventscope.config import ObservabilityConfig

EVENT_ID_ATTRS = ("event_id", "event_name")
_MANAGED_ATTR = "_eventscope_managed"


def event_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Event id attributes of *record* plus the scope bound right now.

    Must run while the handler is still inside Emitter.raise_event(),
    which holds for the synchronous handlers built here.
    """
    fields = {attr: getattr(record, attr) for attr in EVENT_ID_ATTRS if hasattr(record, attr)}
    fields.update(structlog.contextvars.get_contextvars())
    return fields


def add_event_fields(logger: Any, method_name: str, event_dict: dict) -> dict:
    """structlog processor: copy event_fields() of the wrapped record."""
    record = event_dict.get("_record")
    if record is not None:
        for key, value in event_fields(record).items():
            event_dict.setdefault(key, value)
    return event_dict


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


@runtime_checkable
class LogFormatter(Protocol):
    """Builds the logging.Formatter every managed handler uses."""

    def build(self, config: ObservabilityConfig) -> logging.Formatter: ...


class StructlogFormatter:
    def build(self, config: ObservabilityConfig) -> logging.Formatter:
        if config.log_format == "console":
            renderer: Any = structlog.dev.ConsoleRenderer()
        else:
            renderer = structlog.processors.JSONRenderer(default=str)

        return structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[
                add_event_fields,
                structlog.stdlib.add_logger_name,
                structlog.processors.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.format_exc_info,
            ],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )


class EventJsonFormatter(logging.Formatter):
    """One JSON object per record, event fields at top level."""

    def format(self, record: logging.LogRecord) -> str:
        d: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%SZ"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        d.update(event_fields(record))
        if record.exc_info and record.exc_info[1]:
            d["exception"] = self.formatException(record.exc_info)
        return json.dumps(d, default=str)


class EventConsoleFormatter(logging.Formatter):
    """Human-readable line: ``<time> <LEVEL> <logger>: <event> key=value ...``."""

    def __init__(self) -> None:
        super().__init__(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        pairs = " ".join(
            f"{_console_key(key)}={value!r}" for key, value in event_fields(record).items()
        )
        if not pairs:
            return line
        # Traceback (if any) stays on the lines after the first
        head, sep, tail = line.partition("\n")
        return f"{head} {pairs}{sep}{tail}"


def _console_key(key: str) -> str:
    return json.dumps(key) if any(ch.isspace() for ch in key) else key


class StdlibFormatter:
    def build(self, config: ObservabilityConfig) -> logging.Formatter:
        if config.log_format == "console":
            return EventConsoleFormatter()
        return EventJsonFormatter()


# ---------------------------------------------------------------------------
# Destinations
# ---------------------------------------------------------------------------


@runtime_checkable
class LogDestination(Protocol):
    """Owns the handler it creates and closes it on shutdown."""

    def create_handler(self, formatter: logging.Formatter) -> logging.Handler: ...

    def shutdown(self) -> None: ...


class StderrDestination:
    def __init__(self, config: ObservabilityConfig) -> None:
        self._handler: logging.Handler | None = None

    def create_handler(self, formatter: logging.Formatter) -> logging.Handler:
        self._handler = logging.StreamHandler(sys.stderr)
        self._handler.setFormatter(formatter)
        return self._handler

    def shutdown(self) -> None:
        if self._handler is not None:
            self._handler.flush()
            self._handler = None


class JsonlFileDestination:
    """Appends to ``config.jsonl_path`` (default: eventscope.jsonl in the temp dir)."""

    def __init__(self, config: ObservabilityConfig) -> None:
        path = config.jsonl_path or str(Path(tempfile.gettempdir()) / "eventscope.jsonl")
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handler: logging.FileHandler | None = None

    def create_handler(self, formatter: logging.Formatter) -> logging.Handler:
        self._handler = logging.FileHandler(str(self.path), mode="a", encoding="utf-8")
        self._handler.setFormatter(formatter)
        return self._handler

    def shutdown(self) -> None:
        if self._handler is not None:
            self._handler.close()
            self._handler = None


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------

_FORMATTERS: dict[str, type] = {
    "structlog": StructlogFormatter,
    "stdlib": StdlibFormatter,
}

_DESTINATIONS: dict[str, type] = {
    "stderr": StderrDestination,
    "jsonl": JsonlFileDestination,
}


def register_formatter(name: str, cls: type) -> None:
    """Make ``log_formatter=name`` available. ``cls()`` must satisfy LogFormatter."""
    _FORMATTERS[name] = cls


def register_destination(name: str, cls: type) -> None:
    """Make ``log_destination=name`` available. ``cls(config)`` must satisfy LogDestination."""
    _DESTINATIONS[name] = cls


def _resolve(registry: dict[str, type], kind: str, name: str) -> type:
    try:
        return registry[name]
    except KeyError:
        raise ValueError(
            f"Unknown log {kind}: {name!r}. Available: {sorted(registry)}. "
            f"Register one with register_{kind}()."
        ) from None


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

_active_destination: LogDestination | None = None


def setup_logging(config: ObservabilityConfig) -> logging.Handler:
    """Attach the configured handler to the root logger and set its level.

    Calling it again swaps the previous managed handler out.
    """
    global _active_destination

    formatter_cls = _resolve(_FORMATTERS, "formatter", config.log_formatter)
    destination_cls = _resolve(_DESTINATIONS, "destination", config.log_destination)

    formatter = formatter_cls().build(config)
    destination = destination_cls(config)
    handler = destination.create_handler(formatter)
    setattr(handler, _MANAGED_ATTR, True)

    shutdown_logging()
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(int(config.severity))

    _active_destination = destination
    return handler


def shutdown_logging() -> None:
    """Detach the managed handler and close its destination."""
    global _active_destination

    root = logging.getLogger()
    root.handlers = [h for h in root.handlers if not getattr(h, _MANAGED_ATTR, False)]
    if _active_destination is not None:
        _active_destination.shutdown()
        _active_destination = None
