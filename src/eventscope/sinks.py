"""The logging boundary an Emitter delegates to.

EventSink is the whole contract: a cheap level check, a structured
scope around one log call, and the log call itself. LoggerSink adapts
a stdlib ``logging.Logger``; scope properties are bound as structlog
contextvars, so the structlog formatter (merge_contextvars) and the
stdlib JSON formatter both render them next to the record, never
inside the message text.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from contextlib import AbstractContextManager
from typing import Any, NamedTuple, Protocol, runtime_checkable

import structlog

from eventscope.severity import Severity


class EventId(NamedTuple):
    """Correlation pair handed to the sink: numeric id + event name."""

    id: int
    name: str


@runtime_checkable
class EventSink(Protocol):
    """Strategy: where raised events end up."""

    def is_enabled(self, severity: Severity) -> bool: ...

    def begin_scope(self, properties: Mapping[str, Any]) -> AbstractContextManager[Any]: ...

    def log(self, severity: Severity, event_id: EventId, message: str) -> None: ...


class LoggerSink:
    """EventSink over a stdlib logger.

    The event id travels as ``extra`` (``event_id`` / ``event_name``
    record attributes); the message is the event name, passed as a
    ``%s`` argument rather than formatted in.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def is_enabled(self, severity: Severity) -> bool:
        return self._logger.isEnabledFor(int(severity))

    def begin_scope(self, properties: Mapping[str, Any]) -> AbstractContextManager[Any]:
        return structlog.contextvars.bound_contextvars(**properties)

    def log(self, severity: Severity, event_id: EventId, message: str) -> None:
        self._logger.log(
            int(severity),
            "%s",
            message,
            extra={"event_id": event_id.id, "event_name": event_id.name},
        )

    def __repr__(self) -> str:
        return f"LoggerSink({self._logger.name!r})"
