"""Emitter: turns an Event into exactly one structured log call.

    emitter = get_emitter(__name__)
    emitter.raise_event(UserCreated(user_id), Severity.INFORMATION)

raise_event() checks the sink first and does nothing else when the
severity is disabled. Otherwise it merges the event's properties with
the call-site ``properties`` (call site wins), PascalCases every key,
derives an EventId from the event name and logs the name inside a scope
carrying the merged map.
"""

from __future__ import annotations

import logging
import zlib
from collections.abc import Mapping
from types import ModuleType
from typing import Any

from eventscope.errors import require_not_none
from eventscope.events import Event
from eventscope.severity import Severity
from eventscope.sinks import EventId, EventSink, LoggerSink


def to_pascal_case(value: str) -> str:
    """Upper-case the first character only; blank keys pass through.

    A first character whose upper case is several characters ("ß" -> "SS")
    is kept as-is so the key length never changes.
    """
    if not value or value.isspace():
        return value
    first = value[0].upper()
    if len(first) != 1:
        return value
    return first + value[1:]


def event_id_for(name: str) -> EventId:
    """Stable (id, name) pair; the id is the CRC-32 of the UTF-8 name."""
    return EventId(zlib.crc32(name.encode("utf-8")), name)


class Emitter:
    """Raises events against an EventSink (or a stdlib logger)."""

    def __init__(self, sink: EventSink | logging.Logger) -> None:
        require_not_none(sink, "sink")
        if isinstance(sink, logging.Logger):
            sink = LoggerSink(sink)
        self._sink: EventSink = sink

    @property
    def sink(self) -> EventSink:
        return self._sink

    def is_enabled(self, severity: Severity | int | str) -> bool:
        return self._sink.is_enabled(Severity.parse(severity))

    def raise_event(
        self,
        event: Event,
        severity: Severity | int | str,
        properties: Mapping[str, Any] | None = None,
    ) -> None:
        """Log *event* at *severity*, with optional call-site properties.

        Neither the event nor *properties* is mutated. Sink errors
        propagate.
        """
        require_not_none(event, "event")
        severity = Severity.parse(severity)

        if not self._sink.is_enabled(severity):
            return

        merged: dict[str, Any] = {
            to_pascal_case(key): value for key, value in event.build_properties().items()
        }
        if properties is not None:
            for key, value in properties.items():
                merged[to_pascal_case(key)] = value

        name = event.name
        event_id = event_id_for(name)

        with self._sink.begin_scope(merged):
            self._sink.log(severity, event_id, name)

    def __repr__(self) -> str:
        return f"Emitter({self._sink!r})"


def get_emitter(category: str | type | ModuleType) -> Emitter:
    """Emitter bound to the stdlib logger named after *category*.

    A string is used as-is; a class maps to ``module.QualName``; a
    module maps to its ``__name__``.
    """
    require_not_none(category, "category")
    if isinstance(category, str):
        logger_name = category
    elif isinstance(category, ModuleType):
        logger_name = category.__name__
    else:
        logger_name = f"{category.__module__}.{category.__qualname__}"
    return Emitter(logging.getLogger(logger_name))
