"""One call shape per severity, forwarding to Emitter.raise_event()."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from eventscope.emitter import Emitter
from eventscope.errors import require_not_none
from eventscope.events import Event
from eventscope.severity import Severity


def _forward(
    emitter: Emitter,
    event: Event,
    severity: Severity,
    properties: Mapping[str, Any] | None,
) -> None:
    require_not_none(emitter, "emitter")
    require_not_none(event, "event")
    emitter.raise_event(event, severity, properties)


def raise_trace(emitter: Emitter, event: Event, properties: Mapping[str, Any] | None = None) -> None:
    _forward(emitter, event, Severity.TRACE, properties)


def raise_debug(emitter: Emitter, event: Event, properties: Mapping[str, Any] | None = None) -> None:
    _forward(emitter, event, Severity.DEBUG, properties)


def raise_information(
    emitter: Emitter, event: Event, properties: Mapping[str, Any] | None = None
) -> None:
    _forward(emitter, event, Severity.INFORMATION, properties)


def raise_warning(emitter: Emitter, event: Event, properties: Mapping[str, Any] | None = None) -> None:
    _forward(emitter, event, Severity.WARNING, properties)


def raise_error(emitter: Emitter, event: Event, properties: Mapping[str, Any] | None = None) -> None:
    _forward(emitter, event, Severity.ERROR, properties)


def raise_critical(
    emitter: Emitter, event: Event, properties: Mapping[str, Any] | None = None
) -> None:
    _forward(emitter, event, Severity.CRITICAL, properties)
