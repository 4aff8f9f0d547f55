"""Typed events: a name plus a flat property map.

Application code subclasses LoggingEvent (or ErrorEvent) and writes its
own fields into ``self.properties``. Emitters only ever read events
through the Event protocol: ``name`` and ``build_properties()``.

Every event starts with two properties:

    "Service name"       the process-wide service name (see eventscope.service)
    "Event description"  the description passed to the constructor

and is named ``"{service name}.{event description}"``.
"""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

from eventscope.errors import require_text
from eventscope.service import get_service_name

SERVICE_NAME_KEY = "Service name"
EVENT_DESCRIPTION_KEY = "Event description"

ERROR_MESSAGE_KEY = "Error message"
EXCEPTION_TYPE_KEY = "Exception type"
EXCEPTION_MESSAGE_KEY = "Exception message"
STACK_KEY = "Stack"
BASE_PREFIX = "Base."


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class Event(Protocol):
    """Anything an Emitter can raise.

    build_properties() must be side-effect free and safe to call
    repeatedly.
    """

    @property
    def name(self) -> str: ...

    def build_properties(self) -> Mapping[str, Any]: ...


# ---------------------------------------------------------------------------
# Base event
# ---------------------------------------------------------------------------


class LoggingEvent:
    """Base for concrete events, carrying service metadata.

    Usage:
        class UserCreated(LoggingEvent):
            def __init__(self, user_id: str) -> None:
                super().__init__("UserCreated")
                self.properties["User id"] = user_id
    """

    def __init__(self, event_description: str) -> None:
        require_text(event_description, "event_description")

        service_name = get_service_name()
        self._service_name = service_name
        self._event_description = event_description
        self._name = f"{service_name}.{event_description}"
        self.properties: dict[str, Any] = {
            SERVICE_NAME_KEY: service_name,
            EVENT_DESCRIPTION_KEY: event_description,
        }

    @property
    def name(self) -> str:
        return self._name

    @property
    def service_name(self) -> str:
        return self._service_name

    @property
    def event_description(self) -> str:
        return self._event_description

    def build_properties(self) -> Mapping[str, Any]:
        """Read-only view of the event's properties.

        Override to add computed or transformed properties.
        """
        return MappingProxyType(self.properties)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"


# ---------------------------------------------------------------------------
# Error event
# ---------------------------------------------------------------------------


class ErrorEvent(LoggingEvent):
    """An event describing a failure, optionally with the exception behind it.

    Records the supplied exception and the root of its chain (the
    "Base." keys). Intermediate exceptions are not recorded. Without a
    chain the root is the exception itself, so the "Base." keys are
    present whenever an exception is given.

    Extra ``properties`` are applied last and win on key collisions.
    """

    def __init__(
        self,
        event_description: str,
        error_message: str,
        exception: BaseException | None = None,
        properties: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(event_description)
        require_text(error_message, "error_message")

        self.properties[ERROR_MESSAGE_KEY] = error_message
        if exception is not None:
            self._record_exception(exception, "")
            self._record_exception(base_exception(exception), BASE_PREFIX)

        if properties is not None:
            self.properties.update(properties)

    def _record_exception(self, exc: BaseException, prefix: str) -> None:
        self.properties[prefix + EXCEPTION_TYPE_KEY] = type(exc).__name__
        self.properties[prefix + EXCEPTION_MESSAGE_KEY] = str(exc)
        if exc.__traceback__ is not None:
            self.properties[prefix + STACK_KEY] = "".join(
                traceback.format_tb(exc.__traceback__)
            )


def base_exception(exc: BaseException) -> BaseException:
    """Innermost exception of a chain.

    Follows ``__cause__`` (``raise ... from ...``), falling back to the
    implicit ``__context__`` unless it was suppressed. Stops on cycles.
    """
    seen = {id(exc)}
    current = exc
    while True:
        inner = current.__cause__
        if inner is None and not current.__suppress_context__:
            inner = current.__context__
        if inner is None or id(inner) in seen:
            return current
        seen.add(id(inner))
        current = inner
