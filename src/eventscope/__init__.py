"""eventscope: typed events raised as structured log records.

Public API:
    configure(cfg)          — Set up logging + service name (call once at startup)
    set_service_name(name)  — Fix the process-wide service name (write-once)
    get_emitter(category)   — Emitter bound to a stdlib logger
    Emitter.raise_event(event, severity, properties=None)
    raise_debug(emitter, event) ... raise_critical(emitter, event)

Events:
    LoggingEvent  — name "{service}.{description}" + property map
    ErrorEvent    — adds error message and exception (top + root) details

Properties travel as a structured scope around a single log call whose
message is just the event name. Sinks decide how they are rendered.
"""

from eventscope.bootstrap import configure, is_configured, reset
from eventscope.config import ObservabilityConfig
from eventscope.emitter import Emitter, event_id_for, get_emitter, to_pascal_case
from eventscope.errors import ConflictingStateError, EventScopeError, InvalidArgumentError
from eventscope.events import ErrorEvent, Event, LoggingEvent
from eventscope.extensions import (
    raise_critical,
    raise_debug,
    raise_error,
    raise_information,
    raise_trace,
    raise_warning,
)
from eventscope.logging import (
    LogDestination,
    LogFormatter,
    register_destination,
    register_formatter,
    setup_logging,
    shutdown_logging,
)
from eventscope.service import get_service_name, is_service_name_set, set_service_name
from eventscope.severity import Severity
from eventscope.sinks import EventId, EventSink, LoggerSink

__all__ = [
    # Startup
    "configure",
    "is_configured",
    "reset",
    "ObservabilityConfig",
    # Service name
    "set_service_name",
    "get_service_name",
    "is_service_name_set",
    # Events
    "Event",
    "LoggingEvent",
    "ErrorEvent",
    # Emission
    "Emitter",
    "get_emitter",
    "Severity",
    "EventId",
    "event_id_for",
    "to_pascal_case",
    "raise_trace",
    "raise_debug",
    "raise_information",
    "raise_warning",
    "raise_error",
    "raise_critical",
    # Sinks
    "EventSink",
    "LoggerSink",
    # Logging (swappable)
    "setup_logging",
    "shutdown_logging",
    "LogFormatter",
    "LogDestination",
    "register_formatter",
    "register_destination",
    # Errors
    "EventScopeError",
    "InvalidArgumentError",
    "ConflictingStateError",
]
