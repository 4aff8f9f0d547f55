"""Startup wiring: configure once, raise events everywhere.

configure() sets up structured logging and fixes the service name, then
raises an ObservabilityConfigured event at debug level through the
pipeline it just built. Idempotent: a second call returns the config
from the first one. reset() tears logging down for tests; the service
name is write-once and survives it.
"""

from __future__ import annotations

from eventscope.config import ObservabilityConfig
from eventscope.emitter import get_emitter
from eventscope.events import LoggingEvent
from eventscope.logging import setup_logging, shutdown_logging
from eventscope.service import set_service_name
from eventscope.severity import Severity

_config: ObservabilityConfig | None = None


class ObservabilityConfigured(LoggingEvent):
    def __init__(self, config: ObservabilityConfig) -> None:
        super().__init__("ObservabilityConfigured")
        self.properties["Log formatter"] = config.log_formatter
        self.properties["Log destination"] = config.log_destination
        self.properties["Log level"] = config.log_level
        self.properties["Log format"] = config.log_format


def configure(config: ObservabilityConfig | None = None) -> ObservabilityConfig:
    """Initialize logging and the service name.

    Called once at startup (CLI entry, app factory, test setup).
    Raises ConflictingStateError if the service name was already fixed
    to a different value.
    """
    global _config

    if _config is not None:
        return _config

    cfg = config or ObservabilityConfig.load()

    if cfg.service_name:
        set_service_name(cfg.service_name)

    setup_logging(cfg)
    get_emitter(__name__).raise_event(ObservabilityConfigured(cfg), Severity.DEBUG)

    _config = cfg
    return cfg


def is_configured() -> bool:
    return _config is not None


def reset() -> None:
    """Reset for testing."""
    global _config

    shutdown_logging()
    _config = None
