"""Shared fixtures: isolated service name, reset logging, recording sink."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import pytest
import structlog

from eventscope import service
from eventscope.severity import Severity
from eventscope.sinks import EventId


# ---------------------------------------------------------------------------
# Recording sink
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LogCall:
    severity: Severity
    event_id: EventId
    message: str
    scope: dict[str, Any] | None
    open_scopes: int


class RecordingSink:
    """EventSink double: records checks, scopes and log calls."""

    def __init__(self, min_severity: Severity = Severity.TRACE, fail_with: Exception | None = None):
        self.min_severity = min_severity
        self.fail_with = fail_with
        self.enabled_checks: list[Severity] = []
        self.scopes: list[dict[str, Any]] = []
        self.calls: list[LogCall] = []
        self.open_scopes = 0

    def is_enabled(self, severity: Severity) -> bool:
        self.enabled_checks.append(severity)
        return severity >= self.min_severity

    @contextmanager
    def begin_scope(self, properties: Mapping[str, Any]):
        self.scopes.append(dict(properties))
        self.open_scopes += 1
        try:
            yield
        finally:
            self.open_scopes -= 1

    def log(self, severity: Severity, event_id: EventId, message: str) -> None:
        self.calls.append(
            LogCall(
                severity=severity,
                event_id=event_id,
                message=message,
                scope=self.scopes[-1] if self.scopes else None,
                open_scopes=self.open_scopes,
            )
        )
        if self.fail_with is not None:
            raise self.fail_with


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _fresh_service_name(monkeypatch):
    """Each test starts with an unset service name."""
    monkeypatch.setattr(service, "_service_name", service.ServiceNameCell())


@pytest.fixture(autouse=True)
def _reset_eventscope():
    """Reset logging wiring and bound scope before and after each test."""
    from eventscope.bootstrap import reset

    root_level = logging.getLogger().level
    reset()
    structlog.contextvars.clear_contextvars()
    yield
    reset()
    structlog.contextvars.clear_contextvars()
    logging.getLogger().setLevel(root_level)


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def make_sink():
    """Factory for sinks with a threshold or a failing log call."""
    return RecordingSink
