"""Process-wide service name: set once at startup, read by every event.

Unset, the name reads as "Service". The first successful
set_service_name() wins; repeating it with the same value is a no-op,
a different value raises ConflictingStateError. There is no reset.
"""

from __future__ import annotations

import threading

from eventscope.errors import ConflictingStateError, require_text

DEFAULT_SERVICE_NAME = "Service"


class ServiceNameCell:
    """Write-once string cell guarded by a lock."""

    def __init__(self) -> None:
        self._value: str | None = None
        self._lock = threading.Lock()

    @property
    def value(self) -> str:
        return self._value if self._value is not None else DEFAULT_SERVICE_NAME

    def is_set(self) -> bool:
        return self._value is not None

    def set(self, name: str) -> None:
        require_text(name, "service_name")
        with self._lock:
            existing = self._value
            if existing is None:
                self._value = name
                return
        if existing != name:
            raise ConflictingStateError(
                f"Service name has already been set to {existing!r} "
                f"and cannot be changed to {name!r}."
            )


_service_name = ServiceNameCell()


def set_service_name(name: str) -> None:
    """Fix the process-wide service name. Call once during startup."""
    _service_name.set(name)


def get_service_name() -> str:
    return _service_name.value


def is_service_name_set() -> bool:
    return _service_name.is_set()
