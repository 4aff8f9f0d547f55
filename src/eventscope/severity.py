"""Ordered severity levels, numerically aligned with stdlib logging.

TRACE has no stdlib counterpart; importing this module registers the
"TRACE" level name (5) with :mod:`logging` so records render with it.
"""

from __future__ import annotations

import logging
from enum import IntEnum

from eventscope.errors import InvalidArgumentError

TRACE = 5

logging.addLevelName(TRACE, "TRACE")


class Severity(IntEnum):
    """Trace < Debug < Information < Warning < Error < Critical."""

    TRACE = TRACE
    DEBUG = logging.DEBUG
    INFORMATION = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def parse(cls, value: str | int | Severity) -> Severity:
        """Resolve a severity from a name ("info", "Warning", "WARN") or a level number."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise InvalidArgumentError(
                    f"Unknown severity level: {value!r}. "
                    f"Available: {[int(s) for s in cls]}."
                ) from None
        key = str(value).strip().upper()
        key = _ALIASES.get(key, key)
        try:
            return cls[key]
        except KeyError:
            raise InvalidArgumentError(
                f"Unknown severity: {value!r}. Available: {[s.name for s in cls]}."
            ) from None


_ALIASES = {
    "INFO": "INFORMATION",
    "WARN": "WARNING",
    "FATAL": "CRITICAL",
}
