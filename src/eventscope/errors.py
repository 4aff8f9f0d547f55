"""Exception taxonomy for eventscope.

Both concrete errors also subclass the matching builtin, so callers that
catch ``ValueError`` / ``RuntimeError`` keep working.
"""

from __future__ import annotations


class EventScopeError(Exception):
    """Base class for every error raised by eventscope itself."""


class InvalidArgumentError(EventScopeError, ValueError):
    """Raised at the call site for a blank or missing argument."""


class ConflictingStateError(EventScopeError, RuntimeError):
    """Raised when write-once state is set again to a different value."""


def require_text(value: object, argument: str) -> str:
    """Return *value* if it is a non-blank string, else raise InvalidArgumentError."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(
            f"{argument} must be a non-empty, non-whitespace string, got {value!r}."
        )
    return value


def require_not_none(value: object, argument: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"{argument} must not be None.")
