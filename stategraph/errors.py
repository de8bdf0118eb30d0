# stategraph/errors.py
"""
Error types raised by the state-space exploration engine.

Error Hierarchy:
────────────────
    StateGraphError (base)
    ├── TransitionError      - the model's transition function raised
    ├── TraceMismatchError   - an explicit event trace left the recorded graph
    ├── SerializationError   - a value has no canonical string form
    └── InvalidEventError    - an event value carries no ``type`` tag

Error Codes:
────────────
Codes follow the pattern SG-XXXX:
  - 1000-1999: exploration errors
  - 2000-2999: trace replay errors
  - 3000-3999: canonicalization errors

Every error here signals a defect in the model or its configuration.  None
of them is transient, so nothing in the package retries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ErrorCode:
    """A unique, stable identifier for an error kind."""

    code: str
    title: str

    def __str__(self) -> str:
        return self.code


class StateGraphErrorCodes:
    """Registry of every error code the package emits."""

    INTERNAL_ERROR = ErrorCode("SG-0000", "internal error")
    TRANSITION_FAILED = ErrorCode("SG-1001", "transition failed")
    TRACE_MISMATCH = ErrorCode("SG-2001", "no such transition")
    UNSERIALIZABLE_VALUE = ErrorCode("SG-3001", "value cannot be serialized")
    MISSING_EVENT_TYPE = ErrorCode("SG-3002", "event has no type")


# ═══════════════════════════════════════════════════════════════════════════════
# EXCEPTION CLASSES
# ═══════════════════════════════════════════════════════════════════════════════

class StateGraphError(Exception):
    """
    Base exception for all stategraph errors.

    Carries an :class:`ErrorCode` so that callers (test generators, CI
    reporters) can classify failures without parsing messages.
    """

    default_code: ErrorCode = StateGraphErrorCodes.INTERNAL_ERROR

    def __init__(self, message: str, code: Optional[ErrorCode] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class TransitionError(StateGraphError):
    """The external transition function rejected a state/event pair."""

    default_code = StateGraphErrorCodes.TRANSITION_FAILED

    def __init__(
        self,
        state: Any,
        event: Any,
        state_key: str,
        event_key: str,
        cause: Optional[BaseException] = None,
    ) -> None:
        reason = f": {cause}" if cause is not None else ""
        super().__init__(
            f"Unable to transition from state {state_key} "
            f"on event {event_key}{reason}"
        )
        self.state = state
        self.event = event
        self.state_key = state_key
        self.event_key = event_key


class TraceMismatchError(StateGraphError):
    """An event in an explicit trace has no recorded edge at the current state."""

    default_code = StateGraphErrorCodes.TRACE_MISMATCH

    def __init__(self, state_key: str, event_key: str, index: int) -> None:
        super().__init__(
            f"Invalid transition from {state_key} with {event_key} "
            f"(trace step {index})"
        )
        self.state_key = state_key
        self.event_key = event_key
        self.index = index


class SerializationError(StateGraphError, TypeError):
    """A state or event contains a value with no canonical JSON form."""

    default_code = StateGraphErrorCodes.UNSERIALIZABLE_VALUE

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"Object of type {type(value).__name__} cannot be canonically "
            f"serialized; supply a custom serializer"
        )
        self.value = value


class InvalidEventError(StateGraphError, ValueError):
    """An event value exposes neither a ``"type"`` key nor a ``.type`` attribute."""

    default_code = StateGraphErrorCodes.MISSING_EVENT_TYPE

    def __init__(self, event: Any) -> None:
        super().__init__(f"Event {event!r} has no 'type' tag")
        self.event = event


__all__ = [
    "ErrorCode",
    "StateGraphErrorCodes",
    "StateGraphError",
    "TransitionError",
    "TraceMismatchError",
    "SerializationError",
    "InvalidEventError",
]
