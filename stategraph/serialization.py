# stategraph/serialization.py
"""
Canonical keys for states and events.

Two values that are semantically equal must produce the same key; the
explorer and every path finder identify vertices and edge labels purely by
these strings.  The default encoding is compact JSON with sorted keys:

    state  →  json(value)                        (no context)
    state  →  json(value) + " | " + json(context)
    event  →  json(event_object)

Values JSON does not know about are lowered first: dataclass instances to
their field mapping, enums to their value, sets to a sorted list.  Anything
else raises :class:`~stategraph.errors.SerializationError` rather than
falling back to ``repr`` (whose output may embed object addresses and would
break determinism).  A mapping whose keys cannot be ordered against each
other (``{1: "a", "b": 2}``) raises the same error.

Mapping keys follow JSON rules: non-string keys (ints, floats, bools,
``None``) become strings.  ``{1: "a"}`` and ``{"1": "a"}`` therefore
produce the same key; models that mix such keys must supply their own
serializer.
"""

from __future__ import annotations

import dataclasses
import enum
import json
from typing import Any, Mapping

from .errors import SerializationError
from .events import to_event_object

_SEPARATORS = (",", ":")


def _lower(obj: Any) -> Any:
    """``json.dumps`` *default* hook: map non-JSON values to JSON ones."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    if isinstance(obj, enum.Enum):
        return obj.value
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=canonical_json)
    if isinstance(obj, Mapping):
        return dict(obj)
    raise SerializationError(obj)


def canonical_json(value: Any) -> str:
    """Deterministic compact JSON encoding of *value*."""
    try:
        return json.dumps(
            value,
            sort_keys=True,
            separators=_SEPARATORS,
            ensure_ascii=False,
            default=_lower,
        )
    except SerializationError:
        raise
    except TypeError as exc:
        # unorderable mapping keys under sort_keys
        raise SerializationError(value) from exc


def serialize_state(state: Any) -> str:
    """Default state serializer.

    Uses ``state.value`` and ``state.context`` when the state exposes them;
    a plain value is encoded as a whole.
    """
    value = getattr(state, "value", state)
    context = getattr(state, "context", None)
    if context is None:
        return canonical_json(value)
    return canonical_json(value) + " | " + canonical_json(context)


def serialize_event(event: Any) -> str:
    """Default event serializer (bare type names are normalized first)."""
    return canonical_json(to_event_object(event))


def deserialize_event_string(event_string: str) -> Any:
    """Inverse of :func:`serialize_event` for JSON-native events."""
    return json.loads(event_string)


__all__ = [
    "canonical_json",
    "serialize_state",
    "serialize_event",
    "deserialize_event_string",
]
