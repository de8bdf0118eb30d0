# stategraph/options.py
"""
Exploration options.

Knobs that control how a model is expanded.  Every field is optional and
independently overridable:

  - events:            event type → fixed sequence or ``callable(state)``
  - filter:            boundary predicate; rejected states are recorded as
                       edge targets but never expanded
  - state_serializer:  canonical key for a state
  - event_serializer:  canonical key for an event
  - enabled_events:    state → enabled event types (defaults to
                       ``state.next_events``)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable, Mapping, Optional

from .events import EventSource
from .serialization import serialize_event, serialize_state


def _always(state: Any) -> bool:
    return True


def default_enabled_events(state: Any) -> Iterable[Any]:
    """Read the enabled event types off ``state.next_events``."""
    return getattr(state, "next_events", None) or ()


@dataclass(frozen=True)
class GraphOptions:
    events: Mapping[Any, EventSource] = field(default_factory=dict)
    filter: Callable[[Any], bool] = _always
    state_serializer: Callable[[Any], str] = serialize_state
    event_serializer: Callable[[Any], str] = serialize_event
    enabled_events: Callable[[Any], Iterable[Any]] = default_enabled_events


DEFAULT_GRAPH_OPTIONS = GraphOptions()


def get_graph_options(
    options: Optional[GraphOptions] = None, **overrides: Any
) -> GraphOptions:
    """Merge *overrides* over *options* (or the defaults).

    ``None`` overrides are ignored so callers can forward optional arguments.
    """
    base = options if options is not None else DEFAULT_GRAPH_OPTIONS
    changes = {k: v for k, v in overrides.items() if v is not None}
    return replace(base, **changes) if changes else base


__all__ = [
    "GraphOptions",
    "DEFAULT_GRAPH_OPTIONS",
    "default_enabled_events",
    "get_graph_options",
]
