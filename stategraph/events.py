# stategraph/events.py
"""
Event normalization and event-generation strategies.

A model only tells the explorer *which event types* are enabled in a state.
The caller decides which concrete event values to try for each type:

  * no entry              → the single event ``{"type": <type>}``
  * a sequence of events  → :class:`FixedEvents`, the same values everywhere
  * a callable(state)     → :class:`GeneratedEvents`, state-dependent values

Both strategy variants expose ``evaluate(state)`` so the explorer treats them
uniformly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Sequence,
    Tuple,
    Union,
)

from .errors import InvalidEventError

EventSource = Union[Sequence[Any], Callable[[Any], Iterable[Any]]]


def to_event_object(event: Any) -> Any:
    """Promote a bare event type (``str`` or ``int``) to ``{"type": event}``."""
    if isinstance(event, (str, int)) and not isinstance(event, bool):
        return {"type": event}
    return event


def event_type(event: Any) -> Any:
    """Return the discriminating ``type`` tag of *event*."""
    event = to_event_object(event)
    if isinstance(event, Mapping):
        if "type" in event:
            return event["type"]
    elif hasattr(event, "type"):
        return event.type
    raise InvalidEventError(event)


@dataclass(frozen=True)
class FixedEvents:
    """The same event values are offered in every state."""

    events: Tuple[Any, ...]

    def evaluate(self, state: Any) -> Tuple[Any, ...]:
        return self.events


@dataclass(frozen=True)
class GeneratedEvents:
    """Event values computed from the current state."""

    generate: Callable[[Any], Iterable[Any]]

    def evaluate(self, state: Any) -> Tuple[Any, ...]:
        return tuple(self.generate(state))


EventStrategy = Union[FixedEvents, GeneratedEvents]


def as_event_strategy(source: Union[EventSource, EventStrategy]) -> EventStrategy:
    """Wrap a raw strategy value (sequence or callable) in its variant."""
    if isinstance(source, (FixedEvents, GeneratedEvents)):
        return source
    if callable(source):
        return GeneratedEvents(source)
    return FixedEvents(tuple(source))


def candidate_events(
    state: Any,
    enabled: Iterable[Any],
    strategies: Mapping[Any, Union[EventSource, EventStrategy]],
) -> List[Any]:
    """All concrete events to try from *state*, in deterministic order.

    Order is the enabled-type order, then the order each strategy yields.
    """
    events: List[Any] = []
    for type_name in enabled:
        source = strategies.get(type_name)
        if source is None:
            events.append({"type": type_name})
            continue
        events.extend(
            to_event_object(e) for e in as_event_strategy(source).evaluate(state)
        )
    return events


def group_events_by_type(events: Iterable[Any]) -> Dict[Any, List[Any]]:
    """Group event values by type, keeping the order each type occurs in."""
    grouped: Dict[Any, List[Any]] = {}
    for event in events:
        event = to_event_object(event)
        grouped.setdefault(event_type(event), []).append(event)
    return grouped


__all__ = [
    "EventSource",
    "EventStrategy",
    "FixedEvents",
    "GeneratedEvents",
    "to_event_object",
    "event_type",
    "as_event_strategy",
    "candidate_events",
    "group_events_by_type",
]
