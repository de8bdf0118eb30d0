# stategraph/transition_system.py
"""
Explicit-state exploration of a transition system.

This module provides:
  - explore: memoized depth-first expansion from an initial state into an
    adjacency map keyed by canonical state and event keys
  - get_adjacency_map: the same, driven by a machine object
  - adjacency_targets: every vertex of an adjacency map, boundary states
    included

Each distinct reachable state is expanded exactly once, which guarantees
termination on cyclic state spaces.  Expansion uses an explicit stack, so
deep models do not hit the interpreter's recursion limit; the visiting order
is the one a recursive formulation would produce.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Set, Tuple

from .errors import TransitionError
from .events import candidate_events
from .graph_types import AdjacencyMap, MachineLike, Segment
from .options import GraphOptions, get_graph_options

logger = logging.getLogger(__name__)

Transition = Callable[[Any, Any], Any]

_DONE = object()


def apply_transition(
    transition: Transition, state: Any, event: Any, state_key: str,
    options: GraphOptions,
) -> Any:
    try:
        return transition(state, event)
    except Exception as exc:
        raise TransitionError(
            state, event, state_key, options.event_serializer(event), exc
        ) from exc


def explore(
    initial_state: Any,
    transition: Transition,
    options: Optional[GraphOptions] = None,
) -> AdjacencyMap:
    """
    Build the adjacency map of every state reachable from *initial_state*.

    Parameters
    ----------
    initial_state :
        Entry state of the model.
    transition :
        ``transition(state, event) -> next_state``.  Any exception it raises
        is re-raised as :class:`~stategraph.errors.TransitionError`.
    options :
        Event strategy, boundary filter, serializers and enabled-event lookup.

    Returns
    -------
    AdjacencyMap
        ``{state_key: {event_key: Segment(next_state, event)}}``.  Edge order
        follows event enumeration order.  Transitions that leave the state
        key unchanged are not recorded.
    """
    opts = get_graph_options(options)
    serialize = opts.state_serializer
    adjacency: AdjacencyMap = {}
    boundary: Set[str] = set()

    # Stack frames: (state, state_key, remaining candidate events)
    Frame = Tuple[Any, str, Iterator[Any]]
    stack: List[Frame] = []

    def enter(state: Any) -> None:
        key = serialize(state)
        if key in adjacency:
            return
        adjacency[key] = {}
        events = candidate_events(state, opts.enabled_events(state), opts.events)
        stack.append((state, key, iter(events)))

    enter(initial_state)
    while stack:
        state, key, events = stack[-1]
        event = next(events, _DONE)
        if event is _DONE:
            stack.pop()
            continue

        next_state = apply_transition(transition, state, event, key, opts)
        next_key = serialize(next_state)
        if next_key == key:
            continue

        adjacency[key][opts.event_serializer(event)] = Segment(next_state, event)
        if opts.filter(next_state):
            enter(next_state)
        elif next_key not in adjacency:
            boundary.add(next_key)

    logger.debug(
        "Explored %d states, %d edges, %d boundary targets",
        len(adjacency),
        sum(len(edges) for edges in adjacency.values()),
        len(boundary),
    )
    return adjacency


def get_adjacency_map(
    machine: MachineLike[Any, Any],
    options: Optional[GraphOptions] = None,
) -> AdjacencyMap:
    """Explore *machine* from its initial state."""
    return explore(machine.initial_state, machine.transition, options)


def adjacency_targets(
    adjacency: AdjacencyMap,
    serialize: Callable[[Any], str],
) -> List[str]:
    """Every vertex key of *adjacency*: expanded states first, then boundary
    targets in the order they were discovered."""
    vertices: Dict[str, None] = dict.fromkeys(adjacency)
    for edges in adjacency.values():
        for segment in edges.values():
            vertices.setdefault(serialize(segment.state))
    return list(vertices)


__all__ = [
    "Transition",
    "apply_transition",
    "explore",
    "get_adjacency_map",
    "adjacency_targets",
]
