# stategraph/path_analysis.py
"""
Path questions over an explored adjacency map.

Provides three queries, each available on a raw adjacency map and on a
machine object:

  Shortest paths
      One minimal-weight witness path to every reachable state
      (:func:`shortest_paths`, :func:`get_shortest_paths`).

  Simple paths
      Every acyclic path from the initial state to every reachable state
      (:func:`simple_paths`, :func:`get_simple_paths`,
      :func:`get_simple_paths_as_list`).

  Trace resolution
      The concrete path a literal event sequence takes
      (:func:`resolve_trace`, :func:`get_path_from_events`).

All edges have unit weight.  Results are built fresh on every call.
"""

from __future__ import annotations

import logging
from typing import (
    Any,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    Tuple,
    Union,
)

from .depth_first import DepthOptions, enumerate_simple_paths
from .errors import TraceMismatchError
from .events import group_events_by_type, to_event_object
from .graph_types import (
    AdjacencyMap,
    MachineLike,
    StatePath,
    StatePaths,
    StatePathsMap,
    Step,
)
from .options import GraphOptions, get_graph_options
from .transition_system import (
    Transition,
    adjacency_targets,
    apply_transition,
    get_adjacency_map,
)

logger = logging.getLogger(__name__)

# weight, predecessor key, predecessor event key
WeightEntry = Tuple[int, Optional[str], Optional[str]]


def _declares_states(machine: MachineLike[Any, Any]) -> bool:
    return bool(getattr(machine, "states", None))


# ─────────────────────────────────────────────────────────────────────
#  Shortest paths
# ─────────────────────────────────────────────────────────────────────

def shortest_paths(
    adjacency: AdjacencyMap,
    initial_state: Any,
    options: Optional[GraphOptions] = None,
) -> StatePathsMap:
    """
    Minimal-weight path from *initial_state* to every vertex of *adjacency*.

    Relaxation by passes: every pass scans a snapshot of the unvisited
    vertices and gives each newly reached neighbour weight + 1.  Vertices
    reached during a pass wait for the next one, so the passes are
    breadth-first levels and the result equals a breadth-first search even
    when *adjacency* was built depth-first.  When
    several predecessors give the same minimal weight the first one found
    is kept.

    Returns
    -------
    dict
        ``{state_key: StatePaths(state, (path,))}`` with exactly one path per
        state, in discovery order.  The initial state maps to the empty path.
    """
    serialize = get_graph_options(options).state_serializer
    initial_key = serialize(initial_state)

    weights: Dict[str, WeightEntry] = {initial_key: (0, None, None)}
    states: Dict[str, Any] = {initial_key: initial_state}
    unvisited: Dict[str, None] = {initial_key: None}
    visited: Set[str] = set()
    passes = 0

    # Each pass relaxes one breadth-first level, so the first weight a
    # vertex receives is already minimal.
    while unvisited:
        passes += 1
        for vertex in list(unvisited):
            weight = weights[vertex][0]
            for event_key, segment in adjacency.get(vertex, {}).items():
                next_vertex = serialize(segment.state)
                states.setdefault(next_vertex, segment.state)
                if next_vertex in weights:
                    continue
                weights[next_vertex] = (weight + 1, vertex, event_key)
                unvisited[next_vertex] = None
            visited.add(vertex)
            unvisited.pop(vertex, None)

    logger.debug(
        "Shortest paths converged after %d passes over %d vertices",
        passes, len(visited),
    )

    result: StatePathsMap = {}
    for key, (weight, _, _) in weights.items():
        steps: List[Step[Any, Any]] = []
        cursor = key
        while True:
            _, previous, event_key = weights[cursor]
            if previous is None:
                break
            steps.append(
                Step(states[previous], adjacency[previous][event_key].event)
            )
            cursor = previous
        steps.reverse()
        state = states[key]
        result[key] = StatePaths(state, (StatePath(state, tuple(steps), weight),))
    return result


def get_shortest_paths(
    machine: MachineLike[Any, Any],
    options: Optional[GraphOptions] = None,
) -> StatePathsMap:
    """Explore *machine* and return its shortest paths (``{}`` when the
    machine declares no states)."""
    if not _declares_states(machine):
        return {}
    opts = get_graph_options(options)
    adjacency = get_adjacency_map(machine, opts)
    return shortest_paths(adjacency, machine.initial_state, opts)


# ─────────────────────────────────────────────────────────────────────
#  Simple paths
# ─────────────────────────────────────────────────────────────────────

def simple_paths(
    adjacency: AdjacencyMap,
    initial_state: Any,
    options: Optional[GraphOptions] = None,
) -> StatePathsMap:
    """
    Every simple path from *initial_state* to every vertex of *adjacency*.

    Vertices are the expanded states followed by boundary targets.  A path
    stops at its target and never revisits a state.  The number of paths
    grows exponentially with graph density.
    """
    serialize = get_graph_options(options).state_serializer
    depth_options = DepthOptions(serialize_vertex=serialize)
    return enumerate_simple_paths(
        adjacency,
        initial_state,
        adjacency_targets(adjacency, serialize),
        serialize,
        depth_options.resolved_visit_condition(),
    )


def get_simple_paths(
    machine: MachineLike[Any, Any],
    options: Optional[GraphOptions] = None,
) -> StatePathsMap:
    if not _declares_states(machine):
        return {}
    opts = get_graph_options(options)
    adjacency = get_adjacency_map(machine, opts)
    return simple_paths(adjacency, machine.initial_state, opts)


def get_simple_paths_as_list(
    machine: MachineLike[Any, Any],
    options: Optional[GraphOptions] = None,
) -> List[StatePaths[Any, Any]]:
    return list(get_simple_paths(machine, options).values())


# ─────────────────────────────────────────────────────────────────────
#  Trace resolution
# ─────────────────────────────────────────────────────────────────────

def resolve_trace(
    source: Union[AdjacencyMap, Transition],
    initial_state: Any,
    events: Sequence[Any],
    options: Optional[GraphOptions] = None,
) -> StatePath[Any, Any]:
    """
    Replay *events* in order from *initial_state*.

    *source* is either an adjacency map or a transition function.  Against a
    map, each event must match a recorded edge of the current state exactly
    (by event key).  Against a function, a transition that leaves the state
    key unchanged counts as "no such transition", the same rule the explorer
    uses when recording edges.

    Raises
    ------
    TraceMismatchError
        If some event has no transition from the state reached before it.
    TransitionError
        If the transition function itself raises.
    """
    opts = get_graph_options(options)
    serialize = opts.state_serializer
    state = initial_state
    state_key = serialize(state)
    steps: List[Step[Any, Any]] = []

    for index, event in enumerate(events):
        event = to_event_object(event)
        event_key = opts.event_serializer(event)
        if isinstance(source, Mapping):
            segment = source.get(state_key, {}).get(event_key)
            if segment is None:
                raise TraceMismatchError(state_key, event_key, index)
            next_state = segment.state
            next_key = serialize(next_state)
        else:
            next_state = apply_transition(source, state, event, state_key, opts)
            next_key = serialize(next_state)
            if next_key == state_key:
                raise TraceMismatchError(state_key, event_key, index)

        steps.append(Step(state, event))
        state, state_key = next_state, next_key

    return StatePath(state, tuple(steps), len(steps))


def get_path_from_events(
    machine: MachineLike[Any, Any],
    events: Sequence[Any],
    options: Optional[GraphOptions] = None,
) -> StatePath[Any, Any]:
    """
    The path *machine* takes through *events*.

    The events themselves, grouped by type, become the event strategy, so an
    event type that occurs several times is explored with each of its
    payloads.  Any ``events`` strategy in *options* is replaced.  A machine
    that declares no states yields the empty path at its initial state.
    """
    if not _declares_states(machine):
        return StatePath(machine.initial_state, (), 0)

    events = [to_event_object(event) for event in events]
    opts = get_graph_options(options, events=group_events_by_type(events))
    adjacency = get_adjacency_map(machine, opts)
    return resolve_trace(adjacency, machine.initial_state, events, opts)


__all__ = [
    "shortest_paths",
    "get_shortest_paths",
    "simple_paths",
    "get_simple_paths",
    "get_simple_paths_as_list",
    "resolve_trace",
    "get_path_from_events",
]
