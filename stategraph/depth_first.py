# stategraph/depth_first.py
"""
Model-agnostic depth-first traversal and simple-path enumeration.

Works over any ``reducer(state, event) -> state`` and a fixed, finite event
list; nothing here knows about enabled events or machines.  The backtracking
core, :func:`enumerate_simple_paths`, is also what
:func:`stategraph.path_analysis.simple_paths` runs on.

Descent is controlled by a *visit condition*: ``visit_condition(vertex,
event, ctx)`` returns ``True`` when the search must NOT step into *vertex*.
The default stops at vertices already on the current path, which makes every
emitted path simple.  Callers bound the search (depth, edge reuse, …) by
supplying their own condition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Set,
    Tuple,
)

from .graph_types import AdjacencyMap, Segment, StatePath, StatePaths, Step
from .serialization import canonical_json

logger = logging.getLogger(__name__)

_DONE = object()


@dataclass
class VisitedContext:
    """Search bookkeeping handed to visit conditions.

    ``vertices`` holds the keys on the current path; ``edges`` every event
    key traversed so far while searching for the current target.
    """
    vertices: Set[str] = field(default_factory=set)
    edges: Set[str] = field(default_factory=set)


VisitCondition = Callable[[Any, Any, VisitedContext], bool]


@dataclass(frozen=True)
class DepthOptions:
    serialize_vertex: Callable[[Any], str] = canonical_json
    serialize_event: Callable[[Any], str] = canonical_json
    visit_condition: Optional[VisitCondition] = None

    def resolved_visit_condition(self) -> VisitCondition:
        if self.visit_condition is not None:
            return self.visit_condition
        serialize = self.serialize_vertex

        def on_current_path(vertex: Any, event: Any, ctx: VisitedContext) -> bool:
            return serialize(vertex) in ctx.vertices

        return on_current_path


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

def depth_first_traversal(
    reducer: Callable[[Any, Any], Any],
    initial_state: Any,
    events: Sequence[Any],
    serialize_state: Callable[[Any], str] = canonical_json,
    serialize_event: Callable[[Any], str] = canonical_json,
) -> AdjacencyMap:
    """Adjacency map of every state reachable through *events*.

    Unlike :func:`stategraph.transition_system.explore`, every edge is
    recorded, self-loops included.
    """
    adjacency: AdjacencyMap = {}
    stack: List[Tuple[Any, str, Iterator[Any]]] = []

    def enter(state: Any) -> None:
        key = serialize_state(state)
        if key not in adjacency:
            adjacency[key] = {}
            stack.append((state, key, iter(events)))

    enter(initial_state)
    while stack:
        state, key, pending = stack[-1]
        event = next(pending, _DONE)
        if event is _DONE:
            stack.pop()
            continue
        next_state = reducer(state, event)
        adjacency[key][serialize_event(event)] = Segment(next_state, event)
        enter(next_state)

    return adjacency


# ---------------------------------------------------------------------------
# Simple paths
# ---------------------------------------------------------------------------

def _paths_to(
    adjacency: AdjacencyMap,
    initial_state: Any,
    target_key: str,
    serialize_vertex: Callable[[Any], str],
    visit_condition: VisitCondition,
) -> List[StatePath[Any, Any]]:
    """Backtracking search for every path from the initial vertex to
    *target_key* that *visit_condition* allows."""
    ctx = VisitedContext()
    initial_key = serialize_vertex(initial_state)
    if initial_key == target_key:
        return [StatePath(initial_state, (), 0)]

    found: List[StatePath[Any, Any]] = []
    steps: List[Step[Any, Any]] = []
    ctx.vertices.add(initial_key)
    stack: List[Tuple[str, Any, Iterator[Tuple[str, Segment[Any, Any]]]]] = [
        (initial_key, initial_state,
         iter(adjacency.get(initial_key, {}).items()))
    ]

    while stack:
        key, state, edges = stack[-1]
        item = next(edges, _DONE)
        if item is _DONE:
            stack.pop()
            ctx.vertices.discard(key)
            if stack:
                steps.pop()
            continue

        event_key, segment = item
        if visit_condition(segment.state, segment.event, ctx):
            continue
        ctx.edges.add(event_key)
        step = Step(state, segment.event)
        next_key = serialize_vertex(segment.state)
        if next_key == target_key:
            found.append(
                StatePath(segment.state, tuple(steps) + (step,), len(steps) + 1)
            )
            continue

        steps.append(step)
        ctx.vertices.add(next_key)
        stack.append(
            (next_key, segment.state, iter(adjacency.get(next_key, {}).items()))
        )

    return found


def enumerate_simple_paths(
    adjacency: AdjacencyMap,
    initial_state: Any,
    targets: Iterable[str],
    serialize_vertex: Callable[[Any], str],
    visit_condition: VisitCondition,
) -> Dict[str, StatePaths[Any, Any]]:
    """
    For every key in *targets*, every path from *initial_state* to it.

    Parameters
    ----------
    adjacency :
        Map produced by ``explore`` or :func:`depth_first_traversal`.
    targets :
        Vertex keys to search for, in result order.
    visit_condition :
        ``True`` stops the search from stepping into a vertex.  The visited
        context is fresh for each target.

    Returns
    -------
    dict
        ``{target_key: StatePaths}``; targets with no admissible path are
        omitted.
    """
    result: Dict[str, StatePaths[Any, Any]] = {}
    for target_key in targets:
        paths = _paths_to(
            adjacency, initial_state, target_key, serialize_vertex,
            visit_condition,
        )
        if paths:
            result[target_key] = StatePaths(paths[0].state, tuple(paths))

    logger.debug(
        "Enumerated %d paths to %d vertices",
        sum(len(entry.paths) for entry in result.values()),
        len(result),
    )
    return result


def depth_simple_paths(
    reducer: Callable[[Any, Any], Any],
    initial_state: Any,
    events: Sequence[Any],
    options: Optional[DepthOptions] = None,
) -> Dict[str, StatePaths[Any, Any]]:
    """Simple paths to every state reachable from *initial_state* via
    *reducer* and the fixed *events*."""
    opts = options or DepthOptions()
    adjacency = depth_first_traversal(
        reducer, initial_state, events,
        opts.serialize_vertex, opts.serialize_event,
    )
    return enumerate_simple_paths(
        adjacency,
        initial_state,
        list(adjacency),
        opts.serialize_vertex,
        opts.resolved_visit_condition(),
    )


__all__ = [
    "VisitedContext",
    "VisitCondition",
    "DepthOptions",
    "depth_first_traversal",
    "enumerate_simple_paths",
    "depth_simple_paths",
]
