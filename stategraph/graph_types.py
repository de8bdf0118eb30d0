# stategraph/graph_types.py
"""
Result types and the structural protocols a model must satisfy.

Nothing in this package subclasses a model class; any object with the right
attributes qualifies (``typing.Protocol``), the same way an abstract state
only has to look like one to be explored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Any,
    Dict,
    Generic,
    Iterable,
    Mapping,
    Optional,
    Protocol,
    Tuple,
    TypeVar,
    runtime_checkable,
)

S = TypeVar("S")          # model state
E = TypeVar("E")          # event value

# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------

@runtime_checkable
class StateLike(Protocol):
    """What the default serializer and explorer read from a state."""

    @property
    def value(self) -> Any: ...

    @property
    def context(self) -> Any: ...

    @property
    def next_events(self) -> Iterable[Any]:
        """Event types enabled in this state, in declaration order."""
        ...


@runtime_checkable
class MachineLike(Protocol[S, E]):
    """An external transition system: initial state plus transition function."""

    @property
    def initial_state(self) -> S: ...

    @property
    def states(self) -> Optional[Mapping[str, Any]]:
        """Declared states; empty or ``None`` means a degenerate model."""
        ...

    def transition(self, state: S, event: E) -> S: ...


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Segment(Generic[S, E]):
    """Adjacency entry: the state reached and the event that reached it."""
    state: S
    event: E


@dataclass(frozen=True)
class Step(Generic[S, E]):
    """One step of a path: *event* was taken from *state*."""
    state: S
    event: E


@dataclass(frozen=True)
class StatePath(Generic[S, E]):
    """A path from the initial state to ``state`` through ``steps``.

    ``weight`` is the number of transitions and always equals ``len(steps)``.
    """
    state: S
    steps: Tuple[Step[S, E], ...]
    weight: int

    def __post_init__(self) -> None:
        if self.weight != len(self.steps):
            raise ValueError(
                f"path weight {self.weight} does not match "
                f"{len(self.steps)} steps"
            )

    @property
    def events(self) -> Tuple[E, ...]:
        return tuple(step.event for step in self.steps)

    def __len__(self) -> int:
        return self.weight


@dataclass(frozen=True)
class StatePaths(Generic[S, E]):
    """Every path found to one state."""
    state: S
    paths: Tuple[StatePath[S, E], ...]


AdjacencyMap = Dict[str, Dict[str, Segment[Any, Any]]]
StatePathsMap = Dict[str, StatePaths[Any, Any]]


__all__ = [
    "StateLike",
    "MachineLike",
    "Segment",
    "Step",
    "StatePath",
    "StatePaths",
    "AdjacencyMap",
    "StatePathsMap",
]
