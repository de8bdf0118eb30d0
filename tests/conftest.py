# tests/conftest.py
"""
Shared mock models for the stategraph test suite.

``MockMachine`` is a tiny table-driven transition system standing in for a
real state-machine engine.  Each table entry maps a state value to
``{event_type: target}``, where *target* is either the next state value or a
callable ``(context, event) -> (next_value, next_context)``.  Unknown events
leave the state unchanged, as most statechart engines do.
"""

from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Tuple

import pytest

from stategraph import event_type, serialize_state


@dataclass(frozen=True)
class MockState:
    value: Any
    context: Any = None
    next_events: Tuple[str, ...] = ()


class MockMachine:

    def __init__(self, table: Mapping[str, Mapping[str, Any]], initial: str,
                 context: Any = None) -> None:
        self.states: Dict[str, Mapping[str, Any]] = dict(table)
        self.initial_state = self.make_state(initial, context)

    def make_state(self, value: str, context: Any = None) -> MockState:
        return MockState(value, context, tuple(self.states.get(value, {})))

    def transition(self, state: MockState, event: Any) -> MockState:
        target = self.states.get(state.value, {}).get(event_type(event))
        if target is None:
            return state
        if callable(target):
            value, context = target(state.context, event)
            return self.make_state(value, context)
        return self.make_state(target, state.context)


def key(value: Any, context: Any = None) -> str:
    """Canonical key of a mock state with the given value/context."""
    return serialize_state(MockState(value, context))


def bfs_weights(adjacency, initial_key: str,
                serialize: Callable[[Any], str] = serialize_state) -> Dict[str, int]:
    """Reference breadth-first distances over an adjacency map."""
    dist = {initial_key: 0}
    queue = deque([initial_key])
    while queue:
        cur = queue.popleft()
        for segment in adjacency.get(cur, {}).values():
            nxt = serialize(segment.state)
            if nxt not in dist:
                dist[nxt] = dist[cur] + 1
                queue.append(nxt)
    return dist


def path_keys(path, serialize: Callable[[Any], str] = serialize_state):
    """State keys visited by *path*, terminal state included."""
    return [serialize(step.state) for step in path.steps] + [serialize(path.state)]


# ── Models ───────────────────────────────────────────────────────────

def _increment(context, event):
    return "active", {"count": context["count"] + event.get("amount", 1)}


def _explode(context, event):
    raise RuntimeError("kaboom")


def two_amounts(state):
    return [{"type": "INC", "amount": 1}, {"type": "INC", "amount": 2}]


def count_at_most(limit: int):
    return lambda state: state.context["count"] <= limit


@pytest.fixture
def light_switch():
    return MockMachine(
        {
            "off": {"TURN_ON": "on"},
            "on": {"TURN_OFF": "off", "TURN_ON": "on"},
        },
        initial="off",
    )


@pytest.fixture
def diamond():
    return MockMachine(
        {
            "a": {"LEFT": "b", "RIGHT": "c"},
            "b": {"JOIN": "d"},
            "c": {"JOIN": "d"},
            "d": {"RESET": "a"},
        },
        initial="a",
    )


@pytest.fixture
def shortcut():
    """Depth-first exploration reaches ``d`` through the long branch first."""
    return MockMachine(
        {
            "a": {"LONG": "b", "SHORT": "d"},
            "b": {"NEXT": "c"},
            "c": {"NEXT": "d"},
            "d": {},
        },
        initial="a",
    )


@pytest.fixture
def counter():
    return MockMachine({"active": {"INC": _increment}}, initial="active",
                       context={"count": 0})


@pytest.fixture
def broken():
    return MockMachine(
        {"idle": {"GO": "busy", "BOOM": _explode}, "busy": {}},
        initial="idle",
    )


@pytest.fixture
def empty_machine():
    return MockMachine({}, initial="idle")
