# tests/test_transition_system.py
"""
Tests for adjacency-map construction (memoized depth-first exploration).
"""

import logging

import pytest

from stategraph import (
    GraphOptions,
    StateGraphError,
    TransitionError,
    explore,
    get_adjacency_map,
    get_graph_options,
    serialize_event,
    serialize_state,
)
from stategraph.transition_system import adjacency_targets
from tests.conftest import MockMachine, count_at_most, key, two_amounts


def _counter_options(limit=3):
    return GraphOptions(events={"INC": two_amounts}, filter=count_at_most(limit))


class TestLightSwitch:

    def test_two_vertices(self, light_switch):
        adjacency = get_adjacency_map(light_switch)
        assert list(adjacency) == [key("off"), key("on")]

    def test_edges(self, light_switch):
        adjacency = get_adjacency_map(light_switch)
        off_edges = adjacency[key("off")]
        assert list(off_edges) == [serialize_event("TURN_ON")]
        segment = off_edges[serialize_event("TURN_ON")]
        assert segment.state.value == "on"
        assert segment.event == {"type": "TURN_ON"}

    def test_self_loop_not_recorded(self, light_switch):
        adjacency = get_adjacency_map(light_switch)
        assert list(adjacency[key("on")]) == [serialize_event("TURN_OFF")]

    def test_machine_wrapper_matches_explore(self, light_switch):
        assert get_adjacency_map(light_switch) == explore(
            light_switch.initial_state, light_switch.transition
        )


class TestDeterminism:

    def test_repeated_exploration_identical(self, diamond):
        first = get_adjacency_map(diamond)
        second = get_adjacency_map(diamond)
        assert first == second
        assert list(first) == list(second)
        for state_key in first:
            assert list(first[state_key]) == list(second[state_key])

    def test_depth_first_order(self, shortcut):
        adjacency = get_adjacency_map(shortcut)
        assert list(adjacency) == [key("a"), key("b"), key("c"), key("d")]
        assert list(adjacency[key("a")]) == [
            serialize_event("LONG"),
            serialize_event("SHORT"),
        ]


class TestEventStrategy:

    def test_generated_events_with_filter(self, counter):
        adjacency = get_adjacency_map(counter, _counter_options())
        assert list(adjacency) == [
            key("active", {"count": n}) for n in (0, 1, 2, 3)
        ]
        edges = adjacency[key("active", {"count": 0})]
        assert [s.event["amount"] for s in edges.values()] == [1, 2]

    def test_enabled_events_override(self, light_switch):
        options = GraphOptions(enabled_events=lambda state: ["TURN_ON"])
        adjacency = get_adjacency_map(light_switch, options)
        assert adjacency[key("on")] == {}

    def test_custom_state_serializer_merges_states(self, counter):
        options = get_graph_options(
            _counter_options(), state_serializer=lambda state: state.value
        )
        assert get_adjacency_map(counter, options) == {"active": {}}

    def test_long_chain_does_not_recurse(self):
        size = 5000
        table = {f"s{i}": {"NEXT": f"s{i + 1}"} for i in range(size)}
        machine = MockMachine(table, initial="s0")
        adjacency = get_adjacency_map(machine)
        assert len(adjacency) == size + 1


class TestBoundary:

    def test_boundary_states_recorded_not_expanded(self, counter):
        adjacency = get_adjacency_map(counter, _counter_options())
        three = adjacency[key("active", {"count": 3})]
        targets = [s.state.context["count"] for s in three.values()]
        assert targets == [4, 5]
        assert key("active", {"count": 4}) not in adjacency
        assert key("active", {"count": 5}) not in adjacency

    def test_reachability_closure(self, counter):
        options = _counter_options()
        adjacency = get_adjacency_map(counter, options)
        for edges in adjacency.values():
            for segment in edges.values():
                target = serialize_state(segment.state)
                assert target in adjacency or not options.filter(segment.state)

    def test_adjacency_targets_lists_boundary_last(self, counter):
        adjacency = get_adjacency_map(counter, _counter_options())
        targets = adjacency_targets(adjacency, serialize_state)
        assert targets == [
            key("active", {"count": n}) for n in (0, 1, 2, 3, 4, 5)
        ]


class TestTransitionFailure:

    def test_error_wrapped_with_context(self, broken):
        with pytest.raises(TransitionError) as info:
            get_adjacency_map(broken)
        err = info.value
        assert err.state.value == "idle"
        assert err.event == {"type": "BOOM"}
        assert err.state_key == key("idle")
        assert err.event_key == serialize_event("BOOM")
        assert isinstance(err.__cause__, RuntimeError)
        assert isinstance(err, StateGraphError)
        assert str(err).startswith("[SG-1001]")
        assert "kaboom" in str(err)


class TestLogging:

    def test_summary_logged(self, light_switch, caplog):
        with caplog.at_level(logging.DEBUG, logger="stategraph.transition_system"):
            get_adjacency_map(light_switch)
        assert "Explored 2 states, 2 edges, 0 boundary targets" in caplog.text
