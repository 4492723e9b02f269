"""
Unit tests for ShortestPathEngine using AdjacencyGraph.
"""

import io
import json
import math

import pytest

from dijkstrax.engine import (
    INFINITY,
    EngineConfig,
    EngineState,
    ShortestPathEngine,
    is_infinite,
    shortest_path,
)
from dijkstrax.exceptions import (
    ConfigError,
    GraphFormatError,
    InputError,
    InvalidVertexError,
    NotFinalizedError,
    PreconditionError,
    UnsupportedWeightError,
)
from dijkstrax.graph import AdjacencyGraph, payload_weight
from dijkstrax.logger import StdLogger


def _ends(edges):
    return [(e.u, e.v) for e in edges]


def test_concrete_scenario(abcd):
    engine = ShortestPathEngine(abcd)
    engine.initialize("A")
    engine.run()

    assert engine.state is EngineState.COMPLETED
    assert {v: engine.distance_to(v) for v in "ABCD"} == {"A": 0, "B": 1, "C": 3, "D": 4}
    assert engine.path_vertices("D") == ["A", "B", "C", "D"]
    assert _ends(engine.path_edges("D")) == [("A", "B"), ("B", "C"), ("C", "D")]


def test_source_path_is_degenerate(abcd):
    engine = shortest_path(abcd, "A")

    assert engine.distance_to("A") == 0.0
    assert engine.path_vertices("A") == ["A"]
    assert engine.path_edges("A") == []


def test_unreachable_vertex_keeps_sentinel(abcd):
    engine = shortest_path(abcd, "A")

    assert engine.distance_to("E") == INFINITY
    assert is_infinite(engine.distance_to("E"))
    assert engine.path_vertices("E") == ["E"]
    assert engine.path_edges("E") == []
    assert engine.is_finalized("E")


def test_queries_are_idempotent(abcd):
    engine = shortest_path(abcd, "A")

    first = [(engine.distance_to(v), engine.path_vertices(v), engine.path_edges(v)) for v in "ABCDE"]
    second = [(engine.distance_to(v), engine.path_vertices(v), engine.path_edges(v)) for v in "ABCDE"]

    assert first == second


def test_early_termination_stops_at_target(abcd):
    engine = ShortestPathEngine(abcd)
    engine.initialize("A")
    engine.run("C")

    assert engine.distance_to("C") == 3.0
    assert engine.path_vertices("C") == ["A", "B", "C"]
    assert engine.finalized_order == ["A", "B", "C"]
    assert not engine.is_finalized("D")
    with pytest.raises(NotFinalizedError):
        engine.distance_to("D")
    with pytest.raises(NotFinalizedError):
        engine.path_vertices("D")
    with pytest.raises(PreconditionError):
        engine.path_edges("D")


def test_early_termination_matches_full_run(abcd):
    full = shortest_path(abcd, "A")
    for target in "ABCDE":
        early = shortest_path(abcd, "A", target)
        assert early.distance_to(target) == full.distance_to(target)
        assert early.path_vertices(target) == full.path_vertices(target)
        assert early.path_edges(target) == full.path_edges(target)


def test_target_edges_are_not_relaxed():
    g = AdjacencyGraph.from_edges([("s", "t", 1), ("t", "x", 1)])
    engine = shortest_path(g, "s", "t")

    # x is only reachable through t, whose edges are never relaxed
    assert engine.summary()["edges_relaxed"] == 1
    assert not engine.is_finalized("x")


def test_self_loop_never_lowers_source_or_becomes_predecessor():
    g = AdjacencyGraph()
    g.insert_edge("A", "A", 0)
    g.insert_edge("A", "A", 3)
    ab = g.insert_edge("A", "B", 2)
    g.insert_edge("B", "B", 0)

    engine = shortest_path(g, "A")

    assert engine.distance_to("A") == 0.0
    assert engine.path_edges("A") == []
    assert engine.path_vertices("A") == ["A"]
    assert engine.path_edges("B") == [ab]


def test_parallel_edges_pick_the_lightest():
    g = AdjacencyGraph()
    g.insert_edge("A", "B", 5)
    light = g.insert_edge("A", "B", 2)
    g.insert_edge("A", "B", 9)

    engine = shortest_path(g, "A")

    assert engine.distance_to("B") == 2.0
    assert engine.path_edges("B") == [light]


def test_undirected_graph(abcd_undirected):
    engine = shortest_path(abcd_undirected, "D")

    assert {v: engine.distance_to(v) for v in "ABCD"} == {"A": 4, "B": 3, "C": 1, "D": 0}
    assert engine.path_vertices("A") == ["D", "C", "B", "A"]
    assert [payload_weight(e) for e in engine.path_edges("A")] == [1.0, 2.0, 1.0]


def test_ties_break_by_vertex_enumeration_order():
    g = AdjacencyGraph.from_edges(
        [("A", "B", 1), ("A", "C", 1), ("B", "D", 1), ("C", "D", 1)]
    )
    engine = shortest_path(g, "A")

    assert engine.finalized_order == ["A", "B", "C", "D"]
    assert engine.path_vertices("D") == ["A", "B", "D"]
    assert engine.distance_to("D") == 2.0


def test_custom_weight_function(abcd):
    # every edge costs 1: hop count
    engine = shortest_path(abcd, "A", weight=lambda e: 1.0)

    assert engine.distance_to("D") == 2.0
    assert engine.path_vertices("D") == ["A", "B", "D"]


def test_default_weight_requires_numeric_payload():
    g = AdjacencyGraph()
    g.insert_edge("A", "B", "heavy")
    engine = ShortestPathEngine(g)
    engine.initialize("A")

    with pytest.raises(GraphFormatError):
        engine.run()


def test_failed_run_requires_reinitialize():
    g = AdjacencyGraph()
    g.insert_edge("A", "B", "heavy")
    g.insert_edge("A", "C", 1)
    engine = ShortestPathEngine(g)
    engine.initialize("A")

    with pytest.raises(GraphFormatError):
        engine.run()
    assert engine.state is EngineState.UNINITIALIZED
    with pytest.raises(PreconditionError):
        engine.run()
    with pytest.raises(PreconditionError):
        engine.distance_to("C")

    engine.initialize("A")
    with pytest.raises(GraphFormatError):
        engine.run()


def test_weight_function_error_resets_state(abcd):
    def flaky(e):
        if e.v == "D":
            raise KeyError(e.v)
        return float(e.element)

    engine = ShortestPathEngine(abcd, flaky)
    engine.initialize("A")

    with pytest.raises(KeyError):
        engine.run()
    assert engine.state is EngineState.UNINITIALIZED

    engine = ShortestPathEngine(abcd, flaky)
    engine.initialize("A")
    engine.run("B")
    assert engine.distance_to("B") == 1.0


def test_weight_must_be_callable(abcd):
    with pytest.raises(ConfigError):
        ShortestPathEngine(abcd, 3.0)


def test_config_validation():
    with pytest.raises(ConfigError):
        EngineConfig(check_weights="yes")


def test_state_machine_preconditions(abcd):
    engine = ShortestPathEngine(abcd)
    assert engine.state is EngineState.UNINITIALIZED

    with pytest.raises(PreconditionError):
        engine.run()
    with pytest.raises(PreconditionError):
        engine.distance_to("A")

    engine.initialize("A")
    assert engine.state is EngineState.INITIALIZED
    with pytest.raises(PreconditionError):
        engine.distance_to("A")
    with pytest.raises(PreconditionError):
        engine.result()

    engine.run()
    with pytest.raises(PreconditionError):
        engine.run()


def test_invalid_vertices(abcd):
    engine = ShortestPathEngine(abcd)

    with pytest.raises(InvalidVertexError) as info:
        engine.initialize("Z")
    assert info.value.vertex == "Z"
    assert isinstance(info.value, InputError)
    assert isinstance(info.value, ValueError)
    with pytest.raises(InvalidVertexError):
        engine.initialize(["not", "hashable"])
    assert engine.state is EngineState.UNINITIALIZED

    engine.initialize("A")
    with pytest.raises(InvalidVertexError):
        engine.run("Z")
    engine.run()
    with pytest.raises(InvalidVertexError):
        engine.distance_to("Z")
    with pytest.raises(InvalidVertexError):
        engine.path_vertices("Z")


def test_reinitialize_discards_previous_run(abcd):
    engine = shortest_path(abcd, "A")
    engine.initialize("C")
    engine.run()

    assert engine.source == "C"
    assert engine.distance_to("C") == 0.0
    assert engine.distance_to("D") == 1.0
    assert engine.distance_to("A") == INFINITY
    assert engine.path_vertices("B") == ["B"]


def test_negative_weight_is_reported():
    g = AdjacencyGraph.from_edges([("A", "B", 2), ("B", "C", -1)])
    engine = ShortestPathEngine(g)
    engine.initialize("A")

    with pytest.raises(UnsupportedWeightError) as info:
        engine.run()
    assert info.value.weight == -1.0
    assert engine.state is EngineState.UNINITIALIZED
    with pytest.raises(PreconditionError):
        engine.distance_to("A")


def test_nan_weight_is_reported():
    g = AdjacencyGraph.from_edges([("A", "B", math.nan)])

    with pytest.raises(UnsupportedWeightError):
        shortest_path(g, "A")


def test_weight_check_can_be_disabled():
    g = AdjacencyGraph.from_edges([("A", "B", 2), ("B", "C", -1)])
    engine = shortest_path(g, "A", config=EngineConfig(check_weights=False))

    assert engine.distance_to("C") == 1.0


def test_counters_and_metrics(abcd):
    engine = shortest_path(abcd, "A")

    assert engine.summary() == {"edges_relaxed": 5, "improvements": 5, "vertices_finalized": 5}
    m = engine.metrics(wall_ms=1.5)
    assert m.vertices == 5
    assert m.finalized == 5
    assert m.state == "completed"
    assert m.wall_ms == 1.5
    assert m.peak_mib is None


def test_record_order_disabled(abcd):
    engine = shortest_path(abcd, "A", config=EngineConfig(record_order=False))

    assert engine.finalized_order == []
    assert engine.distance_to("D") == 4.0


def test_result_is_a_snapshot(abcd):
    engine = shortest_path(abcd, "A", "C")
    res = engine.result()

    assert res.source == "A"
    assert res.finalized == frozenset({"A", "B", "C"})
    res.distances["C"] = 99.0
    assert engine.distance_to("C") == 3.0


def test_logger_events(abcd):
    buf = io.StringIO()
    logger = StdLogger(level="debug", stream=buf)
    shortest_path(abcd, "A", "D", logger=logger)

    lines = buf.getvalue().splitlines()
    assert lines[0] == "debug initialize source=A vertices=5"
    assert lines[1].startswith("debug early_exit target=D distance=4")
    assert lines[2].startswith("info run source=A target=D")


def test_json_logger_events(abcd):
    buf = io.StringIO()
    logger = StdLogger(level="info", json_fmt=True, stream=buf)
    shortest_path(abcd, "A", logger=logger)

    events = [json.loads(line) for line in buf.getvalue().splitlines()]
    assert len(events) == 1
    assert events[0]["event"] == "run"
    assert events[0]["vertices_finalized"] == 5


def test_logger_rejects_unknown_level():
    with pytest.raises(ConfigError):
        StdLogger(level="verbose")


def test_logger_filters_below_level():
    buf = io.StringIO()
    logger = StdLogger(level="info", stream=buf)

    logger.debug("initialize", source="A")
    logger.info("run", source="A", target=None)

    assert buf.getvalue() == "info run source=A target=None\n"
