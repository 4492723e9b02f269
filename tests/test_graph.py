"""
Unit tests for AdjacencyGraph and the default edge weight.
"""

import pytest

from dijkstrax.exceptions import GraphFormatError, InputError, InvalidVertexError
from dijkstrax.graph import AdjacencyGraph, Edge, payload_weight


def test_directed_incidence_lists_outgoing_edges():
    g = AdjacencyGraph()
    ab = g.insert_edge("a", "b", 1.0)
    ca = g.insert_edge("c", "a", 2.0)

    assert g.vertices() == ["a", "b", "c"]
    assert g.incident_edges("a") == [ab]
    assert g.incident_edges("b") == []
    assert g.incident_edges("c") == [ca]
    assert g.num_vertices() == 3
    assert g.num_edges() == 2


def test_undirected_incidence_lists_every_touching_edge_once():
    g = AdjacencyGraph(directed=False)
    ab = g.insert_edge("a", "b", 1.0)
    loop = g.insert_edge("a", "a", 0.0)

    assert g.incident_edges("a") == [ab, loop]
    assert g.incident_edges("b") == [ab]
    assert g.opposite("b", ab) == "a"
    assert g.opposite("a", loop) == "a"


def test_parallel_edges_are_distinct():
    g = AdjacencyGraph()
    e1 = g.insert_edge(1, 2, 3.0)
    e2 = g.insert_edge(1, 2, 3.0)

    assert e1 != e2
    assert len({e1, e2}) == 2
    assert e1.endpoints == (1, 2)


def test_opposite_rejects_foreign_vertex():
    g = AdjacencyGraph()
    e = g.insert_edge("a", "b", 1.0)

    with pytest.raises(InputError):
        g.opposite("z", e)


def test_incident_edges_rejects_unknown_vertex():
    g = AdjacencyGraph()
    with pytest.raises(InvalidVertexError):
        g.incident_edges("missing")
    assert not g.contains_vertex(["unhashable"])


def test_from_edges_with_isolated_vertices():
    g = AdjacencyGraph.from_edges([(0, 1, 2.5)], directed=False, vertices=[5])

    assert g.vertices() == [5, 0, 1]
    assert not g.directed


def test_payload_weight():
    assert payload_weight(Edge("a", "b", 3)) == 3.0
    assert payload_weight(Edge("a", "b", "2.5")) == 2.5
    with pytest.raises(GraphFormatError):
        payload_weight(Edge("a", "b", None))
