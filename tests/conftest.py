"""Shared graphs for the engine tests."""

import pytest

from dijkstrax.graph import AdjacencyGraph

ABCD_EDGES = [
    ("A", "B", 1),
    ("A", "C", 4),
    ("B", "C", 2),
    ("B", "D", 5),
    ("C", "D", 1),
]


@pytest.fixture
def abcd():
    """A->B(1), A->C(4), B->C(2), B->D(5), C->D(1) plus an isolated vertex E."""
    return AdjacencyGraph.from_edges(ABCD_EDGES, vertices=["A", "B", "C", "D", "E"])


@pytest.fixture
def abcd_undirected():
    return AdjacencyGraph.from_edges(ABCD_EDGES, directed=False)
