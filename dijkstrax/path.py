"""Utilities for reconstructing paths from predecessor-edge tables."""

from __future__ import annotations

from typing import Any, Iterator, List, Mapping, Optional, Tuple

from .exceptions import AlgorithmError
from .graph import Graph


def walk_predecessors(
    graph: Graph,
    predecessors: Mapping[Any, Optional[Any]],
    target: Any,
) -> Iterator[Tuple[Any, Optional[Any]]]:
    """Walk predecessor edges backward from ``target``.

    Args:
        graph: Graph used to resolve the far endpoint of each edge.
        predecessors: Edge used to reach each vertex, or ``None`` for the
            source and for unreached vertices.
        target: Vertex to start the walk from.

    Yields:
        ``(vertex, edge)`` pairs from ``target`` back towards the source,
        where ``edge`` is the predecessor edge of ``vertex``. The final pair
        has ``edge is None``.

    Raises:
        AlgorithmError: If the predecessor edges form a cycle.
    """
    seen = set()
    cur = target
    while True:
        if cur in seen:
            raise AlgorithmError(f"predecessor cycle through {cur!r}")
        seen.add(cur)
        edge = predecessors.get(cur)
        yield cur, edge
        if edge is None:
            return
        cur = graph.opposite(cur, edge)


def path_vertices(graph: Graph, predecessors: Mapping[Any, Optional[Any]], target: Any) -> List[Any]:
    """Return the vertices from the root of the walk to ``target``.

    An unreached ``target`` yields ``[target]``.
    """
    vertices = [v for v, _ in walk_predecessors(graph, predecessors, target)]
    vertices.reverse()
    return vertices


def path_edges(graph: Graph, predecessors: Mapping[Any, Optional[Any]], target: Any) -> List[Any]:
    """Return the edges from the root of the walk to ``target`` (may be empty)."""
    edges = [e for _, e in walk_predecessors(graph, predecessors, target) if e is not None]
    edges.reverse()
    return edges


__all__ = ["walk_predecessors", "path_vertices", "path_edges"]
