"""Reference Bellman-Ford implementation used to cross-check the engine."""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import InvalidVertexError
from .graph import EdgeWeight, Float, Graph, payload_weight


def bellman_ford_reference(
    graph: Graph,
    source: Any,
    weight: Optional[EdgeWeight] = None,
    max_iters: Optional[int] = None,
) -> Dict[Any, Float]:
    """Run Bellman-Ford with early stopping over the graph capability.

    Args:
        graph: Graph providing ``vertices``, ``incident_edges`` and
            ``opposite``.
        source: Source vertex.
        weight: Edge-weight function, defaults to the edge payload.
        max_iters: Optional cap on the number of passes (at most ``n - 1``).

    Returns:
        Distance to every vertex, ``math.inf`` for unreachable ones.
    """
    weight = weight or payload_weight
    vertices = list(graph.vertices())
    dist: Dict[Any, Float] = {v: math.inf for v in vertices}
    if source not in dist:
        raise InvalidVertexError(source, "source")
    dist[source] = 0.0

    arcs: List[Tuple[Any, Any, Float]] = []
    for v in vertices:
        for e in graph.incident_edges(v):
            arcs.append((v, graph.opposite(v, e), weight(e)))

    n = len(vertices)
    limit = n - 1 if max_iters is None else min(max_iters, n - 1)
    for _ in range(limit):
        updated = False
        for u, v, w in arcs:
            du = dist[u]
            if du == math.inf:
                continue
            nd = du + w
            if nd < dist[v]:
                dist[v] = nd
                updated = True
        if not updated:
            break
    return dist


__all__ = ["bellman_ford_reference"]
