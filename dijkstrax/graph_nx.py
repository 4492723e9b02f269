"""Adapter exposing a :mod:`networkx` graph through the engine's graph capability."""

from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple

import networkx as nx

from .exceptions import GraphFormatError, InputError, InvalidVertexError
from .graph import Float

NxEdge = Tuple[Hashable, Hashable, Optional[Hashable]]


class NetworkXGraph:
    """Wrap a ``Graph``, ``DiGraph``, ``MultiGraph`` or ``MultiDiGraph``.

    Edges are ``(u, v, key)`` triples oriented away from the vertex they were
    listed for; ``key`` is ``None`` for graphs without parallel edges.
    """

    def __init__(self, graph: nx.Graph) -> None:
        self.graph = graph
        self.directed = graph.is_directed()
        self.multigraph = graph.is_multigraph()

    def vertices(self) -> List[Hashable]:
        return list(self.graph.nodes)

    def incident_edges(self, v: Hashable) -> List[NxEdge]:
        if v not in self.graph:
            raise InvalidVertexError(v)
        view = self.graph.out_edges if self.directed else self.graph.edges
        if self.multigraph:
            return [(a, b, k) for a, b, k in view(v, keys=True)]
        return [(a, b, None) for a, b in view(v)]

    def opposite(self, v: Hashable, e: NxEdge) -> Hashable:
        a, b, _ = e
        if a == v:
            return b
        if b == v:
            return a
        raise InputError(f"{v!r} is not an endpoint of {e!r}")

    def edge_data(self, e: NxEdge) -> Dict[str, Any]:
        """Return the networkx attribute dictionary of ``e``."""
        a, b, k = e
        if self.multigraph:
            return self.graph.edges[a, b, k]
        return self.graph.edges[a, b]


def attribute_weight(
    adapter: NetworkXGraph, attr: str = "weight", default: Optional[Float] = 1.0
) -> Callable[[NxEdge], Float]:
    """Return an edge-weight function reading ``attr`` from edge data.

    Args:
        adapter: Wrapped graph the edges belong to.
        attr: Edge attribute holding the weight.
        default: Weight of edges without ``attr``. If ``None``, such edges
            raise :class:`~dijkstrax.exceptions.GraphFormatError`.
    """

    def weight(e: NxEdge) -> Float:
        data = adapter.edge_data(e)
        if attr not in data:
            if default is None:
                raise GraphFormatError(f"edge {e!r} has no {attr!r} attribute")
            return float(default)
        return float(data[attr])

    return weight


__all__ = ["NetworkXGraph", "attribute_weight"]
