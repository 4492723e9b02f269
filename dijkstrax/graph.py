"""Graph capability consumed by the engine and a simple adjacency-map graph."""

from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, Iterable, List, Protocol, Sequence, Tuple

from .exceptions import GraphFormatError, InputError, InvalidVertexError

Vertex = Hashable
Float = float


class Graph(Protocol):
    """Capabilities the engine needs from a graph representation.

    Vertices and edges are opaque handles. The engine only stores them as
    dictionary keys and compares them, so any hashable value works.
    """

    def vertices(self) -> Iterable[Any]:
        """Return every vertex of the graph."""
        ...

    def incident_edges(self, v: Any) -> Iterable[Any]:
        """Return the edges that can be followed out of ``v``."""
        ...

    def opposite(self, v: Any, e: Any) -> Any:
        """Return the endpoint of ``e`` that is not ``v`` (``v`` for a self-loop)."""
        ...


EdgeWeight = Callable[[Any], Float]


class Edge:
    """Edge between two vertices carrying an arbitrary ``element`` payload.

    Edges compare by identity, so parallel edges between the same pair of
    vertices remain distinct.
    """

    __slots__ = ("u", "v", "element")

    def __init__(self, u: Vertex, v: Vertex, element: Any = None) -> None:
        self.u = u
        self.v = v
        self.element = element

    @property
    def endpoints(self) -> Tuple[Vertex, Vertex]:
        return self.u, self.v

    def __repr__(self) -> str:
        return f"Edge({self.u!r}, {self.v!r}, {self.element!r})"


def payload_weight(e: Edge) -> Float:
    """Default edge weight: the numeric payload stored on the edge.

    Raises:
        GraphFormatError: If the payload cannot be read as a number.
    """
    try:
        return float(e.element)
    except (TypeError, ValueError) as exc:
        raise GraphFormatError(f"edge {e!r} does not carry a numeric weight") from exc


class AdjacencyGraph:
    """Directed or undirected graph stored as per-vertex incidence lists.

    For a directed graph :meth:`incident_edges` returns the outgoing edges of
    a vertex. For an undirected graph it returns every edge touching the
    vertex; a self-loop is listed once.

    Attributes:
        directed: Whether edges are traversed only from ``u`` to ``v``.
    """

    def __init__(self, directed: bool = True) -> None:
        self.directed = directed
        self._incident: Dict[Vertex, List[Edge]] = {}
        self._edges: List[Edge] = []

    def insert_vertex(self, x: Vertex) -> Vertex:
        """Add ``x`` to the vertex set (no-op if already present)."""
        self._incident.setdefault(x, [])
        return x

    def insert_edge(self, u: Vertex, v: Vertex, element: Any = None) -> Edge:
        """Add an edge from ``u`` to ``v``, inserting missing endpoints.

        Args:
            u: Tail vertex.
            v: Head vertex.
            element: Payload stored on the edge, usually its weight.

        Returns:
            The new edge handle.

        Examples:
            ```python
            >>> g = AdjacencyGraph()
            >>> e = g.insert_edge("a", "b", 1.5)
            >>> g.opposite("a", e)
            'b'
            ```
        """
        self.insert_vertex(u)
        self.insert_vertex(v)
        e = Edge(u, v, element)
        self._edges.append(e)
        self._incident[u].append(e)
        if not self.directed and u != v:
            self._incident[v].append(e)
        return e

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Tuple[Vertex, Vertex, Any]],
        directed: bool = True,
        vertices: Sequence[Vertex] = (),
    ) -> "AdjacencyGraph":
        """Create a graph from ``(u, v, element)`` triples.

        Args:
            edges: Iterable of edge triples.
            directed: Whether the graph is directed.
            vertices: Extra vertices to insert first (e.g. isolated ones).
        """
        g = cls(directed=directed)
        for x in vertices:
            g.insert_vertex(x)
        for u, v, element in edges:
            g.insert_edge(u, v, element)
        return g

    def vertices(self) -> List[Vertex]:
        return list(self._incident)

    def edges(self) -> List[Edge]:
        return list(self._edges)

    def contains_vertex(self, v: Vertex) -> bool:
        try:
            return v in self._incident
        except TypeError:
            return False

    def num_vertices(self) -> int:
        return len(self._incident)

    def num_edges(self) -> int:
        return len(self._edges)

    def incident_edges(self, v: Vertex) -> List[Edge]:
        """Return the edges leaving ``v``.

        Raises:
            InvalidVertexError: If ``v`` is not in the graph.
        """
        if not self.contains_vertex(v):
            raise InvalidVertexError(v)
        return list(self._incident[v])

    def opposite(self, v: Vertex, e: Edge) -> Vertex:
        """Return the endpoint of ``e`` opposite ``v``.

        Raises:
            InputError: If ``v`` is not an endpoint of ``e``.
        """
        if e.u == v:
            return e.v
        if e.v == v:
            return e.u
        raise InputError(f"{v!r} is not an endpoint of {e!r}")


__all__ = ["Graph", "EdgeWeight", "Edge", "AdjacencyGraph", "payload_weight"]
