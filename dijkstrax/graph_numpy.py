"""NumPy-backed graph representation."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from .exceptions import GraphFormatError, InputError, InvalidVertexError
from .graph import Float

EdgeTriple = Tuple[int, int, Float]


def _csr(keys: npt.NDArray[np.int64], n: int) -> Tuple[npt.NDArray[np.int64], npt.NDArray[np.int64]]:
    """Group edge ids by ``keys`` into ``(ptr, order)`` compressed rows."""
    order = np.argsort(keys, kind="stable").astype(np.int64)
    counts = np.bincount(keys, minlength=n)
    ptr = np.zeros(n + 1, dtype=np.int64)
    np.cumsum(counts, out=ptr[1:])
    return ptr, order


class ArrayGraph:
    """Graph on vertices ``0 .. n-1`` with edges stored in NumPy arrays.

    Edge handles are integer ids indexing :attr:`tails`, :attr:`heads` and
    :attr:`weights`. The bound method :meth:`weight` can be passed to the
    engine as its edge-weight function. Negative weights are disallowed and
    trigger :class:`~dijkstrax.exceptions.GraphFormatError` citing the edge.

    Attributes:
        n: Number of vertices.
        directed: Whether edges are traversed only from tail to head.
        tails: Tail vertex of each edge.
        heads: Head vertex of each edge.
        weights: Weight of each edge.
    """

    def __init__(
        self,
        n: int,
        tails: Sequence[int],
        heads: Sequence[int],
        weights: Sequence[Float],
        directed: bool = True,
    ) -> None:
        if not isinstance(n, (int, np.integer)) or n <= 0:
            raise InputError("ArrayGraph.n must be a positive integer.")
        self.n = int(n)
        self.directed = directed
        self.tails: npt.NDArray[np.int64] = np.asarray(tails, dtype=np.int64).reshape(-1)
        self.heads: npt.NDArray[np.int64] = np.asarray(heads, dtype=np.int64).reshape(-1)
        self.weights: npt.NDArray[np.float64] = np.asarray(weights, dtype=np.float64).reshape(-1)
        if not (self.tails.shape == self.heads.shape == self.weights.shape):
            raise InputError("tails, heads and weights must have the same length.")

        ends = np.concatenate([self.tails, self.heads])
        if ends.size and (ends.min() < 0 or ends.max() >= self.n):
            raise InputError("edge endpoints must be vertex ids in [0, n).")
        bad = np.flatnonzero(~(self.weights >= 0))
        if bad.size:
            e = int(bad[0])
            raise GraphFormatError(
                f"negative weight {self.weights[e]} on edge ({self.tails[e]}, {self.heads[e]})"
            )

        self._out_ptr, self._out_order = _csr(self.tails, self.n)
        # Incoming edges minus self-loops, which are already listed as outgoing.
        loops = self.tails == self.heads
        in_keys = np.where(loops, self.n, self.heads)
        in_ptr, in_order = _csr(in_keys, self.n + 1)
        self._in_ptr = in_ptr[: self.n + 1]
        self._in_order = in_order

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[EdgeTriple], directed: bool = True) -> "ArrayGraph":
        """Construct a graph from an iterable of ``(u, v, w)`` edges."""
        triples = list(edges)
        tails = [int(u) for u, _, _ in triples]
        heads = [int(v) for _, v, _ in triples]
        weights = [float(w) for _, _, w in triples]
        return cls(n, tails, heads, weights, directed=directed)

    @property
    def m(self) -> int:
        return int(self.tails.shape[0])

    def vertices(self) -> range:
        return range(self.n)

    def _check(self, v: int) -> None:
        if not isinstance(v, (int, np.integer)) or not 0 <= v < self.n:
            raise InvalidVertexError(v)

    def incident_edges(self, v: int) -> List[int]:
        """Return the ids of the edges leaving ``v``."""
        self._check(v)
        out = self._out_order[self._out_ptr[v] : self._out_ptr[v + 1]].tolist()
        if self.directed:
            return out
        return out + self._in_order[self._in_ptr[v] : self._in_ptr[v + 1]].tolist()

    def opposite(self, v: int, e: int) -> int:
        """Return the endpoint of edge ``e`` opposite ``v``."""
        u, w = int(self.tails[e]), int(self.heads[e])
        if u == v:
            return w
        if w == v:
            return u
        raise InputError(f"{v!r} is not an endpoint of edge {e}")

    def weight(self, e: int) -> Float:
        """Return the weight of edge ``e``."""
        return float(self.weights[e])

    def out_degree(self, u: int) -> int:
        """Return the number of edges stored with tail ``u``."""
        self._check(u)
        return int(self._out_ptr[u + 1] - self._out_ptr[u])


__all__ = ["ArrayGraph"]
