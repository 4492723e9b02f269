"""Frontier data structure used by the engine."""

from __future__ import annotations

from typing import Dict, Hashable, List, Optional, Tuple

from .exceptions import AlgorithmError

Float = float


class IndexedFrontier:
    """Binary min-heap keyed by vertex with native decrease-key.

    Every vertex appears at most once. A position map tracks where each
    vertex sits in the heap array so :meth:`decrease_key` can sift it up in
    ``O(log n)`` without leaving stale duplicates behind. Equal keys are
    ordered by insertion sequence, which makes the pop order deterministic.

    Examples:
        ```python
        >>> f = IndexedFrontier()
        >>> f.push("a", 3.0)
        >>> f.push("b", 1.0)
        >>> f.decrease_key("a", 0.5)
        >>> f.pop_min()
        ('a', 0.5)
        ```
    """

    def __init__(self) -> None:
        """Create an empty frontier."""
        # Entries are [key, seq, vertex]; lists so keys can be updated in place.
        self._heap: List[List[object]] = []
        self._pos: Dict[Hashable, int] = {}
        self._seq = 0

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, vertex: Hashable) -> bool:
        return vertex in self._pos

    # ---- internals ----------------------------------------------------

    @staticmethod
    def _less(a: List[object], b: List[object]) -> bool:
        if a[0] != b[0]:
            return a[0] < b[0]  # type: ignore[operator]
        return a[1] < b[1]  # type: ignore[operator]

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._pos[heap[i][2]] = i  # type: ignore[index]
        self._pos[heap[j][2]] = j  # type: ignore[index]

    def _sift_up(self, i: int) -> None:
        heap = self._heap
        while i > 0:
            parent = (i - 1) // 2
            if not self._less(heap[i], heap[parent]):
                break
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i: int) -> None:
        heap = self._heap
        n = len(heap)
        while True:
            left = 2 * i + 1
            if left >= n:
                break
            smallest = left
            right = left + 1
            if right < n and self._less(heap[right], heap[left]):
                smallest = right
            if not self._less(heap[smallest], heap[i]):
                break
            self._swap(i, smallest)
            i = smallest

    # ---- public API ---------------------------------------------------

    def push(self, vertex: Hashable, key: Float) -> None:
        """Insert ``vertex`` with priority ``key``.

        Raises:
            AlgorithmError: If ``vertex`` is already in the frontier.
        """
        if vertex in self._pos:
            raise AlgorithmError(f"vertex {vertex!r} is already in the frontier")
        self._heap.append([key, self._seq, vertex])
        self._seq += 1
        self._pos[vertex] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def peek(self) -> Optional[Tuple[Hashable, Float]]:
        """Return the minimum ``(vertex, key)`` pair without removing it."""
        if not self._heap:
            return None
        key, _, vertex = self._heap[0]
        return vertex, key  # type: ignore[return-value]

    def pop_min(self) -> Tuple[Hashable, Float]:
        """Remove and return the ``(vertex, key)`` pair with the smallest key.

        Raises:
            AlgorithmError: If the frontier is empty.
        """
        if not self._heap:
            raise AlgorithmError("pop from an empty frontier")
        self._swap(0, len(self._heap) - 1)
        key, _, vertex = self._heap.pop()
        del self._pos[vertex]
        if self._heap:
            self._sift_down(0)
        return vertex, key  # type: ignore[return-value]

    def key_of(self, vertex: Hashable) -> Float:
        """Return the current key of ``vertex``.

        Raises:
            AlgorithmError: If ``vertex`` is not in the frontier.
        """
        i = self._pos.get(vertex)
        if i is None:
            raise AlgorithmError(f"vertex {vertex!r} is not in the frontier")
        return self._heap[i][0]  # type: ignore[return-value]

    def decrease_key(self, vertex: Hashable, key: Float) -> None:
        """Lower the key of ``vertex`` to ``key`` and restore heap order.

        Raises:
            AlgorithmError: If ``vertex`` is absent or ``key`` is larger than
                its current key.
        """
        i = self._pos.get(vertex)
        if i is None:
            raise AlgorithmError(f"vertex {vertex!r} is not in the frontier")
        entry = self._heap[i]
        if key > entry[0]:  # type: ignore[operator]
            raise AlgorithmError(
                f"decrease_key would raise key of {vertex!r} from {entry[0]} to {key}"
            )
        entry[0] = key
        self._sift_up(i)


__all__ = ["IndexedFrontier"]
