"""Single-source shortest paths with Dijkstra's algorithm."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Optional

from .exceptions import (
    ConfigError,
    InvalidVertexError,
    NotFinalizedError,
    PreconditionError,
    UnsupportedWeightError,
)
from .frontier import IndexedFrontier
from .graph import EdgeWeight, Float, Graph, payload_weight
from .logger import Logger, NoopLogger
from .path import path_edges, path_vertices

INFINITY: Float = math.inf


def is_infinite(value: Float) -> bool:
    """Return ``True`` if ``value`` is the "no finite distance known" sentinel."""
    return math.isinf(value)


class EngineState(enum.Enum):
    """Lifecycle of a :class:`ShortestPathEngine`."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    COMPLETED = "completed"


@dataclass(frozen=True)
class EngineConfig:
    """Configuration knobs for the engine.

    Attributes:
        check_weights: If ``True``, raise :class:`UnsupportedWeightError`
            when a negative or NaN weight is met during relaxation. If
            ``False``, such weights give undefined results.
        record_order: If ``True``, keep the order in which vertices were
            finalized (see :attr:`ShortestPathEngine.finalized_order`).
    """

    check_weights: bool = True
    record_order: bool = True

    def __post_init__(self) -> None:
        for name in ("check_weights", "record_order"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be a bool")


@dataclass(frozen=True)
class EngineMetrics:
    """Performance metrics collected from an engine run."""

    vertices: int
    finalized: int
    state: str
    counters: Dict[str, int]
    wall_ms: float
    peak_mib: float | None = None


@dataclass(frozen=True)
class ShortestPathResult:
    """Snapshot of the tables left behind by a completed run."""

    source: Any
    distances: Dict[Any, Float]
    predecessors: Dict[Any, Optional[Any]]
    finalized: FrozenSet[Any]


class ShortestPathEngine:
    """Dijkstra's algorithm over an abstract graph and edge-weight function.

    Usage is ``initialize(source)``, then ``run()`` or ``run(target)``, then
    the query accessors. Calling :meth:`initialize` again starts a fresh run
    and discards the previous tables. An instance is not thread-safe.

    Weights must be non-negative. By default a negative weight met during
    relaxation raises :class:`UnsupportedWeightError`; with
    ``EngineConfig(check_weights=False)`` the result is undefined.
    """

    def __init__(
        self,
        graph: Graph,
        weight: Optional[EdgeWeight] = None,
        *,
        config: Optional[EngineConfig] = None,
        logger: Logger | None = None,
    ) -> None:
        """Create an engine.

        Args:
            graph: Graph providing ``vertices``, ``incident_edges`` and
                ``opposite``.
            weight: Function mapping an edge to its weight. Defaults to
                :func:`~dijkstrax.graph.payload_weight`, the number stored as
                the edge's ``element``.
            config: Optional engine configuration.
            logger: Optional structured logger.

        Raises:
            ConfigError: If ``weight`` is not callable.
        """
        if weight is None:
            weight = payload_weight
        if not callable(weight):
            raise ConfigError("weight must be callable")
        self.graph = graph
        self.weight: EdgeWeight = weight
        self.cfg = config or EngineConfig()
        self.logger = logger or NoopLogger()

        self._state = EngineState.UNINITIALIZED
        self._source: Any = None
        self._dist: Dict[Any, Float] = {}
        self._prev: Dict[Any, Optional[Any]] = {}
        self._frontier = IndexedFrontier()
        self._finalized: set = set()
        self._order: List[Any] = []
        self.counters: Dict[str, int] = self._fresh_counters()

    @staticmethod
    def _fresh_counters() -> Dict[str, int]:
        return {"edges_relaxed": 0, "improvements": 0, "vertices_finalized": 0}

    # ---------- state -----------------------------------------------------

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def source(self) -> Any:
        return self._source

    @property
    def finalized_order(self) -> List[Any]:
        """Vertices in the order they were removed from the frontier."""
        return list(self._order)

    def _check_vertex(self, v: Any, role: str = "vertex") -> None:
        try:
            known = v in self._dist
        except TypeError:
            known = False
        if not known:
            raise InvalidVertexError(v, role)

    def _require_completed(self, f: Any) -> None:
        if self._state is not EngineState.COMPLETED:
            raise PreconditionError("queries require run() to have completed")
        self._check_vertex(f)
        if f not in self._finalized:
            raise NotFinalizedError(f)

    # ---------- algorithm -------------------------------------------------

    def initialize(self, source: Any) -> None:
        """Reset all tables for a run from ``source``.

        Every vertex gets an infinite tentative distance and no predecessor,
        ``source`` gets distance zero, and every vertex enters the frontier.

        Raises:
            InvalidVertexError: If ``source`` is not a vertex of the graph.
        """
        dist: Dict[Any, Float] = {v: INFINITY for v in self.graph.vertices()}
        try:
            known = source in dist
        except TypeError:
            known = False
        if not known:
            raise InvalidVertexError(source, "source")
        dist[source] = 0.0

        frontier = IndexedFrontier()
        for v, d in dist.items():
            frontier.push(v, d)

        self._source = source
        self._dist = dist
        self._prev = {v: None for v in dist}
        self._frontier = frontier
        self._finalized = set()
        self._order = []
        self.counters = self._fresh_counters()
        self._state = EngineState.INITIALIZED
        self.logger.debug("initialize", source=source, vertices=len(dist))

    def run(self, target: Any = None) -> None:
        """Finalize vertices in order of distance from the source.

        Args:
            target: Optional vertex at which to stop. The run halts as soon
                as ``target`` is removed from the frontier, before its own
                edges are relaxed; vertices still in the frontier are left
                unfinalized and must not be queried.

        Raises:
            PreconditionError: If :meth:`initialize` has not been called
                since the last run.
            InvalidVertexError: If ``target`` is not a vertex of the graph.
            UnsupportedWeightError: If weight checking is enabled and a
                negative or NaN weight is encountered.

        Any exception escaping the relaxation loop, including one raised by
        the weight function or the graph, leaves the engine
        ``UNINITIALIZED``; it must be re-initialized before the next run.
        """
        if self._state is not EngineState.INITIALIZED:
            raise PreconditionError("run() requires initialize(source) first")
        if target is not None:
            self._check_vertex(target, "target")
        try:
            self._relax_loop(target)
        except BaseException:
            # the frontier is partially drained
            self._state = EngineState.UNINITIALIZED
            raise
        self._state = EngineState.COMPLETED
        self.logger.info("run", source=self._source, target=target, **self.counters)

    def _relax_loop(self, target: Any) -> None:
        graph = self.graph
        weight = self.weight
        dist = self._dist
        prev = self._prev
        frontier = self._frontier
        check = self.cfg.check_weights
        counters = self.counters

        while frontier:
            v, d = frontier.pop_min()
            self._finalized.add(v)
            if self.cfg.record_order:
                self._order.append(v)
            counters["vertices_finalized"] += 1
            if target is not None and v == target:
                self.logger.debug("early_exit", target=v, distance=d)
                return
            if is_infinite(d):
                # Everything left is unreachable.
                continue
            for e in graph.incident_edges(v):
                u = graph.opposite(v, e)
                w = weight(e)
                counters["edges_relaxed"] += 1
                if check and not w >= 0:
                    raise UnsupportedWeightError(e, w)
                if u not in frontier:
                    continue
                candidate = d + w
                if candidate < dist[u]:
                    dist[u] = candidate
                    prev[u] = e
                    frontier.decrease_key(u, candidate)
                    counters["improvements"] += 1

    # ---------- queries ---------------------------------------------------

    def is_finalized(self, v: Any) -> bool:
        """Return ``True`` if ``v`` was removed from the frontier by the last run."""
        try:
            return v in self._finalized
        except TypeError:
            return False

    def distance_to(self, f: Any) -> Float:
        """Return the shortest-path distance from the source to ``f``.

        Returns:
            The distance, or :data:`INFINITY` if ``f`` is unreachable.

        Raises:
            PreconditionError: If no run has completed.
            InvalidVertexError: If ``f`` is not a vertex of the graph.
            NotFinalizedError: If the run stopped early before reaching ``f``.
        """
        self._require_completed(f)
        return self._dist[f]

    def path_vertices(self, f: Any) -> List[Any]:
        """Return the vertices on the shortest path from the source to ``f``.

        If ``f`` is the source or is unreachable, the result is ``[f]``.
        Raises the same errors as :meth:`distance_to`.
        """
        self._require_completed(f)
        return path_vertices(self.graph, self._prev, f)

    def path_edges(self, f: Any) -> List[Any]:
        """Return the edges on the shortest path from the source to ``f``.

        If ``f`` is the source or is unreachable, the result is empty.
        Raises the same errors as :meth:`distance_to`.
        """
        self._require_completed(f)
        return path_edges(self.graph, self._prev, f)

    def result(self) -> ShortestPathResult:
        """Return a copy of the distance and predecessor tables.

        Raises:
            PreconditionError: If no run has completed.
        """
        if self._state is not EngineState.COMPLETED:
            raise PreconditionError("result() requires run() to have completed")
        return ShortestPathResult(
            source=self._source,
            distances=dict(self._dist),
            predecessors=dict(self._prev),
            finalized=frozenset(self._finalized),
        )

    # ---------- counters --------------------------------------------------

    def summary(self) -> Dict[str, int]:
        """Return a copy of internal counter values."""
        return dict(self.counters)

    def metrics(self, wall_ms: float, peak_mib: float | None = None) -> EngineMetrics:
        """Return performance metrics for the most recent run.

        Args:
            wall_ms: Wall-clock time spent in :meth:`run` in milliseconds.
            peak_mib: Optional peak memory usage in MiB.
        """
        return EngineMetrics(
            vertices=len(self._dist),
            finalized=len(self._finalized),
            state=self._state.value,
            counters=self.summary(),
            wall_ms=wall_ms,
            peak_mib=peak_mib,
        )


def shortest_path(
    graph: Graph,
    source: Any,
    target: Any = None,
    weight: Optional[EdgeWeight] = None,
    *,
    config: Optional[EngineConfig] = None,
    logger: Logger | None = None,
) -> ShortestPathEngine:
    """Build an engine, run it from ``source`` and return it for querying."""
    engine = ShortestPathEngine(graph, weight, config=config, logger=logger)
    engine.initialize(source)
    engine.run(target)
    return engine


__all__ = [
    "INFINITY",
    "is_infinite",
    "EngineState",
    "EngineConfig",
    "EngineMetrics",
    "ShortestPathResult",
    "ShortestPathEngine",
    "shortest_path",
]
