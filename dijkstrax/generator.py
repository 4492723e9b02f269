"""Random weighted graph generator for testing and benchmarking the engine.

WEIGHT DISTRIBUTIONS
--------------------
- uniform: evenly distributed integer weights in ``[w_min, w_max]``
- small_int: many equal or similar weights (stresses tie-breaking)
- exp: heavy-tailed, many small weights and occasional large ones

All generated weights are non-negative integers, so path sums are exact.
"""

from __future__ import annotations

import random
from typing import Literal, Optional, Set, Tuple

from .exceptions import ConfigError
from .graph import AdjacencyGraph

WeightDist = Literal["uniform", "small_int", "exp"]


def _sample_weight(rng: random.Random, dist: WeightDist, w_min: int, w_max: int) -> int:
    if dist == "uniform":
        return rng.randint(w_min, w_max)

    if dist == "small_int":
        hi = min(w_max, w_min + 3)
        return rng.randint(w_min, hi)

    if dist == "exp":
        if w_max == w_min:
            return w_min
        lam = 1.0 / max(1.0, (w_max - w_min) / 4.0)
        x = rng.expovariate(lam)
        return int(w_min + min(w_max - w_min, round(x)))

    raise ConfigError(f"Unknown weight distribution: {dist}")


def generate_graph(
    *,
    n: int,
    m: Optional[int] = None,
    seed: Optional[int] = 0,
    directed: bool = True,
    weight_dist: WeightDist = "uniform",
    w_min: int = 0,
    w_max: int = 10,
    allow_self_loops: bool = False,
    allow_parallel: bool = False,
    ensure_weakly_connected: bool = False,
) -> AdjacencyGraph:
    """Generate a random graph on vertices ``0 .. n-1``.

    Notes:
    - If ensure_weakly_connected=True, a backbone chain (i -> i+1) is added
      first, which counts towards ``m``.
    - Vertices are always all inserted, so isolated vertices are possible.

    Returns:
        AdjacencyGraph whose edge payloads are integer weights.

    Raises:
        ConfigError: On invalid sizes or weight bounds.
    """
    if n <= 0:
        raise ConfigError("n must be > 0.")
    if w_min < 0:
        raise ConfigError("w_min must be >= 0 for Dijkstra-safe graphs.")
    if w_max < w_min:
        raise ConfigError("w_max must be >= w_min.")
    if m is None:
        m = min(n * 4, n * (n - 1))
    if m < 0:
        raise ConfigError("m must be >= 0.")

    rng = random.Random(seed)
    g = AdjacencyGraph(directed=directed)
    for i in range(n):
        g.insert_vertex(i)

    # Undirected pairs are stored with the smaller endpoint first.
    seen: Set[Tuple[int, int]] = set()
    if directed:
        capacity = n * n if allow_self_loops else n * (n - 1)
    else:
        capacity = n * (n - 1) // 2 + (n if allow_self_loops else 0)
    target_m = m if allow_parallel else min(m, capacity)

    def add_edge(u: int, v: int) -> None:
        if not allow_self_loops and u == v:
            return
        key = (u, v) if directed else (min(u, v), max(u, v))
        if not allow_parallel and key in seen:
            return
        seen.add(key)
        g.insert_edge(u, v, _sample_weight(rng, weight_dist, w_min, w_max))

    if ensure_weakly_connected:
        for i in range(min(n - 1, target_m)):
            add_edge(i, i + 1)

    attempts = 0
    max_attempts = 100 * max(1, target_m) + 1000
    while g.num_edges() < target_m and attempts < max_attempts:
        attempts += 1
        add_edge(rng.randrange(n), rng.randrange(n))
    return g


__all__ = ["generate_graph"]
