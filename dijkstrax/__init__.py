"""Public package exports for :mod:`dijkstrax`."""

from __future__ import annotations

from .engine import (
    INFINITY,
    EngineConfig,
    EngineMetrics,
    EngineState,
    ShortestPathEngine,
    ShortestPathResult,
    is_infinite,
    shortest_path,
)
from .exceptions import (
    AlgorithmError,
    ConfigError,
    DijkstraxError,
    GraphFormatError,
    InputError,
    InvalidVertexError,
    NotFinalizedError,
    PreconditionError,
    UnsupportedWeightError,
)
from .frontier import IndexedFrontier
from .graph import AdjacencyGraph, Edge, EdgeWeight, Graph, payload_weight
from .graph_numpy import ArrayGraph
from .graph_nx import NetworkXGraph, attribute_weight
from .io import read_graph, write_graph
from .logger import Logger, NoopLogger, StdLogger
from .reference import bellman_ford_reference

__version__ = "0.1.0"

__all__ = [
    "ShortestPathEngine",
    "ShortestPathResult",
    "EngineConfig",
    "EngineMetrics",
    "EngineState",
    "INFINITY",
    "is_infinite",
    "shortest_path",
    "IndexedFrontier",
    "Graph",
    "Edge",
    "EdgeWeight",
    "AdjacencyGraph",
    "ArrayGraph",
    "NetworkXGraph",
    "attribute_weight",
    "payload_weight",
    "bellman_ford_reference",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "read_graph",
    "write_graph",
    "DijkstraxError",
    "InputError",
    "InvalidVertexError",
    "GraphFormatError",
    "ConfigError",
    "PreconditionError",
    "NotFinalizedError",
    "UnsupportedWeightError",
    "AlgorithmError",
]
