"""Custom exception types used across :mod:`dijkstrax`."""

from __future__ import annotations


class DijkstraxError(Exception):
    """Base class for all package-specific errors."""


class InputError(DijkstraxError, ValueError):
    """Raised for invalid user input such as malformed edges."""


class InvalidVertexError(InputError):
    """Raised when a vertex does not belong to the graph's vertex set."""

    def __init__(self, vertex: object, role: str = "vertex") -> None:
        super().__init__(f"{role} {vertex!r} is not a vertex of the graph")
        self.vertex = vertex
        self.role = role


class GraphFormatError(InputError):
    """Raised when parsing a graph file or edge payload fails."""


class ConfigError(DijkstraxError, ValueError):
    """Raised for invalid configuration options."""


class PreconditionError(DijkstraxError, RuntimeError):
    """Raised when an engine operation is called in the wrong state."""


class NotFinalizedError(PreconditionError):
    """Raised when querying a vertex the last run never finalized."""

    def __init__(self, vertex: object) -> None:
        super().__init__(
            f"vertex {vertex!r} was not finalized by the last run "
            "(the run stopped early at its target)"
        )
        self.vertex = vertex


class UnsupportedWeightError(DijkstraxError, ValueError):
    """Raised when a negative or NaN edge weight is encountered."""

    def __init__(self, edge: object, weight: float) -> None:
        super().__init__(f"unsupported weight {weight!r} on edge {edge!r}")
        self.edge = edge
        self.weight = weight


class AlgorithmError(DijkstraxError, RuntimeError):
    """Raised when algorithm invariants are violated at runtime."""


__all__ = [
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
