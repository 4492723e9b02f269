"""Render a completed run with NetworkX + Matplotlib.

The source is drawn in red, finalized vertices in blue, vertices the run
never finalized in grey, and the path to ``target`` (if given) is
highlighted.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import matplotlib.pyplot as plt
import networkx as nx
from matplotlib.axes import Axes

from .engine import ShortestPathEngine
from .exceptions import ConfigError

_LAYOUTS: Dict[str, Callable[..., Dict[Any, Any]]] = {
    "spring": lambda g: nx.spring_layout(g, seed=42),
    "shell": nx.shell_layout,
    "circular": nx.circular_layout,
}


@dataclass
class VisualizationPayload:
    """Everything needed to draw a run, independent of Matplotlib."""

    graph: nx.Graph
    positions: Mapping[Any, Tuple[float, float]]
    edge_labels: Mapping[Tuple[Any, Any], float]
    distances: Mapping[Any, float]
    source: Any
    target: Optional[Any] = None
    focus_path: List[Any] = field(default_factory=list)

    @property
    def focus_edges(self) -> List[Tuple[Any, Any]]:
        return list(zip(self.focus_path, self.focus_path[1:]))


def visualization_payload(
    engine: ShortestPathEngine,
    target: Optional[Any] = None,
    layout: str = "spring",
) -> VisualizationPayload:
    """Convert a completed engine into a networkx graph, layout and focus path.

    Raises:
        ConfigError: If ``layout`` is unknown.
        PreconditionError: If the engine has not completed a run.
    """
    try:
        resolver = _LAYOUTS[layout]
    except KeyError as exc:
        raise ConfigError(f"Unsupported layout '{layout}'. Choose from {sorted(_LAYOUTS)}") from exc

    res = engine.result()
    directed = getattr(engine.graph, "directed", True)
    G = nx.DiGraph() if directed else nx.Graph()
    for v in engine.graph.vertices():
        G.add_node(v)
        for e in engine.graph.incident_edges(v):
            u = engine.graph.opposite(v, e)
            w = engine.weight(e)
            # Keep the lightest of parallel edges.
            if not G.has_edge(v, u) or w < G.edges[v, u]["weight"]:
                G.add_edge(v, u, weight=w)

    focus_path = engine.path_vertices(target) if target is not None else []
    return VisualizationPayload(
        graph=G,
        positions=resolver(G),
        edge_labels={(u, v): d["weight"] for u, v, d in G.edges(data=True)},
        distances={v: d for v, d in res.distances.items() if v in res.finalized},
        source=res.source,
        target=target,
        focus_path=focus_path,
    )


def draw_shortest_path(
    engine: ShortestPathEngine,
    target: Optional[Any] = None,
    *,
    ax: Optional[Axes] = None,
    layout: str = "spring",
    show_weights: bool = True,
    node_size: int = 300,
) -> Axes:
    """Draw the graph of a completed run and return the Matplotlib axes."""
    payload = visualization_payload(engine, target, layout=layout)
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 6))

    G = payload.graph
    node_colors = []
    for node in G.nodes:
        if node == payload.source:
            node_colors.append("tab:red")
        elif node in payload.distances:
            node_colors.append("tab:blue")
        else:
            node_colors.append("tab:gray")

    nx.draw_networkx_nodes(G, payload.positions, node_color=node_colors, node_size=node_size, ax=ax)
    nx.draw_networkx_edges(G, payload.positions, width=1.0, alpha=0.5, ax=ax)
    if payload.focus_edges:
        nx.draw_networkx_edges(
            G,
            payload.positions,
            edgelist=payload.focus_edges,
            edge_color="tab:orange",
            width=2.5,
            ax=ax,
        )
    labels = {
        v: f"{v}\n{'inf' if math.isinf(d) else f'{d:g}'}" for v, d in payload.distances.items()
    }
    nx.draw_networkx_labels(G, payload.positions, labels=labels, font_size=8, ax=ax)
    if show_weights:
        nx.draw_networkx_edge_labels(
            G, payload.positions, edge_labels=dict(payload.edge_labels), font_size=7, ax=ax
        )

    title = f"Shortest paths from {payload.source}"
    if target is not None:
        title += f" to {target}"
    ax.set_title(title)
    ax.set_axis_off()
    return ax


__all__ = ["VisualizationPayload", "visualization_payload", "draw_shortest_path"]
