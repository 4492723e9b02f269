"""Export utilities for shortest-path trees."""

from __future__ import annotations

import json
import math
from typing import Any, List, Tuple
from xml.sax.saxutils import quoteattr

from .engine import ShortestPathEngine
from .graph import Float


def _json_id(x: Any) -> Any:
    return x if isinstance(x, (int, str)) else str(x)


def shortest_path_tree(engine: ShortestPathEngine) -> List[Tuple[Any, Any, Float]]:
    """Return the edges of the shortest-path tree of a completed run.

    Args:
        engine: Engine whose last run has completed.

    Returns:
        ``(parent, child, weight)`` triples, one per finalized vertex that was
        reached through a predecessor edge.
    """
    res = engine.result()
    tree: List[Tuple[Any, Any, Float]] = []
    for child, e in res.predecessors.items():
        if e is None or child not in res.finalized:
            continue
        parent = engine.graph.opposite(child, e)
        tree.append((parent, child, engine.weight(e)))
    return tree


def export_tree_json(engine: ShortestPathEngine) -> str:
    """Return a JSON string with finalized vertices, distances and tree edges.

    Infinite distances are written as ``null``.
    """
    res = engine.result()
    nodes = [
        {"id": _json_id(v), "distance": None if math.isinf(d) else d}
        for v, d in res.distances.items()
        if v in res.finalized
    ]
    data = {
        "source": _json_id(res.source),
        "nodes": nodes,
        "edges": [
            {"source": _json_id(p), "target": _json_id(c), "weight": w}
            for (p, c, w) in shortest_path_tree(engine)
        ],
    }
    return json.dumps(data)


def export_tree_graphml(engine: ShortestPathEngine) -> str:
    """Return a minimal GraphML string for the shortest-path tree."""
    res = engine.result()
    lines: List[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append('<graphml xmlns="http://graphml.graphdrawing.org/xmlns">')
    lines.append('  <key id="d" for="node" attr.name="distance" attr.type="double"/>')
    lines.append('  <graph id="T" edgedefault="directed">')
    for v, d in res.distances.items():
        if v not in res.finalized:
            continue
        lines.append(f"    <node id={quoteattr(str(v))}><data key=\"d\">{d}</data></node>")
    for p, c, w in shortest_path_tree(engine):
        lines.append(
            f"    <edge source={quoteattr(str(p))} target={quoteattr(str(c))} weight=\"{w}\"/>"
        )
    lines.append("  </graph>")
    lines.append("</graphml>")
    return "\n".join(lines)


__all__ = ["shortest_path_tree", "export_tree_json", "export_tree_graphml"]
