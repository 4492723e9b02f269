"""Graph input/output helpers."""

from __future__ import annotations

import json
import math
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple
from xml.sax.saxutils import quoteattr

from .exceptions import GraphFormatError
from .graph import AdjacencyGraph, payload_weight

RawEdge = Tuple[str, str, float]
_GRAPHML_NS = "{http://graphml.graphdrawing.org/xmlns}"


def _parse_weight(raw: Any, where: str) -> float:
    try:
        w = float(raw)
    except (TypeError, ValueError) as exc:
        raise GraphFormatError(f"invalid weight {raw!r} at {where}") from exc
    if math.isnan(w):
        raise GraphFormatError(f"invalid weight {raw!r} at {where}")
    if w < 0:
        raise GraphFormatError(f"negative weight {w} at {where}")
    return w


def _coerce_ids(names: List[str]) -> Dict[str, Any]:
    """Map raw vertex names to ints when every name is a canonical integer.

    Names such as ``"01"`` or ``"+1"`` keep every id a string, so distinct
    names never collapse onto the same vertex.
    """
    try:
        ids = {s: int(s) for s in names}
    except ValueError:
        return {s: s for s in names}
    if any(str(i) != s for s, i in ids.items()):
        return {s: s for s in names}
    return ids


def _build(vertices: List[str], edges: List[RawEdge], directed: bool) -> AdjacencyGraph:
    names = list(dict.fromkeys(vertices + [x for u, v, _ in edges for x in (u, v)]))
    if not edges and not names:
        raise GraphFormatError("no edges parsed from file")
    ids = _coerce_ids(names)
    return AdjacencyGraph.from_edges(
        ((ids[u], ids[v], w) for u, v, w in edges),
        directed=directed,
        vertices=[ids[s] for s in names],
    )


def _read_csv(path: Path) -> Tuple[List[str], List[RawEdge]]:
    """Read ``u,v,w`` rows; ``#`` comments, blank lines and tabs are accepted.

    Raises:
        GraphFormatError: If a row has fewer than three columns or a bad weight.
    """
    edges: List[RawEdge] = []
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row or row.startswith("#"):
                continue
            parts = [p.strip() for p in row.replace("\t", ",").split(",")]
            if len(parts) < 3:
                raise GraphFormatError(f"expected u,v,w at {path.name}:{lineno}")
            edges.append((parts[0], parts[1], _parse_weight(parts[2], f"{path.name}:{lineno}")))
    return [], edges


def _write_csv(path: Path, G: AdjacencyGraph) -> None:
    with path.open("w", encoding="utf-8") as fh:
        fh.write("# u,v,w\n")
        for e in G.edges():
            fh.write(f"{e.u},{e.v},{payload_weight(e)}\n")


def _read_jsonl(path: Path) -> Tuple[List[str], List[RawEdge]]:
    """Read one ``{"u": .., "v": .., "w": ..}`` object per line.

    A line of the form ``{"vertex": x}`` declares an isolated vertex.
    """
    vertices: List[str] = []
    edges: List[RawEdge] = []
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row:
                continue
            where = f"{path.name}:{lineno}"
            try:
                obj = json.loads(row)
            except json.JSONDecodeError as exc:
                raise GraphFormatError(f"invalid JSON at {where}") from exc
            if not isinstance(obj, dict):
                raise GraphFormatError(f"expected an object at {where}")
            if "vertex" in obj:
                vertices.append(str(obj["vertex"]))
                continue
            try:
                u, v, w = obj["u"], obj["v"], obj["w"]
            except KeyError as exc:
                raise GraphFormatError(f"missing key {exc} at {where}") from exc
            edges.append((str(u), str(v), _parse_weight(w, where)))
    return vertices, edges


def _write_jsonl(path: Path, G: AdjacencyGraph) -> None:
    touched = {x for e in G.edges() for x in (e.u, e.v)}
    with path.open("w", encoding="utf-8") as fh:
        for x in G.vertices():
            if x not in touched:
                fh.write(json.dumps({"vertex": x}) + "\n")
        for e in G.edges():
            fh.write(json.dumps({"u": e.u, "v": e.v, "w": payload_weight(e)}) + "\n")


def _read_graphml(path: Path) -> Tuple[List[str], List[RawEdge], bool]:
    """Parse nodes and weighted edges from a GraphML file.

    The weight is read from a ``weight`` attribute or a ``<data key="w">``
    child and defaults to ``1.0``.
    """
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as exc:
        raise GraphFormatError(f"invalid GraphML in {path.name}") from exc
    ns = _GRAPHML_NS
    graph_el = root.find(f"{ns}graph")
    directed = graph_el is None or graph_el.attrib.get("edgedefault", "directed") == "directed"
    vertices = [n.attrib["id"] for n in root.iter(f"{ns}node") if "id" in n.attrib]
    edges: List[RawEdge] = []
    for edge in root.iter(f"{ns}edge"):
        u = edge.attrib.get("source")
        v = edge.attrib.get("target")
        if u is None or v is None:
            raise GraphFormatError("edge without source/target in GraphML")
        w_attr = edge.attrib.get("weight")
        if w_attr is None:
            data = edge.find(f"{ns}data[@key='w']")
            w_attr = data.text if (data is not None and data.text is not None) else 1.0
        edges.append((u, v, _parse_weight(w_attr, f"edge {u}->{v}")))
    return vertices, edges, directed


def _write_graphml(path: Path, G: AdjacencyGraph) -> None:
    default = "directed" if G.directed else "undirected"
    lines: List[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append('<graphml xmlns="http://graphml.graphdrawing.org/xmlns">')
    lines.append(f'  <graph id="G" edgedefault="{default}">')
    for x in G.vertices():
        lines.append(f"    <node id={quoteattr(str(x))}/>")
    for e in G.edges():
        lines.append(
            f"    <edge source={quoteattr(str(e.u))} target={quoteattr(str(e.v))} "
            f'weight="{payload_weight(e)}"/>'
        )
    lines.append("  </graph>")
    lines.append("</graphml>")
    path.write_text("\n".join(lines), encoding="utf-8")


_FMT_WRITERS: Dict[str, Callable[[Path, AdjacencyGraph], None]] = {
    "csv": _write_csv,
    "jsonl": _write_jsonl,
    "graphml": _write_graphml,
}


def _detect_format(path: Path) -> Optional[str]:
    """Detect the file format (``csv``, ``jsonl`` or ``graphml``) from the extension."""
    ext = path.suffix.lower()
    if ext in {".csv", ".tsv"}:
        return "csv"
    if ext in {".jsonl", ".json"}:
        return "jsonl"
    if ext in {".graphml", ".xml"}:
        return "graphml"
    return None


def read_graph(path: str, fmt: Optional[str] = None, directed: bool = True) -> AdjacencyGraph:
    """Read a graph from a file in the specified format.

    Args:
        path: The path to the graph file.
        fmt: ``csv``, ``jsonl`` or ``graphml``; auto-detected if ``None``.
        directed: Whether edges are directed. GraphML files carry their own
            ``edgedefault`` which takes precedence.

    Returns:
        An :class:`AdjacencyGraph` whose edge payloads are the weights.

    Raises:
        GraphFormatError: If the format is unknown or the file is malformed.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt == "csv":
        vertices, edges = _read_csv(p)
    elif fmt == "jsonl":
        vertices, edges = _read_jsonl(p)
    elif fmt == "graphml":
        vertices, edges, directed = _read_graphml(p)
    else:
        raise GraphFormatError("unknown graph format")
    return _build(vertices, edges, directed)


def write_graph(G: AdjacencyGraph, path: str, fmt: Optional[str] = None) -> None:
    """Write a graph to a file in the specified format.

    Raises:
        GraphFormatError: If the format is unknown or unsupported.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_WRITERS:
        raise GraphFormatError("unknown graph format")
    _FMT_WRITERS[fmt](p, G)


__all__ = ["read_graph", "write_graph"]
