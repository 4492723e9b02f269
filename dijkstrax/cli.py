"""Command-line interface for running the engine."""

from __future__ import annotations

import argparse
import json
import math
import sys
import time
import traceback
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from .engine import EngineConfig, ShortestPathEngine
from .exceptions import (
    ConfigError,
    DijkstraxError,
    InputError,
    PreconditionError,
    UnsupportedWeightError,
)
from .export import export_tree_graphml, export_tree_json
from .generator import generate_graph
from .graph import AdjacencyGraph, payload_weight
from .io import read_graph
from .logger import StdLogger

EXAMPLE_CSV = """# u,v,w
A,B,1
A,C,4
B,C,2
B,D,5
C,D,1
"""

EXIT_OK = 0
EXIT_USAGE = 64
EXIT_INTERNAL = 70


def _build_graph_from_file(path: str, fmt: Optional[str], directed: bool) -> AdjacencyGraph:
    """Build an :class:`AdjacencyGraph` from an edges file."""
    if not Path(path).exists():
        raise InputError(f"edges file not found: {path}")
    return read_graph(path, fmt, directed=directed)


def _resolve_vertex(G: AdjacencyGraph, raw: str) -> Any:
    """Map a command-line vertex name onto a vertex of ``G``.

    Integer names are tried first so ``--source 0`` matches vertex ``0``.
    Unknown names are returned unchanged and rejected by the engine.
    """
    try:
        as_int = int(raw)
    except ValueError:
        return raw
    return as_int if G.contains_vertex(as_int) else raw


def _jsonable(d: float) -> Optional[float]:
    return None if math.isinf(d) else d


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``dijkstrax`` command-line tool."""
    examples = (
        "Examples:\n"
        "  dijkstrax --edges graph.csv --source A --target D\n"
        "  dijkstrax --random --n 100 --m 500 --source 0\n"
        "  dijkstrax --edges graph.csv --source A --export-json tree.json\n"
    )
    p = argparse.ArgumentParser(
        prog="dijkstrax",
        description="Single-source shortest paths with Dijkstra's algorithm",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured log lines")
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "warning"],
        default="warning",
        help="Log verbosity",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--edges", type=str, help="Path to edges file")
    src.add_argument("--random", action="store_true", help="Use a random graph")
    src.add_argument(
        "--example",
        action="store_true",
        help="Print a sample edges CSV to stdout and exit",
    )
    p.add_argument(
        "--format",
        choices=["csv", "jsonl", "graphml"],
        default=None,
        help="Edge file format (auto-detected from extension)",
    )
    p.add_argument("--undirected", action="store_true", help="Treat edges as undirected")
    p.add_argument("--n", type=int, default=10, help="Vertices (random mode)")
    p.add_argument("--m", type=int, default=20, help="Edges (random mode)")
    p.add_argument("--seed", type=int, default=0, help="Seed controlling random graph generation")
    p.add_argument("--source", type=str, default="0", help="Source vertex")
    p.add_argument("--target", type=str, default=None, help="Stop at this vertex and print its path")
    p.add_argument(
        "--no-weight-check",
        action="store_true",
        help="Do not reject negative weights met during the run",
    )
    p.add_argument("--export-json", type=str, default=None, help="Write shortest-path tree as JSON")
    p.add_argument(
        "--export-graphml",
        type=str,
        default=None,
        help="Write shortest-path tree as GraphML",
    )
    p.add_argument("--metrics-out", type=str, default=None, help="Write run metrics to this JSON file")

    args = p.parse_args(argv)

    if args.example:
        sys.stdout.write(EXAMPLE_CSV)
        return EXIT_OK

    try:
        directed = not args.undirected
        if args.random:
            G = generate_graph(n=args.n, m=args.m, seed=args.seed, directed=directed)
        else:
            G = _build_graph_from_file(args.edges, args.format, directed)

        stream = sys.stdout if args.log_json else sys.stderr
        level = "info" if args.log_json and args.log_level == "warning" else args.log_level
        logger = StdLogger(level=level, json_fmt=args.log_json, stream=stream)
        cfg = EngineConfig(check_weights=not args.no_weight_check)

        source = _resolve_vertex(G, args.source)
        target = _resolve_vertex(G, args.target) if args.target is not None else None

        if args.verbose and not args.log_json:
            sys.stderr.write(
                f"config: n={G.num_vertices()} m={G.num_edges()} directed={directed} "
                f"source={source!r} target={target!r}\n"
            )

        engine = ShortestPathEngine(G, payload_weight, config=cfg, logger=logger)
        engine.initialize(source)
        if args.metrics_out:
            import tracemalloc

            tracemalloc.start()
            t0 = time.perf_counter()
            engine.run(target)
            wall_ms = (time.perf_counter() - t0) * 1000.0
            _, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            peak_mib: Optional[float] = peak / (1024 * 1024)
        else:
            t0 = time.perf_counter()
            engine.run(target)
            wall_ms = (time.perf_counter() - t0) * 1000.0
            peak_mib = None

        res = engine.result()
        out: Dict[str, Any] = {
            "source": source,
            "directed": directed,
            "distances": {
                str(v): _jsonable(d) for v, d in res.distances.items() if v in res.finalized
            },
        }
        if target is not None:
            out["target"] = target
            out["distance"] = _jsonable(engine.distance_to(target))
            out["path"] = engine.path_vertices(target)
            out["path_edges"] = [
                [e.u, e.v, payload_weight(e)] for e in engine.path_edges(target)
            ]

        if args.export_json:
            with open(args.export_json, "w", encoding="utf-8") as fh:
                fh.write(export_tree_json(engine))
        if args.export_graphml:
            with open(args.export_graphml, "w", encoding="utf-8") as fh:
                fh.write(export_tree_graphml(engine))
        if args.metrics_out:
            with open(args.metrics_out, "w", encoding="utf-8") as fh:
                json.dump(asdict(engine.metrics(wall_ms=wall_ms, peak_mib=peak_mib)), fh)

        if not args.log_json:
            print(json.dumps(out, default=str))
        return EXIT_OK

    except (InputError, ConfigError, PreconditionError, UnsupportedWeightError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return EXIT_USAGE
    except DijkstraxError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL


if __name__ == "__main__":
    sys.exit(main())
