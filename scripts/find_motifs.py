#!/usr/bin/env python3
"""
Find every occurrence of a motif graph inside a host graph.

Usage:
  python scripts/find_motifs.py <motif_edgelist> <host_edgelist> [options]

Input format (both files): one directed edge "u v" per line; a line holding a
single token declares an isolated node; "#" starts a comment.

Behavior:
  - Prints the number of mappings and the first --top-k of them.
  - --summary prints per-motif-node coverage from MatchSummary.
  - --render-dir writes one PNG per printed mapping using MatchVisualizer.
Exit codes: 0 ok, 1 missing input, 2 search error (disconnected motif, timeout).
"""
from __future__ import annotations

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

import networkx as nx

# Add src to sys.path for local runs
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from grandiso import MatchSummary, MatchVisualizer, MotifSearch, MotifSearchError  # noqa: E402

# Defaults (override by CLI)
CONFIG = {
    "injective": False,
    "timeout": None,
    "top_k": 20,
    "nodetype": "str",
    "render_dir": None,
    "neighborhood_only": True,
    "quiet": False,
}

NODE_TYPES = {"str": str, "int": int}


def load_edgelist(path: Path, nodetype=str) -> nx.DiGraph:
    edge_lines: List[str] = []
    isolated: List[str] = []
    with open(path, "r", encoding="utf-8") as f:
        for raw in f:
            line = raw.split("#", 1)[0].strip()
            if not line:
                continue
            tokens = line.split()
            if len(tokens) == 1:
                isolated.append(tokens[0])
            else:
                edge_lines.append(" ".join(tokens[:2]))
    G = nx.parse_edgelist(edge_lines, create_using=nx.DiGraph(), nodetype=nodetype, data=False)
    for tok in isolated:
        G.add_node(nodetype(tok))
    return G


def format_mapping(mapping) -> str:
    return ", ".join(f"{k}->{v}" for k, v in mapping.items())


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Enumerate motif occurrences (breadth-first candidate growth)")
    parser.add_argument("motif", type=str)
    parser.add_argument("host", type=str)
    parser.add_argument("--injective", action="store_true", default=CONFIG["injective"],
                        help="reject mappings that reuse a host node")
    parser.add_argument("--timeout", type=float, default=CONFIG["timeout"], help="seconds before aborting")
    parser.add_argument("--top-k", type=int, default=CONFIG["top_k"], help="print at most K mappings")
    parser.add_argument("--nodetype", choices=sorted(NODE_TYPES), default=CONFIG["nodetype"])
    parser.add_argument("--summary", action="store_true", help="print coverage summary")
    parser.add_argument("--render-dir", type=str, default=CONFIG["render_dir"])
    parser.add_argument("--full-host", action="store_true",
                        help="render the whole host instead of the match neighborhood")
    parser.add_argument("--quiet", action="store_true", default=CONFIG["quiet"])
    args = parser.parse_args(argv)

    log_level = logging.WARNING if args.quiet else logging.INFO

    motif_path, host_path = Path(args.motif), Path(args.host)
    for p in (motif_path, host_path):
        if not p.exists():
            print(f"[find_motifs] input not found: {p}")
            return 1

    nodetype = NODE_TYPES[args.nodetype]
    motif = load_edgelist(motif_path, nodetype)
    host = load_edgelist(host_path, nodetype)
    print(f"[find_motifs] motif: {motif.number_of_nodes()} nodes / {motif.number_of_edges()} edges; "
          f"host: {host.number_of_nodes()} nodes / {host.number_of_edges()} edges")

    search = MotifSearch(motif, host, injective=args.injective, timeout=args.timeout, log_level=log_level)
    try:
        matches = search.run()
    except MotifSearchError as e:
        print(f"[find_motifs] search failed: {e}")
        return 2

    print(f"total mappings: {len(matches)}")
    K = max(0, int(args.top_k))
    for i, m in enumerate(matches[:K]):
        print(f"[{i}] {format_mapping(m)}")
    if len(matches) > K:
        print(f"... {len(matches) - K} more")

    if args.summary:
        summary = MatchSummary(motif.nodes).load_matches(matches)
        for key, val in summary.describe().items():
            print(f"  {key}: {val}")
        print(f"  images per motif node: {summary.coverage()}")

    if args.render_dir and matches:
        viz = MatchVisualizer()
        out_dir = Path(args.render_dir)
        for i, m in enumerate(matches[:K]):
            out = viz.render_match(host, m, out_dir / f"match_{i:04d}.png", motif=motif,
                                   neighborhood_only=not args.full_host, title=format_mapping(m))
            print(f"[find_motifs] wrote {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
