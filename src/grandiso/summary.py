"""Tabular summary of motif search results."""

from __future__ import annotations

import logging
from typing import Any, Hashable, Iterable, Optional

import numpy as np
import pandas as pd


class MatchSummary:
    """Collects mappings and reports how the motif sits in the host.

    One row per mapping, one column per motif node; cells hold host nodes.
    """

    def __init__(self, motif_nodes: Optional[Iterable[Hashable]] = None):
        self.motif_nodes: list[Hashable] = list(motif_nodes) if motif_nodes is not None else []
        self.matches: list[dict[Hashable, Hashable]] = []
        self.df: Optional[pd.DataFrame] = None

    def add(self, mapping: dict[Hashable, Hashable]):
        self.matches.append(dict(mapping))
        for node in mapping:
            if node not in self.motif_nodes:
                self.motif_nodes.append(node)
        self.df = None

    def load_matches(self, matches: Iterable[dict[Hashable, Hashable]]):
        for m in matches:
            self.add(m)
        return self

    def to_frame(self) -> pd.DataFrame:
        if self.df is None:
            self.df = pd.DataFrame(self.matches, columns=self.motif_nodes)
        return self.df

    def coverage(self) -> dict[Hashable, int]:
        """Number of distinct host nodes each motif node was mapped to."""
        df = self.to_frame()
        return {node: int(df[node].nunique()) for node in self.motif_nodes}

    def host_node_frequency(self) -> pd.Series:
        """How many mappings use each host node, most used first."""
        df = self.to_frame()
        if df.empty:
            return pd.Series(dtype="int64")
        used = [set(row) for row in df.itertuples(index=False, name=None)]
        counts: dict[Any, int] = {}
        for nodes in used:
            for h in nodes:
                counts[h] = counts.get(h, 0) + 1
        return pd.Series(counts, dtype="int64").sort_values(ascending=False, kind="stable")

    def describe(self) -> dict[str, Any]:
        cov = np.array(list(self.coverage().values()), dtype=float)
        freq = self.host_node_frequency()
        return {
            "matches": len(self.matches),
            "motif_nodes": len(self.motif_nodes),
            "host_nodes_used": int(len(freq)),
            "mean_images_per_motif_node": float(cov.mean()) if cov.size else 0.0,
            "median_images_per_motif_node": float(np.median(cov)) if cov.size else 0.0,
            "max_host_node_reuse": int(freq.max()) if len(freq) else 0,
        }

    def log(self, level: int = logging.INFO):
        logging.log(level, f"match summary: {self.describe()}")
        if self.matches:
            logging.log(level, f"images per motif node: {self.coverage()}")


__all__ = ["MatchSummary"]
