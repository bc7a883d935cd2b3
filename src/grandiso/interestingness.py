"""Interestingness scores: the search-order heuristic over motif nodes."""

from __future__ import annotations

import logging
import numbers
from typing import Any, Hashable, Mapping

from grandiso.graph_view import GraphView


class InterestingnessScorer:
    """Assigns a priority score to every motif node.

    ``score`` is called once per search; the table it returns is treated as
    read-only for the rest of the search.
    """

    def score(self, motif: GraphView) -> dict[Hashable, float]:
        raise NotImplementedError


class UniformInterestingness(InterestingnessScorer):
    """Every motif node scores 1.0."""

    def score(self, motif: GraphView) -> dict[Hashable, float]:
        return {n: 1.0 for n in motif.nodes()}


class ExplicitInterestingness(InterestingnessScorer):
    """Caller-supplied scores. Motif nodes missing from the table score 0.0."""

    def __init__(self, table: Mapping[Hashable, Any]) -> None:
        scores: dict[Hashable, float] = {}
        for node, value in table.items():
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ValueError(f"interestingness for {node!r} must be a number, got {value!r}")
            scores[node] = float(value)
        self.table = scores

    def score(self, motif: GraphView) -> dict[Hashable, float]:
        nodes = motif.nodes()
        unknown = set(self.table) - set(nodes)
        if unknown:
            logging.warning(f"interestingness: ignoring {len(unknown)} key(s) that are not motif nodes")
        return {n: self.table.get(n, 0.0) for n in nodes}


def resolve_scorer(value: Any = None) -> InterestingnessScorer:
    if value is None:
        return UniformInterestingness()
    if isinstance(value, InterestingnessScorer):
        return value
    if isinstance(value, Mapping):
        return ExplicitInterestingness(value)
    raise TypeError(f"interestingness must be a scorer or a mapping, got {type(value).__name__}")


__all__ = [
    "InterestingnessScorer",
    "UniformInterestingness",
    "ExplicitInterestingness",
    "resolve_scorer",
]
