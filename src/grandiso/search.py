"""Breadth-first motif search over a host graph.

``find_motifs(motif, host)`` returns every mapping of motif nodes to host nodes
under which each motif edge lands on a host edge. The search keeps a FIFO
frontier of partial mappings, grows the oldest one by a single node per step
and collects mappings once they cover the whole motif.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from typing import Any, Callable, Hashable, Iterator, Optional

from grandiso.candidates import CandidateExpander
from grandiso.errors import SearchCancelled
from grandiso.graph_view import as_graph_view
from grandiso.interestingness import resolve_scorer


class MotifSearch:
    """One motif search: frontier, results and counters for a motif/host pair.

    Parameters:
    - motif, host: networkx graphs or ``GraphView`` objects. Neither may be
      mutated while the search runs.
    - interestingness: ``None`` (uniform), a scorer, or a ``{motif_node: score}``
      table. The highest-scoring node seeds the search.
    - injective: reject mappings that reuse a host node.
    - is_cancelled: polled before every expansion; returning True aborts.
    - timeout: wall-clock budget in seconds; exceeding it aborts.

    An aborted search raises ``SearchCancelled`` and returns nothing. The frontier
    is unbounded; callers that need bounded memory should consume
    ``iter_matches`` and stop early, or cancel.
    """

    def __init__(
        self,
        motif: Any,
        host: Any,
        *,
        interestingness: Any = None,
        injective: bool = False,
        is_cancelled: Optional[Callable[[], bool]] = None,
        timeout: Optional[float] = None,
        log: Optional[logging.Logger] = None,
        log_level: int = logging.INFO,
    ) -> None:
        self.motif = as_graph_view(motif)
        self.host = as_graph_view(host)
        self.scorer = resolve_scorer(interestingness)
        self.injective = bool(injective)
        self.is_cancelled = is_cancelled
        if timeout is not None and timeout < 0:
            raise ValueError(f"timeout must be >= 0, got {timeout}")
        self.timeout = timeout

        self.logger = log or logging.getLogger(self.__class__.__name__)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            handler.setFormatter(fmt)
            self.logger.addHandler(handler)
        self.logger.setLevel(log_level)

        self.stats: dict[str, Any] = {}
        self._reset_stats()

    def _reset_stats(self) -> None:
        self.stats = {
            "expansions": 0,
            "levels": 0,
            "max_frontier": 0,
            "matches": 0,
            "runtime": 0.0,
        }

    def _check_cancelled(self, t0: float) -> None:
        if self.is_cancelled is not None and self.is_cancelled():
            raise SearchCancelled(
                "search cancelled by caller",
                reason="cancelled",
                expansions=self.stats["expansions"],
            )
        if self.timeout is not None and time.time() - t0 > self.timeout:
            raise SearchCancelled(
                f"search exceeded timeout of {self.timeout}s",
                reason="timeout",
                expansions=self.stats["expansions"],
            )

    def iter_matches(self) -> Iterator[dict[Hashable, Hashable]]:
        """Yield complete, edge-verified mappings in breadth-first order."""
        self._reset_stats()
        t0 = time.time()
        motif_size = self.motif.node_count()
        self.logger.info(
            f"motif search start: motif_nodes={motif_size}, host_nodes={self.host.node_count()}, "
            f"injective={self.injective}"
        )
        if motif_size == 0:
            self.logger.info("motif search done: empty motif, matches=0")
            return

        scores = dict(self.scorer.score(self.motif))
        expander = CandidateExpander(self.motif, self.host, scores, injective=self.injective)

        frontier: deque = deque([{}])
        level = -1
        while frontier:
            self._check_cancelled(t0)
            candidate = frontier.popleft()
            if len(candidate) > level:
                level = len(candidate)
                self.stats["levels"] = level + 1
                self.logger.debug(f"level {level}: frontier={len(frontier) + 1}")

            grown = expander.expand(candidate)
            self.stats["expansions"] += 1
            for mapping in grown:
                if len(mapping) == motif_size:
                    self.stats["matches"] += 1
                    yield mapping
                else:
                    frontier.append(mapping)
            if len(frontier) > self.stats["max_frontier"]:
                self.stats["max_frontier"] = len(frontier)

        self.stats["runtime"] = time.time() - t0
        self.logger.info(
            f"motif search done: matches={self.stats['matches']}, expansions={self.stats['expansions']}, "
            f"max_frontier={self.stats['max_frontier']}, runtime={self.stats['runtime']:.3f}s"
        )

    def run(self) -> list[dict[Hashable, Hashable]]:
        """All complete mappings, in emission order."""
        return list(self.iter_matches())


def find_motifs(motif: Any, host: Any, **kwargs: Any) -> list[dict[Hashable, Hashable]]:
    """Every edge-preserving mapping of ``motif`` into ``host``.

    Keyword arguments are those of ``MotifSearch``. Logging defaults to WARNING
    here so library calls stay quiet.

    Raises:
        DisconnectedMotifError: the motif has more than one connected component.
        InvariantViolationError: internal consistency failure (a bug).
        SearchCancelled: ``is_cancelled`` returned True or ``timeout`` elapsed.
    """
    kwargs.setdefault("log_level", logging.WARNING)
    return MotifSearch(motif, host, **kwargs).run()


def find_motifs_iter(motif: Any, host: Any, **kwargs: Any) -> Iterator[dict[Hashable, Hashable]]:
    """Lazy ``find_motifs``: mappings are yielded as soon as they complete."""
    kwargs.setdefault("log_level", logging.WARNING)
    yield from MotifSearch(motif, host, **kwargs).iter_matches()


def count_motifs(motif: Any, host: Any, **kwargs: Any) -> int:
    kwargs.setdefault("log_level", logging.WARNING)
    return sum(1 for _ in MotifSearch(motif, host, **kwargs).iter_matches())


__all__ = [
    "MotifSearch",
    "find_motifs",
    "find_motifs_iter",
    "count_motifs",
]
