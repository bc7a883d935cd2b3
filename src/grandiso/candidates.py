"""Candidate-mapping growth: one step of the breadth-first motif search.

A candidate is a partial mapping ``{motif_node: host_node}``. Each call to
``CandidateExpander.expand`` binds exactly one more motif node and returns every
one-node-larger mapping that is still consistent with the host, or nothing if
the candidate is a dead end.

Motif neighborhoods are read in both edge directions, so a weakly connected
directed motif (``a -> b <- c``) grows from any start node.
"""

from __future__ import annotations

import logging
from typing import Hashable, Mapping, Optional

from grandiso.errors import DisconnectedMotifError, InvariantViolationError
from grandiso.graph_view import GraphView, edge_list

Candidate = dict


def _node_ranks(nodes: list[Hashable]) -> dict[Hashable, int]:
    # lowest identifier wins ties; fall back to repr for mixed node types
    try:
        ordered = sorted(nodes)
    except TypeError:
        ordered = sorted(nodes, key=repr)
    return {n: i for i, n in enumerate(ordered)}


class CandidateExpander:
    """Grows candidate mappings of ``motif`` into ``host`` one node at a time.

    Motif structure (edges, neighborhoods, tie-break ranks) is computed once at
    construction; ``expand`` only reads it. Both graphs must stay unchanged for
    the lifetime of the expander.

    Args:
        motif: the pattern graph.
        host: the graph searched within.
        scores: interestingness of every motif node.
        injective: when True, a host node already used by the candidate is never
            offered again, so results are true subgraph monomorphisms. Otherwise
            two motif nodes may share a host node (edge-preserving homomorphisms).
    """

    def __init__(
        self,
        motif: GraphView,
        host: GraphView,
        scores: Mapping[Hashable, float],
        *,
        injective: bool = False,
    ) -> None:
        self.motif = motif
        self.host = host
        self.scores = scores
        self.injective = bool(injective)

        self.motif_nodes: list[Hashable] = list(motif.nodes())
        self.motif_node_count = motif.node_count()
        self.motif_edges = edge_list(motif)
        self._succ: dict[Hashable, list[Hashable]] = {}
        self._pred: dict[Hashable, list[Hashable]] = {}
        self._neighbors: dict[Hashable, set[Hashable]] = {}
        for n in self.motif_nodes:
            succ = [v for v in motif.out_neighbors(n) if v != n]
            pred = [u for u in motif.in_neighbors(n) if u != n]
            self._succ[n] = succ
            self._pred[n] = pred
            self._neighbors[n] = set(succ) | set(pred)
        self._rank = _node_ranks(self.motif_nodes)

    # ------------------------------------------------------------------
    # node selection
    # ------------------------------------------------------------------
    def most_interesting_node(self) -> Hashable:
        """Highest score; ties go to the lowest node identifier."""
        return min(self.motif_nodes, key=lambda n: (-self.scores[n], self._rank[n]))

    def next_node(self, candidate: Mapping[Hashable, Hashable]) -> Hashable:
        """The unbound motif node with the most already-bound neighbors.

        Ties fall back to interestingness, then to the lowest identifier.
        """
        best: Optional[Hashable] = None
        best_key: Optional[tuple] = None
        best_count = 0
        for n in self.motif_nodes:
            if n in candidate:
                continue
            bound = sum(1 for nb in self._neighbors[n] if nb in candidate)
            key = (-bound, -self.scores[n], self._rank[n])
            if best_key is None or key < best_key:
                best, best_key, best_count = n, key, bound
        if best is None:
            raise InvariantViolationError("no unbound motif node left to bind", bound=len(candidate))
        if best_count == 0:
            raise DisconnectedMotifError(
                "motif is not connected: no unbound node touches the current candidate",
                node=best,
                required_edges=0,
            )
        return best

    def required_edges(self, node: Hashable, candidate: Mapping[Hashable, Hashable]) -> list[tuple]:
        """Motif edges between ``node`` and nodes already bound in ``candidate``."""
        edges = [(node, v) for v in self._succ[node] if v in candidate]
        edges.extend((u, node) for u in self._pred[node] if u in candidate)
        return edges

    # ------------------------------------------------------------------
    # host-side admissibility
    # ------------------------------------------------------------------
    def _hosts_for_edge(self, edge: tuple, node: Hashable, candidate: Mapping[Hashable, Hashable]) -> list:
        u, v = edge
        if v == node:
            # bound u -> new v: image of v is a host successor of image of u
            return self.host.out_neighbors(candidate[u])
        return self.host.in_neighbors(candidate[v])

    def admissible_hosts(self, node: Hashable, candidate: Mapping[Hashable, Hashable]) -> list:
        """Host nodes ``node`` may bind to, given every required edge.

        With several required edges the per-edge sets are intersected; the order
        of the first edge's set is kept so emission order is reproducible.
        """
        required = self.required_edges(node, candidate)
        if not required:
            raise DisconnectedMotifError(
                "no required edge for the selected motif node",
                node=node,
                required_edges=0,
                candidates=0,
            )
        per_edge = [self._hosts_for_edge(e, node, candidate) for e in required]
        admissible = list(dict.fromkeys(per_edge[0]))
        if len(per_edge) > 1:
            common = set(per_edge[0]).intersection(*(set(hosts) for hosts in per_edge[1:]))
            admissible = [h for h in admissible if h in common]
        if self.injective:
            used = set(candidate.values())
            admissible = [h for h in admissible if h not in used]
        return admissible

    # ------------------------------------------------------------------
    # verification
    # ------------------------------------------------------------------
    def preserves_edges(self, candidate: Mapping[Hashable, Hashable]) -> bool:
        """True if every motif edge has a host edge between the images.

        Only meaningful for complete candidates; a missing endpoint is a bug in
        the growth logic and raises ``InvariantViolationError``.
        """
        for u, v in self.motif_edges:
            if u not in candidate or v not in candidate:
                raise InvariantViolationError(
                    "complete candidate is missing a motif edge endpoint",
                    edge=(u, v),
                    size=len(candidate),
                )
            if not self.host.has_edge(candidate[u], candidate[v]):
                return False
        return True

    def _verify(self, produced: list[Candidate]) -> list[Candidate]:
        out: list[Candidate] = []
        for c in produced:
            if len(c) == self.motif_node_count and not self.preserves_edges(c):
                continue
            out.append(c)
        return out

    # ------------------------------------------------------------------
    # growth step
    # ------------------------------------------------------------------
    def expand(self, candidate: Mapping[Hashable, Hashable]) -> list[Candidate]:
        """All one-node-larger extensions of ``candidate``.

        The input is never modified; every extension is a new dict.
        """
        if not self.motif_nodes:
            return []

        if not candidate:
            first = self.most_interesting_node()
            host_nodes = self.host.nodes()
            logging.debug(f"expand: seeding motif node {first!r} on {len(host_nodes)} host nodes")
            return self._verify([{first: h} for h in host_nodes])

        node = self.next_node(candidate)
        admissible = self.admissible_hosts(node, candidate)
        logging.debug(f"expand: bind {node!r} size={len(candidate)} admissible={len(admissible)}")
        produced = []
        for h in admissible:
            grown = dict(candidate)
            grown[node] = h
            produced.append(grown)
        return self._verify(produced)


def get_next_candidates(
    candidate: Mapping[Hashable, Hashable],
    motif: GraphView,
    host: GraphView,
    interestingness: Mapping[Hashable, float],
    *,
    injective: bool = False,
) -> list[Candidate]:
    """Single growth step without keeping an expander around."""
    return CandidateExpander(motif, host, interestingness, injective=injective).expand(candidate)


__all__ = [
    "CandidateExpander",
    "get_next_candidates",
]
