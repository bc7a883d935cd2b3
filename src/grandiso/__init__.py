"""grandiso: breadth-first subgraph monomorphism search.

Find every occurrence of a small directed motif inside a larger host graph::

    import networkx as nx
    from grandiso import find_motifs

    motif = nx.DiGraph([("A", "B")])
    host = nx.DiGraph([("X", "Y"), ("Z", "W")])
    find_motifs(motif, host)  # [{'A': 'X', 'B': 'Y'}, {'A': 'Z', 'B': 'W'}]
"""

__version__ = "0.2.0"

from grandiso.errors import (
    DisconnectedMotifError,
    InvariantViolationError,
    MotifSearchError,
    SearchCancelled,
)
from grandiso.graph_view import AdjacencyGraph, GraphView, NetworkxGraphView, as_graph_view
from grandiso.interestingness import (
    ExplicitInterestingness,
    InterestingnessScorer,
    UniformInterestingness,
)
from grandiso.candidates import CandidateExpander, get_next_candidates
from grandiso.search import MotifSearch, count_motifs, find_motifs, find_motifs_iter
from grandiso.summary import MatchSummary
from grandiso.visualizer import MatchVisualizer

__all__ = [
    "find_motifs",
    "find_motifs_iter",
    "count_motifs",
    "MotifSearch",
    "CandidateExpander",
    "get_next_candidates",
    "GraphView",
    "AdjacencyGraph",
    "NetworkxGraphView",
    "as_graph_view",
    "InterestingnessScorer",
    "UniformInterestingness",
    "ExplicitInterestingness",
    "MatchSummary",
    "MatchVisualizer",
    "MotifSearchError",
    "DisconnectedMotifError",
    "InvariantViolationError",
    "SearchCancelled",
]
