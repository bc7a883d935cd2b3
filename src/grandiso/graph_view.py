"""Read-only graph capability consumed by the motif search, and its adapters.

The search never touches a concrete graph type. It only needs to

- iterate nodes,
- iterate the out- and in-neighbors of a node,
- test edge existence,
- count nodes.

Two adapters are provided: ``AdjacencyGraph`` (a small adjacency-list digraph)
and ``NetworkxGraphView`` (wraps a networkx graph). Node and edge data are
passed through untouched; the search ignores them.
"""

from __future__ import annotations

from typing import Any, Hashable, Iterable, List, Protocol, Tuple, runtime_checkable

import networkx as nx


@runtime_checkable
class GraphView(Protocol):
    """Query surface over a directed graph. Must not change during a search."""

    def nodes(self) -> List[Hashable]: ...

    def out_neighbors(self, node: Hashable) -> List[Hashable]: ...

    def in_neighbors(self, node: Hashable) -> List[Hashable]: ...

    def has_edge(self, u: Hashable, v: Hashable) -> bool: ...

    def node_count(self) -> int: ...


class AdjacencyGraph:
    """Minimal directed graph kept as out/in adjacency lists.

    Nodes are kept in insertion order, so iteration (and therefore the order in
    which the search emits mappings) is reproducible. Parallel edges collapse to
    one; edge labels are accepted and stored but never read by the search.
    """

    def __init__(self, edges: Iterable[Tuple[Any, ...]] = (), nodes: Iterable[Hashable] = ()) -> None:
        self.out_edges: dict[Hashable, list[Hashable]] = {}
        self.in_edges: dict[Hashable, list[Hashable]] = {}
        self.edge_labels: dict[tuple[Hashable, Hashable], Any] = {}
        for n in nodes:
            self.add_node(n)
        for e in edges:
            if len(e) == 2:
                self.add_edge(e[0], e[1])
            elif len(e) == 3:
                self.add_edge(e[0], e[1], e[2])
            else:
                raise ValueError(f"edge must be (u, v) or (u, v, label), got {e!r}")

    def add_node(self, node: Hashable) -> None:
        self.out_edges.setdefault(node, [])
        self.in_edges.setdefault(node, [])

    def add_edge(self, u: Hashable, v: Hashable, label: Any = None) -> None:
        self.add_node(u)
        self.add_node(v)
        if v not in self.out_edges[u]:
            self.out_edges[u].append(v)
            self.in_edges[v].append(u)
        if label is not None:
            self.edge_labels[(u, v)] = label

    # capability
    def nodes(self) -> List[Hashable]:
        return list(self.out_edges)

    def out_neighbors(self, node: Hashable) -> List[Hashable]:
        return list(self.out_edges.get(node, ()))

    def in_neighbors(self, node: Hashable) -> List[Hashable]:
        return list(self.in_edges.get(node, ()))

    def has_edge(self, u: Hashable, v: Hashable) -> bool:
        return v in self.out_edges.get(u, ())

    def node_count(self) -> int:
        return len(self.out_edges)

    def edges(self) -> List[Tuple[Hashable, Hashable]]:
        return [(u, v) for u, vs in self.out_edges.items() for v in vs]

    def __repr__(self) -> str:
        n_edges = sum(len(vs) for vs in self.out_edges.values())
        return f"AdjacencyGraph(nodes={self.node_count()}, edges={n_edges})"


class NetworkxGraphView:
    """Adapts a networkx graph to ``GraphView``.

    Directed graphs use successors/predecessors. An undirected graph is read as
    a digraph with both directions of every edge present.
    """

    def __init__(self, graph: nx.Graph) -> None:
        if not isinstance(graph, nx.Graph):
            raise TypeError(f"expected a networkx graph, got {type(graph).__name__}")
        self.graph = graph
        self.directed = graph.is_directed()

    def nodes(self) -> List[Hashable]:
        return list(self.graph.nodes)

    def out_neighbors(self, node: Hashable) -> List[Hashable]:
        if self.directed:
            return list(self.graph.successors(node))
        return list(self.graph.neighbors(node))

    def in_neighbors(self, node: Hashable) -> List[Hashable]:
        if self.directed:
            return list(self.graph.predecessors(node))
        return list(self.graph.neighbors(node))

    def has_edge(self, u: Hashable, v: Hashable) -> bool:
        return self.graph.has_edge(u, v)

    def node_count(self) -> int:
        return self.graph.number_of_nodes()

    def edges(self) -> List[Tuple[Hashable, Hashable]]:
        return edge_list(self)

    def __repr__(self) -> str:
        return f"NetworkxGraphView({type(self.graph).__name__}, nodes={self.node_count()})"


def as_graph_view(obj: Any) -> GraphView:
    """Coerce a networkx graph or a GraphView-conforming object."""
    if isinstance(obj, nx.Graph):
        return NetworkxGraphView(obj)
    if isinstance(obj, GraphView):
        return obj
    raise TypeError(
        f"cannot search over {type(obj).__name__}: pass a networkx graph or an object "
        "with nodes/out_neighbors/in_neighbors/has_edge/node_count"
    )


def edge_list(graph: GraphView) -> List[Tuple[Hashable, Hashable]]:
    """All directed edges, derived from the capability alone."""
    return [(u, v) for u in graph.nodes() for v in graph.out_neighbors(u)]


__all__ = [
    "GraphView",
    "AdjacencyGraph",
    "NetworkxGraphView",
    "as_graph_view",
    "edge_list",
]
