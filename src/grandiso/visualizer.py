"""Render a motif occurrence inside its host graph as a PNG.

Uses networkx for layout and matplotlib (Agg backend) for drawing. Matched host
nodes are filled and labelled with the motif node they stand for; host edges
that realise a motif edge are drawn thick and coloured.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Hashable, Mapping, Optional

from grandiso.graph_view import NetworkxGraphView, as_graph_view, edge_list

FIG_SIZE = (8, 8)
FIG_DPI = 150
COLOR_MATCHED = "#e0f2ff"
COLOR_MATCHED_BORDER = "#007bff"
COLOR_OTHER = "#f0f0f0"
COLOR_BORDER = "#333333"
COLOR_EDGE = "#777777"
COLOR_MOTIF_EDGE = "#d62728"


class MatchVisualizer:
    def __init__(self) -> None:
        self.SPRING_K = 1.2
        self.SPRING_ITER = 100
        self.SEED = 42
        self.NEIGHBORHOOD_HOPS = 1

    def _ensure_libs(self):
        try:
            import networkx as nx  # noqa: F401
            import matplotlib
            matplotlib.use("Agg")
            import matplotlib.pyplot as plt  # noqa: F401
        except Exception as e:
            raise RuntimeError(
                "networkx and matplotlib are required for rendering. Install with\n"
                "  pip install networkx matplotlib\n"
                f"import error: {type(e).__name__}: {e}"
            )

    def _to_networkx(self, host: Any):
        import networkx as nx
        view = as_graph_view(host)
        if isinstance(view, NetworkxGraphView):
            return view.graph
        G = nx.DiGraph()
        G.add_nodes_from(view.nodes())
        G.add_edges_from(edge_list(view))
        return G

    def _select_nodes(self, G, mapping: Mapping[Hashable, Hashable], neighborhood_only: bool) -> list:
        if not neighborhood_only:
            return list(G.nodes)
        keep = set(mapping.values())
        frontier = set(keep)
        U = G.to_undirected(as_view=True)
        for _ in range(max(0, int(self.NEIGHBORHOOD_HOPS))):
            nxt = set()
            for n in frontier:
                nxt.update(U.neighbors(n))
            frontier = nxt - keep
            keep |= nxt
        return [n for n in G.nodes if n in keep]

    def render_match(
        self,
        host: Any,
        mapping: Mapping[Hashable, Hashable],
        out_png: str | Path,
        *,
        motif: Any = None,
        neighborhood_only: bool = False,
        figsize=None,
        font_size: int = 9,
        title: Optional[str] = None,
    ) -> str:
        """Draw ``host`` with the occurrence ``mapping`` highlighted.

        When ``motif`` is given, host edges that realise motif edges are
        emphasised. ``neighborhood_only`` restricts the drawing to the matched
        nodes and their immediate neighbors, which keeps large hosts readable.
        """
        self._ensure_libs()
        import networkx as nx
        import matplotlib.pyplot as plt

        if not mapping:
            raise ValueError("empty mapping: nothing to highlight")
        G_full = self._to_networkx(host)
        missing = [h for h in mapping.values() if h not in G_full]
        if missing:
            raise ValueError(f"mapping refers to host nodes not in the graph: {missing}")
        G = G_full.subgraph(self._select_nodes(G_full, mapping, neighborhood_only))

        motif_edges: set = set()
        if motif is not None:
            for u, v in edge_list(as_graph_view(motif)):
                if u in mapping and v in mapping:
                    motif_edges.add((mapping[u], mapping[v]))

        # several motif nodes may share one host node when injectivity is off
        roles: dict[Hashable, list[str]] = {}
        for m_node, h_node in mapping.items():
            roles.setdefault(h_node, []).append(str(m_node))

        pos = nx.spring_layout(G, seed=self.SEED, k=self.SPRING_K, iterations=self.SPRING_ITER)
        matched = [n for n in G.nodes if n in roles]
        others = [n for n in G.nodes if n not in roles]
        labels = {n: (f"{n}\n[{','.join(roles[n])}]" if n in roles else str(n)) for n in G.nodes}
        plain_edges = [(u, v) for u, v in G.edges if (u, v) not in motif_edges]
        hit_edges = [(u, v) for u, v in G.edges if (u, v) in motif_edges]

        fig, ax = plt.subplots(figsize=figsize or FIG_SIZE)
        ax.axis("off")
        arrows = G.is_directed()
        if plain_edges:
            nx.draw_networkx_edges(G, pos, edgelist=plain_edges, ax=ax, arrows=arrows, arrowstyle='-|>', arrowsize=12, width=1.0, edge_color=COLOR_EDGE)
        if hit_edges:
            nx.draw_networkx_edges(G, pos, edgelist=hit_edges, ax=ax, arrows=arrows, arrowstyle='-|>', arrowsize=16, width=2.5, edge_color=COLOR_MOTIF_EDGE)
        if others:
            nx.draw_networkx_nodes(G, pos, nodelist=others, node_color=COLOR_OTHER, edgecolors=COLOR_BORDER, linewidths=1.0, node_size=700, ax=ax)
        nx.draw_networkx_nodes(G, pos, nodelist=matched, node_color=COLOR_MATCHED, edgecolors=COLOR_MATCHED_BORDER, linewidths=2.0, node_size=1100, ax=ax)
        nx.draw_networkx_labels(G, pos, labels=labels, font_size=font_size, ax=ax)
        if title:
            ax.set_title(title)

        ax.margins(0.12)
        fig.tight_layout()
        out_png = Path(out_png)
        out_png.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out_png, format="png", dpi=FIG_DPI)
        plt.close(fig)
        return str(out_png)


__all__ = ["MatchVisualizer"]
