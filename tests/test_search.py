import os
import sys
import itertools
import unittest
from unittest import mock

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

import networkx as nx  # noqa: E402

from grandiso import (  # noqa: E402
    AdjacencyGraph,
    DisconnectedMotifError,
    MotifSearch,
    SearchCancelled,
    count_motifs,
    find_motifs,
    find_motifs_iter,
)


def as_set(mappings):
    return {frozenset(m.items()) for m in mappings}


class ScenarioTests(unittest.TestCase):
    def test_single_node_motif_equals_host(self):
        g = AdjacencyGraph(nodes=["A"])
        self.assertEqual(find_motifs(g, g), [{"A": "A"}])

    def test_single_node_networkx(self):
        g = nx.DiGraph()
        g.add_node("A")
        self.assertEqual(len(find_motifs(g, g.copy())), 1)

    def test_path_identity(self):
        g = nx.DiGraph([(0, 1), (1, 2)])
        self.assertEqual(find_motifs(g, g), [{0: 0, 1: 1, 2: 2}])

    def test_directed_cycle(self):
        g = AdjacencyGraph([("0", "1"), ("1", "2"), ("2", "0")])
        res = find_motifs(g, g)
        self.assertIn({"0": "0", "1": "1", "2": "2"}, res)
        # rotations preserve every edge; reflections do not
        expected = {
            frozenset({"0": "0", "1": "1", "2": "2"}.items()),
            frozenset({"0": "1", "1": "2", "2": "0"}.items()),
            frozenset({"0": "2", "1": "0", "2": "1"}.items()),
        }
        self.assertEqual(as_set(res), expected)
        self.assertEqual(len(res), 3)

    def test_single_edge_into_disjoint_edges(self):
        motif = nx.DiGraph([("A", "B")])
        host = nx.DiGraph([("X", "Y"), ("Z", "W")])
        res = find_motifs(motif, host)
        self.assertEqual(res, [{"A": "X", "B": "Y"}, {"A": "Z", "B": "W"}])


class PropertyTests(unittest.TestCase):
    def build_host(self) -> nx.DiGraph:
        return nx.DiGraph([
            ("a", "b"), ("b", "c"), ("c", "a"), ("c", "d"),
            ("d", "e"), ("e", "c"), ("b", "d"), ("a", "e"),
        ])

    def test_results_cover_motif_and_preserve_edges(self):
        motif = nx.DiGraph([(1, 2), (2, 3), (1, 3)])
        host = self.build_host()
        res = find_motifs(motif, host)
        self.assertTrue(len(res) >= 1)
        for m in res:
            self.assertEqual(set(m), set(motif.nodes))
            for u, v in motif.edges:
                self.assertTrue(host.has_edge(m[u], m[v]), f"{m} breaks {u}->{v}")

    def test_result_set_is_deterministic(self):
        motif = nx.DiGraph([(1, 2), (2, 3)])
        host = self.build_host()
        first = find_motifs(motif, host)
        second = find_motifs(motif, host)
        self.assertEqual(first, second)

    def test_interestingness_changes_order_not_set(self):
        motif = nx.DiGraph([("A", "B")])
        host = nx.DiGraph([("X", "Y"), ("Z", "W")])
        default = find_motifs(motif, host)
        b_first = find_motifs(motif, host, interestingness={"A": 0.0, "B": 2.0})
        self.assertEqual(as_set(default), as_set(b_first))

    def test_matches_brute_force(self):
        motif = nx.DiGraph([(1, 2), (2, 3), (3, 1)])
        host = self.build_host()
        brute = []
        for images in itertools.product(list(host.nodes), repeat=3):
            m = dict(zip([1, 2, 3], images))
            if all(host.has_edge(m[u], m[v]) for u, v in motif.edges):
                brute.append(m)
        self.assertEqual(as_set(find_motifs(motif, host)), as_set(brute))

    def test_injective_rejects_shared_images(self):
        motif = AdjacencyGraph([("a", "b"), ("c", "b")])
        host = AdjacencyGraph([("x", "y")])
        self.assertEqual(find_motifs(motif, host), [{"a": "x", "b": "y", "c": "x"}])
        self.assertEqual(find_motifs(motif, host, injective=True), [])

    def test_injective_results_subset_of_homomorphisms(self):
        motif = nx.DiGraph([(1, 2), (2, 3)])
        host = self.build_host()
        loose = as_set(find_motifs(motif, host))
        strict = find_motifs(motif, host, injective=True)
        self.assertTrue(as_set(strict) <= loose)
        for m in strict:
            self.assertEqual(len(set(m.values())), len(m))


class EdgeCaseTests(unittest.TestCase):
    def test_empty_motif(self):
        self.assertEqual(find_motifs(AdjacencyGraph(), AdjacencyGraph([("x", "y")])), [])

    def test_empty_host(self):
        self.assertEqual(find_motifs(AdjacencyGraph([("a", "b")]), AdjacencyGraph()), [])

    def test_disconnected_motif_without_edges(self):
        motif = AdjacencyGraph(nodes=["A", "B"])
        host = AdjacencyGraph(nodes=["X"])
        with self.assertRaises(DisconnectedMotifError) as ctx:
            find_motifs(motif, host)
        self.assertEqual(ctx.exception.details["node"], "B")
        self.assertEqual(ctx.exception.details["required_edges"], 0)

    def test_disconnected_motif_two_components(self):
        motif = nx.DiGraph([("A", "B"), ("C", "D")])
        host = nx.DiGraph([("X", "Y")])
        with self.assertRaises(DisconnectedMotifError):
            find_motifs(motif, host)

    def test_self_loop_on_single_node_motif(self):
        motif = AdjacencyGraph([("A", "A")])
        host = AdjacencyGraph([("Y", "Y")], nodes=["X"])
        self.assertEqual(find_motifs(motif, host), [{"A": "Y"}])

    def test_undirected_graphs(self):
        motif = nx.Graph([("a", "b")])
        host = nx.Graph([("x", "y")])
        res = find_motifs(motif, host)
        self.assertEqual(as_set(res), as_set([{"a": "x", "b": "y"}, {"a": "y", "b": "x"}]))

    def test_rejects_unknown_graph_type(self):
        with self.assertRaises(TypeError):
            find_motifs([("a", "b")], nx.DiGraph())


class DriverTests(unittest.TestCase):
    def setUp(self):
        self.motif = nx.DiGraph([("A", "B")])
        self.host = nx.DiGraph([("X", "Y"), ("Z", "W")])

    def test_stats(self):
        search = MotifSearch(self.motif, self.host, log_level=30)
        res = search.run()
        self.assertEqual(len(res), 2)
        self.assertEqual(search.stats["matches"], 2)
        # the empty seed plus one expansion per host node
        self.assertEqual(search.stats["expansions"], 5)
        self.assertEqual(search.stats["levels"], 2)
        self.assertEqual(search.stats["max_frontier"], 4)

    def test_iter_is_lazy(self):
        it = find_motifs_iter(self.motif, self.host)
        self.assertEqual(next(it), {"A": "X", "B": "Y"})
        self.assertEqual(list(it), [{"A": "Z", "B": "W"}])

    def test_count(self):
        self.assertEqual(count_motifs(self.motif, self.host), 2)

    def test_cancelled_immediately(self):
        with self.assertRaises(SearchCancelled) as ctx:
            find_motifs(self.motif, self.host, is_cancelled=lambda: True)
        self.assertEqual(ctx.exception.details["reason"], "cancelled")

    def test_cancelled_midway(self):
        polls = itertools.count()
        with self.assertRaises(SearchCancelled) as ctx:
            find_motifs(self.motif, self.host, is_cancelled=lambda: next(polls) >= 2)
        self.assertEqual(ctx.exception.details["expansions"], 2)

    def test_timeout(self):
        clock = itertools.count(0.0, 10.0)
        with mock.patch("grandiso.search.time.time", side_effect=lambda: next(clock)):
            with self.assertRaises(SearchCancelled) as ctx:
                find_motifs(self.motif, self.host, timeout=5.0)
        self.assertEqual(ctx.exception.details["reason"], "timeout")

    def test_negative_timeout(self):
        with self.assertRaises(ValueError):
            MotifSearch(self.motif, self.host, timeout=-1)


if __name__ == "__main__":
    unittest.main()
