# tests/test_directedness.py
import unittest

from graphrepr import DIRECTED, UNDIRECTED, Directed, EdgeType, Graph, Undirected
from graphrepr.core.directedness import Directedness, resolve_directedness


class TestResolveDirectedness(unittest.TestCase):
    def test_accepted_forms(self):
        self.assertIs(resolve_directedness(True), DIRECTED)
        self.assertIs(resolve_directedness(False), UNDIRECTED)
        self.assertIs(resolve_directedness(EdgeType.UNDIRECTED), UNDIRECTED)
        self.assertIs(resolve_directedness("directed"), DIRECTED)
        self.assertIs(resolve_directedness("Undirected"), UNDIRECTED)
        self.assertIs(resolve_directedness(UNDIRECTED), UNDIRECTED)

    def test_unknown_string(self):
        with self.assertRaises(ValueError):
            resolve_directedness("bidirectional")

    def test_equality(self):
        self.assertEqual(Directed(), DIRECTED)
        self.assertEqual(Undirected(), UNDIRECTED)
        self.assertNotEqual(DIRECTED, UNDIRECTED)
        self.assertTrue(DIRECTED.is_directed)
        self.assertFalse(UNDIRECTED.is_directed)

    def test_strategy_base_is_abstract(self):
        with self.assertRaises(TypeError):
            Directedness()

        class Partial(Directedness):
            def add_edge(self, store, u, v, weight):
                store.set(u, v, weight)

        with self.assertRaises(TypeError):
            Partial()

    def test_graph_edge_type(self):
        self.assertIs(Graph(1).edge_type, EdgeType.DIRECTED)
        self.assertIs(Graph(1, directed="undirected").edge_type, EdgeType.UNDIRECTED)


class TestEdgeCounting(unittest.TestCase):
    def test_undirected_counts(self):
        for backend in ("matrix", "list"):
            with self.subTest(backend=backend):
                G = Graph(3, directed=False, backend=backend)
                G.add_edge(0, 0)
                G.add_edge(0, 1)
                self.assertEqual(G.edge_count(), 2)
                self.assertEqual(G.degree(0), 3)
                self.assertEqual(G.degree(1), 1)
                self.assertEqual(G.degree(2), 0)
                self.assertEqual(G.in_degree(1), G.out_degree(1))

    def test_directed_counts(self):
        for backend in ("matrix", "list"):
            with self.subTest(backend=backend):
                G = Graph(3, directed=True, backend=backend)
                G.add_edge(0, 0)
                G.add_edge(0, 1)
                G.add_edge(2, 0)
                self.assertEqual(G.edge_count(), 3)
                self.assertEqual(G.degree(0), 4)
                self.assertEqual(G.out_degree(0), 2)
                self.assertEqual(G.in_degree(0), 2)
                self.assertEqual(G.in_degree(2), 0)

    def test_undirected_edges_reported_once(self):
        for backend in ("matrix", "list"):
            with self.subTest(backend=backend):
                G = Graph(3, directed=False, backend=backend)
                G.add_edge(2, 1, 4)
                self.assertEqual(G.edges(), [(1, 2, 4.0)])
                self.assertEqual(G.out_edges(2), [(1, 4.0)])
                self.assertEqual(G.in_edges(2), [(1, 4.0)])

    def test_directed_edges(self):
        G = Graph(3, backend="matrix")
        G.add_edge(2, 1, 4)
        G.add_edge(1, 2, 3)
        self.assertEqual(sorted(G.edges()), [(1, 2, 3.0), (2, 1, 4.0)])
        self.assertEqual(G.out_edges(2), [(1, 4.0)])
        self.assertEqual(G.in_edges(2), [(1, 3.0)])

    def test_clear_edges(self):
        for directed in (True, False):
            with self.subTest(directed=directed):
                G = Graph(3, directed=directed)
                G.add_edge(0, 1)
                G.add_edge(1, 2)
                G.clear_edges()
                self.assertEqual(G.edge_count(), 0)
                self.assertEqual(G.vertex_count(), 3)


if __name__ == "__main__":
    unittest.main()
