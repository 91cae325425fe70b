# tests/test_backends.py
import unittest

import numpy as np

from graphrepr.core import backend as backend_mod
from graphrepr.core.backend import GraphBackend, available_storage, make_backend, register_backend
from graphrepr.core.edgelist import EdgeList
from graphrepr.core.exceptions import VertexOutOfRange
from graphrepr.core.graph import Graph
from graphrepr.core.matrix import AdjacencyMatrix


class _BackendContract:
    """Shared checks run against every storage backend."""

    backend_cls = None

    def setUp(self):
        self.S = self.backend_cls(4)

    def test_empty(self):
        S = self.backend_cls(0)
        self.assertEqual(S.vertex_count(), 0)
        self.assertEqual(list(S.entries()), [])
        self.assertEqual(S.edge_entry_count(), 0)

    def test_set_get_unset(self):
        S = self.S
        self.assertIsNone(S.get(0, 1))
        S.set(0, 1, 2.5)
        self.assertEqual(S.get(0, 1), 2.5)
        self.assertIsNone(S.get(1, 0))
        self.assertTrue(S.unset(0, 1))
        self.assertFalse(S.unset(0, 1))
        self.assertIsNone(S.get(0, 1))

    def test_zero_weight_is_still_an_edge(self):
        self.S.set(2, 3, 0.0)
        self.assertEqual(self.S.get(2, 3), 0.0)
        self.assertEqual(self.S.edge_entry_count(), 1)

    def test_overwrite_keeps_count(self):
        self.S.set(0, 1, 1)
        self.S.set(0, 1, 7)
        self.assertEqual(self.S.get(0, 1), 7.0)
        self.assertEqual(self.S.edge_entry_count(), 1)

    def test_set_pair_and_unset_pair(self):
        S = self.S
        S.set_pair(1, 2, 3)
        self.assertEqual(S.get(1, 2), 3.0)
        self.assertEqual(S.get(2, 1), 3.0)
        self.assertTrue(S.unset_pair(2, 1))
        self.assertIsNone(S.get(1, 2))
        self.assertIsNone(S.get(2, 1))
        self.assertFalse(S.unset_pair(1, 2))

    def test_set_pair_self_loop(self):
        self.S.set_pair(3, 3, 1.5)
        self.assertEqual(self.S.get(3, 3), 1.5)
        self.assertEqual(self.S.edge_entry_count(), 1)

    def test_out_of_range_leaves_storage_untouched(self):
        S = self.S
        S.set(0, 1, 1)
        for bad in [(0, 4), (4, 0), (-1, 0), (0, -1)]:
            with self.assertRaises(VertexOutOfRange):
                S.set(*bad, 9)
            with self.assertRaises(VertexOutOfRange):
                S.set_pair(*bad, 9)
            with self.assertRaises(VertexOutOfRange):
                S.get(*bad)
        self.assertEqual(sorted(S.entries()), [(0, 1, 1.0)])

    def test_non_integer_index(self):
        with self.assertRaises(TypeError):
            self.S.get(0.5, 1)
        with self.assertRaises(TypeError):
            self.S.get(True, 1)

    def test_numpy_integer_index(self):
        self.S.set(np.int64(1), np.int32(2), 4)
        self.assertEqual(self.S.get(1, 2), 4.0)

    def test_bad_weight(self):
        with self.assertRaises(TypeError):
            self.S.set(0, 1, "heavy")
        with self.assertRaises(TypeError):
            self.S.set(0, 1, True)
        self.assertIsNone(self.S.get(0, 1))

    def test_successors_predecessors(self):
        S = self.S
        S.set(0, 1, 1)
        S.set(0, 2, 2)
        S.set(3, 2, 3)
        self.assertEqual(sorted(S.successors(0)), [(1, 1.0), (2, 2.0)])
        self.assertEqual(sorted(S.predecessors(2)), [(0, 2.0), (3, 3.0)])
        self.assertEqual(list(S.successors(1)), [])

    def test_add_vertex(self):
        self.S.set(3, 0, 1)
        self.assertEqual(self.S.add_vertex(), 4)
        self.assertEqual(self.S.add_vertices(2), [5, 6])
        self.assertEqual(self.S.vertex_count(), 7)
        self.assertEqual(self.S.get(3, 0), 1.0)
        self.assertEqual(list(self.S.successors(6)), [])
        with self.assertRaises(ValueError):
            self.S.add_vertices(-1)

    def test_remove_vertex_compacts(self):
        S = self.S
        S.set(0, 1, 1)
        S.set(1, 3, 2)
        S.set(3, 2, 3)
        S.set(2, 2, 4)
        S.set(0, 3, 5)
        S.remove_vertex(1)
        self.assertEqual(S.vertex_count(), 3)
        # old 3 -> 2, old 2 -> 1
        self.assertEqual(sorted(S.entries()), [(0, 2, 5.0), (1, 1, 4.0), (2, 1, 3.0)])
        self.assertEqual(S.edge_entry_count(), 3)
        # the freed slot comes back clean
        S.add_vertex()
        self.assertEqual(list(S.successors(3)), [])
        self.assertEqual(list(S.predecessors(3)), [])

    def test_remove_vertex_with_self_loop(self):
        S = self.backend_cls(3)
        S.set(0, 0, 1)
        S.set(0, 1, 1)
        S.set(2, 0, 1)
        S.set(1, 2, 1)
        self.assertEqual(S.edge_entry_count(), 4)
        S.remove_vertex(0)
        self.assertEqual(S.edge_entry_count(), 1)
        self.assertEqual(list(S.entries()), [(0, 1, 1.0)])
        self.assertEqual(list(S.predecessors(1)), [(0, 1.0)])

    def test_remove_last_vertex(self):
        S = self.backend_cls(1)
        S.set(0, 0, 1)
        S.remove_vertex(0)
        self.assertEqual(S.vertex_count(), 0)
        self.assertEqual(S.edge_entry_count(), 0)
        with self.assertRaises(VertexOutOfRange):
            S.remove_vertex(0)

    def test_clear(self):
        self.S.set(0, 1, 1)
        self.S.set_pair(2, 3, 1)
        self.S.clear()
        self.assertEqual(self.S.edge_entry_count(), 0)
        self.assertEqual(self.S.vertex_count(), 4)

    def test_copy_is_independent(self):
        self.S.set(0, 1, 1)
        C = self.S.copy()
        C.set(1, 2, 2)
        C.add_vertex()
        self.assertIsNone(self.S.get(1, 2))
        self.assertEqual(self.S.vertex_count(), 4)
        self.assertEqual(C.get(0, 1), 1.0)

    def test_to_coo(self):
        self.S.set(0, 1, 1.5)
        self.S.set(3, 0, 2.0)
        rows, cols, data = self.S.to_coo()
        got = sorted(zip(rows.tolist(), cols.tolist(), data.tolist()))
        self.assertEqual(got, [(0, 1, 1.5), (3, 0, 2.0)])
        self.assertEqual(data.dtype, np.float64)

    def test_nbytes_positive(self):
        self.assertGreater(self.S.nbytes(), 0)

    def test_negative_size(self):
        with self.assertRaises(ValueError):
            self.backend_cls(-1)


class TestAdjacencyMatrix(_BackendContract, unittest.TestCase):
    backend_cls = AdjacencyMatrix

    def test_row_scan_is_ascending(self):
        S = self.S
        S.set(0, 3, 1)
        S.set(0, 1, 1)
        S.set(0, 2, 1)
        self.assertEqual([x for x, _ in S.successors(0)], [1, 2, 3])

    def test_capacity_grows_geometrically(self):
        S = AdjacencyMatrix(0)
        S.add_vertex()
        S.add_vertex()
        S.set(0, 1, 3)
        for _ in range(20):
            S.add_vertex()
        self.assertEqual(S.vertex_count(), 22)
        self.assertGreaterEqual(S.capacity, 22)
        self.assertEqual(S.get(0, 1), 3.0)

    def test_to_dense(self):
        S = AdjacencyMatrix(3)
        S.set(0, 1, 2)
        dense = S.to_dense(nonedge=np.inf)
        self.assertEqual(dense.shape, (3, 3))
        self.assertEqual(dense[0, 1], 2.0)
        self.assertTrue(np.isinf(dense[1, 0]))

    def test_dtype(self):
        S = AdjacencyMatrix(2, dtype=np.float32)
        S.set(0, 1, 0.5)
        self.assertEqual(S.dtype, np.float32)
        self.assertEqual(S.get(0, 1), 0.5)
        with self.assertRaises(ValueError):
            AdjacencyMatrix(2, dtype=np.int64)

    def test_weights_round_to_dtype(self):
        exact = AdjacencyMatrix(2)
        exact.set(0, 1, 0.1)
        self.assertEqual(exact.get(0, 1), 0.1)
        narrow = AdjacencyMatrix(2, dtype=np.float32)
        narrow.set(0, 1, 0.1)
        self.assertNotEqual(narrow.get(0, 1), 0.1)
        self.assertEqual(narrow.get(0, 1), float(np.float32(0.1)))


class TestEdgeList(_BackendContract, unittest.TestCase):
    backend_cls = EdgeList

    def test_successors_follow_insertion_order(self):
        S = self.S
        S.set(0, 3, 1)
        S.set(0, 1, 1)
        S.set(0, 2, 1)
        # updating an existing entry keeps its position
        S.set(0, 3, 5)
        self.assertEqual([x for x, _ in S.successors(0)], [3, 1, 2])

    def test_order_survives_compaction(self):
        S = EdgeList(5)
        S.set(0, 4, 1)
        S.set(0, 2, 1)
        S.set(0, 3, 1)
        S.remove_vertex(1)
        self.assertEqual([x for x, _ in S.successors(0)], [3, 1, 2])


class TestBackendRegistry(unittest.TestCase):
    def tearDown(self):
        backend_mod._REGISTERED.pop("tracing", None)

    def test_builtin_names(self):
        self.assertIn("matrix", available_storage())
        self.assertIn("list", available_storage())
        self.assertIsInstance(make_backend("matrix", 2), AdjacencyMatrix)
        self.assertIsInstance(make_backend("list", 2), EdgeList)
        self.assertIsInstance(make_backend(EdgeList, 2), EdgeList)

    def test_unknown_name(self):
        with self.assertRaises(ValueError):
            make_backend("hash", 2)
        with self.assertRaises(ValueError):
            make_backend("list", -2)
        with self.assertRaises(TypeError):
            make_backend(42)

    def test_register_custom_backend(self):
        class TracingMatrix(AdjacencyMatrix):
            name = "tracing"

        register_backend("tracing", TracingMatrix)
        self.assertIn("tracing", available_storage())
        G = Graph(2, backend="tracing")
        self.assertIsInstance(G.backend, TracingMatrix)
        G.add_edge(0, 1)
        self.assertTrue(G.has_edge(0, 1))

    def test_register_rejects_non_backend(self):
        with self.assertRaises(TypeError):
            register_backend("bogus", dict)

    def test_contract_is_abstract(self):
        with self.assertRaises(TypeError):
            GraphBackend()


if __name__ == "__main__":
    unittest.main()
