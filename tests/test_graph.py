import unittest

import numpy as np

from mazegen.errors import InvalidEdgeError
from mazegen.graph import (
    DisjointSet,
    adjacency_lists,
    build_adjacency,
    edge_key,
    is_acyclic,
    is_connected,
    is_spanning_tree,
    validate_edges,
)


class AdjacencyTests(unittest.TestCase):
    def test_adjacency_lists_follow_edge_order(self) -> None:
        self.assertEqual(adjacency_lists([(1, 2), (2, 3)]), {1: [2], 2: [1, 3], 3: [2]})
        self.assertEqual(adjacency_lists([(0, 1), (2, 0), (0, 3)])[0], [1, 2, 3])

    def test_build_adjacency_is_indexed_by_vertex_id(self) -> None:
        adjacency = build_adjacency([[4, 2], [2, 7]])
        self.assertEqual(adjacency.vertices.tolist(), [2, 4, 7])
        self.assertEqual(adjacency.size, 8)
        self.assertEqual(adjacency.neighbors(2).tolist(), [4, 7])
        self.assertEqual(len(adjacency.neighbors(5)), 0)
        self.assertEqual(adjacency.neighbors(7).tolist(), [2])

    def test_empty_edge_list(self) -> None:
        adjacency = build_adjacency([])
        self.assertEqual(len(adjacency.vertices), 0)
        self.assertEqual(adjacency.size, 0)
        self.assertEqual(adjacency_lists([]), {})
        self.assertTrue(is_connected([]))

    def test_reachability(self) -> None:
        adjacency = build_adjacency([(0, 1), (1, 2), (3, 4)])
        mask = adjacency.reachable_from(0)
        self.assertEqual(np.flatnonzero(mask).tolist(), [0, 1, 2])
        self.assertFalse(is_connected([(0, 1), (1, 2), (3, 4)]))
        self.assertTrue(is_connected([(0, 1), (1, 2), (2, 4)]))


class ValidationTests(unittest.TestCase):
    def test_valid_edges_pass(self) -> None:
        arr = validate_edges([(0, 1), (1, 2), (0, 2)])
        self.assertEqual(arr.shape, (3, 2))

    def test_self_loop_is_rejected(self) -> None:
        with self.assertRaises(InvalidEdgeError):
            validate_edges([(0, 1), (2, 2)])

    def test_duplicate_in_either_direction_is_rejected(self) -> None:
        with self.assertRaisesRegex(InvalidEdgeError, r"Duplicate edge \(0, 1\)"):
            validate_edges([(0, 1), (1, 2), (1, 0)])

    def test_malformed_edges_are_rejected(self) -> None:
        for edges in (
            [(0, 1, 2)],
            [(0, 1), (2,)],
            [(-1, 0)],
            [("a", "b")],
            [(0.5, 1)],
            [(True, False)],
            [(0, 1), (1, True)],
            np.array([[0.0, 1.0]]),
        ):
            with self.subTest(edges=edges):
                with self.assertRaises(InvalidEdgeError):
                    validate_edges(edges)


class TreeCheckTests(unittest.TestCase):
    def test_edge_key_is_unordered(self) -> None:
        self.assertEqual(edge_key(5, 3), (3, 5))
        self.assertEqual(edge_key(3, 5), (3, 5))

    def test_disjoint_set(self) -> None:
        components = DisjointSet([1, 2, 3, 4])
        self.assertTrue(components.union(1, 2))
        self.assertTrue(components.union(3, 4))
        self.assertFalse(components.union(2, 1))
        self.assertEqual(components.component_count(), 2)
        self.assertTrue(components.union(2, 4))
        self.assertEqual(components.find(1), components.find(3))
        self.assertEqual(len(components), 4)

    def test_is_acyclic(self) -> None:
        self.assertTrue(is_acyclic([(0, 1), (1, 2), (2, 3)]))
        self.assertFalse(is_acyclic([(0, 1), (1, 2), (2, 0)]))

    def test_is_spanning_tree(self) -> None:
        vertices = [0, 1, 2, 3]
        self.assertTrue(is_spanning_tree(vertices, [(0, 1), (1, 2), (1, 3)]))
        self.assertFalse(is_spanning_tree(vertices, [(0, 1), (2, 3)]))
        self.assertFalse(is_spanning_tree(vertices, [(0, 1), (1, 2), (2, 0)]))
        self.assertFalse(is_spanning_tree(vertices, [(0, 1), (1, 2), (2, 9)]))
        self.assertTrue(is_spanning_tree([7], []))


if __name__ == "__main__":
    unittest.main()
