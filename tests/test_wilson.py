import random
import unittest
from collections import Counter

import numpy as np
from scipy.stats import chisquare

from mazegen.errors import DisconnectedGraphError, InvalidEdgeError
from mazegen.graph import edge_key, is_spanning_tree
from mazegen.topology import HexagonalTopology, RectangularTopology
from mazegen.wilson import SpanningTreeResult, count_spanning_trees, generate_uniform_spanning_tree

FOUR_CYCLE = [(0, 1), (1, 2), (2, 3), (3, 0)]
DIAMOND = [(0, 1), (0, 2), (1, 2), (1, 3), (2, 3)]
K4 = [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]


def _vertices(edges):
    return {v for edge in edges for v in edge}


class SpanningTreeTests(unittest.TestCase):
    def assertSpanningTree(self, edges, result: SpanningTreeResult) -> None:
        n = len(_vertices(edges))
        self.assertEqual(len(result.passages), n - 1)
        self.assertEqual(len(result.walls), len(edges) - n + 1)
        self.assertEqual(sorted(result.walls + result.passages), sorted(tuple(e) for e in edges))
        self.assertTrue(is_spanning_tree(_vertices(edges), result.passages))
        self.assertIn(result.root, _vertices(edges))

    def test_single_edge_is_always_a_passage(self) -> None:
        rng = random.Random(7)
        for _ in range(20):
            walls, passages = generate_uniform_spanning_tree([(0, 1)], rng)
            self.assertEqual(walls, [])
            self.assertEqual(passages, [(0, 1)])

    def test_four_cycle_loses_one_edge(self) -> None:
        result = generate_uniform_spanning_tree(FOUR_CYCLE, random.Random(1))
        self.assertEqual(len(result.passages), 3)
        self.assertEqual(len(result.walls), 1)
        self.assertSpanningTree(FOUR_CYCLE, result)

    def test_grids_produce_spanning_trees(self) -> None:
        rng = random.Random(2024)
        for desc in ({"width": 10, "height": 7}, {"width": 1, "height": 9}, {"width": 25, "height": 25}):
            with self.subTest(desc=desc):
                edges = RectangularTopology().generate_edges(desc)
                self.assertSpanningTree(edges, generate_uniform_spanning_tree(edges, rng))

    def test_hexagons_produce_spanning_trees(self) -> None:
        rng = random.Random(99)
        for radius in (2, 5, 12):
            with self.subTest(radius=radius):
                edges = HexagonalTopology().generate_edges({"radius": radius})
                self.assertSpanningTree(edges, generate_uniform_spanning_tree(edges, rng))

    def test_sparse_vertex_ids(self) -> None:
        edges = [(10, 500), (500, 42), (42, 10), (42, 7)]
        self.assertSpanningTree(edges, generate_uniform_spanning_tree(edges, random.Random(3)))

    def test_partition_keeps_input_order(self) -> None:
        edges = RectangularTopology().generate_edges({"width": 6, "height": 6})
        result = generate_uniform_spanning_tree(edges, random.Random(5))
        position = {edge: i for i, edge in enumerate(edges)}
        self.assertEqual(result.walls, sorted(result.walls, key=position.__getitem__))
        self.assertEqual(result.passages, sorted(result.passages, key=position.__getitem__))

    def test_list_edges_come_back_as_tuples(self) -> None:
        walls, passages = generate_uniform_spanning_tree([[0, 1], [1, 2]], random.Random(0))
        self.assertEqual(walls, [])
        self.assertEqual(passages, [(0, 1), (1, 2)])

    def test_empty_graph(self) -> None:
        result = generate_uniform_spanning_tree([], random.Random(0))
        self.assertEqual(result.walls, [])
        self.assertEqual(result.passages, [])
        self.assertIsNone(result.root)

    def test_single_cell_maze_is_empty(self) -> None:
        edges = RectangularTopology().generate_edges({"width": 1, "height": 1})
        walls, passages = generate_uniform_spanning_tree(edges)
        self.assertEqual((walls, passages), ([], []))

    def test_seeded_runs_are_reproducible(self) -> None:
        edges = HexagonalTopology().generate_edges({"radius": 6})
        first = generate_uniform_spanning_tree(edges, random.Random(1234))
        second = generate_uniform_spanning_tree(edges, random.Random(1234))
        self.assertEqual(first, second)

    def test_default_random_source(self) -> None:
        result = generate_uniform_spanning_tree(K4)
        self.assertSpanningTree(K4, result)

    def test_to_dict(self) -> None:
        result = generate_uniform_spanning_tree([(0, 1)], random.Random(0))
        self.assertEqual(result.to_dict()["passages"], [[0, 1]])
        self.assertEqual(result.to_dict()["walls"], [])


class PreconditionTests(unittest.TestCase):
    def test_disconnected_graph_fails_fast_when_checked(self) -> None:
        with self.assertRaisesRegex(DisconnectedGraphError, "disconnected"):
            generate_uniform_spanning_tree([(0, 1), (2, 3)], random.Random(0), check_connectivity=True)

    def test_duplicate_edges_fail_when_checked(self) -> None:
        with self.assertRaises(InvalidEdgeError):
            generate_uniform_spanning_tree([(0, 1), (1, 0)], check_connectivity=True)

    def test_self_loops_fail_when_checked(self) -> None:
        with self.assertRaises(InvalidEdgeError):
            generate_uniform_spanning_tree([(0, 1), (1, 1)], check_connectivity=True)

    def test_fractional_ids_are_not_truncated(self) -> None:
        with self.assertRaises(InvalidEdgeError):
            generate_uniform_spanning_tree([(0.7, 1), (1, 2.9)], random.Random(0), check_connectivity=True)
        with self.assertRaises(InvalidEdgeError):
            generate_uniform_spanning_tree([(0.7, 1), (1, 2.9)], random.Random(0))

    def test_numpy_integer_ids_are_accepted(self) -> None:
        edges = [(np.int32(0), np.int64(1)), (np.uint8(1), 2)]
        _, passages = generate_uniform_spanning_tree(edges, random.Random(0), check_connectivity=True)
        self.assertEqual(passages, [(0, 1), (1, 2)])

    def test_negative_ids_are_always_rejected(self) -> None:
        with self.assertRaises(InvalidEdgeError):
            generate_uniform_spanning_tree([(-1, 0)])


class TreeCountTests(unittest.TestCase):
    def test_known_counts(self) -> None:
        self.assertEqual(count_spanning_trees(FOUR_CYCLE), 4)
        self.assertEqual(count_spanning_trees(DIAMOND), 8)
        self.assertEqual(count_spanning_trees(K4), 16)
        self.assertEqual(count_spanning_trees([(0, 1)]), 1)
        # 3x3 grid graph
        self.assertEqual(count_spanning_trees(RectangularTopology().generate_edges({"width": 3, "height": 3})), 192)


class UniformityTests(unittest.TestCase):
    trials = 10_000

    def _tree_frequencies(self, edges, seed: int) -> Counter:
        rng = random.Random(seed)
        counts: Counter = Counter()
        for _ in range(self.trials):
            passages = generate_uniform_spanning_tree(edges, rng).passages
            counts[frozenset(edge_key(v, w) for v, w in passages)] += 1
        return counts

    def assertUniform(self, edges, seed: int) -> None:
        counts = self._tree_frequencies(edges, seed)
        self.assertEqual(len(counts), count_spanning_trees(edges))
        for tree in counts:
            self.assertTrue(is_spanning_tree(_vertices(edges), tree))
        _, p_value = chisquare(list(counts.values()))
        self.assertGreater(p_value, 1e-4)

    def test_four_cycle(self) -> None:
        self.assertUniform(FOUR_CYCLE, seed=11)

    def test_diamond(self) -> None:
        # Vertices of unequal degree.
        self.assertUniform(DIAMOND, seed=12)

    def test_complete_graph_on_four_vertices(self) -> None:
        self.assertUniform(K4, seed=13)


if __name__ == "__main__":
    unittest.main()
