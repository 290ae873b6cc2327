"""Uniform spanning trees via Wilson's algorithm.

Wilson's algorithm grows a tree from a random root by attaching one
loop-erased random walk at a time. Each walk records, for every vertex it
passes, only the latest step taken; replaying those steps from the start
vertex follows the walk with its loops erased. The resulting tree is drawn
uniformly from all spanning trees of the graph.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence

import numpy as np

from .errors import DisconnectedGraphError
from .graph import Edge, Vertex, as_edge_array, build_adjacency, validate_edges

logger = logging.getLogger(__name__)


@dataclass
class SpanningTreeResult:
    """Partition of an edge list into walls (non-tree) and passages (tree).

    Both lists keep the order of the input edge list. Unpacks as
    ``walls, passages``.
    """

    walls: List[Edge] = field(default_factory=list)
    passages: List[Edge] = field(default_factory=list)
    root: Optional[Vertex] = None

    def __iter__(self) -> Iterator[List[Edge]]:
        yield self.walls
        yield self.passages

    def to_dict(self) -> dict:
        return {
            "walls": [list(edge) for edge in self.walls],
            "passages": [list(edge) for edge in self.passages],
            "root": self.root,
        }


def generate_uniform_spanning_tree(
    edges: Iterable[Sequence[int]],
    rng: Optional[random.Random] = None,
    *,
    check_connectivity: bool = False,
) -> SpanningTreeResult:
    """Pick a spanning tree of the graph uniformly at random.

    ``edges`` must describe a connected graph without self-loops or duplicate
    edges. A disconnected graph is a precondition violation: a walk started in
    a component without the root never reaches the tree and the call does not
    return. Pass ``check_connectivity=True`` to validate the edge list and
    raise :class:`DisconnectedGraphError` up front instead.

    ``rng`` supplies every random choice; only ``rng.randrange`` is called, so
    a seeded ``random.Random`` gives reproducible trees.
    """

    arr = validate_edges(edges) if check_connectivity else as_edge_array(edges)
    if len(arr) == 0:
        return SpanningTreeResult()

    adjacency = build_adjacency(arr)
    vertices = adjacency.vertices.tolist()
    if check_connectivity:
        seen = adjacency.reachable_from(vertices[0])
        unreachable = adjacency.vertices[~seen[adjacency.vertices]]
        if len(unreachable):
            raise DisconnectedGraphError(
                f"Graph is disconnected: {len(unreachable)} of {len(vertices)} vertices "
                f"are unreachable from vertex {vertices[0]} (e.g. vertex {int(unreachable[0])})"
            )

    if rng is None:
        rng = random.Random()
    offsets = adjacency.offsets.tolist()
    targets = adjacency.targets.tolist()
    successor = [-1] * adjacency.size
    included = [False] * adjacency.size

    root = vertices[rng.randrange(len(vertices))]
    included[root] = True

    steps = 0
    for v in vertices:
        # Random walk until the tree is hit; later steps overwrite earlier ones.
        w = v
        while not included[w]:
            start = offsets[w]
            w_next = targets[start + rng.randrange(offsets[w + 1] - start)]
            successor[w] = w_next
            w = w_next
            steps += 1
        # Replay the loop-erased path into the tree.
        w = v
        while not included[w]:
            included[w] = True
            w = successor[w]

    succ = np.asarray(successor, dtype=np.int64)
    sources, sinks = arr[:, 0], arr[:, 1]
    in_tree = (succ[sources] == sinks) | (succ[sinks] == sources)

    result = SpanningTreeResult(root=root)
    for (v, w), tree_edge in zip(arr.tolist(), in_tree.tolist()):
        if tree_edge:
            result.passages.append((v, w))
        else:
            result.walls.append((v, w))
    logger.debug(
        "Spanning tree over %d vertices rooted at %d: %d passages, %d walls, %d walk steps",
        len(vertices),
        root,
        len(result.passages),
        len(result.walls),
        steps,
    )
    return result


def count_spanning_trees(edges: Iterable[Sequence[int]]) -> int:
    """Number of spanning trees, by Kirchhoff's matrix-tree theorem.

    Uses a floating point determinant, so it is exact only for small graphs.
    """

    arr = as_edge_array(edges)
    if len(arr) == 0:
        return 1
    vertices, compact = np.unique(arr, return_inverse=True)
    compact = compact.reshape(arr.shape)
    n = len(vertices)
    laplacian = np.zeros((n, n), dtype=np.float64)
    np.add.at(laplacian, (compact[:, 0], compact[:, 1]), -1.0)
    np.add.at(laplacian, (compact[:, 1], compact[:, 0]), -1.0)
    laplacian[np.diag_indices(n)] = -laplacian.sum(axis=1)
    return int(round(np.linalg.det(laplacian[1:, 1:]))) if n > 1 else 1


__all__ = [
    "SpanningTreeResult",
    "generate_uniform_spanning_tree",
    "count_spanning_trees",
]
