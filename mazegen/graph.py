"""Vertex and edge model shared by every maze topology.

Vertices are nonnegative integers and edges are unordered pairs of distinct
vertices. Topologies encode their own coordinates into dense integer ids, so
the helpers here can keep adjacency and visited flags in flat numpy arrays
indexed by vertex id instead of dictionaries.
"""

from __future__ import annotations

import logging
import numbers
from collections import deque
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from .errors import InvalidEdgeError

logger = logging.getLogger(__name__)

Vertex = int
Edge = Tuple[Vertex, Vertex]


def edge_key(v: Vertex, w: Vertex) -> Edge:
    """Canonical form of the unordered pair ``{v, w}``."""

    return (v, w) if v <= w else (w, v)


def as_edge_array(edges: Iterable[Sequence[int]]) -> np.ndarray:
    """Convert an edge list into an ``(m, 2)`` int64 array."""

    if isinstance(edges, np.ndarray):
        rows = edges
    else:
        rows = [tuple(edge) for edge in edges]
        for edge in rows:
            if any(isinstance(x, (bool, np.bool_)) or not isinstance(x, numbers.Integral) for x in edge):
                raise InvalidEdgeError(f"Vertex ids must be integers, got edge {edge!r}")
    try:
        arr = np.asarray(rows)
    except (TypeError, ValueError) as exc:
        raise InvalidEdgeError("Edges must be pairs of integer vertex ids") from exc
    if arr.size == 0:
        return arr.astype(np.int64).reshape(0, 2)
    if arr.dtype.kind not in "iu":
        raise InvalidEdgeError(f"Vertex ids must be integers, got {arr.dtype} values")
    arr = arr.astype(np.int64, copy=False)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidEdgeError(f"Edges must be pairs of vertex ids, got array of shape {arr.shape}")
    if np.any(arr < 0):
        raise InvalidEdgeError("Vertex ids must be nonnegative")
    return arr


def validate_edges(edges: Iterable[Sequence[int]]) -> np.ndarray:
    """Reject self-loops and duplicate unordered pairs.

    Returns the edge list as an array so callers can keep working with it.
    """

    arr = as_edge_array(edges)
    if len(arr) == 0:
        return arr
    loops = np.flatnonzero(arr[:, 0] == arr[:, 1])
    if loops.size:
        v = int(arr[loops[0], 0])
        raise InvalidEdgeError(f"Self-loop on vertex {v} at edge index {int(loops[0])}")
    canonical = np.sort(arr, axis=1)
    unique, counts = np.unique(canonical, axis=0, return_counts=True)
    repeated = unique[counts > 1]
    if len(repeated):
        v, w = (int(x) for x in repeated[0])
        raise InvalidEdgeError(f"Duplicate edge ({v}, {w})")
    return arr


@dataclass(frozen=True, eq=False)
class Adjacency:
    """Compressed adjacency lists indexed by vertex id.

    The neighbors of ``v`` are ``targets[offsets[v]:offsets[v + 1]]``, in the
    order the edges appeared in the input. ``vertices`` lists, in ascending
    order, every id that occurs in at least one edge.
    """

    vertices: np.ndarray
    offsets: np.ndarray
    targets: np.ndarray

    @property
    def size(self) -> int:
        """Length of arrays indexed by vertex id (largest id + 1)."""

        return len(self.offsets) - 1

    def neighbors(self, v: Vertex) -> np.ndarray:
        return self.targets[self.offsets[v] : self.offsets[v + 1]]

    def reachable_from(self, start: Vertex) -> np.ndarray:
        """Boolean mask of the vertices reachable from ``start``."""

        seen = np.zeros(self.size, dtype=bool)
        seen[start] = True
        offsets = self.offsets.tolist()
        targets = self.targets.tolist()
        queue = deque([start])
        while queue:
            v = queue.popleft()
            for w in targets[offsets[v] : offsets[v + 1]]:
                if not seen[w]:
                    seen[w] = True
                    queue.append(w)
        return seen


def build_adjacency(edges: Iterable[Sequence[int]]) -> Adjacency:
    """Build array-backed adjacency lists from a bidirectional edge list."""

    arr = as_edge_array(edges)
    if len(arr) == 0:
        empty = np.empty(0, dtype=np.int64)
        return Adjacency(vertices=empty, offsets=np.zeros(1, dtype=np.int64), targets=empty)

    # Interleave both directions so a stable sort keeps input edge order.
    sources = arr.ravel()
    targets = arr[:, ::-1].ravel()
    counts = np.bincount(sources, minlength=int(arr.max()) + 1)
    order = np.argsort(sources, kind="stable")
    offsets = np.zeros(len(counts) + 1, dtype=np.int64)
    np.cumsum(counts, out=offsets[1:])
    adjacency = Adjacency(
        vertices=np.flatnonzero(counts),
        offsets=offsets,
        targets=targets[order],
    )
    logger.debug(
        "Built adjacency for %d vertices and %d edges", len(adjacency.vertices), len(arr)
    )
    return adjacency


def adjacency_lists(edges: Iterable[Sequence[int]]) -> Dict[Vertex, List[Vertex]]:
    """Plain dictionary view of the adjacency lists.

    >>> adjacency_lists([(1, 2), (2, 3)])
    {1: [2], 2: [1, 3], 3: [2]}
    """

    adjacency = build_adjacency(edges)
    return {int(v): adjacency.neighbors(v).tolist() for v in adjacency.vertices}


def is_connected(edges: Iterable[Sequence[int]]) -> bool:
    """Whether every vertex of the edge list is reachable from every other."""

    adjacency = build_adjacency(edges)
    if len(adjacency.vertices) == 0:
        return True
    seen = adjacency.reachable_from(int(adjacency.vertices[0]))
    return bool(np.all(seen[adjacency.vertices]))


class DisjointSet:
    """Union-find over arbitrary hashable vertex ids."""

    def __init__(self, items: Iterable[Vertex] = ()) -> None:
        self._parent: Dict[Vertex, Vertex] = {}
        for item in items:
            self._parent.setdefault(item, item)

    def __len__(self) -> int:
        return len(self._parent)

    def find(self, item: Vertex) -> Vertex:
        parent = self._parent.setdefault(item, item)
        root = item
        while parent != root:
            root = parent
            parent = self._parent[root]
        # Path compression
        while item != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, a: Vertex, b: Vertex) -> bool:
        """Merge the sets holding ``a`` and ``b``; False if already merged."""

        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return False
        self._parent[root_b] = root_a
        return True

    def component_count(self) -> int:
        return len({self.find(item) for item in list(self._parent)})


def is_acyclic(edges: Iterable[Sequence[int]]) -> bool:
    components = DisjointSet()
    return all(components.union(int(v), int(w)) for v, w in edges)


def is_spanning_tree(vertices: Iterable[Vertex], tree_edges: Iterable[Sequence[int]]) -> bool:
    """Check that ``tree_edges`` is acyclic and connects exactly ``vertices``."""

    vertex_set = {int(v) for v in vertices}
    components = DisjointSet(vertex_set)
    for v, w in tree_edges:
        if int(v) not in vertex_set or int(w) not in vertex_set:
            return False
        if not components.union(int(v), int(w)):
            return False
    return components.component_count() <= 1


__all__ = [
    "Vertex",
    "Edge",
    "Adjacency",
    "DisjointSet",
    "edge_key",
    "as_edge_array",
    "validate_edges",
    "build_adjacency",
    "adjacency_lists",
    "is_connected",
    "is_acyclic",
    "is_spanning_tree",
]
