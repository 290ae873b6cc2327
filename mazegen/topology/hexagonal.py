"""Hexagonal topology: a disk of hex cells around the origin.

Cells use axial coordinates ``(s, t)``. A maze of radius ``r`` holds every
cell within ``r - 1`` steps of the origin, i.e. ``r`` rings counting the
center cell, so ``3*r*(r - 1) + 1`` cells in total.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np

from ..base import AbstractTopology, MazeDescription, Parameter
from ..graph import Edge, Vertex

logger = logging.getLogger(__name__)

DIRECTIONS = ((-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0))


def encode_vertex(radius: int, s: int, t: int) -> Vertex:
    return (radius + s) * (2 * radius + 1) + (radius + t)


def decode_vertex(radius: int, v: Vertex) -> Tuple[int, int]:
    q, x = divmod(v, 2 * radius + 1)
    return q - radius, x - radius


def _walk(
    radius: int,
    inner: Optional[List[Edge]],
    outer: Optional[List[Edge]],
) -> None:
    """Breadth-first traversal from the origin, one ring per iteration.

    Internal edges go to ``inner`` once each (only as ``(v, w)`` with
    ``v < w``); edges from the last ring to unseen cells beyond it go to
    ``outer``. Either list may be None when the caller does not need it.
    """

    if radius < 0:
        raise ValueError(f"Radius must be nonnegative, got {radius}")
    # Every cell up to `radius` steps out encodes inside this range.
    seen = np.zeros((2 * radius + 1) ** 2, dtype=bool)
    origin = encode_vertex(radius, 0, 0)
    seen[origin] = True
    fringe = [origin]
    for dist in range(radius):
        todo, fringe = fringe, []
        for v in todo:
            s, t = decode_vertex(radius, v)
            for ds, dt in DIRECTIONS:
                w = encode_vertex(radius, s + ds, t + dt)
                if not seen[w] and dist + 1 == radius:
                    if outer is not None:
                        outer.append((v, w))
                    continue
                if inner is not None and v < w:
                    inner.append((v, w))
                if not seen[w]:
                    seen[w] = True
                    fringe.append(w)


def hex_edges(radius: int) -> List[Edge]:
    inner: List[Edge] = []
    _walk(radius, inner, None)
    logger.debug("Hexagonal radius %d: %d internal edges", radius, len(inner))
    return inner


def hex_borders(radius: int) -> List[Edge]:
    outer: List[Edge] = []
    _walk(radius, None, outer)
    return outer


class HexagonalTopology(AbstractTopology):
    """Hexagon-shaped maze of hexagonal cells."""

    name = "hexagonal"
    label = "Hexagonal"
    parameters = {
        "radius": Parameter(label="Radius", min_value=1, max_value=100, default_value=8),
    }

    def generate_edges(self, desc: MazeDescription) -> List[Edge]:
        return hex_edges(desc["radius"])

    def generate_borders(self, desc: MazeDescription) -> List[Edge]:
        return hex_borders(desc["radius"])

    def encode_vertex(self, desc: MazeDescription, *coords: int) -> Vertex:
        s, t = coords
        return encode_vertex(desc["radius"], s, t)

    def decode_vertex(self, desc: MazeDescription, v: Vertex) -> Tuple[int, int]:
        return decode_vertex(desc["radius"], v)

    def vertex_count(self, desc: MazeDescription) -> int:
        radius = desc["radius"]
        return 3 * radius * (radius - 1) + 1 if radius > 0 else 0


__all__ = [
    "HexagonalTopology",
    "DIRECTIONS",
    "encode_vertex",
    "decode_vertex",
    "hex_edges",
    "hex_borders",
]
