"""Rectangular grid topology."""

from __future__ import annotations

from typing import List, Tuple

from ..base import AbstractTopology, MazeDescription, Parameter
from ..graph import Edge, Vertex


def encode_vertex(width: int, row: int, col: int) -> Vertex:
    return row * width + col


def decode_vertex(width: int, v: Vertex) -> Tuple[int, int]:
    row, col = divmod(v, width)
    return row, col


def grid_edges(width: int, height: int) -> List[Edge]:
    """Connect every cell to its bottom and right neighbors.

    Cells are visited row-major; the bottom edge of a cell precedes its right
    edge.
    """

    if width < 1 or height < 1:
        raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
    edges: List[Edge] = []
    for r in range(height):
        for c in range(width):
            v = encode_vertex(width, r, c)
            if r + 1 < height:
                edges.append((v, encode_vertex(width, r + 1, c)))
            if c + 1 < width:
                edges.append((v, encode_vertex(width, r, c + 1)))
    return edges


class RectangularTopology(AbstractTopology):
    """``height`` x ``width`` grid of square cells, id ``row * width + col``."""

    name = "rectangular"
    label = "Rectangular"
    parameters = {
        "width": Parameter(label="Width", min_value=1, max_value=1000, default_value=30),
        "height": Parameter(label="Height", min_value=1, max_value=1000, default_value=20),
    }

    def generate_edges(self, desc: MazeDescription) -> List[Edge]:
        return grid_edges(desc["width"], desc["height"])

    def encode_vertex(self, desc: MazeDescription, *coords: int) -> Vertex:
        row, col = coords
        return encode_vertex(desc["width"], row, col)

    def decode_vertex(self, desc: MazeDescription, v: Vertex) -> Tuple[int, int]:
        return decode_vertex(desc["width"], v)

    def vertex_count(self, desc: MazeDescription) -> int:
        return desc["width"] * desc["height"]


__all__ = ["RectangularTopology", "encode_vertex", "decode_vertex", "grid_edges"]
