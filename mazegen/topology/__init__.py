"""Built-in maze topologies."""

__all__ = [
    "RectangularTopology",
    "HexagonalTopology",
]

from .rectangular import RectangularTopology
from .hexagonal import HexagonalTopology
