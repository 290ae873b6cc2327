"""Maze generation from uniform random spanning trees."""

__all__ = [
    "AbstractTopology",
    "AbstractMazeGenerator",
    "AbstractMazeEvaluator",
    "Parameter",
    "MazeDescription",
    "RectangularTopology",
    "HexagonalTopology",
    "TopologyRegistry",
    "create_default_registry",
    "SpanningTreeResult",
    "generate_uniform_spanning_tree",
    "count_spanning_trees",
    "MazeGenerator",
    "MazeRecord",
    "generate_maze",
    "MazeEvaluator",
    "MazeEvaluationResult",
    "InvalidEdgeError",
    "DisconnectedGraphError",
    "InvalidParameterError",
    "UnknownTopologyError",
]

from .base import (
    AbstractMazeEvaluator,
    AbstractMazeGenerator,
    AbstractTopology,
    MazeDescription,
    Parameter,
)
from .errors import (
    DisconnectedGraphError,
    InvalidEdgeError,
    InvalidParameterError,
    UnknownTopologyError,
)
from .topology import HexagonalTopology, RectangularTopology
from .registry import TopologyRegistry, create_default_registry
from .wilson import SpanningTreeResult, count_spanning_trees, generate_uniform_spanning_tree
from .maze import MazeGenerator, MazeRecord, generate_maze
from .evaluator import MazeEvaluator, MazeEvaluationResult
