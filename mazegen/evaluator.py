"""Check stored maze records against their topology's graph."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Set

from .base import AbstractMazeEvaluator, PathLike
from .graph import Edge, edge_key, is_acyclic, is_spanning_tree
from .registry import TopologyRegistry, create_default_registry

logger = logging.getLogger(__name__)


@dataclass
class MazeEvaluationResult:
    maze_id: str
    is_partition: bool
    is_acyclic: bool
    is_spanning: bool
    message: str

    @property
    def is_valid(self) -> bool:
        return self.is_partition and self.is_acyclic and self.is_spanning

    def to_dict(self) -> dict:
        return {
            "maze_id": self.maze_id,
            "is_partition": self.is_partition,
            "is_acyclic": self.is_acyclic,
            "is_spanning": self.is_spanning,
            "is_valid": self.is_valid,
            "message": self.message,
        }


class MazeEvaluator(AbstractMazeEvaluator):
    """Verify that saved mazes are spanning trees of their topology's graph."""

    def __init__(
        self,
        metadata_path: PathLike,
        *,
        registry: Optional[TopologyRegistry] = None,
    ) -> None:
        super().__init__(metadata_path)
        self.registry = registry if registry is not None else create_default_registry()

    def evaluate(self, maze_id: str) -> MazeEvaluationResult:
        record = self.get_record(maze_id)
        topology = self.registry.get(record["topology"])
        desc = topology.parse_description(record["description"])

        expected = [edge_key(v, w) for v, w in topology.generate_edges(desc)]
        walls = [edge_key(int(v), int(w)) for v, w in record["walls"]]
        passages = [edge_key(int(v), int(w)) for v, w in record["passages"]]
        vertices: Set[int] = {v for edge in expected for v in edge}

        stored = walls + passages
        is_partition = len(stored) == len(expected) and set(stored) == set(expected)
        acyclic = is_acyclic(passages)
        spanning = is_spanning_tree(vertices, passages) if acyclic else False

        if not is_partition:
            message = self._partition_message(set(expected), stored)
        elif not acyclic:
            message = "Passages contain a cycle."
        elif not spanning:
            message = "Passages do not connect every cell."
        else:
            message = "Passages form a spanning tree of the maze graph."
        logger.debug("Maze %s: %s", maze_id, message)

        return MazeEvaluationResult(
            maze_id=maze_id,
            is_partition=is_partition,
            is_acyclic=acyclic,
            is_spanning=spanning,
            message=message,
        )

    # ------------------------------------------------------------------

    @staticmethod
    def _partition_message(expected: Set[Edge], stored: List[Edge]) -> str:
        unknown = [edge for edge in stored if edge not in expected]
        if unknown:
            return f"Edge {unknown[0]} is not part of the maze graph."
        if len(stored) != len(set(stored)):
            return "Walls and passages overlap or repeat an edge."
        missing = sorted(expected - set(stored))
        return f"Edge {missing[0]} is neither a wall nor a passage."


__all__ = ["MazeEvaluator", "MazeEvaluationResult"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Verify generated mazes")
    parser.add_argument("metadata", type=Path, help="Path to maze metadata JSON")
    parser.add_argument("maze_id", type=str, nargs="?", default=None, help="Maze to check (all if omitted)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    evaluator = MazeEvaluator(args.metadata)
    maze_ids = [args.maze_id] if args.maze_id else list(evaluator.records)
    results = [evaluator.evaluate(maze_id).to_dict() for maze_id in maze_ids]
    print(json.dumps(results, indent=2))


if __name__ == "__main__":
    main()
