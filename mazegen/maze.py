"""Maze assembly: topology edges in, walls and passages out."""

from __future__ import annotations

import argparse
import json
import logging
import random
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional

from .base import AbstractMazeGenerator, AbstractTopology, MazeDescription, PathLike
from .errors import InvalidParameterError
from .graph import Edge
from .registry import TopologyRegistry, create_default_registry
from .wilson import SpanningTreeResult, generate_uniform_spanning_tree

logger = logging.getLogger(__name__)


def generate_maze(
    topology: AbstractTopology,
    desc: MazeDescription,
    rng: Optional[random.Random] = None,
    *,
    check_connectivity: bool = False,
) -> SpanningTreeResult:
    """Carve a maze: a uniform spanning tree of the topology's graph.

    ``desc`` must already be validated against the topology's parameters.
    """

    edges = topology.generate_edges(desc)
    logger.debug("%s maze %s: %d candidate walls", topology.label, desc, len(edges))
    return generate_uniform_spanning_tree(edges, rng, check_connectivity=check_connectivity)


@dataclass
class MazeRecord:
    id: str
    topology: str
    description: MazeDescription
    walls: List[Edge]
    passages: List[Edge]
    borders: List[Edge] = field(default_factory=list)
    root: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "topology": self.topology,
            "description": dict(self.description),
            "root": self.root,
            "walls": [list(edge) for edge in self.walls],
            "passages": [list(edge) for edge in self.passages],
            "borders": [list(edge) for edge in self.borders],
        }


class MazeGenerator(AbstractMazeGenerator[MazeRecord]):
    """Generate maze records from the topologies of a registry."""

    def __init__(
        self,
        registry: Optional[TopologyRegistry] = None,
        *,
        seed: Optional[int] = None,
        check_connectivity: bool = False,
    ) -> None:
        self.registry = registry if registry is not None else create_default_registry()
        self.check_connectivity = check_connectivity
        self._rng = random.Random(seed)

    def create_maze(
        self,
        topology_name: Optional[str] = None,
        desc: Optional[Mapping[str, Any]] = None,
        *,
        maze_id: Optional[str] = None,
    ) -> MazeRecord:
        name = topology_name or self.registry.default_name
        topology = self.registry.get(name)
        parsed = topology.parse_description(desc or {})
        result = generate_maze(
            topology, parsed, self._rng, check_connectivity=self.check_connectivity
        )
        return MazeRecord(
            id=maze_id or str(uuid.uuid4()),
            topology=name,
            description=parsed,
            walls=result.walls,
            passages=result.passages,
            borders=topology.generate_borders(parsed),
            root=result.root,
        )

    def generate_dataset(
        self,
        count: int,
        topology_name: Optional[str] = None,
        desc: Optional[Mapping[str, Any]] = None,
        *,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
    ) -> List[MazeRecord]:
        """Generate ``count`` mazes of one topology, all from the same description."""

        return super().generate_dataset(
            count, topology_name, desc, metadata_path=metadata_path, append=append
        )


__all__ = ["MazeGenerator", "MazeRecord", "generate_maze"]


def _build_parser(registry: TopologyRegistry) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate mazes from uniform random spanning trees")
    parser.add_argument("count", type=int, nargs="?", default=1, help="Number of mazes to generate")
    parser.add_argument(
        "--type",
        dest="topology",
        choices=registry.names(),
        default=registry.default_name,
        help="Maze type",
    )
    group = parser.add_argument_group("maze parameters")
    added = set()
    for name in registry:
        topology = registry.get(name)
        for param_name, parameter in topology.parameters.items():
            if param_name in added:
                continue
            added.add(param_name)
            group.add_argument(
                f"--{param_name}",
                default=None,
                help=(
                    f"{parameter.label} of {topology.label.lower()} mazes, "
                    f"{parameter.min_value}-{parameter.max_value} (default {parameter.default_value})"
                ),
            )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", type=Path, default=None, help="JSON file to write (stdout if omitted)")
    parser.add_argument("--no-append", action="store_true", help="Overwrite the output file instead of appending")
    parser.add_argument(
        "--check-connectivity",
        action="store_true",
        help="Fail on disconnected graphs instead of assuming connectivity",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    registry = create_default_registry()
    parser = _build_parser(registry)
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.count < 0:
        parser.error("count must be nonnegative")

    topology = registry.get(args.topology)
    values = {}
    param_names = dict.fromkeys(p for name in registry for p in registry.get(name).parameters)
    for param_name in param_names:
        raw = getattr(args, param_name)
        if raw is None:
            continue
        if param_name in topology.parameters:
            values[param_name] = raw
        else:
            logger.warning("Ignoring --%s, not a parameter of %s mazes", param_name, args.topology)
    try:
        desc = topology.parse_description(values)
    except InvalidParameterError as exc:
        parser.error(str(exc))

    generator = MazeGenerator(registry, seed=args.seed, check_connectivity=args.check_connectivity)
    records = generator.generate_dataset(
        args.count,
        args.topology,
        desc,
        metadata_path=args.output,
        append=not args.no_append,
    )
    if args.output is None:
        print(json.dumps([record.to_dict() for record in records], indent=2))
    else:
        logger.info("Wrote %d %s mazes to %s", len(records), args.topology, args.output)


if __name__ == "__main__":
    main()
