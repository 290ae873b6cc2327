"""Explicit registry of the maze topologies available to a caller."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from .base import AbstractTopology, MazeDescription
from .errors import UnknownTopologyError
from .topology import HexagonalTopology, RectangularTopology


class TopologyRegistry:
    """Ordered mapping from topology name to topology.

    Registries are built by the caller and passed to whatever needs them;
    there is no process-wide instance.
    """

    def __init__(self, topologies: Optional[List[AbstractTopology]] = None) -> None:
        self._topologies: Dict[str, AbstractTopology] = {}
        for topology in topologies or ():
            self.register(topology)

    def register(self, topology: AbstractTopology, *, name: Optional[str] = None) -> None:
        key = name or topology.name
        if key in self._topologies:
            raise ValueError(f"Topology '{key}' is already registered")
        self._topologies[key] = topology

    def get(self, name: str) -> AbstractTopology:
        try:
            return self._topologies[name]
        except KeyError as exc:
            known = ", ".join(self._topologies) or "none"
            raise UnknownTopologyError(f"Unknown maze type '{name}' (known: {known})") from exc

    def __getitem__(self, name: str) -> AbstractTopology:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._topologies

    def __iter__(self) -> Iterator[str]:
        return iter(self._topologies)

    def __len__(self) -> int:
        return len(self._topologies)

    def names(self) -> List[str]:
        return list(self._topologies)

    @property
    def default_name(self) -> str:
        """Name of the first registered topology."""

        if not self._topologies:
            raise UnknownTopologyError("No maze types are registered")
        return next(iter(self._topologies))

    def default_descriptions(self) -> Dict[str, MazeDescription]:
        return {name: topology.default_description() for name, topology in self._topologies.items()}


def create_default_registry() -> TopologyRegistry:
    """Fresh registry holding the built-in rectangular and hexagonal topologies."""

    return TopologyRegistry([RectangularTopology(), HexagonalTopology()])


__all__ = ["TopologyRegistry", "create_default_registry"]
