"""Abstract interfaces for maze topologies, generators and evaluators."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, Tuple, TypeVar, Union

from .errors import InvalidParameterError
from .graph import Edge, Vertex

MazeDescription = Dict[str, int]
PathLike = Union[str, Path]
RecordT = TypeVar("RecordT")


@dataclass(frozen=True)
class Parameter:
    """Bounds and default for one integer maze parameter."""

    label: str
    min_value: int
    max_value: int
    default_value: int

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "minValue": self.min_value,
            "maxValue": self.max_value,
            "defaultValue": self.default_value,
        }

    def parse(self, name: str, raw: Any) -> int:
        """Convert ``raw`` to an int within bounds or raise InvalidParameterError."""

        value = None
        if isinstance(raw, int) and not isinstance(raw, bool):
            value = raw
        elif isinstance(raw, str):
            try:
                value = int(raw.strip(), 10)
            except ValueError:
                pass
        if value is None or not self.min_value <= value <= self.max_value:
            raise InvalidParameterError(
                name,
                raw,
                f'Invalid {name}: "{raw}". Value must be an integer between '
                f"{self.min_value} and {self.max_value}.",
            )
        return value


class AbstractTopology(ABC):
    """Base class for the graph shapes mazes can be carved from.

    A topology turns a :data:`MazeDescription` into the edge list of a
    connected graph. Generators assume the description has already been
    validated (see :meth:`parse_description`); out-of-bounds values are the
    caller's responsibility.
    """

    name: str
    label: str
    parameters: Mapping[str, Parameter]

    @abstractmethod
    def generate_edges(self, desc: MazeDescription) -> List[Edge]:
        """Every internal edge of the topology, without duplicates."""

    def generate_borders(self, desc: MazeDescription) -> List[Edge]:
        """Edges from rim cells to cells outside the maze, for drawing only."""

        return []

    @abstractmethod
    def encode_vertex(self, desc: MazeDescription, *coords: int) -> Vertex:
        """Map topology coordinates to a vertex id."""

    @abstractmethod
    def decode_vertex(self, desc: MazeDescription, v: Vertex) -> Tuple[int, ...]:
        """Inverse of :meth:`encode_vertex`."""

    @abstractmethod
    def vertex_count(self, desc: MazeDescription) -> int:
        """Number of cells in the maze described by ``desc``."""

    def default_description(self) -> MazeDescription:
        return {name: parameter.default_value for name, parameter in self.parameters.items()}

    def parse_description(self, values: Mapping[str, Any]) -> MazeDescription:
        """Validate raw parameter values, filling omitted ones with defaults."""

        unknown = sorted(set(values) - set(self.parameters))
        if unknown:
            raise InvalidParameterError(
                unknown[0],
                values[unknown[0]],
                f"Unknown parameter for {self.label.lower()} mazes: {unknown[0]}",
            )
        desc: MazeDescription = {}
        for name, parameter in self.parameters.items():
            raw = values.get(name)
            desc[name] = parameter.default_value if raw is None else parameter.parse(name, raw)
        return desc

    def describe(self) -> Dict[str, Any]:
        """Form-builder view of the topology: label plus parameter bounds."""

        return {
            "label": self.label,
            "parameters": {name: parameter.to_dict() for name, parameter in self.parameters.items()},
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class AbstractMazeGenerator(ABC, Generic[RecordT]):
    """Base class for builders that emit batches of maze records."""

    @abstractmethod
    def create_maze(self, *args, **kwargs) -> RecordT:
        """Generate a single maze record."""

    def generate_dataset(
        self,
        count: int,
        *args,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
        **kwargs,
    ) -> List[RecordT]:
        """Generate ``count`` mazes and optionally persist them as JSON.

        Extra arguments are forwarded to :meth:`create_maze` for every record.
        """

        records = [self.create_maze(*args, **kwargs) for _ in range(count)]
        if metadata_path is not None:
            self.write_metadata(records, metadata_path, append=append)
        return records

    def write_metadata(
        self,
        records: Iterable[RecordT],
        metadata_path: PathLike,
        *,
        append: bool = True,
    ) -> None:
        """Store records as one JSON list; with ``append`` the file's list grows."""

        path = Path(metadata_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        stored: List[Dict[str, Any]] = load_metadata(path) if append and path.exists() else []
        stored.extend(self.record_to_dict(record) for record in records)
        path.write_text(json.dumps(stored, indent=2), encoding="utf-8")

    def record_to_dict(self, record: RecordT) -> Dict[str, Any]:
        if hasattr(record, "to_dict"):
            return getattr(record, "to_dict")()
        raise TypeError(
            "Maze record must implement to_dict() or override record_to_dict() in the generator."
        )


class AbstractMazeEvaluator(ABC):
    """Base class for checks run over a saved maze metadata file."""

    def __init__(self, metadata_path: PathLike) -> None:
        self.metadata_path = Path(metadata_path)
        if not self.metadata_path.exists():
            raise FileNotFoundError(f"Metadata file not found: {self.metadata_path}")
        self._records: Dict[str, Dict[str, Any]] = {}
        for record in load_metadata(self.metadata_path):
            if not record.get("id"):
                raise ValueError(f"Every maze record in {self.metadata_path} needs an 'id'")
            self._records[str(record["id"])] = record

    @property
    def records(self) -> Dict[str, Dict[str, Any]]:
        """Saved records keyed by maze id, in file order."""

        return self._records

    def get_record(self, maze_id: str) -> Dict[str, Any]:
        if maze_id not in self._records:
            raise KeyError(f"Maze id '{maze_id}' not found in {self.metadata_path}")
        return self._records[maze_id]

    @abstractmethod
    def evaluate(self, maze_id: str, *args, **kwargs):
        """Check the stored maze with the given id."""


def load_metadata(path: PathLike) -> List[Dict[str, Any]]:
    """Read a maze metadata file, which must hold a JSON list of records."""

    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"Maze metadata in {path} must be a list of records")
    return payload


__all__ = [
    "AbstractTopology",
    "AbstractMazeGenerator",
    "AbstractMazeEvaluator",
    "MazeDescription",
    "Parameter",
    "PathLike",
    "load_metadata",
]
