"""Exceptions raised by the maze generation toolkit."""

from __future__ import annotations


class InvalidEdgeError(ValueError):
    """An edge list contains a malformed pair, a self-loop or a duplicate."""


class DisconnectedGraphError(ValueError):
    """The spanning tree engine was handed a graph with several components."""


class InvalidParameterError(ValueError):
    """A maze description value lies outside its declared bounds."""

    def __init__(self, name: str, value: object, message: str) -> None:
        super().__init__(message)
        self.name = name
        self.value = value


class UnknownTopologyError(KeyError):
    """No topology is registered under the requested name."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


__all__ = [
    "InvalidEdgeError",
    "DisconnectedGraphError",
    "InvalidParameterError",
    "UnknownTopologyError",
]
