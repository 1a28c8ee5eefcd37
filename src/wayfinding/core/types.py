"""
Core type definitions and protocols.

This module provides type aliases and the read-only graph protocol consumed by
the path finding code, so that search and validation depend only on the queries
they actually make.
"""

from typing import List, Optional, Protocol, Sequence, Set, Tuple

from .enums import NodeType

# (longitude, latitude)
Coordinates = Tuple[float, float]

# Closed polygon ring of coordinate pairs
Ring = List[Coordinates]

# Ordered node ids from source to target
Path = List[str]


class GraphProtocol(Protocol):
    """Protocol defining the read operations path finding relies on."""

    def has_node(self, node_id: str) -> bool:
        """Check whether a node exists."""
        ...

    def get_neighbors(self, node_id: str) -> List[str]:
        """Get outgoing neighbors of a node in enumeration order."""
        ...

    def get_node_type(self, node_id: str) -> NodeType:
        """Get the type tag of a node."""
        ...

    def get_node_coordinates(self, node_id: str) -> Optional[Coordinates]:
        """Get the display coordinates of a node."""
        ...

    def get_nodes(self) -> Set[str]:
        """Get all node ids."""
        ...


def as_coordinates(value: Sequence[float]) -> Coordinates:
    """Convert a validated two-element numeric sequence to a coordinate tuple."""
    return (float(value[0]), float(value[1]))
