"""
Data models for path finding.

This module provides the value objects returned by the path finding package:
- NodeDetails: id, type and coordinates of one path node
- PathEndpoint / PathSummary: start, end and waypoint count of a path
- PathDetails: a path enriched for display
- SearchMetrics: counters describing one search

Every model converts to plain data with ``to_dict()``, which is what the UI and
the CLI's JSON output consume.

Example:
    >>> details = pathfinder.get_path_details(["di_box_1", "wp_001", "col_cab_2"])
    >>> details.summary.waypoints_used
    1
    >>> details.to_dict()["summary"]["start"]
    {'id': 'di_box_1', 'type': 'di_box'}
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ...utils.validation import validate_dataclass
from ..enums import NodeType
from ..types import Coordinates


@validate_dataclass
@dataclass(frozen=True)
class NodeDetails:
    """
    Display information about one node of a path.

    Attributes:
        node_id: Node identifier
        node_type: Node type tag
        coordinates: Display coordinates, if known
    """

    node_id: str
    node_type: NodeType
    coordinates: Optional[Coordinates] = None

    def __post_init__(self):
        if not self.node_id:
            raise ValueError("node_id must be a non-empty string")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.node_id,
            "type": self.node_type.value,
            "coordinates": list(self.coordinates) if self.coordinates is not None else None,
        }


@validate_dataclass
@dataclass(frozen=True)
class PathEndpoint:
    """Id and type of the first or last node of a path."""

    node_id: str
    node_type: NodeType

    def __post_init__(self):
        if not self.node_id:
            raise ValueError("node_id must be a non-empty string")

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.node_id, "type": self.node_type.value}


@validate_dataclass
@dataclass(frozen=True)
class PathSummary:
    """
    Summary of a path.

    Attributes:
        start: First node of the path
        end: Last node of the path
        waypoints_used: Number of path nodes that are waypoints, endpoints included
    """

    start: PathEndpoint
    end: PathEndpoint
    waypoints_used: int

    def __post_init__(self):
        if self.waypoints_used < 0:
            raise ValueError("waypoints_used cannot be negative")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "waypoints_used": self.waypoints_used,
        }


@validate_dataclass
@dataclass(frozen=True)
class PathDetails:
    """
    A path enriched with per-node information and a summary.

    Attributes:
        path: Node ids from source to target
        nodes: Details of each node, in path order
        summary: Start, end and waypoint count
    """

    path: List[str]
    nodes: List[NodeDetails]
    summary: PathSummary

    def __post_init__(self):
        if not self.path:
            raise ValueError("path cannot be empty")
        if len(self.nodes) != len(self.path):
            raise ValueError("nodes must describe every path element")

    @property
    def length(self) -> int:
        """Number of nodes in the path."""
        return len(self.path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": list(self.path),
            "length": self.length,
            "nodes": [node.to_dict() for node in self.nodes],
            "summary": self.summary.to_dict(),
        }


@dataclass
class SearchMetrics:
    """
    What one breadth-first search did, filled in as the search runs.

    ``iterations`` counts dequeued nodes and ``nodes_visited`` counts nodes
    ever enqueued, the source included. A search that stopped at max_depth
    with nodes still queued is ``truncated``; one that ran out of nodes is not.
    ``max_memory_used`` is only set when the pathfinder has a memory ceiling.
    Timestamps come from time.time(); end_time stays 0.0 until the search ends.

    Example:
        >>> path, metrics = pathfinder.find_path_with_metrics("wp_001", "wp_003")
        >>> metrics.found, metrics.iterations
        (True, 2)
    """

    operation: str
    start_time: float
    end_time: float = 0.0
    iterations: int = 0
    nodes_visited: int = 0
    path_length: Optional[int] = None
    truncated: bool = False
    max_memory_used: Optional[int] = None

    def __post_init__(self):
        if not (isinstance(self.operation, str) and self.operation.strip()):
            raise ValueError("operation must name the search, got an empty value")
        if isinstance(self.start_time, bool) or not isinstance(self.start_time, (int, float)):
            raise TypeError(f"start_time must be a timestamp, got {type(self.start_time).__name__}")

    @property
    def found(self) -> bool:
        return self.path_length is not None

    @property
    def duration(self) -> float:
        """Wall time in milliseconds, 0.0 while the search is running."""
        if not self.end_time:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def to_dict(self) -> Dict[str, Any]:
        counters = {
            name: getattr(self, name)
            for name in ("iterations", "nodes_visited", "path_length", "truncated", "max_memory_used")
        }
        return {"operation": self.operation, "duration_ms": self.duration, "found": self.found, **counters}
