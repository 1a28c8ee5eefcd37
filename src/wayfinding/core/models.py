"""
Graph-level data models.

Value objects produced by the graph for visualisation consumers: walking path
records carried through from the map data and the statistics snapshot.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from ..utils.validation import validate_dataclass
from .types import Coordinates

WALKING_PATH = "walking_path"


@validate_dataclass
@dataclass(frozen=True)
class WalkingPath:
    """
    A drawable walking path between two nodes.

    Attributes:
        source (str): Id of the node the line starts at
        target (str): Id of the node the line ends at
        coordinates (List[Coordinates]): Line geometry
        path_type (str): Kind of line, always ``walking_path`` for map data
    """

    source: str
    target: str
    coordinates: List[Coordinates] = field(default_factory=list)
    path_type: str = WALKING_PATH

    def __post_init__(self):
        if not self.source.strip() or not self.target.strip():
            raise ValueError("walking path endpoints must be non-empty strings")


@validate_dataclass
@dataclass(frozen=True)
class GraphStatistics:
    """
    Snapshot of graph size.

    Attributes:
        total_nodes (int): Number of nodes
        node_types (Dict[str, int]): Node count per type value
        total_edges (int): Number of connected node pairs, each bidirectional
            edge counted once
        walking_paths (int): Number of stored walking paths
        fixture_polygons (int): Number of stored fixture polygons
    """

    total_nodes: int
    node_types: Dict[str, int]
    total_edges: int
    walking_paths: int
    fixture_polygons: int

    def __post_init__(self):
        counts = (self.total_nodes, self.total_edges, self.walking_paths, self.fixture_polygons)
        if any(count < 0 for count in counts):
            raise ValueError("statistics counts cannot be negative")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
