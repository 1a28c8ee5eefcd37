"""Core wayfinding functionality."""

from .enums import FIXTURE_TYPES, NodeType
from .exceptions import (
    DataLoadingError,
    GraphOperationError,
    InvalidCoordinatesError,
    InvalidGraphError,
    InvalidNodeIdError,
    NodeNotFoundError,
    PathValidationError,
    ValidationError,
    WayfindingError,
)
from .models import GraphStatistics, WalkingPath
from .types import Coordinates, GraphProtocol, Path, Ring
from .graph import WayfindingGraph
from .routing import can_visit_neighbor, determine_node_type, is_fixture_type
from .pathfinding import PathDetails, Pathfinder, validate_path

__all__ = [
    "Coordinates",
    "DataLoadingError",
    "FIXTURE_TYPES",
    "GraphOperationError",
    "GraphProtocol",
    "GraphStatistics",
    "InvalidCoordinatesError",
    "InvalidGraphError",
    "InvalidNodeIdError",
    "NodeNotFoundError",
    "NodeType",
    "Path",
    "PathDetails",
    "PathValidationError",
    "Pathfinder",
    "Ring",
    "ValidationError",
    "WalkingPath",
    "WayfindingError",
    "WayfindingGraph",
    "can_visit_neighbor",
    "determine_node_type",
    "is_fixture_type",
    "validate_path",
]
