"""
Wayfinding graph data structure with an adjacency list representation.

This module provides the WayfindingGraph class that holds the indoor navigation
network: node identities, a type tag per node, optional display coordinates and an
adjacency structure. Edges are bidirectional by default and may be added one way.

Neighbor sets are insertion ordered, so neighbor enumeration, and with it the
tie-breaking of breadth-first search, is deterministic for a given build order.

The graph is built incrementally by a single writer (usually the GeoJSON graph
builder) and is then shared read-only; ``freeze()`` marks that hand-off and makes
any further mutation an error.
"""

import logging
import math
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Dict, List, Optional, Sequence, Set, Union

from ..utils.validation import CustomRule, RequiredRule, TypeRule, first_failure
from .enums import NodeType
from .exceptions import (
    GraphOperationError,
    InvalidCoordinatesError,
    InvalidNodeIdError,
    NodeNotFoundError,
    ValidationError,
)
from .models import GraphStatistics, WalkingPath
from .types import Coordinates, Ring, as_coordinates

logger = logging.getLogger(__name__)


def _is_real(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


NODE_ID_RULES = [
    TypeRule(str, "Node ID must be a non-empty string"),
    RequiredRule("Node ID must be a non-empty string"),
]

COORDINATE_RULES = [
    TypeRule((list, tuple), "Coordinates must be a [longitude, latitude] pair"),
    CustomRule(lambda v: len(v) == 2, "Coordinates must contain exactly two values"),
    CustomRule(lambda v: all(_is_real(c) for c in v), "Coordinates must be finite numbers"),
]


@dataclass
class GraphState:
    """Encapsulates the state of a graph."""

    # Node id -> ordered neighbor set (dict keys keep insertion order)
    adjacency: Dict[str, Dict[str, None]] = field(default_factory=dict)
    node_types: Dict[str, NodeType] = field(default_factory=dict)
    node_coordinates: Dict[str, Coordinates] = field(default_factory=dict)
    fixture_polygons: Dict[str, Ring] = field(default_factory=dict)
    walking_paths: List[WalkingPath] = field(default_factory=list)


class WayfindingGraph:
    """
    Indoor navigation graph of waypoints and fixtures.

    Attributes:
        _state (GraphState): Internal state of the graph
        _state_lock (RLock): Lock for thread-safe state access
        _frozen (bool): Whether the graph rejects further mutation
    """

    def __init__(self):
        self._state = GraphState()
        self._state_lock = RLock()
        self._frozen = False

    @property
    def is_frozen(self) -> bool:
        """Whether the graph has been frozen."""
        return self._frozen

    def freeze(self) -> "WayfindingGraph":
        """
        Make the graph read-only.

        After freezing, add_node, add_edge and the other setters raise
        GraphOperationError. Freezing twice is a no-op.

        Returns:
            The graph itself, so that builders can ``return graph.freeze()``
        """
        with self._state_lock:
            self._frozen = True
            logger.debug(f"Graph frozen with {len(self._state.adjacency)} nodes")
        return self

    def _check_mutable(self, operation: str) -> None:
        if self._frozen:
            raise GraphOperationError(f"Cannot {operation}: graph is frozen")

    def add_node(
        self,
        node_id: str,
        node_type: Union[NodeType, str] = NodeType.UNKNOWN,
        coordinates: Optional[Sequence[float]] = None,
    ) -> None:
        """
        Add a node, or update the type and coordinates of an existing one.

        Re-adding an id overwrites its type, and its coordinates when given, but
        never duplicates the node or clears its neighbors.

        Args:
            node_id: Non-empty node identifier
            node_type: NodeType or its string value
            coordinates: Optional [longitude, latitude] pair

        Raises:
            InvalidNodeIdError: If node_id is not a non-empty string
            InvalidCoordinatesError: If coordinates is not a pair of finite numbers
            ValidationError: If node_type is not a known node type
            GraphOperationError: If the graph is frozen
        """
        failed = first_failure(node_id, NODE_ID_RULES)
        if failed:
            raise InvalidNodeIdError(failed.error_message)
        resolved_type = _coerce_node_type(node_type)
        resolved_coordinates = None
        if coordinates is not None:
            resolved_coordinates = _validate_coordinates(coordinates)

        with self._state_lock:
            self._check_mutable("add node")
            self._state.node_types[node_id] = resolved_type
            if resolved_coordinates is not None:
                self._state.node_coordinates[node_id] = resolved_coordinates
            self._state.adjacency.setdefault(node_id, {})

    def add_edge(self, source_id: str, target_id: str, bidirectional: bool = True) -> None:
        """
        Connect two existing nodes.

        Raises:
            NodeNotFoundError: If either endpoint is not in the graph
            GraphOperationError: If the graph is frozen
        """
        with self._state_lock:
            self._check_mutable("add edge")
            if source_id not in self._state.adjacency:
                raise NodeNotFoundError(source_id, side="source")
            if target_id not in self._state.adjacency:
                raise NodeNotFoundError(target_id, side="target")

            self._state.adjacency[source_id][target_id] = None
            if bidirectional:
                self._state.adjacency[target_id][source_id] = None

    def set_node_coordinates(self, node_id: str, coordinates: Sequence[float]) -> None:
        """Set or replace the display coordinates of an existing node."""
        resolved = _validate_coordinates(coordinates)
        with self._state_lock:
            self._check_mutable("set coordinates")
            if node_id not in self._state.adjacency:
                raise NodeNotFoundError(node_id)
            self._state.node_coordinates[node_id] = resolved

    def set_fixture_polygon(self, node_id: str, ring: Sequence[Sequence[float]]) -> None:
        """Store the outline of a fixture for display."""
        # Ring positions may carry an altitude; only the planar pair is kept
        polygon = [
            _validate_coordinates(point[:2] if isinstance(point, (list, tuple)) else point)
            for point in ring
        ]
        with self._state_lock:
            self._check_mutable("set fixture polygon")
            if node_id not in self._state.adjacency:
                raise NodeNotFoundError(node_id)
            self._state.fixture_polygons[node_id] = polygon

    def add_walking_path(self, walking_path: WalkingPath) -> None:
        """Record a drawable walking path."""
        with self._state_lock:
            self._check_mutable("add walking path")
            self._state.walking_paths.append(walking_path)

    def get_node_type(self, node_id: str) -> NodeType:
        """Get the type of a node, or UNKNOWN if it does not exist."""
        with self._state_lock:
            return self._state.node_types.get(node_id, NodeType.UNKNOWN)

    def get_node_coordinates(self, node_id: str) -> Optional[Coordinates]:
        """Get the coordinates of a node, or None."""
        with self._state_lock:
            return self._state.node_coordinates.get(node_id)

    def get_fixture_polygon(self, node_id: str) -> Optional[Ring]:
        """Get the stored polygon ring of a node, or None."""
        with self._state_lock:
            polygon = self._state.fixture_polygons.get(node_id)
            return list(polygon) if polygon is not None else None

    def get_neighbors(self, node_id: str) -> List[str]:
        """Get the neighbors of a node, empty if it is absent or isolated."""
        with self._state_lock:
            return list(self._state.adjacency.get(node_id, ()))

    def has_node(self, node_id: str) -> bool:
        """Check if a node exists in the graph."""
        with self._state_lock:
            return node_id in self._state.adjacency

    def has_edge(self, source_id: str, target_id: str) -> bool:
        """Check if target is a neighbor of source."""
        with self._state_lock:
            return target_id in self._state.adjacency.get(source_id, {})

    def get_nodes(self) -> Set[str]:
        """Get all nodes in the graph."""
        with self._state_lock:
            return set(self._state.adjacency)

    @property
    def walking_paths(self) -> List[WalkingPath]:
        """Stored walking paths, in insertion order."""
        with self._state_lock:
            return list(self._state.walking_paths)

    def get_statistics(self) -> GraphStatistics:
        """
        Summarize the graph.

        Edges are counted as connected node pairs, so a bidirectional edge counts
        once and so does a one-way edge.
        """
        with self._state_lock:
            type_count: Dict[str, int] = {}
            for node_type in self._state.node_types.values():
                type_count[node_type.value] = type_count.get(node_type.value, 0) + 1

            pairs = set()
            for source_id, neighbors in self._state.adjacency.items():
                for target_id in neighbors:
                    pairs.add(frozenset((source_id, target_id)))

            return GraphStatistics(
                total_nodes=len(self._state.adjacency),
                node_types=type_count,
                total_edges=len(pairs),
                walking_paths=len(self._state.walking_paths),
                fixture_polygons=len(self._state.fixture_polygons),
            )

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, str) and self.has_node(node_id)

    def __len__(self) -> int:
        with self._state_lock:
            return len(self._state.adjacency)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "mutable"
        return f"WayfindingGraph(nodes={len(self)}, {state})"


def _coerce_node_type(node_type: Union[NodeType, str]) -> NodeType:
    if isinstance(node_type, NodeType):
        return node_type
    if isinstance(node_type, str):
        try:
            return NodeType(node_type)
        except ValueError:
            pass
    raise ValidationError(f"Unknown node type: {node_type!r}")


def _validate_coordinates(coordinates: Any) -> Coordinates:
    failed = first_failure(coordinates, COORDINATE_RULES)
    if failed:
        raise InvalidCoordinatesError(failed.error_message)
    return as_coordinates(coordinates)
