"""
Enumerations for node types in the wayfinding graph.

The node type set is closed: every node in a graph carries exactly one of these
tags. Waypoints form the navigation grid; the remaining concrete types are
fixtures (destinations) that connect to the grid.
"""

from enum import Enum


class NodeType(Enum):
    """Enumeration of all node types in the wayfinding graph."""

    WAYPOINT = "waypoint"  # Navigation grid point
    DI_BOX = "di_box"  # Display box fixture
    CABINET = "cabinet"  # Collection cabinet fixture
    FOSSIL = "fossil"  # Fossil excavation site fixture
    UNKNOWN = "unknown"  # Untyped node

    @property
    def is_fixture(self) -> bool:
        """Whether this type is a fixture (destination) type."""
        return self in FIXTURE_TYPES


FIXTURE_TYPES = frozenset({NodeType.DI_BOX, NodeType.CABINET, NodeType.FOSSIL})
