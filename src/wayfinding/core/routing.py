"""
Routing rules for indoor navigation.

Waypoints form the navigation grid and fixtures (DI boxes, cabinets, fossil
sites) hang off it. A single hop between two fixtures is never allowed, whatever
edges the map data contains, so every fixture-to-fixture route passes through at
least one waypoint.

``can_visit_neighbor`` is the single decision point for that rule; the search
loop in ``wayfinding.core.pathfinding`` and ``validate_path`` both call it.
"""

from typing import Any

from .enums import FIXTURE_TYPES, NodeType


def is_fixture_type(node_type: NodeType) -> bool:
    """Check whether a node type is a fixture (non-waypoint destination) type."""
    return node_type in FIXTURE_TYPES


def can_visit_neighbor(
    current_type: NodeType,
    neighbor_type: NodeType,
    allow_direct_fixture_connections: bool = False,
) -> bool:
    """
    Decide whether a single hop between two node types is permitted.

    Rules, first match wins:

    1. Waypoint -> Waypoint: allowed
    2. Fixture -> Waypoint: allowed
    3. Waypoint -> Fixture: allowed
    4. Fixture -> Fixture: never allowed, the flag does not apply
    5. Either side UNKNOWN: allowed only if ``allow_direct_fixture_connections``
    6. Anything else: denied

    Note that despite its name the flag only affects hops involving UNKNOWN
    nodes; fixtures always route through waypoints.

    Args:
        current_type: Type of the node being expanded
        neighbor_type: Type of the candidate next node
        allow_direct_fixture_connections: Permit hops to or from UNKNOWN nodes

    Returns:
        True if the hop is allowed
    """
    current_is_waypoint = current_type == NodeType.WAYPOINT
    neighbor_is_waypoint = neighbor_type == NodeType.WAYPOINT

    if current_is_waypoint and neighbor_is_waypoint:
        return True
    if is_fixture_type(current_type) and neighbor_is_waypoint:
        return True
    if current_is_waypoint and is_fixture_type(neighbor_type):
        return True
    if is_fixture_type(current_type) and is_fixture_type(neighbor_type):
        return False
    if current_type == NodeType.UNKNOWN or neighbor_type == NodeType.UNKNOWN:
        return allow_direct_fixture_connections
    return False


def determine_node_type(node_id: Any) -> NodeType:
    """
    Infer a node type from the naming convention of map ids.

    Matching is case-insensitive:

    - ``wp_...`` -> WAYPOINT
    - ``di_...`` -> DI_BOX
    - ``col_...`` containing ``cab_`` -> CABINET
    - ``fossil_...`` -> FOSSIL
    - anything else, or a non-string/empty id -> UNKNOWN

    The core search never calls this; it is used by graph builders.
    """
    if not isinstance(node_id, str) or not node_id:
        return NodeType.UNKNOWN

    lowered = node_id.lower()
    if lowered.startswith("wp_"):
        return NodeType.WAYPOINT
    if lowered.startswith("di_"):
        return NodeType.DI_BOX
    if lowered.startswith("col_") and "cab_" in lowered:
        return NodeType.CABINET
    if lowered.startswith("fossil_"):
        return NodeType.FOSSIL
    return NodeType.UNKNOWN
