"""
Custom exceptions for the wayfinding system.

This module defines the hierarchy of custom exceptions used throughout the system
to handle caller-input and precondition violations in a structured way. Every
exception carries a machine-readable ``code`` so that UI collaborators can map
failures to user-facing messages without parsing strings.

None of these errors are transient; nothing in the package retries them.
"""

from typing import Optional


class WayfindingError(Exception):
    """
    Base class for all wayfinding errors.

    Attributes:
        code (str): Machine-readable error code
    """

    default_code = "WAYFINDING_ERROR"

    def __init__(self, message: str = "", code: Optional[str] = None):
        super().__init__(message)
        self.code = code or self.default_code


class ValidationError(WayfindingError):
    """
    Raised when data validation fails.

    This exception is raised when input data fails to meet the required validation
    criteria, such as type checks on node attributes.

    Examples:
        * Node type that is neither a NodeType nor one of its values
        * Malformed node identifiers
        * Malformed coordinate pairs
    """

    default_code = "VALIDATION_ERROR"

    def __str__(self) -> str:
        """Format validation error message."""
        return f"Validation Error: {super().__str__()}"


class InvalidNodeIdError(ValidationError):
    """Raised when a node id is empty or not a string."""

    default_code = "INVALID_NODE_ID"


class InvalidCoordinatesError(ValidationError):
    """Raised when coordinates are not exactly a pair of real numbers."""

    default_code = "INVALID_COORDINATES"


class GraphOperationError(WayfindingError):
    """
    Raised when graph operations fail.

    This exception is raised when an operation on the graph structure is not
    allowed in its current state.

    Examples:
        * Adding a node to a frozen graph
        * Adding an edge to a frozen graph
    """

    default_code = "GRAPH_OPERATION_ERROR"

    def __str__(self) -> str:
        """Format graph operation error message."""
        return f"Graph Operation Error: {super().__str__()}"


class NodeNotFoundError(WayfindingError):
    """
    Raised when a requested node is not found.

    The error records which side of the operation referenced the missing node
    so callers can report "unknown start" and "unknown destination" separately.

    Attributes:
        node_id (str): The id that was not found
        side (Optional[str]): ``"source"``, ``"target"`` or None

    Examples:
        * Edge insertion with an unknown endpoint
        * Path search from or to an unknown node
    """

    default_code = "NODE_NOT_FOUND"

    def __init__(self, node_id: str, side: Optional[str] = None, message: Optional[str] = None):
        if message is None:
            label = f"{side.capitalize()} node" if side else "Node"
            message = f"{label} '{node_id}' not found in graph"
        super().__init__(message)
        self.node_id = node_id
        self.side = side


class InvalidGraphError(WayfindingError):
    """Raised when a pathfinder is constructed over something that is not a graph."""

    default_code = "INVALID_GRAPH"


class PathValidationError(WayfindingError):
    """
    Raised when a path fails validation checks.

    This exception indicates issues such as:
    - Empty paths
    - Nodes missing from the graph
    - Consecutive nodes without a connecting edge
    - Transitions forbidden by the routing rules
    - Repeated nodes
    """

    default_code = "INVALID_PATH"


class DataLoadingError(WayfindingError):
    """
    Raised when map data cannot be loaded or turned into a graph.

    Attributes:
        cause (Optional[BaseException]): The underlying error, if any

    Examples:
        * Missing or unreadable GeoJSON file
        * Invalid JSON or GeoJSON structure
        * Core errors while building the graph
    """

    default_code = "DATA_LOADING_ERROR"

    def __init__(
        self,
        message: str = "",
        code: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, code)
        self.cause = cause
