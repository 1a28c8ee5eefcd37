"""Path finding over wayfinding graphs."""

from ...config import DEFAULT_MAX_DEPTH, DEFAULT_MAX_PATHS
from .models import NodeDetails, PathDetails, PathEndpoint, PathSummary, SearchMetrics
from .pathfinder import Pathfinder
from .utils import MemoryManager, validate_path

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_MAX_PATHS",
    "MemoryManager",
    "NodeDetails",
    "PathDetails",
    "PathEndpoint",
    "PathSummary",
    "Pathfinder",
    "SearchMetrics",
    "validate_path",
]
