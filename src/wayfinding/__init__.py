"""
Wayfinding - Constrained Routing over Indoor Map Graphs

This package builds a navigable graph from indoor map GeoJSON and finds
walking routes between its nodes. It includes:

- A node/edge graph with node types, positions and fixture outlines
- A breadth-first pathfinder that keeps fixtures off route interiors
- GeoJSON loading and graph building
- A small command line interface

For more information, please see the documentation.
"""

__version__ = "0.1.0"
__author__ = "Wayfinding Team"
__license__ = "See LICENSE file"

# Version compatibility check
import sys

if sys.version_info < (3, 12):
    raise RuntimeError("Wayfinding requires Python 3.12 or higher")

from .core.enums import NodeType
from .core.exceptions import DataLoadingError, NodeNotFoundError, WayfindingError
from .core.graph import WayfindingGraph
from .core.pathfinding import Pathfinder
from .core.routing import can_visit_neighbor, determine_node_type
from .data import WayfindingDataManager

__all__ = [
    "DataLoadingError",
    "NodeNotFoundError",
    "NodeType",
    "Pathfinder",
    "WayfindingDataManager",
    "WayfindingError",
    "WayfindingGraph",
    "can_visit_neighbor",
    "determine_node_type",
]
