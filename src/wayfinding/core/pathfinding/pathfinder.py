"""
Constrained breadth-first path finding over a wayfinding graph.

Queue entries are whole paths rather than single nodes, so the route is available
the moment the target is reached without a separate parent map. Every hop is
checked against the routing rules before the target test; a fixture adjacent to a
fixture target is therefore never accepted as a one-hop route.
"""

import logging
from collections import deque
from time import time
from typing import Deque, FrozenSet, Iterable, List, Optional, Set, Tuple

from ...config import DEFAULT_MAX_DEPTH, DEFAULT_MAX_PATHS
from ..enums import NodeType
from ..exceptions import InvalidGraphError, NodeNotFoundError
from ..graph import WayfindingGraph
from ..routing import can_visit_neighbor
from ..types import Path
from .models import NodeDetails, PathDetails, PathEndpoint, PathSummary, SearchMetrics
from .utils import MemoryManager

logger = logging.getLogger(__name__)


class Pathfinder:
    """
    Finds routes between nodes of a WayfindingGraph.

    The pathfinder keeps a shared reference to the graph and never mutates it.
    It holds no per-search state, so one instance may serve concurrent callers
    as long as the graph is not being modified.

    Attributes:
        graph (WayfindingGraph): The graph searched
        max_memory_mb (Optional[float]): Optional memory growth ceiling per search
    """

    def __init__(self, graph: WayfindingGraph, max_memory_mb: Optional[float] = None):
        if not isinstance(graph, WayfindingGraph):
            raise InvalidGraphError("Graph must be an instance of WayfindingGraph")
        self.graph = graph
        self.max_memory_mb = max_memory_mb

    @staticmethod
    def can_visit_neighbor(
        current_type: NodeType,
        neighbor_type: NodeType,
        allow_direct_fixture_connections: bool = False,
    ) -> bool:
        """Routing predicate; see wayfinding.core.routing.can_visit_neighbor."""
        return can_visit_neighbor(current_type, neighbor_type, allow_direct_fixture_connections)

    def validate_nodes(self, source_id: str, target_id: str) -> None:
        """Validate that both endpoints exist in the graph."""
        if not self.graph.has_node(source_id):
            raise NodeNotFoundError(source_id, side="source")
        if not self.graph.has_node(target_id):
            raise NodeNotFoundError(target_id, side="target")

    def find_path(
        self,
        source_id: str,
        target_id: str,
        max_depth: int = DEFAULT_MAX_DEPTH,
        exclude_nodes: Optional[Iterable[str]] = None,
        allow_direct_fixture_connections: bool = False,
    ) -> Optional[Path]:
        """
        Find a minimum-hop route that obeys the routing rules.

        Args:
            source_id: Start node
            target_id: Destination node
            max_depth: Maximum number of BFS expansion steps; a reachable target
                beyond this limit is reported as unreachable
            exclude_nodes: Nodes the route may not pass through
            allow_direct_fixture_connections: Permit hops to or from UNKNOWN
                nodes; fixture-to-fixture hops stay forbidden regardless

        Returns:
            Node ids from source to target, or None if no route was found

        Raises:
            NodeNotFoundError: If source or target is not in the graph
            TypeError: If max_depth is not an integer
            ValueError: If max_depth is negative
        """
        path, _ = self.find_path_with_metrics(
            source_id,
            target_id,
            max_depth=max_depth,
            exclude_nodes=exclude_nodes,
            allow_direct_fixture_connections=allow_direct_fixture_connections,
        )
        return path

    def find_path_with_metrics(
        self,
        source_id: str,
        target_id: str,
        max_depth: int = DEFAULT_MAX_DEPTH,
        exclude_nodes: Optional[Iterable[str]] = None,
        allow_direct_fixture_connections: bool = False,
    ) -> Tuple[Optional[Path], SearchMetrics]:
        """Same as find_path, also returning the search counters."""
        _validate_max_depth(max_depth)
        self.validate_nodes(source_id, target_id)
        excluded: FrozenSet[str] = frozenset(exclude_nodes or ())

        metrics = SearchMetrics(operation="find_path", start_time=time())
        try:
            if source_id == target_id:
                metrics.path_length = 1
                return [source_id], metrics

            path = self._bfs(
                source_id,
                target_id,
                max_depth,
                excluded,
                allow_direct_fixture_connections,
                metrics,
            )
            if path is not None:
                metrics.path_length = len(path)
            return path, metrics
        finally:
            metrics.end_time = time()
            logger.debug(f"find_path {source_id} -> {target_id}: {metrics.to_dict()}")

    def _bfs(
        self,
        source_id: str,
        target_id: str,
        max_depth: int,
        excluded: FrozenSet[str],
        allow_direct_fixture_connections: bool,
        metrics: SearchMetrics,
    ) -> Optional[Path]:
        memory_manager = MemoryManager(self.max_memory_mb) if self.max_memory_mb else None

        queue: Deque[Path] = deque([[source_id]])
        visited: Set[str] = {source_id}
        iterations = 0

        try:
            while queue and iterations < max_depth:
                if memory_manager:
                    memory_manager.check_memory()
                iterations += 1

                current_path = queue.popleft()
                current_node = current_path[-1]
                current_type = self.graph.get_node_type(current_node)

                for neighbor in self.graph.get_neighbors(current_node):
                    if neighbor in visited or neighbor in excluded:
                        continue

                    neighbor_type = self.graph.get_node_type(neighbor)
                    if not can_visit_neighbor(
                        current_type, neighbor_type, allow_direct_fixture_connections
                    ):
                        continue

                    new_path = current_path + [neighbor]
                    if neighbor == target_id:
                        return new_path

                    visited.add(neighbor)
                    queue.append(new_path)

            if queue:
                metrics.truncated = True
                logger.debug(
                    f"Search {source_id} -> {target_id} stopped at max_depth={max_depth} "
                    f"with {len(queue)} paths queued"
                )
            return None
        finally:
            metrics.iterations = iterations
            metrics.nodes_visited = len(visited)
            if memory_manager:
                metrics.max_memory_used = memory_manager.peak_memory_bytes

    def get_path_details(self, path: Optional[Path]) -> Optional[PathDetails]:
        """
        Enrich a path with node types, coordinates and a summary.

        Returns:
            PathDetails, or None if path is None, empty or not a list/tuple
        """
        if not path or not isinstance(path, (list, tuple)):
            return None

        nodes = [
            NodeDetails(
                node_id=node_id,
                node_type=self.graph.get_node_type(node_id),
                coordinates=self.graph.get_node_coordinates(node_id),
            )
            for node_id in path
        ]
        waypoints_used = sum(1 for node in nodes if node.node_type == NodeType.WAYPOINT)

        return PathDetails(
            path=list(path),
            nodes=nodes,
            summary=PathSummary(
                start=PathEndpoint(nodes[0].node_id, nodes[0].node_type),
                end=PathEndpoint(nodes[-1].node_id, nodes[-1].node_type),
                waypoints_used=waypoints_used,
            ),
        )

    def find_multiple_paths(
        self,
        source_id: str,
        target_id: str,
        max_paths: int = DEFAULT_MAX_PATHS,
        max_depth: int = DEFAULT_MAX_DEPTH,
        exclude_nodes: Optional[Iterable[str]] = None,
        allow_direct_fixture_connections: bool = False,
    ) -> List[Path]:
        """
        Find up to ``max_paths`` routes whose interiors share no node.

        After each route is found its intermediate nodes are excluded from the
        following searches. The search stops at the first failure, so fewer than
        ``max_paths`` routes may be returned. A direct one-hop route has no
        intermediate nodes and can therefore be returned more than once.

        Raises:
            ValueError: If max_paths is not a positive integer
            NodeNotFoundError: If source or target is not in the graph
        """
        if not isinstance(max_paths, int) or isinstance(max_paths, bool) or max_paths <= 0:
            raise ValueError("max_paths must be positive")

        excluded: Set[str] = set(exclude_nodes or ())
        paths: List[Path] = []

        for _ in range(max_paths):
            path = self.find_path(
                source_id,
                target_id,
                max_depth=max_depth,
                exclude_nodes=excluded,
                allow_direct_fixture_connections=allow_direct_fixture_connections,
            )
            if path is None:
                break

            paths.append(path)
            excluded.update(path[1:-1])

        logger.debug(f"find_multiple_paths {source_id} -> {target_id}: {len(paths)} found")
        return paths


def _validate_max_depth(max_depth: int) -> None:
    if not isinstance(max_depth, int) or isinstance(max_depth, bool):
        raise TypeError("max_depth must be an integer")
    if max_depth < 0:
        raise ValueError("max_depth must be non-negative")
