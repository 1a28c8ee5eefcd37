"""
Utility functions for path finding operations.
"""

import gc
import logging
import os
import time
from typing import Optional, Sequence

import psutil

from ..exceptions import PathValidationError
from ..routing import can_visit_neighbor
from ..types import GraphProtocol

logger = logging.getLogger(__name__)


def validate_path(
    path: Sequence[str],
    graph: GraphProtocol,
    allow_direct_fixture_connections: bool = False,
) -> None:
    """
    Check that a path is a walk the search could have produced.

    Checks:
    - The path is non-empty and every node exists
    - No node repeats
    - Each consecutive pair is joined by an edge in the stored direction
    - Each hop satisfies the routing rules

    Raises:
        PathValidationError: On the first failed check
    """
    if not path:
        raise PathValidationError("Path is empty")

    for node_id in path:
        if not graph.has_node(node_id):
            raise PathValidationError(f"Node {node_id} not in graph")

    seen = set()
    for node_id in path:
        if node_id in seen:
            raise PathValidationError(f"Cycle detected at node {node_id}")
        seen.add(node_id)

    for current, neighbor in zip(path, path[1:]):
        if neighbor not in graph.get_neighbors(current):
            raise PathValidationError(f"Edge from {current} to {neighbor} not found in graph")

        current_type = graph.get_node_type(current)
        neighbor_type = graph.get_node_type(neighbor)
        if not can_visit_neighbor(current_type, neighbor_type, allow_direct_fixture_connections):
            raise PathValidationError(
                f"Routing rules forbid {current} ({current_type.value}) -> "
                f"{neighbor} ({neighbor_type.value})"
            )


def _mb(num_bytes: float) -> float:
    return num_bytes / (1024 * 1024)


class MemoryManager:
    """
    Caps how much resident memory a single search may add.

    Growth is measured from the resident size when the manager is created.
    Readings are throttled to one per ``_check_interval`` seconds because the
    search calls check_memory() once per expanded node.
    """

    def __init__(self, max_memory_mb: Optional[float] = None):
        gc.collect()

        self.max_growth = max_memory_mb * 1024 * 1024 if max_memory_mb else None
        self.start_memory = get_memory_usage()
        self._peak_memory = self.start_memory
        self._check_interval = 0.1
        self._last_check = time.monotonic()

    def _read(self) -> int:
        current = get_memory_usage()
        self._peak_memory = max(self._peak_memory, current)
        return current

    def check_memory(self) -> None:
        """
        Raise MemoryError if the search has grown past its allowance.

        A collection is attempted before giving up, so only memory that is
        still reachable counts against the limit.
        """
        now = time.monotonic()
        if now - self._last_check < self._check_interval:
            return
        self._last_check = now

        if not self.max_growth:
            return

        if self._read() - self.start_memory <= self.max_growth:
            return

        gc.collect()
        current = get_memory_usage()
        if current - self.start_memory > self.max_growth:
            message = (
                f"Memory usage {_mb(current):.1f}MB exceeds "
                f"limit of {_mb(self.max_growth):.1f}MB"
            )
            logger.warning(message)
            raise MemoryError(message)

    @property
    def peak_memory_bytes(self) -> int:
        """Largest resident size observed, in bytes."""
        return self._peak_memory


def get_memory_usage() -> int:
    """Resident set size of this process in bytes."""
    return psutil.Process(os.getpid()).memory_info().rss
