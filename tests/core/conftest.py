"""Shared test fixtures."""

from typing import Callable, Dict, Iterable, Tuple

import pytest

from wayfinding.core.enums import NodeType
from wayfinding.core.graph import WayfindingGraph
from wayfinding.core.pathfinding import Pathfinder

GraphFactory = Callable[[Dict[str, NodeType], Iterable[Tuple[str, str]]], WayfindingGraph]


@pytest.fixture
def graph_factory() -> GraphFactory:
    """Fixture providing a builder for small graphs from a type map and edge list."""

    def build(nodes: Dict[str, NodeType], edges: Iterable[Tuple[str, str]]) -> WayfindingGraph:
        graph = WayfindingGraph()
        for node_id, node_type in nodes.items():
            graph.add_node(node_id, node_type)
        for source_id, target_id in edges:
            graph.add_edge(source_id, target_id)
        return graph

    return build


@pytest.fixture
def chain_graph() -> WayfindingGraph:
    """
    Fixture providing a waypoint chain with a fixture at each end:

    di_box_1 - wp_001 - wp_002 - wp_003 - cabinet_1
    """
    graph = WayfindingGraph()
    graph.add_node("wp_001", NodeType.WAYPOINT, [-123.1, 49.1])
    graph.add_node("wp_002", NodeType.WAYPOINT, [-123.2, 49.2])
    graph.add_node("wp_003", NodeType.WAYPOINT, [-123.3, 49.3])
    graph.add_node("di_box_1", NodeType.DI_BOX, [-123.0, 49.0])
    graph.add_node("cabinet_1", NodeType.CABINET)

    graph.add_edge("wp_001", "wp_002")
    graph.add_edge("wp_002", "wp_003")
    graph.add_edge("di_box_1", "wp_001")
    graph.add_edge("cabinet_1", "wp_003")
    return graph


@pytest.fixture
def pathfinder(chain_graph) -> Pathfinder:
    """Fixture providing a pathfinder over the waypoint chain."""
    return Pathfinder(chain_graph)


@pytest.fixture
def ladder_graph(graph_factory) -> WayfindingGraph:
    """
    Fixture providing two disjoint waypoint corridors between two fixtures:

              wp_a1 - wp_a2
             /             \\
    di_start                cabinet_end
             \\             /
              wp_b1 - wp_b2 - wp_b3
    """
    return graph_factory(
        {
            "di_start": NodeType.DI_BOX,
            "cabinet_end": NodeType.CABINET,
            "wp_a1": NodeType.WAYPOINT,
            "wp_a2": NodeType.WAYPOINT,
            "wp_b1": NodeType.WAYPOINT,
            "wp_b2": NodeType.WAYPOINT,
            "wp_b3": NodeType.WAYPOINT,
        },
        [
            ("di_start", "wp_a1"),
            ("wp_a1", "wp_a2"),
            ("wp_a2", "cabinet_end"),
            ("di_start", "wp_b1"),
            ("wp_b1", "wp_b2"),
            ("wp_b2", "wp_b3"),
            ("wp_b3", "cabinet_end"),
        ],
    )
