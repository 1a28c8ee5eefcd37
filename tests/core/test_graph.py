"""
Tests for the WayfindingGraph data structure.
"""

import math

import pytest

from wayfinding.core.enums import NodeType
from wayfinding.core.exceptions import (
    GraphOperationError,
    InvalidCoordinatesError,
    InvalidNodeIdError,
    NodeNotFoundError,
    ValidationError,
)
from wayfinding.core.graph import WayfindingGraph
from wayfinding.core.models import GraphStatistics, WalkingPath


@pytest.fixture
def graph() -> WayfindingGraph:
    return WayfindingGraph()


def test_empty_graph(graph):
    """Test the initial state of a new graph."""
    assert len(graph) == 0
    assert graph.get_nodes() == set()
    assert not graph.is_frozen
    assert graph.walking_paths == []


def test_add_node(graph):
    """Test adding a node with type and coordinates."""
    graph.add_node("wp_001", NodeType.WAYPOINT, [-123.1, 49.1])

    assert graph.has_node("wp_001")
    assert "wp_001" in graph
    assert graph.get_node_type("wp_001") == NodeType.WAYPOINT
    assert graph.get_node_coordinates("wp_001") == (-123.1, 49.1)
    assert graph.get_neighbors("wp_001") == []


def test_add_node_defaults_to_unknown(graph):
    """Test that a node added without a type is UNKNOWN."""
    graph.add_node("mystery")
    assert graph.get_node_type("mystery") == NodeType.UNKNOWN
    assert graph.get_node_coordinates("mystery") is None


def test_add_node_accepts_type_value(graph):
    """Test that the string value of a node type is accepted."""
    graph.add_node("cab", "cabinet")
    assert graph.get_node_type("cab") == NodeType.CABINET


def test_add_node_rejects_unknown_type_string(graph):
    """Test that an unrecognised type string is a validation error."""
    with pytest.raises(ValidationError, match="Unknown node type"):
        graph.add_node("x", "elevator")
    assert not graph.has_node("x")


@pytest.mark.parametrize("node_id", ["", "   ", None, 42, ["wp_001"]])
def test_add_node_invalid_id(graph, node_id):
    """Test that empty and non-string ids are rejected."""
    with pytest.raises(InvalidNodeIdError, match="Node ID must be a non-empty string"):
        graph.add_node(node_id)
    assert len(graph) == 0


@pytest.mark.parametrize(
    "coordinates",
    [
        [1.0],
        [1.0, 2.0, 3.0],
        ["1", "2"],
        [True, 1.0],
        [math.nan, 1.0],
        [1.0, math.inf],
        "1,2",
        {"lon": 1, "lat": 2},
    ],
)
def test_add_node_invalid_coordinates(graph, coordinates):
    """Test that anything other than a pair of finite numbers is rejected."""
    with pytest.raises(InvalidCoordinatesError):
        graph.add_node("wp_001", NodeType.WAYPOINT, coordinates)
    assert not graph.has_node("wp_001")


def test_add_node_accepts_integer_coordinates(graph):
    """Test that integer coordinates are stored as floats."""
    graph.add_node("wp_001", NodeType.WAYPOINT, (3, 4))
    assert graph.get_node_coordinates("wp_001") == (3.0, 4.0)
    assert all(isinstance(c, float) for c in graph.get_node_coordinates("wp_001"))


def test_readd_node_updates_without_duplicating(graph):
    """Test that re-adding a node overwrites its type and keeps its edges."""
    graph.add_node("a", NodeType.UNKNOWN, [1.0, 2.0])
    graph.add_node("wp_002", NodeType.WAYPOINT)
    graph.add_edge("a", "wp_002")

    graph.add_node("a", NodeType.WAYPOINT)

    assert len(graph) == 2
    assert graph.get_node_type("a") == NodeType.WAYPOINT
    assert graph.get_node_coordinates("a") == (1.0, 2.0)
    assert graph.get_neighbors("a") == ["wp_002"]

    graph.add_node("a", NodeType.WAYPOINT, [5.0, 6.0])
    assert graph.get_node_coordinates("a") == (5.0, 6.0)


def test_add_edge_bidirectional(graph):
    """Test that edges are stored in both directions by default."""
    graph.add_node("a")
    graph.add_node("b")
    graph.add_edge("a", "b")

    assert graph.has_edge("a", "b")
    assert graph.has_edge("b", "a")


def test_add_edge_one_way(graph):
    """Test that a one-way edge is stored only in the given direction."""
    graph.add_node("a")
    graph.add_node("b")
    graph.add_edge("a", "b", bidirectional=False)

    assert graph.get_neighbors("a") == ["b"]
    assert graph.get_neighbors("b") == []


def test_add_edge_is_idempotent(graph):
    """Test that repeating an edge does not duplicate neighbors."""
    graph.add_node("a")
    graph.add_node("b")
    graph.add_edge("a", "b")
    graph.add_edge("a", "b")
    graph.add_edge("b", "a")

    assert graph.get_neighbors("a") == ["b"]
    assert graph.get_neighbors("b") == ["a"]


def test_add_edge_missing_endpoints(graph):
    """Test that edges to unknown nodes report the missing side."""
    graph.add_node("a")

    with pytest.raises(NodeNotFoundError) as exc_info:
        graph.add_edge("ghost", "a")
    assert exc_info.value.side == "source"
    assert exc_info.value.node_id == "ghost"

    with pytest.raises(NodeNotFoundError) as exc_info:
        graph.add_edge("a", "ghost")
    assert exc_info.value.side == "target"

    assert graph.get_neighbors("a") == []


def test_neighbor_order_follows_insertion(graph):
    """Test that neighbors are enumerated in the order edges were added."""
    for node_id in ("hub", "c", "a", "b"):
        graph.add_node(node_id)
    graph.add_edge("hub", "c")
    graph.add_edge("hub", "a")
    graph.add_edge("hub", "b")

    assert graph.get_neighbors("hub") == ["c", "a", "b"]


def test_lookups_on_missing_node(graph):
    """Test that read queries on absent ids do not raise."""
    assert graph.get_node_type("ghost") == NodeType.UNKNOWN
    assert graph.get_node_coordinates("ghost") is None
    assert graph.get_neighbors("ghost") == []
    assert graph.get_fixture_polygon("ghost") is None
    assert not graph.has_node("ghost")
    assert not graph.has_edge("ghost", "other")
    assert 42 not in graph


def test_set_node_coordinates(graph):
    """Test replacing coordinates of an existing node."""
    graph.add_node("a")
    graph.set_node_coordinates("a", [1, 2])
    assert graph.get_node_coordinates("a") == (1.0, 2.0)

    with pytest.raises(NodeNotFoundError):
        graph.set_node_coordinates("ghost", [1, 2])
    with pytest.raises(InvalidCoordinatesError):
        graph.set_node_coordinates("a", [1])


def test_set_fixture_polygon_drops_altitude(graph):
    """Test that polygon rings keep only planar positions."""
    graph.add_node("cabinet_1", NodeType.CABINET)
    graph.set_fixture_polygon("cabinet_1", [[0, 0, 10], [1, 0, 10], [1, 1, 10], [0, 0, 10]])

    assert graph.get_fixture_polygon("cabinet_1") == [
        (0.0, 0.0),
        (1.0, 0.0),
        (1.0, 1.0),
        (0.0, 0.0),
    ]


def test_set_fixture_polygon_requires_node(graph):
    """Test that polygons can only be attached to existing nodes."""
    with pytest.raises(NodeNotFoundError):
        graph.set_fixture_polygon("ghost", [[0, 0], [1, 1], [0, 0]])


def test_walking_paths(graph):
    """Test that walking paths are kept in insertion order."""
    first = WalkingPath(source="wp_001", target="wp_002", coordinates=[(0.0, 0.0), (1.0, 1.0)])
    second = WalkingPath(source="wp_002", target="wp_003")
    graph.add_walking_path(first)
    graph.add_walking_path(second)

    assert graph.walking_paths == [first, second]
    assert first.path_type == "walking_path"


def test_walking_path_requires_endpoints():
    """Test walking path endpoint validation."""
    with pytest.raises(ValueError, match="non-empty"):
        WalkingPath(source="", target="wp_002")
    with pytest.raises(TypeError, match="Invalid field types in WalkingPath"):
        WalkingPath(source="wp_001", target="wp_002", coordinates=[("a", "b")])


def test_statistics(chain_graph):
    """Test statistics over the waypoint chain."""
    chain_graph.set_fixture_polygon("cabinet_1", [[0, 0], [1, 0], [1, 1], [0, 0]])
    stats = chain_graph.get_statistics()

    assert isinstance(stats, GraphStatistics)
    assert stats.total_nodes == 5
    assert stats.node_types == {"waypoint": 3, "di_box": 1, "cabinet": 1}
    assert stats.total_edges == 4
    assert stats.fixture_polygons == 1
    assert stats.walking_paths == 0
    assert stats.to_dict()["total_edges"] == 4


def test_statistics_counts_one_way_edges(graph):
    """Test that one-way and two-way edges each count as one connection."""
    for node_id in ("a", "b", "c"):
        graph.add_node(node_id)
    graph.add_edge("a", "b")
    graph.add_edge("b", "c", bidirectional=False)

    assert graph.get_statistics().total_edges == 2


def test_statistics_rejects_negative_counts():
    """Test statistics model validation."""
    with pytest.raises(ValueError, match="cannot be negative"):
        GraphStatistics(
            total_nodes=-1, node_types={}, total_edges=0, walking_paths=0, fixture_polygons=0
        )


def test_freeze_blocks_mutation(chain_graph):
    """Test that a frozen graph rejects every mutation but still answers queries."""
    assert chain_graph.freeze() is chain_graph
    assert chain_graph.is_frozen

    with pytest.raises(GraphOperationError, match="graph is frozen"):
        chain_graph.add_node("wp_004", NodeType.WAYPOINT)
    with pytest.raises(GraphOperationError):
        chain_graph.add_edge("wp_001", "wp_003")
    with pytest.raises(GraphOperationError):
        chain_graph.set_node_coordinates("wp_001", [0, 0])
    with pytest.raises(GraphOperationError):
        chain_graph.set_fixture_polygon("cabinet_1", [[0, 0], [1, 1], [0, 0]])
    with pytest.raises(GraphOperationError):
        chain_graph.add_walking_path(WalkingPath(source="wp_001", target="wp_002"))

    assert len(chain_graph) == 5
    assert not chain_graph.has_edge("wp_001", "wp_003")
    assert chain_graph.get_neighbors("wp_002") == ["wp_001", "wp_003"]

    # Freezing again is harmless
    chain_graph.freeze()
    assert "frozen" in repr(chain_graph)


def test_repr(graph):
    graph.add_node("a")
    assert repr(graph) == "WayfindingGraph(nodes=1, mutable)"
