"""Shared GeoJSON test fixtures."""

import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import pytest


def point_feature(alt_name: Optional[str], coordinates: List[float], **properties) -> Dict[str, Any]:
    if alt_name is not None:
        properties["alt_name"] = alt_name
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": coordinates},
        "properties": properties,
    }


def line_feature(
    wayfinding_type: Optional[str], source: str, target: str, coordinates: List[List[float]]
) -> Dict[str, Any]:
    properties = {"source": source, "target": target}
    if wayfinding_type is not None:
        properties["wayfinding_type"] = wayfinding_type
    return {
        "type": "Feature",
        "geometry": {"type": "LineString", "coordinates": coordinates},
        "properties": properties,
    }


def polygon_feature(
    alt_name: Optional[str], ring: List[List[float]], display_point: Optional[List[float]] = None
) -> Dict[str, Any]:
    properties: Dict[str, Any] = {}
    if alt_name is not None:
        properties["alt_name"] = alt_name
    if display_point is not None:
        properties["display_point"] = {"type": "Point", "coordinates": display_point}
    return {
        "type": "Feature",
        "geometry": {"type": "Polygon", "coordinates": [ring]},
        "properties": properties,
    }


def collection(features: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": "FeatureCollection", "features": features}


@pytest.fixture
def geojson() -> SimpleNamespace:
    """Fixture providing the feature builders for tests that assemble their own maps."""
    return SimpleNamespace(
        point=point_feature,
        line=line_feature,
        polygon=polygon_feature,
        collection=collection,
    )


@pytest.fixture
def wayfinding_geojson() -> Dict[str, Any]:
    """
    Fixture providing a small indoor map:

    di_27_18_top - wp_001 - wp_002 - wp_003 - col_a_cab_7

    wp_001..wp_003 are grid points joined by walking paths; the two fixtures
    hang off the grid through connection lines. col_a_cab_7 is only declared by
    its edge and gets its position from its outline's display point.
    """
    return collection(
        [
            point_feature("wp_001", [0.0, 0.0], wayfinding_type="walking_grid_point"),
            point_feature("wp_002", [1.0, 0.0], wayfinding_type="walking_grid_point"),
            point_feature("wp_003", [2.0, 0.0], wayfinding_type="walking_grid_point"),
            point_feature("di_27_18_top", [0.0, 1.0]),
            point_feature(None, [5.0, 5.0]),
            line_feature("walking_path", "wp_001", "wp_002", [[0.0, 0.0], [1.0, 0.0]]),
            line_feature("walking_path", "wp_002", "wp_003", [[1.0, 0.0], [2.0, 0.0]]),
            line_feature("connection_line", "di_27_18_top", "wp_001", [[0.0, 1.0], [0.0, 0.0]]),
            line_feature("connection_line", "col_a_cab_7", "wp_003", [[2.5, 0.5], [2.0, 0.0]]),
            line_feature(None, "wp_001", "wp_003", [[0.0, 0.0], [2.0, 0.0]]),
            polygon_feature(
                "col_a_cab_7",
                [[2.4, 0.4], [2.6, 0.4], [2.6, 0.6], [2.4, 0.4]],
                display_point=[2.5, 0.5],
            ),
            polygon_feature(None, [[9.0, 9.0], [9.5, 9.0], [9.0, 9.5], [9.0, 9.0]]),
        ]
    )


@pytest.fixture
def fixture_geojson() -> Dict[str, Any]:
    """Fixture providing a fixture file with an outline, two points and an unnamed feature."""
    return collection(
        [
            polygon_feature(
                "col_b_cab_9",
                [[5.0, 5.0], [5.2, 5.0], [5.2, 5.2], [5.0, 5.0]],
                display_point=[5.1, 5.1],
            ),
            point_feature("di_27_18_top", [0.2, 1.2]),
            point_feature("fossil_excavation_1", [9.0, 9.0]),
            point_feature(None, [3.0, 3.0]),
        ]
    )


@pytest.fixture
def write_geojson(tmp_path) -> Callable[[str, Any], Path]:
    """Fixture providing a writer that stores JSON-serialisable data under tmp_path."""

    def write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return write


@pytest.fixture
def map_files(write_geojson, wayfinding_geojson, fixture_geojson):
    """Fixture providing paths of the map file and one fixture file on disk."""
    return (
        write_geojson("wayfinding.geojson", wayfinding_geojson),
        write_geojson("cabinet_fixtures.geojson", fixture_geojson),
    )
