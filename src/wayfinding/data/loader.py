"""
GeoJSON loading and graph building.

This module turns indoor map files into a WayfindingGraph. It handles:
- Asynchronous reading of local GeoJSON files
- Validation of the FeatureCollection envelope and of individual features
- The multi-pass graph build (points, lines, polygons, fixture files)
- Wrapping of every failure in DataLoadingError with a specific code

Map conventions: every node feature carries its id in the ``alt_name`` property.
Grid points are tagged ``wayfinding_type: walking_grid_point``; edges are
LineStrings tagged ``walking_path`` or ``connection_line`` with ``source`` and
``target`` properties. Fixture outlines are Polygons, optionally carrying a
``display_point`` used as the node position.
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import aiofiles

from ..config import (
    CONNECTION_LINE,
    DEFAULT_FIXTURE_FILES,
    DEFAULT_GEOJSON_DIR,
    PROP_ALT_NAME,
    PROP_DISPLAY_POINT,
    PROP_SOURCE,
    PROP_TARGET,
    PROP_WAYFINDING_TYPE,
    WALKING_GRID_POINT,
    WALKING_PATH,
    BuilderConfig,
    LoaderConfig,
)
from ..core.enums import NodeType
from ..core.exceptions import DataLoadingError, WayfindingError
from ..core.graph import WayfindingGraph
from ..core.models import WalkingPath
from ..core.routing import determine_node_type
from ..core.types import as_coordinates
from ..utils.validation import SchemaValidator

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class GeoJSONLoader:
    """
    Reads GeoJSON FeatureCollections from local files.

    Attributes:
        config (LoaderConfig): Loader options
        validator (SchemaValidator): Envelope validator
    """

    def __init__(self, config: Optional[LoaderConfig] = None):
        self.config = config or LoaderConfig()
        self.validator = SchemaValidator()

    async def load_geojson(self, path: PathLike) -> Dict[str, Any]:
        """
        Load and validate one GeoJSON file.

        Raises:
            DataLoadingError: INVALID_PATH, FILE_NOT_FOUND, READ_ERROR, INVALID_JSON or
                INVALID_GEOJSON
        """
        if not isinstance(path, (str, os.PathLike)) or not str(path).strip():
            raise DataLoadingError("Path must be a non-empty string", "INVALID_PATH")

        file_path = Path(path)
        if not file_path.is_file():
            raise DataLoadingError(f"File not found: {file_path}", "FILE_NOT_FOUND")

        try:
            async with aiofiles.open(file_path, "r", encoding=self.config.encoding) as f:
                content = await f.read()
            data = json.loads(content)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {file_path}: {str(e)}")
            raise DataLoadingError(f"Failed to read {file_path}: {e}", "READ_ERROR", e) from e
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {file_path}: {str(e)}")
            raise DataLoadingError(f"Invalid JSON in {file_path}: {e}", "INVALID_JSON", e) from e

        result = self.validator.validate_collection(data)
        if not result.is_valid:
            raise DataLoadingError(
                f"Invalid GeoJSON format in {file_path}: {'; '.join(result.errors)}",
                "INVALID_GEOJSON",
            )

        logger.debug(f"Loaded {len(data['features'])} features from {file_path}")
        return data

    async def load_multiple_geojson(self, paths: Sequence[PathLike]) -> List[Dict[str, Any]]:
        """
        Load several GeoJSON files, skipping the ones that fail.

        Files are read concurrently; results keep the order of ``paths``.

        Raises:
            DataLoadingError: INVALID_PATHS if paths is not a list or tuple,
                ALL_FILES_FAILED if no file could be loaded
        """
        if not isinstance(paths, (list, tuple)):
            raise DataLoadingError("Paths must be a list", "INVALID_PATHS")

        outcomes = await asyncio.gather(
            *(self.load_geojson(path) for path in paths), return_exceptions=True
        )

        results = []
        errors = []
        for path, outcome in zip(paths, outcomes):
            if isinstance(outcome, DataLoadingError):
                logger.warning(f"Failed to load fixture file {path}: {outcome}")
                errors.append(str(outcome))
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                results.append(outcome)

        if not results and errors:
            raise DataLoadingError(
                f"All fixture files failed to load: {', '.join(errors)}", "ALL_FILES_FAILED"
            )
        if errors:
            logger.warning(f"{len(errors)} of {len(paths)} fixture files failed to load")

        return results


class GraphBuilder:
    """
    Builds a WayfindingGraph from GeoJSON data.

    Attributes:
        config (BuilderConfig): Builder options
        validator (SchemaValidator): Per-feature validator
    """

    def __init__(self, config: Optional[BuilderConfig] = None):
        self.config = config or BuilderConfig()
        self.validator = SchemaValidator()

    def build_graph(
        self,
        geojson_data: Dict[str, Any],
        fixture_data: Iterable[Dict[str, Any]] = (),
    ) -> WayfindingGraph:
        """
        Build a graph from the main map collection and optional fixture collections.

        Passes run in order: points, lines, polygons, then each fixture
        collection, so that edges and outlines can refer to nodes declared by
        points anywhere in the main file.

        Raises:
            DataLoadingError: GRAPH_BUILDING_ERROR wrapping any validation or
                graph error
        """
        graph = WayfindingGraph()

        try:
            features = self._valid_features(geojson_data)
            self._process_points(features, graph)
            self._process_lines(features, graph)
            self._process_polygons(features, graph)

            fixture_collections = list(fixture_data)
            logger.debug(f"Processing {len(fixture_collections)} fixture collections")
            for fixture_geojson in fixture_collections:
                self._process_fixture_data(self._valid_features(fixture_geojson), graph)
        except (WayfindingError, ValueError) as e:
            raise DataLoadingError(
                f"Failed to build graph: {e}", "GRAPH_BUILDING_ERROR", e
            ) from e

        stats = graph.get_statistics()
        logger.info(
            f"Built graph with {stats.total_nodes} nodes, {stats.total_edges} edges, "
            f"{stats.fixture_polygons} polygons"
        )
        return graph

    def _valid_features(self, geojson_data: Any) -> List[Dict[str, Any]]:
        envelope = self.validator.validate_collection(geojson_data)
        if not envelope.is_valid:
            raise DataLoadingError("; ".join(envelope.errors), "INVALID_GEOJSON")

        features = []
        for index, feature in enumerate(geojson_data["features"]):
            result = self.validator.validate_feature(feature)
            if result.is_valid:
                features.append(feature)
                continue
            message = f"Feature {index}: {'; '.join(result.errors)}"
            if self.config.strict_validation:
                raise DataLoadingError(message, "INVALID_GEOJSON")
            if self.config.log_warnings:
                logger.warning(f"Skipping invalid feature. {message}")
        return features

    def _process_points(self, features: List[Dict[str, Any]], graph: WayfindingGraph) -> None:
        for feature in features:
            if feature["geometry"]["type"] != "Point":
                continue

            properties = _properties(feature)
            alt_name = properties.get(PROP_ALT_NAME)
            if not alt_name:
                continue

            if properties.get(PROP_WAYFINDING_TYPE) == WALKING_GRID_POINT:
                node_type = NodeType.WAYPOINT
            else:
                node_type = determine_node_type(alt_name)
            graph.add_node(alt_name, node_type, feature["geometry"]["coordinates"])

    def _process_lines(self, features: List[Dict[str, Any]], graph: WayfindingGraph) -> None:
        for feature in features:
            if feature["geometry"]["type"] != "LineString":
                continue

            properties = _properties(feature)
            wayfinding_type = properties.get(PROP_WAYFINDING_TYPE)
            source = properties.get(PROP_SOURCE)
            target = properties.get(PROP_TARGET)
            if wayfinding_type not in (WALKING_PATH, CONNECTION_LINE) or not source or not target:
                continue

            for node_id in (source, target):
                if not graph.has_node(node_id):
                    graph.add_node(node_id, determine_node_type(node_id))
            graph.add_edge(source, target, bidirectional=True)

            line = feature["geometry"].get("coordinates")
            if wayfinding_type == WALKING_PATH and line:
                graph.add_walking_path(
                    WalkingPath(
                        source=source,
                        target=target,
                        coordinates=[as_coordinates(position) for position in line],
                    )
                )

    def _process_polygons(self, features: List[Dict[str, Any]], graph: WayfindingGraph) -> None:
        for feature in features:
            if feature["geometry"]["type"] != "Polygon":
                continue

            properties = _properties(feature)
            alt_name = properties.get(PROP_ALT_NAME)
            if not alt_name:
                continue

            display_point = _display_point(properties)
            if graph.has_node(alt_name):
                if graph.get_node_coordinates(alt_name) is None and display_point:
                    graph.set_node_coordinates(alt_name, display_point)
            else:
                graph.add_node(alt_name, determine_node_type(alt_name), display_point)
            graph.set_fixture_polygon(alt_name, feature["geometry"]["coordinates"][0])

    def _process_fixture_data(
        self, features: List[Dict[str, Any]], graph: WayfindingGraph
    ) -> None:
        polygon_count = 0
        point_count = 0
        skipped_count = 0

        for feature in features:
            properties = _properties(feature)
            alt_name = properties.get(PROP_ALT_NAME)
            if not alt_name:
                skipped_count += 1
                continue

            geometry = feature["geometry"]
            if geometry["type"] == "Polygon":
                polygon_count += 1
                if not graph.has_node(alt_name):
                    graph.add_node(
                        alt_name, determine_node_type(alt_name), _display_point(properties)
                    )
                graph.set_fixture_polygon(alt_name, geometry["coordinates"][0])
            elif geometry["type"] == "Point":
                point_count += 1
                if graph.has_node(alt_name):
                    graph.set_node_coordinates(alt_name, geometry["coordinates"])
                else:
                    graph.add_node(alt_name, determine_node_type(alt_name), geometry["coordinates"])

        if self.config.log_warnings:
            logger.info(
                f"Fixture file processed: {polygon_count} polygons, {point_count} points, "
                f"{skipped_count} skipped"
            )


class WayfindingDataManager:
    """Loads map files and builds the graph in one call."""

    def __init__(
        self,
        loader_config: Optional[LoaderConfig] = None,
        builder_config: Optional[BuilderConfig] = None,
    ):
        self.loader = GeoJSONLoader(loader_config)
        self.builder = GraphBuilder(builder_config)

    async def load_and_build_graph(
        self,
        wayfinding_path: PathLike,
        fixture_paths: Sequence[PathLike] = (),
        freeze: bool = True,
    ) -> WayfindingGraph:
        """
        Load the main map file and fixture files, then build the graph.

        Args:
            wayfinding_path: Main map file (grid points, edges, outlines)
            fixture_paths: Fixture files; individual failures are skipped
            freeze: Freeze the graph before returning it

        Raises:
            DataLoadingError: LOAD_AND_BUILD_ERROR wrapping the underlying failure
        """
        try:
            wayfinding_data = await self.loader.load_geojson(wayfinding_path)

            fixture_data: List[Dict[str, Any]] = []
            if fixture_paths:
                fixture_data = await self.loader.load_multiple_geojson(list(fixture_paths))

            graph = self.builder.build_graph(wayfinding_data, fixture_data)
        except DataLoadingError as e:
            logger.error(f"Failed to load and build wayfinding data: {e}")
            raise DataLoadingError(
                f"Failed to load and build wayfinding data: {e}", "LOAD_AND_BUILD_ERROR", e
            ) from e

        return graph.freeze() if freeze else graph

    @staticmethod
    def default_fixture_paths(base_dir: PathLike = DEFAULT_GEOJSON_DIR) -> List[str]:
        """Paths of the standard fixture files under ``base_dir``."""
        base = str(base_dir).rstrip("/")
        return [f"{base}/{name}" for name in DEFAULT_FIXTURE_FILES]


def _properties(feature: Dict[str, Any]) -> Dict[str, Any]:
    return feature.get("properties") or {}


def _display_point(properties: Dict[str, Any]) -> Optional[List[float]]:
    display_point = properties.get(PROP_DISPLAY_POINT)
    if isinstance(display_point, dict) and display_point.get("coordinates"):
        return display_point["coordinates"][:2]
    return None
