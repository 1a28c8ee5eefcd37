"""
Configuration for the wayfinding package.

Search defaults, map file names and logging settings are defined here, together
with the small option classes accepted by the GeoJSON loader and graph builder.
"""

import os

# =============================================================================
# Search Configuration
# =============================================================================

# BFS expansion-step ceiling (not a path length limit)
DEFAULT_MAX_DEPTH = 1000

# Alternative routes returned by find_multiple_paths
DEFAULT_MAX_PATHS = 3

# =============================================================================
# Map Data Configuration
# =============================================================================

DEFAULT_GEOJSON_DIR = "./geojson"

DEFAULT_FIXTURE_FILES = (
    "cabinet_fixtures.geojson",
    "di_box_fixtures.geojson",
    "fossil_excavation_fixtures.geojson",
)

# Feature property names read by the graph builder
PROP_WAYFINDING_TYPE = "wayfinding_type"
PROP_ALT_NAME = "alt_name"
PROP_SOURCE = "source"
PROP_TARGET = "target"
PROP_DISPLAY_POINT = "display_point"

# wayfinding_type values
WALKING_GRID_POINT = "walking_grid_point"
WALKING_PATH = "walking_path"
CONNECTION_LINE = "connection_line"

# =============================================================================
# Logging Configuration
# =============================================================================

LOG_LEVEL = os.environ.get("WAYFINDING_LOG_LEVEL", "WARNING")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class LoaderConfig:
    """
    Configuration for reading GeoJSON files.

    Attributes:
        encoding: Text encoding of map files
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding


class BuilderConfig:
    """
    Configuration for building a graph from GeoJSON.

    Attributes:
        strict_validation: Fail on features that do not match their schema
            instead of skipping them
        log_warnings: Log skipped features and per-file summaries
    """

    def __init__(self, strict_validation: bool = True, log_warnings: bool = True):
        self.strict_validation = strict_validation
        self.log_warnings = log_warnings
