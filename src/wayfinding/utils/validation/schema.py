"""
Schema Validation Components for GeoJSON map data

This module provides JSON schema-based validation for the indoor map files that
feed the graph builder. It supports:
- Validation of the top-level FeatureCollection shape
- Registration of JSON schemas per geometry type (Point, LineString, Polygon)
- Validation of individual features against their registered schema

The builder only relies on the parts of GeoJSON it reads: geometry type and
coordinates, and the ``alt_name``/``wayfinding_type``/``source``/``target``
properties.
"""

from typing import Any, Dict, Optional

from jsonschema import ValidationError as JsonSchemaError
from jsonschema import validate as json_validate

from .base import ValidationResult

FEATURE_COLLECTION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "type": {"const": "FeatureCollection"},
        "features": {"type": "array"},
    },
    "required": ["type", "features"],
}

_POSITION = {
    "type": "array",
    "items": {"type": "number"},
    "minItems": 2,
}

_FEATURE_BASE = {
    "type": "object",
    "properties": {
        "properties": {"type": ["object", "null"]},
    },
    "required": ["geometry"],
}

POINT_FEATURE_SCHEMA: Dict[str, Any] = {
    **_FEATURE_BASE,
    "properties": {
        **_FEATURE_BASE["properties"],
        "geometry": {
            "type": "object",
            "properties": {
                "type": {"const": "Point"},
                # Nodes are planar: altitude is not accepted
                "coordinates": {**_POSITION, "maxItems": 2},
            },
            "required": ["type", "coordinates"],
        },
    },
}

LINE_STRING_FEATURE_SCHEMA: Dict[str, Any] = {
    **_FEATURE_BASE,
    "properties": {
        **_FEATURE_BASE["properties"],
        "geometry": {
            "type": "object",
            "properties": {
                "type": {"const": "LineString"},
                "coordinates": {"type": "array", "items": _POSITION},
            },
            "required": ["type"],
        },
    },
}

POLYGON_FEATURE_SCHEMA: Dict[str, Any] = {
    **_FEATURE_BASE,
    "properties": {
        **_FEATURE_BASE["properties"],
        "geometry": {
            "type": "object",
            "properties": {
                "type": {"const": "Polygon"},
                "coordinates": {
                    "type": "array",
                    "items": {"type": "array", "items": _POSITION},
                    "minItems": 1,
                },
            },
            "required": ["type", "coordinates"],
        },
    },
}


class SchemaValidator:
    """
    JSON Schema-based validator for GeoJSON feature collections.

    The validator is created with schemas for the three geometry types the graph
    builder understands. Further geometry types can be registered; features whose
    geometry type has no registered schema validate with a warning.

    Attributes:
        feature_schemas (Dict[str, Dict[str, Any]]): Geometry type to JSON schema
    """

    def __init__(self):
        self.feature_schemas: Dict[str, Dict[str, Any]] = {}
        self.register_feature_schema("Point", POINT_FEATURE_SCHEMA)
        self.register_feature_schema("LineString", LINE_STRING_FEATURE_SCHEMA)
        self.register_feature_schema("Polygon", POLYGON_FEATURE_SCHEMA)

    def register_feature_schema(self, geometry_type: str, schema: Dict[str, Any]) -> None:
        """
        Register a JSON schema for a geometry type.

        Example:
            >>> validator = SchemaValidator()
            >>> validator.register_feature_schema("MultiPoint", {"type": "object"})
        """
        self.feature_schemas[geometry_type] = schema

    def validate_collection(self, data: Any) -> ValidationResult:
        """
        Validate the top-level FeatureCollection structure.

        Only the envelope is checked here; features are checked one at a time by
        validate_feature() so that the builder can skip individual bad features.
        """
        errors = []

        try:
            json_validate(instance=data, schema=FEATURE_COLLECTION_SCHEMA)
        except JsonSchemaError as e:
            errors.append(f"Schema validation failed: {e.message}")

        return ValidationResult.from_messages(errors, context={"schema": "FeatureCollection"})

    def validate_feature(self, feature: Any) -> ValidationResult:
        """
        Validate a single feature against the schema of its geometry type.

        Returns:
            ValidationResult with errors, or a warning if no schema is registered
        """
        errors = []
        warnings = []
        geometry_type = _geometry_type(feature)

        if geometry_type is None:
            errors.append("Feature has no geometry type")
        else:
            schema = self.feature_schemas.get(geometry_type)
            if schema:
                try:
                    json_validate(instance=feature, schema=schema)
                except JsonSchemaError as e:
                    errors.append(f"Schema validation failed: {e.message}")
            else:
                warnings.append(f"No schema registered for geometry type: {geometry_type}")

        return ValidationResult.from_messages(
            errors, warnings, context={"geometry_type": geometry_type}
        )


def _geometry_type(feature: Any) -> Optional[str]:
    if not isinstance(feature, dict):
        return None
    geometry = feature.get("geometry")
    if not isinstance(geometry, dict):
        return None
    geometry_type = geometry.get("type")
    return geometry_type if isinstance(geometry_type, str) else None
