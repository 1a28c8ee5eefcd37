"""
Validation package for the wayfinding package.

Rules for node ids and coordinates, field checks for the path value objects,
and JSON Schema checks for GeoJSON features.
"""

from .base import (
    ValidationResult,
    ValidationRule,
    RequiredRule,
    TypeRule,
    CustomRule,
    DataclassRule,
    first_failure,
    validate_dataclass,
)
from .schema import SchemaValidator

__all__ = [
    "ValidationResult",
    "ValidationRule",
    "RequiredRule",
    "TypeRule",
    "CustomRule",
    "DataclassRule",
    "SchemaValidator",
    "first_failure",
    "validate_dataclass",
]
