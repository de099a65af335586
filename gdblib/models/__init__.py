# =============================================================================
# Data Models Library
# =============================================================================
# Pydantic models and schemas for the geodatabase builder.
# =============================================================================

"""
Data models for the geodatabase builder.

This library provides:
- Spatial types: SpatialReferenceId, GeometryType, Point2D, Bounds
- Schema models: FieldDefinition, LayerSchema, Record, DatasetSpec
- Summary models: read-back view of a written dataset
- Configuration models
"""

# Spatial types
from .spatial import (
    SpatialReferenceId,
    GeometryType,
    Point2D,
    Bounds,
    validate_srs_id,
)

# Schema models
from .schema import (
    FieldType,
    FieldDefinition,
    LayerSchema,
    Record,
    DatasetSpec,
)

# Summary models
from .summary import (
    FieldSummary,
    FeatureSummary,
    LayerSummary,
    DatasetSummary,
)

# Configuration models
from .config import BuilderSettings

__all__ = [
    # Spatial types
    "SpatialReferenceId",
    "GeometryType",
    "Point2D",
    "Bounds",
    "validate_srs_id",
    # Schema models
    "FieldType",
    "FieldDefinition",
    "LayerSchema",
    "Record",
    "DatasetSpec",
    # Summary models
    "FieldSummary",
    "FeatureSummary",
    "LayerSummary",
    "DatasetSummary",
    # Configuration models
    "BuilderSettings",
]
