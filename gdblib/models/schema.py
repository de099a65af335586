# =============================================================================
# Layer Schema Models
# =============================================================================
# Declarative description of the dataset to build:
# - FieldType / FieldDefinition: typed attribute columns
# - LayerSchema: layer name, geometry type, spatial reference, fields
# - Record: attribute values plus one 2D point
# - DatasetSpec: output path, driver, options, layer and records
# =============================================================================

import re
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from .spatial import GeometryType, Point2D, SpatialReferenceId

__all__ = [
    "FieldType",
    "FieldDefinition",
    "LayerSchema",
    "Record",
    "DatasetSpec",
    "AttributeValue",
    "RESERVED_FIELD_NAMES",
    "validate_identifier",
]

AttributeValue = Union[str, int, float, None]

# Columns the File Geodatabase format manages itself (FID and geometry)
RESERVED_FIELD_NAMES = frozenset({"OBJECTID", "SHAPE"})

MAX_IDENTIFIER_LENGTH = 64


def validate_identifier(identifier: str, name: str) -> str:
    """
    Validate a layer or field name against the File Geodatabase allowlist.

    Args:
        identifier: Identifier to validate
        name: Name of the identifier (for error messages)

    Returns:
        The identifier, unchanged

    Raises:
        ValueError: If identifier doesn't match the allowlist pattern or is too long
    """
    if not re.match(r'^[A-Za-z][A-Za-z0-9_]*$', identifier):
        raise ValueError(
            f"Invalid {name}: {identifier!r}. "
            f"Must match pattern: ^[A-Za-z][A-Za-z0-9_]*$"
        )
    if len(identifier) > MAX_IDENTIFIER_LENGTH:
        raise ValueError(
            f"Invalid {name}: {identifier!r} is longer than {MAX_IDENTIFIER_LENGTH} characters"
        )
    return identifier


class FieldType(str, Enum):
    """Primitive attribute types supported on a layer."""
    STRING = "string"
    INTEGER = "integer"
    INTEGER64 = "integer64"
    REAL = "real"
    DATE = "date"
    DATETIME = "datetime"


class FieldDefinition(BaseModel):
    """
    A named, typed attribute column.

    Attributes:
        name: Column name, used exactly as declared (no truncation or renaming)
        type: Primitive type of the column
        width: Optional maximum width (strings) or precision hint
        nullable: Whether the column accepts nulls (default: True)
        alias: Optional human-readable alternative name
    """

    name: str = Field(..., description="Column name")
    type: FieldType = Field(FieldType.STRING, description="Primitive column type")
    width: Optional[int] = Field(None, ge=0, description="Maximum width (0 = driver default)")
    nullable: bool = Field(True, description="Whether the column accepts nulls")
    alias: Optional[str] = Field(None, description="Alternative (display) name")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        validate_identifier(v, "field name")
        if v.upper() in RESERVED_FIELD_NAMES:
            raise ValueError(f"Field name {v!r} is reserved by the File Geodatabase format")
        return v


class LayerSchema(BaseModel):
    """
    Schema of the single layer written by the builder.

    Field order is column order. Field names are unique case-insensitively,
    because File Geodatabase column names are.

    Example:
        >>> schema = LayerSchema(
        ...     name="Employee",
        ...     srs="EPSG:4326",
        ...     fields=[{"name": "Name", "type": "string"}],
        ... )
        >>> schema.srs
        4326
    """

    name: str = Field(..., description="Layer name")
    geometry_type: GeometryType = Field(GeometryType.POINT, description="Declared geometry type")
    srs: SpatialReferenceId = Field(4326, description="Spatial reference of the layer")
    fields: list[FieldDefinition] = Field(default_factory=list, description="Ordered field definitions")
    options: dict[str, str] = Field(
        default_factory=dict,
        description="Driver-specific layer creation options (KEY=VALUE)",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_identifier(v, "layer name")

    @field_validator("fields")
    @classmethod
    def validate_unique_fields(cls, v: list[FieldDefinition]) -> list[FieldDefinition]:
        seen = set()
        for field in v:
            key = field.name.lower()
            if key in seen:
                raise ValueError(f"Duplicate field name: {field.name!r}")
            seen.add(key)
        return v

    @property
    def field_names(self) -> list[str]:
        return [field.name for field in self.fields]

    def option_list(self) -> list[str]:
        """Layer creation options as GDAL KEY=VALUE strings."""
        return [f"{key}={value}" for key, value in self.options.items()]


class Record(BaseModel):
    """One feature to append: attribute values by field name plus a 2D point."""

    attributes: dict[str, AttributeValue] = Field(default_factory=dict)
    point: Point2D


class DatasetSpec(BaseModel):
    """
    Everything needed to build one dataset.

    Attributes:
        output_path: Destination container path; any existing data there is removed
        driver: GDAL vector driver name (default: "OpenFileGDB")
        datasource_options: Driver-specific data source creation options
        layer: Schema of the layer to create
        records: Ordered records to append
    """

    output_path: Path = Field(..., description="Destination container path")
    driver: str = Field("OpenFileGDB", min_length=1, description="GDAL vector driver name")
    datasource_options: dict[str, str] = Field(
        default_factory=dict,
        description="Driver-specific data source creation options (KEY=VALUE)",
    )
    layer: LayerSchema
    records: list[Record] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_record_attributes(self) -> 'DatasetSpec':
        """Every record attribute must name a declared field (exact spelling)."""
        declared = set(self.layer.field_names)
        for index, record in enumerate(self.records):
            unknown = [name for name in record.attributes if name not in declared]
            if unknown:
                raise ValueError(
                    f"Record {index} sets undeclared field(s) {unknown}; "
                    f"declared fields are {self.layer.field_names}"
                )
        return self

    def datasource_option_list(self) -> list[str]:
        """Data source creation options as GDAL KEY=VALUE strings."""
        return [f"{key}={value}" for key, value in self.datasource_options.items()]
