# =============================================================================
# Spatial Types Module
# =============================================================================
# Provides reusable spatial data types with validation:
# - SpatialReferenceId: EPSG code or well-known geographic CS name
# - GeometryType: Layer geometry types
# - Point2D: A single x/y coordinate pair
# - Bounds: Geographic bounding box
# =============================================================================

import math
import re
from enum import Enum
from typing import Annotated, Union
from pydantic import BaseModel, Field, BeforeValidator, field_validator, model_validator

__all__ = [
    "SpatialReferenceId",
    "GeometryType",
    "Point2D",
    "Bounds",
    "WELL_KNOWN_GEOGCS",
    "validate_srs_id",
]


# =============================================================================
# Enums
# =============================================================================

class GeometryType(str, Enum):
    """Geometry type declared on a layer."""
    POINT = "point"
    MULTIPOINT = "multipoint"
    LINESTRING = "linestring"
    POLYGON = "polygon"


# =============================================================================
# Spatial Reference Identifier
# =============================================================================

# Names accepted by OSRSetWellKnownGeogCS (besides "EPSG:n")
WELL_KNOWN_GEOGCS = ("WGS84", "WGS72", "NAD27", "NAD83", "CRS84", "CRS83", "CRS27")


def validate_srs_id(value: Union[int, str]) -> Union[int, str]:
    """
    Validate and normalize a spatial reference identifier.

    Supports two resolution paths:
    1. EPSG registry codes: 4326, "4326", "EPSG:4326", "epsg:27700" → int
    2. Well-known geographic CS names: "WGS84", "nad83" → "NAD83"

    Whether an EPSG code actually exists is left to GDAL; this only
    rejects values that can never resolve.

    Args:
        value: Identifier to validate

    Returns:
        EPSG code as int, or the upper-cased well-known name

    Raises:
        TypeError: If the value is neither an int nor a string
        ValueError: If the format is invalid
    """
    # bool is an int subclass; True is not an EPSG code
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(
            f"Spatial reference must be an EPSG code or a name, got {type(value).__name__}"
        )

    if isinstance(value, int):
        if value <= 0:
            raise ValueError(f"EPSG code must be positive, got {value}")
        return value

    value = value.strip()
    if not value:
        raise ValueError("Spatial reference cannot be empty or whitespace only")

    if value.isdigit():
        return validate_srs_id(int(value))

    match = re.match(r'^EPSG:(\d{4,6})$', value, re.IGNORECASE)
    if match:
        return int(match.group(1))

    name = value.upper()
    if name in WELL_KNOWN_GEOGCS:
        return name

    raise ValueError(
        f"Invalid spatial reference. Must be one of:\n"
        f"  - EPSG code: 4326 or 'EPSG:4326'\n"
        f"  - Well-known name: {', '.join(WELL_KNOWN_GEOGCS)}\n"
        f"Got: {value[:100]}{'...' if len(value) > 100 else ''}"
    )


SpatialReferenceId = Annotated[
    Union[int, str],
    Field(description="EPSG code or well-known geographic CS name"),
    BeforeValidator(validate_srs_id)
]
"""
Spatial reference identifier type.

Examples:
    >>> srs: SpatialReferenceId = "EPSG:4326"  # Valid, normalized to 4326
    >>> srs: SpatialReferenceId = 27700        # Valid
    >>> srs: SpatialReferenceId = "wgs84"      # Valid, normalized to "WGS84"
"""


# =============================================================================
# Point2D
# =============================================================================

class Point2D(BaseModel):
    """
    A 2D coordinate pair.

    Coordinates are expressed in the layer's spatial reference using
    traditional GIS axis order (x = longitude/easting, y = latitude/northing).
    """

    x: float = Field(..., description="X coordinate (longitude or easting)")
    y: float = Field(..., description="Y coordinate (latitude or northing)")

    @field_validator("x", "y")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"Coordinate must be finite, got {v}")
        return v


# =============================================================================
# Bounds (Geographic Bounding Box)
# =============================================================================

class Bounds(BaseModel):
    """
    Bounding box of a layer.

    Validates that minx <= maxx and miny <= maxy (allows point bounds).

    Attributes:
        minx: Minimum X coordinate (west)
        miny: Minimum Y coordinate (south)
        maxx: Maximum X coordinate (east)
        maxy: Maximum Y coordinate (north)
    """

    minx: float = Field(..., description="Minimum X coordinate (west)")
    miny: float = Field(..., description="Minimum Y coordinate (south)")
    maxx: float = Field(..., description="Maximum X coordinate (east)")
    maxy: float = Field(..., description="Maximum Y coordinate (north)")

    @model_validator(mode='after')
    def validate_bounds(self) -> 'Bounds':
        if self.minx > self.maxx:
            raise ValueError(
                f"Invalid bounds: minx ({self.minx}) must be less than or equal to maxx ({self.maxx})"
            )
        if self.miny > self.maxy:
            raise ValueError(
                f"Invalid bounds: miny ({self.miny}) must be less than or equal to maxy ({self.maxy})"
            )
        return self

    @classmethod
    def from_ogr_extent(cls, extent: tuple[float, float, float, float]) -> "Bounds":
        """Build bounds from an OGR (minx, maxx, miny, maxy) extent tuple."""
        minx, maxx, miny, maxy = extent
        return cls(minx=minx, miny=miny, maxx=maxx, maxy=maxy)

    @property
    def width(self) -> float:
        """Calculate the width (east-west extent) of the bounding box."""
        return self.maxx - self.minx

    @property
    def height(self) -> float:
        """Calculate the height (north-south extent) of the bounding box."""
        return self.maxy - self.miny
