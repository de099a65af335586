# =============================================================================
# OGR Type Mapping
# =============================================================================
# Maps the model enums (FieldType, GeometryType) to OGR constants and back.
# =============================================================================

from typing import Optional

from osgeo import ogr

from ..models import FieldType, GeometryType

__all__ = [
    "FIELD_TYPES",
    "GEOMETRY_TYPES",
    "field_type_to_ogr",
    "field_type_from_ogr",
    "geometry_type_to_ogr",
]

FIELD_TYPES = {
    FieldType.STRING: ogr.OFTString,
    FieldType.INTEGER: ogr.OFTInteger,
    FieldType.INTEGER64: ogr.OFTInteger64,
    FieldType.REAL: ogr.OFTReal,
    FieldType.DATE: ogr.OFTDate,
    FieldType.DATETIME: ogr.OFTDateTime,
}

GEOMETRY_TYPES = {
    GeometryType.POINT: ogr.wkbPoint,
    GeometryType.MULTIPOINT: ogr.wkbMultiPoint,
    GeometryType.LINESTRING: ogr.wkbLineString,
    GeometryType.POLYGON: ogr.wkbPolygon,
}

_OGR_FIELD_TYPES = {value: key for key, value in FIELD_TYPES.items()}


def field_type_to_ogr(field_type: FieldType) -> int:
    return FIELD_TYPES[FieldType(field_type)]


def field_type_from_ogr(ogr_type: int) -> Optional[FieldType]:
    """Map an OGR field type code back to FieldType (None for unmapped types)."""
    return _OGR_FIELD_TYPES.get(ogr_type)


def geometry_type_to_ogr(geometry_type: GeometryType) -> int:
    return GEOMETRY_TYPES[GeometryType(geometry_type)]
