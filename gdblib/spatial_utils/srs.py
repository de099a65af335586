# =============================================================================
# Spatial Reference Resolution
# =============================================================================
# Turns SpatialReferenceId values into osr.SpatialReference objects through
# the EPSG registry or the well-known geographic CS names.
# =============================================================================

import logging
from typing import Optional, Union

from osgeo import osr

from ..exceptions import ConfigurationError
from ..models import validate_srs_id

__all__ = [
    "resolve_spatial_reference",
    "well_known_spatial_reference",
    "srs_identifier",
    "as_spatial_reference",
]

logger = logging.getLogger(__name__)


def _new_spatial_reference() -> osr.SpatialReference:
    srs = osr.SpatialReference()
    # x = longitude/easting, y = latitude/northing regardless of CRS axis order
    srs.SetAxisMappingStrategy(osr.OAMS_TRADITIONAL_GIS_ORDER)
    return srs


def _import(srs: osr.SpatialReference, method, argument, label: str) -> osr.SpatialReference:
    """Run an OSR import call, normalizing both error reporting modes."""
    try:
        err = method(argument)
    except RuntimeError as e:
        raise ConfigurationError(f"Cannot resolve spatial reference {label}: {e}") from e
    if err != 0:
        raise ConfigurationError(
            f"Cannot resolve spatial reference {label} (OGR error {err})"
        )
    return srs


def well_known_spatial_reference(name: str) -> osr.SpatialReference:
    """
    Resolve a well-known geographic CS name ("WGS84", "NAD83", "EPSG:4326", ...).

    Raises:
        ConfigurationError: If GDAL does not recognize the name
    """
    srs = _new_spatial_reference()
    return _import(srs, srs.SetWellKnownGeogCS, name, repr(name))


def resolve_spatial_reference(identifier: Union[int, str]) -> osr.SpatialReference:
    """
    Resolve an EPSG code or well-known name to a spatial reference.

    Args:
        identifier: EPSG code (int, "4326", "EPSG:4326") or well-known name

    Returns:
        osr.SpatialReference using traditional GIS axis order

    Raises:
        ConfigurationError: If the identifier is malformed or unknown to the
            linked PROJ database

    Example:
        >>> srs = resolve_spatial_reference("EPSG:27700")
        >>> srs.GetAuthorityCode(None)
        '27700'
    """
    try:
        normalized = validate_srs_id(identifier)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(str(e)) from e

    if isinstance(normalized, int):
        srs = _new_spatial_reference()
        return _import(srs, srs.ImportFromEPSG, normalized, f"EPSG:{normalized}")

    return well_known_spatial_reference(normalized)


def as_spatial_reference(
    value: Union[osr.SpatialReference, int, str],
) -> osr.SpatialReference:
    """Pass spatial references through; resolve identifiers."""
    if isinstance(value, osr.SpatialReference):
        return value
    return resolve_spatial_reference(value)


def srs_identifier(srs: Optional[osr.SpatialReference]) -> Optional[str]:
    """
    Describe a spatial reference as "EPSG:<code>".

    Tries the stored authority first, then asks OSR to identify the CRS.
    Returns None when no EPSG code can be determined.
    """
    if srs is None:
        return None

    code = srs.GetAuthorityCode(None)
    if code is None:
        try:
            identified = srs.AutoIdentifyEPSG() == 0
        except RuntimeError:
            identified = False
        if identified:
            code = srs.GetAuthorityCode(None)

    if code is None:
        logger.debug("Spatial reference has no EPSG authority code")
        return None
    return f"EPSG:{code}"
