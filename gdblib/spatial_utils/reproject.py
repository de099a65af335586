# =============================================================================
# Geometry Reprojection
# =============================================================================
# In-place coordinate transformation between two spatial references.
# Any failure is fatal: there is no retry and no fallback to the
# untransformed geometry.
# =============================================================================

import logging
from typing import Union

from osgeo import ogr, osr

from ..exceptions import ProjectionError
from ..models import Point2D
from .srs import as_spatial_reference, resolve_spatial_reference, well_known_spatial_reference

__all__ = [
    "reproject",
    "reproject_point",
    "to_british_national_grid",
    "BRITISH_NATIONAL_GRID",
]

logger = logging.getLogger(__name__)

BRITISH_NATIONAL_GRID = 27700

SpatialReferenceLike = Union[osr.SpatialReference, int, str]


def _build_transformation(
    source: osr.SpatialReference,
    target: osr.SpatialReference,
) -> osr.CoordinateTransformation:
    # Options can carry an explicit operation or area of interest
    options = osr.CoordinateTransformationOptions()
    try:
        transformation = osr.CreateCoordinateTransformation(source, target, options)
    except RuntimeError as e:
        raise ProjectionError(f"projection failed: no transformation path ({e})") from e
    if transformation is None:
        raise ProjectionError("projection failed: no transformation path")
    return transformation


def reproject(
    geometry: ogr.Geometry,
    source: SpatialReferenceLike,
    target: SpatialReferenceLike,
) -> ogr.Geometry:
    """
    Transform a geometry from ``source`` to ``target`` in place.

    Args:
        geometry: Geometry to transform; modified in place
        source: Spatial reference (or identifier) the coordinates are in
        target: Spatial reference (or identifier) to transform to

    Returns:
        The same geometry, now tagged with the target spatial reference

    Raises:
        ConfigurationError: If source or target cannot be resolved
        ProjectionError: If no transformation exists or it fails for this geometry
    """
    source_srs = as_spatial_reference(source)
    target_srs = as_spatial_reference(target)
    transformation = _build_transformation(source_srs, target_srs)

    try:
        err = geometry.Transform(transformation)
    except RuntimeError as e:
        raise ProjectionError(f"projection failed: {e}") from e
    if err != 0:
        raise ProjectionError(f"projection failed (OGR error {err})")

    logger.debug(f"Reprojected {geometry.GetGeometryName()} to {target_srs.GetName()}")
    return geometry


def reproject_point(
    point: Point2D,
    source: SpatialReferenceLike,
    target: SpatialReferenceLike,
) -> Point2D:
    """Transform a single coordinate pair and return the new pair."""
    geometry = ogr.Geometry(ogr.wkbPoint)
    geometry.SetPoint_2D(0, point.x, point.y)
    reproject(geometry, source, target)
    return Point2D(x=geometry.GetX(), y=geometry.GetY())


def to_british_national_grid(geometry: ogr.Geometry) -> ogr.Geometry:
    """
    Transform a WGS84 geometry to British National Grid in place.

    The source is resolved from its well-known name and the target from the
    EPSG registry.
    """
    source = well_known_spatial_reference("EPSG:4326")
    target = resolve_spatial_reference(BRITISH_NATIONAL_GRID)
    return reproject(geometry, source, target)
