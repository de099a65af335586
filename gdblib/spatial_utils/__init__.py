# =============================================================================
# Spatial Utils Library
# =============================================================================
# Thin helpers over the GDAL/OGR/OSR Python bindings.
# =============================================================================

"""
Spatial utilities for the geodatabase builder.

This library provides:
- configure_gdal: One-time, process-wide GDAL initialization
- check_environment: Driver and PROJ availability report
- resolve_spatial_reference: EPSG code / well-known name → osr.SpatialReference
- reproject: In-place geometry transformation between spatial references
- describe_dataset: Read-back summary of a written container
"""

from .gdal_env import configure_gdal, is_configured, check_environment
from .srs import resolve_spatial_reference, well_known_spatial_reference, srs_identifier
from .reproject import reproject, reproject_point, to_british_national_grid
from .dataset_info import describe_dataset, describe_layer

__all__ = [
    "configure_gdal",
    "is_configured",
    "check_environment",
    "resolve_spatial_reference",
    "well_known_spatial_reference",
    "srs_identifier",
    "reproject",
    "reproject_point",
    "to_british_national_grid",
    "describe_dataset",
    "describe_layer",
]
