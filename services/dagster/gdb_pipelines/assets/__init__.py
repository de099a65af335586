"""Assets for the geodatabase pipelines."""

from .health_checks import gdal_health_check

__all__ = [
    "gdal_health_check",
]
