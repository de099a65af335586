"""Dagster Resources - GDAL Access."""

from .geodatabase_resource import GeodatabaseResource, GDALResult

__all__ = [
    "GeodatabaseResource",
    "GDALResult",
]
