"""Dagster Definitions - Repository Configuration.

Defines assets, jobs and resources for the geodatabase pipelines.
"""

from dagster import Definitions, define_asset_job

from .assets import gdal_health_check
from .jobs import build_geodatabase_job, build_sample_geodatabase_job
from .resources import GeodatabaseResource


# =============================================================================
# Asset Jobs
# =============================================================================

gdal_health_check_job = define_asset_job(
    "gdal_health_check_job",
    selection=[gdal_health_check],
    description="Health check for GDAL installation and the configured driver",
)


# =============================================================================
# Definitions
# =============================================================================

defs = Definitions(
    assets=[gdal_health_check],
    jobs=[
        gdal_health_check_job,
        build_geodatabase_job,
        build_sample_geodatabase_job,
    ],
    resources={
        "geodatabase": GeodatabaseResource(
            driver="OpenFileGDB",
            use_exceptions=True,
        ),
    },
    schedules=[],
    sensors=[],
)
