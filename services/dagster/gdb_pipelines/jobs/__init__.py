"""Dagster Jobs - Executable Workflows."""

from .build_job import build_geodatabase_job, build_sample_geodatabase_job

__all__ = ["build_geodatabase_job", "build_sample_geodatabase_job"]
