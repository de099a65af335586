"""Geodatabase build jobs (op-based)."""

from dagster import job

from gdblib.sample_data import employee_dataset_spec

from ..ops import build_geodatabase


@job(
    name="build_geodatabase_job",
    description="Build a single-layer file geodatabase from a dataset spec passed via run config",
)
def build_geodatabase_job():
    """
    Build job for arbitrary dataset specs.

    The dataset spec is passed as an op input via run config:

        ops:
          build_geodatabase:
            inputs:
              dataset_spec:
                value: {output_path: ..., layer: {...}, records: [...]}
    """
    build_geodatabase()


@job(
    name="build_sample_geodatabase_job",
    description="Build the Employee sample geodatabase (Bob and John at North Cape)",
    config={
        "ops": {
            "build_geodatabase": {
                "inputs": {
                    "dataset_spec": {
                        "value": employee_dataset_spec("sample.gdb").model_dump(mode="json"),
                    }
                }
            }
        }
    },
)
def build_sample_geodatabase_job():
    """Same pipeline as build_geodatabase_job, preconfigured with the sample spec."""
    build_geodatabase()
