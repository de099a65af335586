# =============================================================================
# Build Op - Dataset Spec to File Geodatabase
# =============================================================================
# Builds a file geodatabase from a dataset spec and reads it back to
# confirm what was written.
# =============================================================================

from dataclasses import asdict
from typing import Dict, Any

from dagster import op, OpExecutionContext, In, Out

from gdblib.dataset_builder import BuildResult
from gdblib.models import DatasetSpec


def _build_geodatabase(
    geodatabase,
    dataset_spec: Dict[str, Any],
    log,
) -> Dict[str, Any]:
    """
    Core logic for building a dataset and verifying it.

    This function is extracted for easier unit testing without Dagster context.

    Args:
        geodatabase: GeodatabaseResource instance
        dataset_spec: DatasetSpec in dict form (from run config)
        log: Logger instance (context.log)

    Returns:
        Build info dict: the BuildResult fields plus "fields" (column names
        as stored) and "srs"

    Raises:
        pydantic.ValidationError: If the dataset spec is invalid
        GeodatabaseError: If the build fails
        RuntimeError: If the written layer does not match the dataset spec
    """
    spec = DatasetSpec.model_validate({"driver": geodatabase.driver, **dataset_spec})
    log.info(
        f"Building {spec.driver} dataset at {spec.output_path} "
        f"(layer {spec.layer.name}, {len(spec.records)} record(s))"
    )

    result: BuildResult = geodatabase.build(spec)
    log.info(f"Wrote {result.feature_count} feature(s) to {result.output_path}")

    summary = geodatabase.describe(result.output_path)
    layer = summary.layer(spec.layer.name)

    if layer.feature_count != len(spec.records):
        raise RuntimeError(
            f"Layer {layer.name} holds {layer.feature_count} feature(s), "
            f"expected {len(spec.records)}"
        )
    if layer.field_names != spec.layer.field_names:
        raise RuntimeError(
            f"Layer {layer.name} fields {layer.field_names} do not match "
            f"declared fields {spec.layer.field_names}"
        )

    return {
        **asdict(result),
        "fields": layer.field_names,
        "srs": layer.srs,
    }


@op(
    ins={"dataset_spec": In(dagster_type=dict)},
    out={"build_info": Out(dagster_type=dict)},
    required_resource_keys={"geodatabase"},
)
def build_geodatabase(context: OpExecutionContext, dataset_spec: dict) -> dict:
    """
    Build a file geodatabase from a dataset spec.

    Any existing data at the dataset spec's output path is removed first. After the
    build the container is read back and its layer is checked against the
    spec (feature count and field order).

    Args:
        context: Dagster op execution context
        dataset_spec: DatasetSpec in dict form, passed via run config

    Returns:
        Build info dict containing:
        - success, output_path, layer_name, feature_count, removed_existing
        - fields: Column names as stored
        - srs: Layer spatial reference ("EPSG:<code>")

    Raises:
        GeodatabaseError: If any build step fails
        RuntimeError: If the read-back does not match the dataset spec
    """
    return _build_geodatabase(
        geodatabase=context.resources.geodatabase,
        dataset_spec=dataset_spec,
        log=context.log,
    )
