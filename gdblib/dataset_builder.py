# =============================================================================
# Dataset Builder
# =============================================================================
# Builds a single-layer point dataset (an ESRI File Geodatabase by default)
# through the OGR bindings and flushes it to disk.
# =============================================================================

"""
Dataset builder.

Build order:
1. Clear the output path (destructive, no backup)
2. Resolve the layer's spatial reference
3. Look up the driver
4. Create the data source
5. Create the layer with its geometry type and spatial reference
6. Declare the fields in order (no approximate names)
7. Append one point feature per record
8. Flush: layer sync, data source sync, data source cache flush

Handles are released in reverse creation order on every exit path. A
failure after the data source exists may leave a partial container behind.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from osgeo import gdal, ogr, osr

from .exceptions import ConfigurationError, DatasetIOError, GeodatabaseError, SchemaError
from .models import (
    BuilderSettings,
    DatasetSpec,
    FieldDefinition,
    GeometryType,
    LayerSchema,
    Point2D,
)
from .models.schema import AttributeValue
from .spatial_utils import configure_gdal, resolve_spatial_reference
from .spatial_utils.ogr_types import field_type_to_ogr, geometry_type_to_ogr

__all__ = [
    "BuildResult",
    "build_dataset",
    "try_build_dataset",
    "clear_output_path",
    "get_driver",
    "create_datasource",
    "create_layer",
    "declare_fields",
    "build_point",
    "append_feature",
    "flush",
]

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """
    Outcome of a dataset build.

    All fields are JSON-serializable so the result can be returned from a
    Dagster op unchanged.
    """
    success: bool
    output_path: str
    layer_name: str
    feature_count: int = 0
    removed_existing: bool = False
    error_kind: Optional[str] = None
    error_message: Optional[str] = None


def _ok(err) -> bool:
    # OGR calls return OGRERR_NONE (0); a few bindings return None
    return err is None or err == 0


# =============================================================================
# Build Steps
# =============================================================================

def clear_output_path(path: Union[str, Path]) -> bool:
    """
    Remove whatever exists at ``path`` (directory tree or file).

    Returns:
        True if something was removed

    Raises:
        DatasetIOError: If the existing data cannot be removed
    """
    path = Path(path)
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        elif path.exists() or path.is_symlink():
            path.unlink()
        else:
            return False
    except OSError as e:
        raise DatasetIOError(f"Cannot remove existing output {path}: {e}") from e

    logger.info(f"Removed existing output: {path}")
    return True


def get_driver(name: str) -> ogr.Driver:
    """
    Look up a vector driver that can create data sources.

    Raises:
        ConfigurationError: If the driver is unknown to the linked GDAL
            build or cannot create data sources
    """
    driver = ogr.GetDriverByName(name)
    if driver is None:
        raise ConfigurationError(f"Unknown GDAL vector driver: {name!r}")
    if driver.GetMetadataItem(gdal.DCAP_CREATE) != "YES":
        raise ConfigurationError(f"GDAL driver {name!r} cannot create data sources")
    return driver


def create_datasource(
    driver: ogr.Driver,
    path: Union[str, Path],
    options: Optional[list[str]] = None,
) -> ogr.DataSource:
    """
    Create an empty data source at ``path``.

    Args:
        driver: Driver from get_driver
        path: Destination path
        options: Driver-specific KEY=VALUE creation options

    Raises:
        DatasetIOError: If the data source cannot be created
    """
    try:
        datasource = driver.CreateDataSource(str(path), options=options or [])
    except RuntimeError as e:
        raise DatasetIOError(f"Cannot create data source at {path}: {e}") from e
    if datasource is None:
        raise DatasetIOError(f"Cannot create data source at {path}")

    logger.info(f"Created {driver.GetName()} data source: {path}")
    return datasource


def create_layer(
    datasource: ogr.DataSource,
    schema: LayerSchema,
    srs: osr.SpatialReference,
) -> ogr.Layer:
    """
    Create the layer declared by ``schema``.

    Only point layers can be written, since records carry 2D points; other
    geometry types fail here, before anything is appended.

    Raises:
        SchemaError: If the geometry type is unsupported or the driver
            refuses the layer
    """
    if schema.geometry_type is not GeometryType.POINT:
        raise SchemaError(
            f"Layer {schema.name!r}: geometry type {schema.geometry_type.value!r} "
            f"is not supported, records carry 2D points"
        )

    try:
        layer = datasource.CreateLayer(
            schema.name,
            srs=srs,
            geom_type=geometry_type_to_ogr(schema.geometry_type),
            options=schema.option_list(),
        )
    except RuntimeError as e:
        raise SchemaError(f"Cannot create layer {schema.name!r}: {e}") from e
    if layer is None:
        raise SchemaError(f"Cannot create layer {schema.name!r}")

    logger.info(f"Created layer {schema.name!r} ({schema.geometry_type.value})")
    return layer


def _field_defn(field: FieldDefinition) -> ogr.FieldDefn:
    field_defn = ogr.FieldDefn(field.name, field_type_to_ogr(field.type))
    if field.width:
        field_defn.SetWidth(field.width)
    field_defn.SetNullable(field.nullable)
    if field.alias:
        field_defn.SetAlternativeName(field.alias)
    return field_defn


def declare_fields(layer: ogr.Layer, fields: list[FieldDefinition]) -> None:
    """
    Create ``fields`` on ``layer`` in order.

    Approximate matches are not allowed: a field the driver would truncate
    or rename is an error.

    Raises:
        SchemaError: If the driver rejects or renames a field
    """
    for field in fields:
        try:
            err = layer.CreateField(_field_defn(field), approx_ok=0)
        except RuntimeError as e:
            raise SchemaError(f"Cannot create field {field.name!r}: {e}") from e
        if not _ok(err):
            raise SchemaError(f"Cannot create field {field.name!r} (OGR error {err})")

        defn = layer.GetLayerDefn()
        created = defn.GetFieldDefn(defn.GetFieldCount() - 1).GetName()
        if created != field.name:
            raise SchemaError(f"Field {field.name!r} was created as {created!r}")

    logger.info(f"Declared {len(fields)} field(s): {[field.name for field in fields]}")


def build_point(point: Point2D, srs: osr.SpatialReference) -> ogr.Geometry:
    """
    Create a 2D point tagged with ``srs``.

    The coordinates are assumed to already be in ``srs``; nothing is
    reprojected.
    """
    geometry = ogr.Geometry(ogr.wkbPoint)
    geometry.AssignSpatialReference(srs)
    geometry.SetPoint_2D(0, point.x, point.y)
    return geometry


def append_feature(
    layer: ogr.Layer,
    attributes: Mapping[str, AttributeValue],
    geometry: ogr.Geometry,
) -> int:
    """
    Append one feature to ``layer``.

    Attribute names and the geometry type are checked against the layer
    definition before the feature is created, so a rejected record leaves
    no partial feature behind.

    Args:
        layer: Target layer
        attributes: Values by exact field name (None writes a null)
        geometry: Geometry of the layer's type; copied into the feature

    Returns:
        FID assigned to the new feature

    Raises:
        SchemaError: On an undeclared field, a wrong geometry type or a
            driver rejection
    """
    defn = layer.GetLayerDefn()
    declared = [defn.GetFieldDefn(index).GetName() for index in range(defn.GetFieldCount())]
    unknown = [name for name in attributes if name not in declared]
    if unknown:
        raise SchemaError(
            f"Layer {layer.GetName()!r} has no field(s) {unknown}; declared fields are {declared}"
        )

    # Exact match, dimension included: a Z or M point would lose its extra
    # ordinates on a 2D layer
    layer_type = layer.GetGeomType()
    geometry_type = geometry.GetGeometryType()
    if layer_type != ogr.wkbUnknown and geometry_type != layer_type:
        raise SchemaError(
            f"Layer {layer.GetName()!r} expects {ogr.GeometryTypeToName(layer_type)} geometries, "
            f"got {ogr.GeometryTypeToName(geometry_type)}"
        )

    feature = ogr.Feature(defn)
    try:
        for name, value in attributes.items():
            index = declared.index(name)
            if value is None:
                feature.SetFieldNull(index)
            else:
                feature.SetField(index, value)
        feature.SetGeometry(geometry)
        err = layer.CreateFeature(feature)
        fid = feature.GetFID()
    except RuntimeError as e:
        raise SchemaError(f"Cannot append feature to {layer.GetName()!r}: {e}") from e
    finally:
        feature = None

    if not _ok(err):
        raise SchemaError(f"Cannot append feature to {layer.GetName()!r} (OGR error {err})")
    return fid


def flush(layer: ogr.Layer, datasource: ogr.DataSource) -> None:
    """
    Force buffered writes to disk.

    Layer metadata and indices are synchronized before the data source,
    and the final cache flush leaves nothing buffered.

    Raises:
        DatasetIOError: If any of the three steps fails
    """
    steps = (
        ("layer sync", layer.SyncToDisk),
        ("data source sync", datasource.SyncToDisk),
        ("cache flush", datasource.FlushCache),
    )
    for label, step in steps:
        try:
            err = step()
        except RuntimeError as e:
            raise DatasetIOError(f"Flush failed at {label}: {e}") from e
        if not _ok(err):
            raise DatasetIOError(f"Flush failed at {label} (OGR error {err})")


# =============================================================================
# Build Procedure
# =============================================================================

def build_dataset(
    spec: DatasetSpec,
    settings: Optional[BuilderSettings] = None,
) -> BuildResult:
    """
    Build the dataset described by ``spec`` and flush it to disk.

    Any existing data at ``spec.output_path`` is removed first.

    Args:
        spec: Dataset to build
        settings: Settings used for the one-time GDAL initialization

    Returns:
        BuildResult with success=True and the number of features written

    Raises:
        ConfigurationError: Unknown driver or unresolvable spatial reference
        DatasetIOError: Output cannot be cleared, created or flushed
        SchemaError: Layer, field, attribute or geometry rejected
    """
    configure_gdal(settings)

    output_path = Path(spec.output_path)
    removed = clear_output_path(output_path)
    srs = resolve_spatial_reference(spec.layer.srs)
    driver = get_driver(spec.driver)
    datasource = create_datasource(driver, output_path, spec.datasource_option_list())

    layer = None
    try:
        layer = create_layer(datasource, spec.layer, srs)
        declare_fields(layer, spec.layer.fields)

        for record in spec.records:
            geometry = build_point(record.point, srs)
            append_feature(layer, record.attributes, geometry)
            geometry = None

        flush(layer, datasource)
        feature_count = layer.GetFeatureCount()
    finally:
        # Layer before data source
        layer = None
        datasource = None

    logger.info(f"Wrote {feature_count} feature(s) to {output_path} ({spec.layer.name})")
    return BuildResult(
        success=True,
        output_path=str(output_path),
        layer_name=spec.layer.name,
        feature_count=feature_count,
        removed_existing=removed,
    )


def try_build_dataset(
    spec: DatasetSpec,
    settings: Optional[BuilderSettings] = None,
) -> BuildResult:
    """
    Build like build_dataset, reporting failures in the result instead of raising.

    Returns:
        BuildResult; on failure success=False with error_kind and error_message set
    """
    try:
        return build_dataset(spec, settings)
    except GeodatabaseError as e:
        logger.error(f"Build of {spec.output_path} failed ({e.kind.value}): {e}")
        return BuildResult(
            success=False,
            output_path=str(spec.output_path),
            layer_name=spec.layer.name,
            error_kind=e.kind.value,
            error_message=str(e),
        )
