# =============================================================================
# Dataset Info
# =============================================================================
# Opens a written container read-only and summarizes its layers, schema
# and features.
# =============================================================================

import logging
from pathlib import Path
from typing import Union

from osgeo import ogr

from ..exceptions import DatasetIOError
from ..models import Bounds, DatasetSummary, FeatureSummary, FieldSummary, LayerSummary, Point2D
from .ogr_types import field_type_from_ogr
from .srs import srs_identifier

__all__ = ["describe_dataset", "describe_layer"]

logger = logging.getLogger(__name__)


def _feature_summary(feature: ogr.Feature, field_names: list[str]) -> FeatureSummary:
    attributes = {}
    for index, name in enumerate(field_names):
        attributes[name] = feature.GetField(index) if feature.IsFieldSetAndNotNull(index) else None

    point = None
    geometry = feature.GetGeometryRef()
    if geometry is not None and ogr.GT_Flatten(geometry.GetGeometryType()) == ogr.wkbPoint:
        point = Point2D(x=geometry.GetX(), y=geometry.GetY())

    return FeatureSummary(fid=feature.GetFID(), attributes=attributes, point=point)


def describe_layer(layer: ogr.Layer, include_features: bool = True) -> LayerSummary:
    """
    Summarize one layer.

    Args:
        layer: Open OGR layer
        include_features: Whether to read every feature (default: True)

    Returns:
        LayerSummary with fields in declaration order
    """
    defn = layer.GetLayerDefn()
    fields = []
    for index in range(defn.GetFieldCount()):
        field_defn = defn.GetFieldDefn(index)
        fields.append(FieldSummary(
            name=field_defn.GetName(),
            type=field_type_from_ogr(field_defn.GetType()),
            ogr_type_name=field_defn.GetTypeName(),
        ))

    feature_count = layer.GetFeatureCount()
    extent = Bounds.from_ogr_extent(layer.GetExtent()) if feature_count else None

    features = []
    if include_features:
        field_names = [field.name for field in fields]
        layer.ResetReading()
        for feature in layer:
            features.append(_feature_summary(feature, field_names))

    return LayerSummary(
        name=layer.GetName(),
        geometry_type=ogr.GeometryTypeToName(layer.GetGeomType()),
        srs=srs_identifier(layer.GetSpatialRef()),
        fields=fields,
        feature_count=feature_count,
        extent=extent,
        features=features,
    )


def describe_dataset(path: Union[str, Path], include_features: bool = True) -> DatasetSummary:
    """
    Open a vector container read-only and summarize every layer.

    Args:
        path: Container path (e.g. "sample.gdb")
        include_features: Whether to read every feature (default: True)

    Returns:
        DatasetSummary

    Raises:
        DatasetIOError: If the path cannot be opened as a vector dataset
    """
    path = str(path)
    try:
        datasource = ogr.Open(path, 0)
    except RuntimeError as e:
        raise DatasetIOError(f"Cannot open dataset {path}: {e}") from e
    if datasource is None:
        raise DatasetIOError(f"Cannot open dataset {path}")

    try:
        layers = [
            describe_layer(datasource.GetLayerByIndex(index), include_features)
            for index in range(datasource.GetLayerCount())
        ]
        summary = DatasetSummary(
            path=path,
            driver=datasource.GetDriver().GetName(),
            layers=layers,
        )
    finally:
        datasource = None

    logger.debug(f"Described {path}: {len(summary.layers)} layer(s)")
    return summary
