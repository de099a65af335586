# =============================================================================
# Dataset Summary Models
# =============================================================================
# Read-back view of a written container, produced by
# spatial_utils.dataset_info.describe_dataset.
# =============================================================================

"""Read-back models describing a written dataset."""

from typing import Optional

from pydantic import BaseModel, Field

from ..exceptions import DatasetIOError
from .schema import AttributeValue, FieldType
from .spatial import Bounds, Point2D

__all__ = ["FieldSummary", "FeatureSummary", "LayerSummary", "DatasetSummary"]


class FieldSummary(BaseModel):
    """Name and type of a column as stored by the driver."""

    name: str
    type: Optional[FieldType] = Field(
        None, description="Mapped field type (None if the OGR type has no mapping)"
    )
    ogr_type_name: str = Field(..., description="OGR field type name, e.g. 'String'")


class FeatureSummary(BaseModel):
    """One stored feature."""

    fid: int
    attributes: dict[str, AttributeValue] = Field(default_factory=dict)
    point: Optional[Point2D] = None


class LayerSummary(BaseModel):
    """One stored layer with its schema and contents."""

    name: str
    geometry_type: str = Field(..., description="OGR geometry type name, e.g. 'Point'")
    srs: Optional[str] = Field(None, description="Spatial reference as 'EPSG:<code>'")
    fields: list[FieldSummary] = Field(default_factory=list)
    feature_count: int = 0
    extent: Optional[Bounds] = None
    features: list[FeatureSummary] = Field(default_factory=list)

    @property
    def field_names(self) -> list[str]:
        return [field.name for field in self.fields]


class DatasetSummary(BaseModel):
    """All layers of a stored container."""

    path: str
    driver: str
    layers: list[LayerSummary] = Field(default_factory=list)

    def layer(self, name: str) -> LayerSummary:
        """Return the layer named ``name``; raises DatasetIOError if absent."""
        for layer in self.layers:
            if layer.name == name:
                return layer
        stored = [layer.name for layer in self.layers]
        raise DatasetIOError(f"{self.path} has no layer {name!r}; stored layers are {stored}")
