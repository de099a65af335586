"""
Shared pytest fixtures for model and builder tests.

Provides reusable test data fixtures to avoid duplication across test files.
GDAL-backed fixtures skip when the osgeo bindings or a writable
OpenFileGDB driver are unavailable.
"""

import pytest

from gdblib.models import (
    BuilderSettings,
    DatasetSpec,
    FieldDefinition,
    LayerSchema,
    Point2D,
)


# =============================================================================
# Field / Layer Fixtures
# =============================================================================

@pytest.fixture
def valid_field_dict():
    """Single valid string field dictionary."""
    return {
        "name": "Name",
        "type": "string",
    }


@pytest.fixture
def valid_field(valid_field_dict):
    """Single valid FieldDefinition model instance."""
    return FieldDefinition(**valid_field_dict)


@pytest.fixture
def valid_layer_dict(valid_field_dict):
    """Employee layer schema dictionary."""
    return {
        "name": "Employee",
        "geometry_type": "point",
        "srs": "EPSG:4326",
        "fields": [
            valid_field_dict,
            {"name": "Email", "type": "string"},
        ],
    }


@pytest.fixture
def valid_layer(valid_layer_dict):
    """Employee LayerSchema model instance."""
    return LayerSchema(**valid_layer_dict)


@pytest.fixture
def north_cape():
    """Coordinates shared by both sample employees."""
    return Point2D(x=25.7837, y=71.1710)


# =============================================================================
# Dataset Spec Fixtures
# =============================================================================

@pytest.fixture
def output_path(tmp_path):
    """Destination container path inside the test's temp directory."""
    return tmp_path / "sample.gdb"


@pytest.fixture
def valid_dataset_spec_dict(output_path, valid_layer_dict):
    """Complete valid dataset spec dictionary (Bob and John)."""
    return {
        "output_path": str(output_path),
        "driver": "OpenFileGDB",
        "layer": valid_layer_dict,
        "records": [
            {
                "attributes": {"Name": "Bob", "Email": "bob@google.com"},
                "point": {"x": 25.7837, "y": 71.1710},
            },
            {
                "attributes": {"Name": "John", "Email": "john@google.com"},
                "point": {"x": 25.7837, "y": 71.1710},
            },
        ],
    }


@pytest.fixture
def valid_dataset_spec(valid_dataset_spec_dict):
    """Complete valid DatasetSpec model instance."""
    return DatasetSpec(**valid_dataset_spec_dict)


# =============================================================================
# GDAL Fixtures
# =============================================================================

@pytest.fixture
def builder_settings():
    """Exception-mode settings that ignore the developer's environment."""
    return BuilderSettings(
        GDAL_USE_EXCEPTIONS=True,
        GDAL_DATA=None,
        PROJ_LIB=None,
    )


@pytest.fixture
def gdal_env(builder_settings):
    """GDAL bindings configured for this process (skips without osgeo)."""
    pytest.importorskip("osgeo")
    from gdblib.spatial_utils import configure_gdal

    configure_gdal(builder_settings)


@pytest.fixture
def filegdb(gdal_env):
    """OpenFileGDB driver able to create data sources, or skip."""
    from osgeo import gdal, ogr

    driver = ogr.GetDriverByName("OpenFileGDB")
    if driver is None or driver.GetMetadataItem(gdal.DCAP_CREATE) != "YES":
        pytest.skip("OpenFileGDB driver with write support is not available (GDAL >= 3.6 required)")
    return driver
