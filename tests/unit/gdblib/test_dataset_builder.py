"""
Unit tests for the dataset builder.

These tests write real containers to a temp directory through the
OpenFileGDB driver and read them back; they skip when GDAL (>= 3.6, for
OpenFileGDB write support) is not available.
"""

import pytest

pytest.importorskip("osgeo")

from osgeo import gdal, ogr, osr

from gdblib.dataset_builder import (
    append_feature,
    build_dataset,
    build_point,
    clear_output_path,
    create_datasource,
    create_layer,
    declare_fields,
    flush,
    get_driver,
    try_build_dataset,
)
from gdblib.exceptions import ConfigurationError, SchemaError
from gdblib.models import BuilderSettings, DatasetSpec, FieldDefinition, FieldType, LayerSchema
from gdblib.sample_data import employee_dataset_spec
from gdblib.spatial_utils import configure_gdal, describe_dataset, resolve_spatial_reference
from gdblib.spatial_utils import gdal_env as gdal_env_module

# FileGDB stores coordinates on a grid finer than this
COORDINATE_TOLERANCE = 1e-8


def _open_employee_layer(path, filegdb):
    """Create an empty Employee layer and return (datasource, layer)."""
    srs = resolve_spatial_reference(4326)
    datasource = create_datasource(filegdb, path)
    schema = LayerSchema(
        name="Employee",
        fields=[FieldDefinition(name="Name"), FieldDefinition(name="Email")],
    )
    layer = create_layer(datasource, schema, srs)
    declare_fields(layer, schema.fields)
    return datasource, layer, srs


# =============================================================================
# Clear Output Path Tests
# =============================================================================


class TestClearOutputPath:
    """Test removal of pre-existing output."""

    def test_missing_path_is_noop(self, tmp_path):
        assert clear_output_path(tmp_path / "absent.gdb") is False

    def test_directory_tree_removed(self, tmp_path):
        target = tmp_path / "old.gdb"
        (target / "nested").mkdir(parents=True)
        (target / "nested" / "a00000001.gdbtable").write_bytes(b"stale")

        assert clear_output_path(target) is True
        assert not target.exists()

    def test_regular_file_removed(self, tmp_path):
        target = tmp_path / "old.gdb"
        target.write_text("not a geodatabase")

        assert clear_output_path(target) is True
        assert not target.exists()


# =============================================================================
# Step Tests
# =============================================================================


class TestDriverLookup:
    """Test driver resolution."""

    def test_known_driver(self, filegdb):
        assert get_driver("OpenFileGDB").GetName() == "OpenFileGDB"

    def test_unknown_driver_rejected(self, gdal_env):
        with pytest.raises(ConfigurationError, match="Unknown GDAL vector driver"):
            get_driver("NoSuchDriver")


class TestLayerCreation:
    """Test layer and field creation."""

    def test_unsupported_geometry_type_rejected(self, filegdb, output_path):
        """Non-point layers fail before the driver creates anything."""
        datasource = create_datasource(filegdb, output_path)
        schema = LayerSchema(name="Employee", geometry_type="polygon")

        with pytest.raises(SchemaError, match="not supported"):
            create_layer(datasource, schema, resolve_spatial_reference(4326))
        assert datasource.GetLayerCount() == 0
        datasource = None

    def test_fields_created_in_order(self, filegdb, output_path):
        datasource, layer, _ = _open_employee_layer(output_path, filegdb)

        defn = layer.GetLayerDefn()
        names = [defn.GetFieldDefn(i).GetName() for i in range(defn.GetFieldCount())]
        assert names == ["Name", "Email"]
        assert defn.GetFieldDefn(0).GetType() == ogr.OFTString
        layer = None
        datasource = None


class TestAppendFeature:
    """Test per-record feature creation."""

    def test_append_returns_fid(self, filegdb, output_path, north_cape):
        datasource, layer, srs = _open_employee_layer(output_path, filegdb)

        fid = append_feature(layer, {"Name": "Bob", "Email": "bob@google.com"}, build_point(north_cape, srs))

        assert fid >= 1
        assert layer.GetFeatureCount() == 1
        layer = None
        datasource = None

    def test_undeclared_field_leaves_no_partial_feature(self, filegdb, output_path, north_cape):
        """A record naming an unknown field fails and writes nothing."""
        datasource, layer, srs = _open_employee_layer(output_path, filegdb)

        with pytest.raises(SchemaError, match="Phone"):
            append_feature(
                layer,
                {"Name": "Bob", "Phone": "555-0100"},
                build_point(north_cape, srs),
            )

        assert layer.GetFeatureCount() == 0
        flush(layer, datasource)
        layer = None
        datasource = None

        summary = describe_dataset(output_path)
        assert summary.layer("Employee").feature_count == 0

    def test_wrong_geometry_type_rejected(self, filegdb, output_path):
        datasource, layer, _ = _open_employee_layer(output_path, filegdb)
        line = ogr.CreateGeometryFromWkt("LINESTRING (0 0, 1 1)")

        with pytest.raises(SchemaError, match="expects Point"):
            append_feature(layer, {"Name": "Bob"}, line)
        assert layer.GetFeatureCount() == 0
        layer = None
        datasource = None

    def test_point_with_z_rejected_on_2d_layer(self, filegdb, output_path):
        """A 3D point does not match a 2D point layer."""
        datasource, layer, _ = _open_employee_layer(output_path, filegdb)
        point_z = ogr.CreateGeometryFromWkt("POINT (25.7837 71.1710 12)")
        assert point_z.GetGeometryType() == ogr.wkbPoint25D

        with pytest.raises(SchemaError, match="expects Point geometries, got 3D Point"):
            append_feature(layer, {"Name": "Bob"}, point_z)
        assert layer.GetFeatureCount() == 0
        layer = None
        datasource = None

    def test_null_attribute_written_as_null(self, filegdb, output_path, north_cape):
        datasource, layer, srs = _open_employee_layer(output_path, filegdb)
        append_feature(layer, {"Name": "Bob", "Email": None}, build_point(north_cape, srs))
        flush(layer, datasource)
        layer = None
        datasource = None

        feature = describe_dataset(output_path).layer("Employee").features[0]
        assert feature.attributes == {"Name": "Bob", "Email": None}


def test_build_point_is_tagged_not_reprojected(gdal_env, north_cape):
    """The point keeps its coordinates and carries the layer's reference."""
    srs = resolve_spatial_reference(4326)
    point = build_point(north_cape, srs)

    assert point.GetX() == pytest.approx(25.7837)
    assert point.GetY() == pytest.approx(71.1710)
    assert point.GetSpatialReference().IsSame(srs)


# =============================================================================
# Build Procedure Tests
# =============================================================================


class TestBuildDataset:
    """Test the full build procedure against the Employee sample."""

    def test_schema_read_back(self, filegdb, valid_dataset_spec, builder_settings):
        """The stored layer has the declared name, type, fields and reference."""
        build_dataset(valid_dataset_spec, builder_settings)

        summary = describe_dataset(valid_dataset_spec.output_path)
        assert summary.driver == "OpenFileGDB"
        layer = summary.layer("Employee")
        assert layer.geometry_type == "Point"
        assert layer.field_names == ["Name", "Email"]
        assert all(field.type is FieldType.STRING for field in layer.fields)
        assert layer.srs == "EPSG:4326"

    def test_features_read_back(self, filegdb, valid_dataset_spec, builder_settings):
        """Exactly one feature per record, with values in order."""
        result = build_dataset(valid_dataset_spec, builder_settings)

        assert result.success is True
        assert result.feature_count == 2
        assert result.layer_name == "Employee"

        layer = describe_dataset(valid_dataset_spec.output_path).layer("Employee")
        assert layer.feature_count == 2
        assert [f.attributes for f in layer.features] == [
            {"Name": "Bob", "Email": "bob@google.com"},
            {"Name": "John", "Email": "john@google.com"},
        ]
        for feature in layer.features:
            assert feature.point.x == pytest.approx(25.7837, abs=COORDINATE_TOLERANCE)
            assert feature.point.y == pytest.approx(71.1710, abs=COORDINATE_TOLERANCE)

        assert layer.extent.width == pytest.approx(0, abs=COORDINATE_TOLERANCE)
        assert layer.extent.height == pytest.approx(0, abs=COORDINATE_TOLERANCE)

    def test_rebuild_is_idempotent(self, filegdb, valid_dataset_spec, builder_settings):
        """Building twice at the same path yields the same content."""
        first = build_dataset(valid_dataset_spec, builder_settings)
        before = describe_dataset(valid_dataset_spec.output_path).layer("Employee")

        second = build_dataset(valid_dataset_spec, builder_settings)
        after = describe_dataset(valid_dataset_spec.output_path).layer("Employee")

        assert first.removed_existing is False
        assert second.removed_existing is True
        assert after.feature_count == 2
        assert after.field_names == before.field_names
        assert [f.attributes for f in after.features] == [f.attributes for f in before.features]

    def test_existing_file_replaced(self, filegdb, valid_dataset_spec, builder_settings, output_path):
        output_path.write_text("stale")

        result = build_dataset(valid_dataset_spec, builder_settings)

        assert result.removed_existing is True
        assert describe_dataset(output_path).layer("Employee").feature_count == 2

    def test_single_bob_record(self, filegdb, valid_dataset_spec_dict, builder_settings):
        """One record in, one feature out, with exactly its values."""
        valid_dataset_spec_dict["records"] = valid_dataset_spec_dict["records"][:1]
        spec = DatasetSpec(**valid_dataset_spec_dict)

        build_dataset(spec, builder_settings)

        layer = describe_dataset(spec.output_path).layer("Employee")
        assert layer.feature_count == 1
        feature = layer.features[0]
        assert feature.attributes == {"Name": "Bob", "Email": "bob@google.com"}
        assert feature.point.x == pytest.approx(25.7837, abs=COORDINATE_TOLERANCE)
        assert feature.point.y == pytest.approx(71.1710, abs=COORDINATE_TOLERANCE)

    def test_empty_layer(self, filegdb, valid_dataset_spec_dict, builder_settings):
        valid_dataset_spec_dict["records"] = []
        spec = DatasetSpec(**valid_dataset_spec_dict)

        result = build_dataset(spec, builder_settings)

        assert result.feature_count == 0
        layer = describe_dataset(spec.output_path).layer("Employee")
        assert layer.feature_count == 0
        assert layer.extent is None

    def test_unsupported_geometry_fails_before_any_append(
        self, filegdb, valid_dataset_spec_dict, builder_settings
    ):
        """A polygon layer fails at layer creation; no layer or feature is written."""
        valid_dataset_spec_dict["layer"]["geometry_type"] = "polygon"
        spec = DatasetSpec(**valid_dataset_spec_dict)

        with pytest.raises(SchemaError):
            build_dataset(spec, builder_settings)

        # The data source exists (no rollback) but holds no layer
        assert describe_dataset(spec.output_path).layers == []

    def test_unknown_driver(self, gdal_env, valid_dataset_spec_dict, builder_settings):
        valid_dataset_spec_dict["driver"] = "NoSuchDriver"
        spec = DatasetSpec(**valid_dataset_spec_dict)

        with pytest.raises(ConfigurationError):
            build_dataset(spec, builder_settings)
        assert not spec.output_path.exists()

    def test_unknown_epsg_code(self, filegdb, valid_dataset_spec_dict, builder_settings):
        valid_dataset_spec_dict["layer"]["srs"] = 999999
        spec = DatasetSpec(**valid_dataset_spec_dict)

        with pytest.raises(ConfigurationError, match="EPSG:999999"):
            build_dataset(spec, builder_settings)

    def test_well_known_name_srs(self, filegdb, tmp_path, builder_settings):
        spec = employee_dataset_spec(tmp_path / "wgs84.gdb", srs="WGS84")

        build_dataset(spec, builder_settings)

        assert describe_dataset(spec.output_path).layer("Employee").srs == "EPSG:4326"


class TestTryBuildDataset:
    """Test the result-returning build mode."""

    def test_success(self, filegdb, valid_dataset_spec, builder_settings):
        result = try_build_dataset(valid_dataset_spec, builder_settings)
        assert result.success is True
        assert result.error_kind is None

    def test_failure_reported_in_result(self, gdal_env, valid_dataset_spec_dict, builder_settings):
        valid_dataset_spec_dict["driver"] = "NoSuchDriver"
        spec = DatasetSpec(**valid_dataset_spec_dict)

        result = try_build_dataset(spec, builder_settings)

        assert result.success is False
        assert result.error_kind == "configuration"
        assert "NoSuchDriver" in result.error_message
        assert result.feature_count == 0


# =============================================================================
# Return-Code Mode Tests
# =============================================================================


@pytest.fixture
def return_code_mode(filegdb, monkeypatch):
    """Bindings switched to return-code error reporting for one test."""
    monkeypatch.setattr(gdal_env_module, "_configured", False)
    configure_gdal(BuilderSettings(GDAL_USE_EXCEPTIONS=False, GDAL_DATA=None, PROJ_LIB=None))
    yield filegdb
    gdal.UseExceptions()
    ogr.UseExceptions()
    osr.UseExceptions()


class TestReturnCodeMode:
    """Failures map to the same errors when GDAL reports through return codes."""

    def test_bindings_do_not_raise(self, return_code_mode):
        assert ogr.GetUseExceptions() == 0
        assert osr.GetUseExceptions() == 0

    def test_unknown_epsg_code(self, return_code_mode):
        with pytest.raises(ConfigurationError, match="EPSG:999999"):
            resolve_spatial_reference(999999)

    def test_unknown_driver(self, return_code_mode, valid_dataset_spec_dict):
        valid_dataset_spec_dict["driver"] = "NoSuchDriver"
        spec = DatasetSpec(**valid_dataset_spec_dict)

        with pytest.raises(ConfigurationError, match="Unknown GDAL vector driver"):
            build_dataset(spec)
        assert not spec.output_path.exists()

    def test_duplicate_field_rejected(self, return_code_mode, output_path):
        datasource, layer, _ = _open_employee_layer(output_path, return_code_mode)

        with pytest.raises(SchemaError, match="Cannot create field 'Name'"):
            declare_fields(layer, [FieldDefinition(name="Name")])
        layer = None
        datasource = None

    def test_undeclared_field_leaves_no_partial_feature(
        self, return_code_mode, output_path, north_cape
    ):
        datasource, layer, srs = _open_employee_layer(output_path, return_code_mode)

        with pytest.raises(SchemaError, match="Phone"):
            append_feature(layer, {"Name": "Bob", "Phone": "555-0100"}, build_point(north_cape, srs))
        assert layer.GetFeatureCount() == 0
        layer = None
        datasource = None

    def test_sample_build_reads_back(self, return_code_mode, valid_dataset_spec):
        result = build_dataset(valid_dataset_spec)

        assert result.success is True
        assert result.feature_count == 2
        layer = describe_dataset(valid_dataset_spec.output_path).layer("Employee")
        assert layer.feature_count == 2
        assert [f.attributes["Name"] for f in layer.features] == ["Bob", "John"]
