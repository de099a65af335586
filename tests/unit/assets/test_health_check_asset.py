# =============================================================================
# Unit Tests: GDAL Health Check Asset
# =============================================================================

from unittest.mock import Mock

import pytest

pytest.importorskip("osgeo")

from dagster import build_asset_context

from services.dagster.gdb_pipelines.assets import gdal_health_check
from services.dagster.gdb_pipelines.resources import GDALResult


def _result(stdout, returncode=0, stderr=""):
    return GDALResult(
        success=returncode == 0,
        command=["ogrinfo"],
        stdout=stdout,
        stderr=stderr,
        return_code=returncode,
    )


def _mock_geodatabase(can_create=True, epsg_4326=True, formats="OpenFileGDB -vector- (rov): ESRI FileGDB"):
    geodatabase = Mock()
    geodatabase.driver = "OpenFileGDB"
    geodatabase.check_environment.return_value = {
        "gdal_version": "3.8.4",
        "drivers": {"OpenFileGDB": {"available": True, "can_create": can_create}},
        "epsg_4326": epsg_4326,
    }
    geodatabase.run_raw_command.side_effect = [
        _result("GDAL 3.8.4, released 2024/02/08"),
        _result(formats),
    ]
    return geodatabase


def test_health_check_passes():
    context = build_asset_context(resources={"geodatabase": _mock_geodatabase()})

    results = gdal_health_check(context)

    assert results["gdal_version"] == "3.8.4"
    assert results["driver"] == "OpenFileGDB"
    assert results["ogrinfo_version"].startswith("GDAL 3.8.4")


def test_health_check_driver_without_create_support():
    context = build_asset_context(resources={"geodatabase": _mock_geodatabase(can_create=False)})

    with pytest.raises(RuntimeError, match="cannot create"):
        gdal_health_check(context)


def test_health_check_missing_proj_data():
    context = build_asset_context(resources={"geodatabase": _mock_geodatabase(epsg_4326=False)})

    with pytest.raises(RuntimeError, match="EPSG:4326"):
        gdal_health_check(context)


def test_health_check_cli_missing_driver():
    context = build_asset_context(resources={"geodatabase": _mock_geodatabase(formats="GPKG -vector-")})

    with pytest.raises(RuntimeError, match="does not list driver"):
        gdal_health_check(context)
