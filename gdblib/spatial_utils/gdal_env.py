# =============================================================================
# GDAL Environment - Process-wide library configuration
# =============================================================================
# Configures the GDAL/OGR/OSR bindings once per process (error reporting
# mode, GDAL_DATA, PROJ search paths) and reports what the linked GDAL
# build can do.
# =============================================================================

import logging
import threading
from typing import Iterable, Optional

from osgeo import gdal, ogr, osr

from ..models import BuilderSettings

__all__ = ["configure_gdal", "is_configured", "check_environment"]

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_configured = False


def configure_gdal(settings: Optional[BuilderSettings] = None) -> bool:
    """
    Initialize the GDAL bindings for this process.

    Only the first call has an effect; later calls (including concurrent
    ones) are no-ops, so the error reporting mode never flips mid-run.

    Args:
        settings: Builder settings; read from the environment when omitted

    Returns:
        True if this call performed the initialization, False if it was
        already done
    """
    global _configured

    with _lock:
        if _configured:
            return False

        if settings is None:
            settings = BuilderSettings()

        # Exception mode is switched for all three modules together
        if settings.use_exceptions:
            gdal.UseExceptions()
            ogr.UseExceptions()
            osr.UseExceptions()
        else:
            gdal.DontUseExceptions()
            ogr.DontUseExceptions()
            osr.DontUseExceptions()

        if settings.gdal_data_path:
            gdal.SetConfigOption("GDAL_DATA", settings.gdal_data_path)
        if settings.proj_lib_path:
            osr.SetPROJSearchPaths([settings.proj_lib_path])

        _configured = True
        logger.debug(
            f"GDAL {gdal.__version__} configured "
            f"(exceptions={'on' if settings.use_exceptions else 'off'})"
        )
        return True


def is_configured() -> bool:
    return _configured


def check_environment(driver_names: Iterable[str] = ("OpenFileGDB",)) -> dict:
    """
    Report what the linked GDAL build provides.

    Checks:
    - GDAL release name
    - Each requested vector driver: registered and able to create data sources
    - EPSG:4326 resolves through the PROJ database

    Args:
        driver_names: Vector drivers the caller needs

    Returns:
        Dictionary with "gdal_version", "drivers" (name → {"available",
        "can_create"}) and "epsg_4326" (bool)
    """
    results = {
        "gdal_version": gdal.VersionInfo("RELEASE_NAME"),
        "drivers": {},
    }

    for name in driver_names:
        driver = ogr.GetDriverByName(name)
        can_create = driver is not None and driver.GetMetadataItem(gdal.DCAP_CREATE) == "YES"
        results["drivers"][name] = {
            "available": driver is not None,
            "can_create": can_create,
        }

    srs = osr.SpatialReference()
    try:
        results["epsg_4326"] = srs.ImportFromEPSG(4326) == 0
    except RuntimeError as e:
        logger.warning(f"EPSG:4326 did not resolve: {e}")
        results["epsg_4326"] = False

    return results
