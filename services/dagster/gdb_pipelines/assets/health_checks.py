"""Health check assets for validating the GDAL installation."""

from dagster import asset, AssetExecutionContext

from ..resources import GeodatabaseResource


@asset(group_name="maintenance", compute_kind="gdal", required_resource_keys={"geodatabase"})
def gdal_health_check(context: AssetExecutionContext) -> dict:
    """
    Verify that GDAL can build file geodatabases in this environment.

    Checks:
    - GDAL version of the Python bindings
    - Configured driver is registered and can create data sources
    - EPSG:4326 resolves (PROJ database reachable)
    - ogrinfo CLI is on PATH and lists the configured driver

    Returns:
        Dictionary with check results and versions.

    Raises:
        RuntimeError: If any critical check fails.
    """
    geodatabase: GeodatabaseResource = context.resources.geodatabase
    results = {}

    # 1. Bindings
    report = geodatabase.check_environment()
    context.log.info(f"GDAL version (bindings): {report['gdal_version']}")
    results["gdal_version"] = report["gdal_version"]

    # 2. Driver
    driver = report["drivers"][geodatabase.driver]
    if not driver["available"]:
        raise RuntimeError(f"GDAL driver {geodatabase.driver!r} is not registered")
    if not driver["can_create"]:
        raise RuntimeError(f"GDAL driver {geodatabase.driver!r} cannot create data sources")
    context.log.info(f"Driver {geodatabase.driver} available with create support")
    results["driver"] = geodatabase.driver

    # 3. PROJ
    if not report["epsg_4326"]:
        raise RuntimeError("EPSG:4326 cannot be resolved, check PROJ_LIB / PROJ data files")
    results["epsg_4326"] = True

    # 4. CLI
    res = geodatabase.run_raw_command(["ogrinfo", "--version"])
    if not res.success:
        raise RuntimeError(f"ogrinfo check failed: {res.stderr}")
    ogrinfo_version = res.stdout.strip()
    context.log.info(f"ogrinfo version: {ogrinfo_version}")
    results["ogrinfo_version"] = ogrinfo_version

    res = geodatabase.run_raw_command(["ogrinfo", "--formats"])
    if not res.success:
        raise RuntimeError(f"ogrinfo formats check failed: {res.stderr}")
    if geodatabase.driver not in res.stdout:
        raise RuntimeError(
            f"ogrinfo does not list driver {geodatabase.driver}\n"
            f"Available formats:\n{res.stdout}"
        )

    context.log.info("GDAL Health Check Passed")
    return results
