# =============================================================================
# Geodatabase Resource - GDAL bindings and CLI wrapper
# =============================================================================
# Provides a thin, stateless wrapper around the gdblib builder (GDAL Python
# bindings) and the ogrinfo command-line tool for Dagster ops and assets.
# =============================================================================

from dataclasses import dataclass
import os
import subprocess
from pathlib import Path
from typing import Dict, Optional, Union
import logging

from dagster import ConfigurableResource
from pydantic import Field

from gdblib.dataset_builder import BuildResult, build_dataset
from gdblib.models import BuilderSettings, DatasetSpec, DatasetSummary
from gdblib.spatial_utils import check_environment, describe_dataset

__all__ = ["GeodatabaseResource", "GDALResult"]

logger = logging.getLogger(__name__)


@dataclass
class GDALResult:
    """
    Serializable result from GDAL command-line operations.
    """
    success: bool
    command: list[str]
    stdout: str
    stderr: str
    return_code: int


class GeodatabaseResource(ConfigurableResource):
    """
    Dagster resource for building and inspecting file geodatabases.

    Design Principles:
    - **Stateless:** No internal state between calls
    - **Serializable I/O:** Build results and summaries are JSON-serializable
    - **One-time GDAL setup:** The first build configures the bindings for
      the whole process; later configuration changes have no effect

    Configuration:
        driver: GDAL vector driver used for builds (default: "OpenFileGDB")
        use_exceptions: Exception-based GDAL error reporting (default: True)
        gdal_data_path: Path to GDAL data files (optional)
        proj_lib_path: Path to PROJ data files (optional)

    Example:
        >>> geodatabase = GeodatabaseResource(driver="OpenFileGDB")
        >>> result = geodatabase.build(spec)
        >>> if result.success:
        ...     logger.info(f"Wrote {result.feature_count} features")
    """

    driver: str = Field(
        "OpenFileGDB",
        description="GDAL vector driver used for builds",
    )
    use_exceptions: bool = Field(
        True,
        description="Exception-based GDAL error reporting",
    )
    gdal_data_path: str = Field(
        "",
        description="Path to GDAL data files (optional)",
    )
    proj_lib_path: str = Field(
        "",
        description="Path to PROJ data files (optional)",
    )

    def builder_settings(self) -> BuilderSettings:
        """Translate the resource configuration into BuilderSettings."""
        return BuilderSettings(
            GDB_DRIVER=self.driver,
            GDAL_USE_EXCEPTIONS=self.use_exceptions,
            GDAL_DATA=self.gdal_data_path or None,
            PROJ_LIB=self.proj_lib_path or None,
        )

    def build(self, spec: Union[DatasetSpec, dict]) -> BuildResult:
        """
        Build a dataset.

        The resource's driver applies when the dataset spec does not name one.

        Args:
            spec: DatasetSpec or its dict form

        Returns:
            BuildResult with success=True

        Raises:
            pydantic.ValidationError: If a dict spec is invalid
            gdblib.exceptions.GeodatabaseError: If the build fails
        """
        if isinstance(spec, dict):
            spec = DatasetSpec.model_validate({"driver": self.driver, **spec})
        return build_dataset(spec, self.builder_settings())

    def describe(self, path: Union[str, Path]) -> DatasetSummary:
        """Summarize a written dataset (layers, fields, features)."""
        return describe_dataset(path)

    def check_environment(self) -> dict:
        """Report GDAL version, driver availability and PROJ readiness."""
        return check_environment([self.driver])

    def _get_env(self) -> Dict[str, str]:
        """Build environment variables for GDAL subprocess calls.

        Returns:
            Dictionary of environment variables to pass to subprocess.
        """
        env = os.environ.copy()

        # Optional GDAL/PROJ paths (typically already set in the environment)
        if self.gdal_data_path:
            env["GDAL_DATA"] = self.gdal_data_path
        if self.proj_lib_path:
            env["PROJ_LIB"] = self.proj_lib_path

        return env

    def ogrinfo(
        self,
        input_path: str,
        layer: Optional[str] = None,
        as_json: bool = False,
    ) -> GDALResult:
        """
        Get information about a vector dataset.

        Displays schema, feature count, coordinate system, and spatial extent.

        Args:
            input_path: Path to vector dataset
            layer: Specific layer to inspect (optional)
            as_json: Return output in JSON format (optional, default: False)

        Returns:
            GDALResult with dataset info in stdout

        Example:
            >>> result = geodatabase.ogrinfo("sample.gdb", layer="Employee")
            >>> if result.success:
            ...     print(result.stdout)
        """
        cmd = ["ogrinfo", "-ro"]
        if as_json:
            cmd.append("-json")
        else:
            cmd.extend(["-al", "-so"])
        cmd.append(input_path)
        if layer:
            cmd.append(layer)

        return self._run_command(cmd)

    def _run_command(self, cmd: list[str]) -> GDALResult:
        """
        Execute a GDAL command via subprocess.

        Args:
            cmd: Command and arguments as list (e.g., ["ogrinfo", "-ro", ...])

        Returns:
            GDALResult with execution details, stdout, stderr, and return code
        """
        logger.debug(f"Running: {' '.join(cmd)}")
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            env=self._get_env(),
        )

        return GDALResult(
            success=result.returncode == 0,
            command=cmd,
            stdout=result.stdout,
            stderr=result.stderr,
            return_code=result.returncode,
        )

    def run_raw_command(self, cmd: list[str]) -> GDALResult:
        """
        Execute an arbitrary GDAL command via subprocess.

        Used for health checks, version queries and format listings.

        Example:
            >>> result = geodatabase.run_raw_command(["ogrinfo", "--formats"])
        """
        return self._run_command(cmd)
