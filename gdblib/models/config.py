# =============================================================================
# Configuration Models Module
# =============================================================================
# Provides the Pydantic Settings model for the builder:
# - BuilderSettings: output location, driver, layer, spatial reference and
#   GDAL process configuration
# =============================================================================

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

from .spatial import SpatialReferenceId

__all__ = ["BuilderSettings"]


# =============================================================================
# Builder Settings
# =============================================================================

class BuilderSettings(BaseSettings):
    """
    Configuration for the geodatabase builder.

    Maps environment variables:
    - GDB_OUTPUT_PATH → output_path
    - GDB_DRIVER → driver
    - GDB_LAYER_NAME → layer_name
    - GDB_SRS → srs
    - GDAL_USE_EXCEPTIONS → use_exceptions
    - GDAL_DATA → gdal_data_path
    - PROJ_LIB → proj_lib_path
    - GDB_LOG_LEVEL → log_level

    Attributes:
        output_path: Destination container path (default: "sample.gdb")
        driver: GDAL vector driver name (default: "OpenFileGDB")
        layer_name: Name of the layer to create (default: "Employee")
        srs: Spatial reference of the layer (default: EPSG:4326)
        use_exceptions: Exception-based GDAL error reporting (default: True)
        gdal_data_path: Path to GDAL data files (optional)
        proj_lib_path: Path to PROJ data files (optional)
        log_level: Logging level name (default: "INFO")
    """

    output_path: str = Field("sample.gdb", validation_alias="GDB_OUTPUT_PATH", description="Destination container path")
    driver: str = Field("OpenFileGDB", validation_alias="GDB_DRIVER", description="GDAL vector driver name")
    layer_name: str = Field("Employee", validation_alias="GDB_LAYER_NAME", description="Layer name")
    srs: SpatialReferenceId = Field(4326, validation_alias="GDB_SRS", description="Layer spatial reference")
    use_exceptions: bool = Field(True, validation_alias="GDAL_USE_EXCEPTIONS", description="Exception-based GDAL error reporting")
    gdal_data_path: Optional[str] = Field(None, validation_alias="GDAL_DATA", description="Path to GDAL data files")
    proj_lib_path: Optional[str] = Field(None, validation_alias="PROJ_LIB", description="Path to PROJ data files")
    log_level: str = Field("INFO", validation_alias="GDB_LOG_LEVEL", description="Logging level name")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore unrelated env vars from shared .env files
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level
