# =============================================================================
# Geodatabase Errors
# =============================================================================
# Error taxonomy for dataset builds and reprojection:
# - ConfigurationError: unknown driver, unresolvable spatial reference
# - DatasetIOError: destination cannot be cleared or created
# - SchemaError: invalid layer, field, attribute or geometry type
# - ProjectionError: coordinate transformation failed
# =============================================================================

from enum import Enum

__all__ = [
    "ErrorKind",
    "GeodatabaseError",
    "ConfigurationError",
    "DatasetIOError",
    "SchemaError",
    "ProjectionError",
]


class ErrorKind(str, Enum):
    """Classification of a failed build or reprojection."""
    CONFIGURATION = "configuration"
    IO = "io"
    SCHEMA = "schema"
    PROJECTION = "projection"


class GeodatabaseError(RuntimeError):
    """
    Base class for all failures raised by gdblib.

    Every subclass carries an ErrorKind so that callers using the
    return-code style (see dataset_builder.try_build_dataset) can report
    the failure category without inspecting the exception type.
    """

    kind: ErrorKind = ErrorKind.CONFIGURATION


class ConfigurationError(GeodatabaseError):
    """Driver lookup or spatial reference resolution failed."""

    kind = ErrorKind.CONFIGURATION


class DatasetIOError(GeodatabaseError):
    """The output path could not be cleared, created or flushed."""

    kind = ErrorKind.IO


class SchemaError(GeodatabaseError):
    """A layer, field, attribute or geometry did not fit the layer definition."""

    kind = ErrorKind.SCHEMA


class ProjectionError(GeodatabaseError):
    """A coordinate transformation could not be built or applied."""

    kind = ErrorKind.PROJECTION
