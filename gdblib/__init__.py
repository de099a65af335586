# =============================================================================
# File Geodatabase Builder Library
# =============================================================================
# This package builds ESRI File Geodatabases through the GDAL/OGR bindings.
# See individual sub-packages for detailed documentation.
# =============================================================================

"""
File geodatabase builder library.

Sub-packages:
- models: Pydantic data models, dataset specs and settings
- spatial_utils: GDAL configuration, spatial references, reprojection, inspection

Modules:
- dataset_builder: Build a single-layer point dataset and flush it to disk
- exceptions: Error taxonomy shared by the builder and reprojection helpers
- sample_data: The Employee sample dataset
"""

__version__ = "0.1.0"
