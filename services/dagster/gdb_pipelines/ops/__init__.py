"""Dagster Ops - Reusable Computation Units."""

from .build_op import build_geodatabase

__all__ = [
    "build_geodatabase",
]
