"""Merged table builder module."""

from .table import BuildStats, LengthBounds, TableBuilder

__all__ = [
    "BuildStats",
    "LengthBounds",
    "TableBuilder",
]
