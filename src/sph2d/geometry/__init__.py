"""
Boolean polygon shapes used to define bodies and particle regions.
"""

from .shape import ShapeBooleanOps, MultiPolygon, MultiPolygonShape

__all__ = [
    "ShapeBooleanOps",
    "MultiPolygon",
    "MultiPolygonShape",
]
