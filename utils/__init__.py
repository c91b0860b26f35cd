"""
Utility Functions
"""

from .geometry import (
    EPSILON,
    horizontal_extent,
    vertical_extent,
    rects_intersect,
    clean_overflow,
    axis_shift,
)

__all__ = [
    "EPSILON",
    "horizontal_extent",
    "vertical_extent",
    "rects_intersect",
    "clean_overflow",
    "axis_shift",
]
