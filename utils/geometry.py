"""
Geometry helpers for placing text boxes on the canvas
"""

from typing import Tuple

# Sub-pixel noise left over from float arithmetic is not a real overflow
EPSILON = 1e-6


def horizontal_extent(x: float, width: float, anchor: str) -> Tuple[float, float]:
    """
    Get the left/right edges of a box aligned to x

    Args:
        x: Anchor x coordinate
        width: Box width
        anchor: "start" (left edge at x), "middle" (centered) or "end" (right edge at x)

    Returns:
        (left, right)
    """
    if anchor == "middle":
        return x - width / 2, x + width / 2
    if anchor == "end":
        return x - width, x
    return x, x + width


def vertical_extent(y: float, height: float) -> Tuple[float, float]:
    """Get the top/bottom edges of a box vertically centered on y"""
    return y - height / 2, y + height / 2


def rects_intersect(
    a: Tuple[float, float, float, float],
    b: Tuple[float, float, float, float]
) -> bool:
    """
    Check whether two rectangles overlap

    Args:
        a: (left, top, right, bottom)
        b: (left, top, right, bottom)

    Returns:
        True if the rectangles share any area
    """
    a_left, a_top, a_right, a_bottom = a
    b_left, b_top, b_right, b_bottom = b
    return (
        a_left < b_right
        and a_right > b_left
        and a_top < b_bottom
        and a_bottom > b_top
    )


def clean_overflow(value: float) -> float:
    """Clamp an overflow distance to zero, ignoring float noise"""
    return value if value > EPSILON else 0.0


def axis_shift(low: float, high: float, min_bound: float, max_bound: float) -> float:
    """
    Smallest shift that moves the span [low, high] inside [min_bound, max_bound]

    A span longer than the bounds cannot fit both edges, so it gets centered instead.

    Returns:
        Signed shift (positive moves right/down), 0.0 when already inside
    """
    if (high - low) - (max_bound - min_bound) > EPSILON:
        shift = (min_bound + max_bound) / 2 - (low + high) / 2
    elif min_bound - low > EPSILON:
        shift = min_bound - low
    elif high - max_bound > EPSILON:
        shift = max_bound - high
    else:
        shift = 0.0

    return shift if abs(shift) > EPSILON else 0.0
