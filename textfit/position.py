"""
Position Resolver - Turn preset names or partial positions into anchor points
"""

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from loguru import logger

from config import settings


class Anchor(str, Enum):
    """Horizontal alignment of a text block relative to x"""
    START = "start"    # left edge at x
    MIDDLE = "middle"  # centered on x
    END = "end"        # right edge at x


@dataclass(frozen=True)
class Position:
    """Anchor point; y is the vertical center of the text block"""
    x: float
    y: float
    anchor: Anchor = Anchor.MIDDLE


# Coordinates for a 1920x1080 canvas
POSITION_PRESETS: Mapping[str, Position] = MappingProxyType({
    "topLeft": Position(x=90, y=100, anchor=Anchor.START),
    "topCenter": Position(x=960, y=100, anchor=Anchor.MIDDLE),
    "topRight": Position(x=1830, y=100, anchor=Anchor.END),
    "centerLeft": Position(x=90, y=540, anchor=Anchor.START),
    "center": Position(x=960, y=540, anchor=Anchor.MIDDLE),
    "centerRight": Position(x=1830, y=540, anchor=Anchor.END),
    "bottomLeft": Position(x=90, y=980, anchor=Anchor.START),
    "bottomCenter": Position(x=960, y=980, anchor=Anchor.MIDDLE),
    "bottomRight": Position(x=1830, y=980, anchor=Anchor.END),
    # Common thumbnail positions
    "rightCenter": Position(x=1700, y=400, anchor=Anchor.END),
    "rightUpper": Position(x=1700, y=280, anchor=Anchor.END),
    "rightThird": Position(x=1700, y=400, anchor=Anchor.END),
    "leftThird": Position(x=220, y=400, anchor=Anchor.START),
})

FALLBACK_PRESET = "center"

PositionInput = Union[str, Position, Mapping[str, Any], None]


def parse_anchor(value: Any) -> Anchor:
    """
    Parse an anchor value, falling back to middle for anything unrecognised

    Args:
        value: Anchor, "start"/"middle"/"end" (any case) or None

    Returns:
        Anchor
    """
    if isinstance(value, Anchor):
        return value
    if value is None:
        return Anchor.MIDDLE
    try:
        return Anchor(str(value).strip().lower())
    except ValueError:
        logger.warning(f"Unknown anchor '{value}', using middle")
        return Anchor.MIDDLE


def get_position(
    position_input: PositionInput = None,
    canvas_width: Optional[float] = None,
    canvas_height: Optional[float] = None
) -> Position:
    """
    Resolve a position preset or a partial custom position

    Args:
        position_input: Preset name (e.g. "topLeft"), Position, or mapping
            with any of x, y, anchor
        canvas_width: Canvas width used to default a missing x (default from settings)
        canvas_height: Canvas height used to default a missing y (default from settings)

    Returns:
        Fully specified Position
    """
    if position_input is None:
        position_input = settings.DEFAULT_POSITION

    if isinstance(position_input, str):
        preset = POSITION_PRESETS.get(position_input)
        if preset is None:
            logger.warning(f"Unknown position preset '{position_input}', using {FALLBACK_PRESET}")
            return POSITION_PRESETS[FALLBACK_PRESET]
        return preset

    width = settings.CANVAS_WIDTH if canvas_width is None else canvas_width
    height = settings.CANVAS_HEIGHT if canvas_height is None else canvas_height

    if isinstance(position_input, Position):
        return Position(
            x=_coordinate(position_input.x, width / 2, "x"),
            y=_coordinate(position_input.y, height / 2, "y"),
            anchor=parse_anchor(position_input.anchor),
        )

    if not isinstance(position_input, Mapping):
        logger.warning(f"Unsupported position input {position_input!r}, using {FALLBACK_PRESET}")
        return POSITION_PRESETS[FALLBACK_PRESET]

    return Position(
        x=_coordinate(position_input.get("x"), width / 2, "x"),
        y=_coordinate(position_input.get("y"), height / 2, "y"),
        anchor=parse_anchor(position_input.get("anchor")),
    )


def _coordinate(value: Any, default: float, name: str) -> float:
    """Finite coordinate, or default when missing or invalid"""
    if value is None:
        return default
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = value
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            number = math.nan

    if not math.isfinite(number):
        logger.warning(f"Invalid {name} coordinate {value!r}, using {default}")
        return default
    return number
