"""
Safe Zone - Validate text placement against safe margins and nudge it back inside
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple, Union

from loguru import logger

from config import settings
from textfit.position import Anchor, Position, get_position
from utils.geometry import (
    horizontal_extent,
    vertical_extent,
    rects_intersect,
    clean_overflow,
    axis_shift,
)


@dataclass(frozen=True)
class SafeZoneProfile:
    """Inset margins keeping text visible on a playback device"""
    margin_x: float
    margin_y: float


@dataclass(frozen=True)
class DurationZoneRect:
    """Reserved rectangle covered by the video duration badge"""
    x: float
    y: float
    width: float
    height: float

    def as_rect(self) -> Tuple[float, float, float, float]:
        """(left, top, right, bottom)"""
        return self.x, self.y, self.x + self.width, self.y + self.height

    def for_canvas(self, canvas_width: float, canvas_height: float) -> "DurationZoneRect":
        """Same-size badge pinned to the bottom-right corner of a canvas"""
        return DurationZoneRect(
            x=canvas_width - self.width,
            y=canvas_height - self.height,
            width=self.width,
            height=self.height,
        )


@dataclass(frozen=True)
class CanvasSize:
    """Canvas dimensions in pixels"""
    width: float = 1920
    height: float = 1080

    @classmethod
    def coerce(cls, value: Any = None) -> "CanvasSize":
        """
        Build a CanvasSize from a CanvasSize, a {width, height} mapping or None

        Missing or non-positive dimensions fall back to the configured canvas.
        """
        if isinstance(value, CanvasSize):
            return value

        width = height = None
        if isinstance(value, Mapping):
            width, height = value.get("width"), value.get("height")
        elif value is not None:
            logger.warning(f"Unsupported canvas size {value!r}, using default canvas")

        return cls(
            width=_positive_or(width, settings.CANVAS_WIDTH),
            height=_positive_or(height, settings.CANVAS_HEIGHT),
        )


def _positive_or(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number) or number <= 0:
        return default
    return value if isinstance(value, (int, float)) else number


SAFE_ZONES: Mapping[str, SafeZoneProfile] = MappingProxyType({
    "desktop": SafeZoneProfile(margin_x=90, margin_y=50),
    "mobile": SafeZoneProfile(margin_x=160, margin_y=90),  # more conservative
})

DEFAULT_DEVICE = "desktop"

# Bottom-right badge on a 1920x1080 thumbnail
DURATION_ZONE = DurationZoneRect(x=1750, y=1000, width=170, height=80)


@dataclass
class SafeZoneBounds:
    """Inset rectangle inside the canvas"""
    left: float
    right: float
    top: float
    bottom: float
    width: float
    height: float
    device: str


@dataclass
class TextBounds:
    """Absolute text box on the canvas"""
    left: float
    right: float
    top: float
    bottom: float


@dataclass
class Overflow:
    """Distance the text box sticks out past each safe edge (0 when inside)"""
    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0

    def any(self) -> bool:
        return any(value > 0 for value in (self.left, self.right, self.top, self.bottom))


@dataclass
class ValidationResult:
    """Safe-zone check of one text placement"""
    valid: bool
    overflow: Overflow
    text_bounds: TextBounds
    safe_bounds: SafeZoneBounds
    in_duration_zone: bool


@dataclass
class PositionAdjustment:
    """Position after safe-zone correction"""
    x: float
    y: float
    anchor: Anchor
    adjusted: bool = False
    adjustments: List[str] = field(default_factory=list)

    @property
    def position(self) -> Position:
        return Position(x=self.x, y=self.y, anchor=self.anchor)


SafeZoneInput = Union[str, SafeZoneProfile, None]


def resolve_safe_zone(safe_zone: SafeZoneInput = None) -> Tuple[SafeZoneProfile, str]:
    """
    Resolve a device name or profile into (profile, device name)

    Unknown device names fall back to desktop margins.
    """
    if isinstance(safe_zone, SafeZoneProfile):
        return safe_zone, "custom"

    device = safe_zone or settings.SAFE_ZONE_DEVICE
    profile = SAFE_ZONES.get(device)
    if profile is None:
        logger.warning(f"Unknown safe zone device '{device}', using {DEFAULT_DEVICE}")
        return SAFE_ZONES[DEFAULT_DEVICE], DEFAULT_DEVICE
    return profile, device


def get_safe_zone_bounds(
    canvas_width: float = 1920,
    canvas_height: float = 1080,
    device: SafeZoneInput = "desktop"
) -> SafeZoneBounds:
    """
    Calculate the safe rectangle for a canvas

    Args:
        canvas_width: Canvas width
        canvas_height: Canvas height
        device: "desktop", "mobile" or an explicit SafeZoneProfile

    Returns:
        SafeZoneBounds
    """
    profile, device_name = resolve_safe_zone(device)

    return SafeZoneBounds(
        left=profile.margin_x,
        right=canvas_width - profile.margin_x,
        top=profile.margin_y,
        bottom=canvas_height - profile.margin_y,
        width=canvas_width - profile.margin_x * 2,
        height=canvas_height - profile.margin_y * 2,
        device=device_name,
    )


def _block_size(text_block: Any) -> Tuple[float, float]:
    if isinstance(text_block, Mapping):
        return text_block.get("width", 0) or 0, text_block.get("height", 0) or 0
    return text_block.width, text_block.height


def _resolve_position(position: Any) -> Position:
    if isinstance(position, PositionAdjustment):
        position = position.position
    return get_position(position)


def compute_text_bounds(text_block: Any, position: Any) -> TextBounds:
    """
    Absolute box of a text block placed at position

    Args:
        text_block: Anything with width/height (TextBlock, FitResult, mapping)
        position: Position (x follows the anchor rule, y is the vertical center)

    Returns:
        TextBounds
    """
    width, height = _block_size(text_block)
    position = _resolve_position(position)

    left, right = horizontal_extent(position.x, width, position.anchor.value)
    top, bottom = vertical_extent(position.y, height)
    return TextBounds(left=left, right=right, top=top, bottom=bottom)


def validate_safe_zone(
    text_block: Any,
    position: Any,
    canvas_size: Any = None,
    safe_zone: SafeZoneInput = "desktop"
) -> ValidationResult:
    """
    Check that a text block lies within the safe zone

    Duration-badge overlap is reported but does not make the result invalid.
    The badge keeps its size and sits in the bottom-right corner of any canvas.

    Args:
        text_block: Anything with width/height
        position: Position of the block
        canvas_size: CanvasSize or {width, height} (default canvas if None)
        safe_zone: Device name or SafeZoneProfile

    Returns:
        ValidationResult, valid iff all four overflow values are 0
    """
    canvas = CanvasSize.coerce(canvas_size)
    safe_bounds = get_safe_zone_bounds(canvas.width, canvas.height, safe_zone)
    bounds = compute_text_bounds(text_block, position)

    overflow = Overflow(
        left=clean_overflow(safe_bounds.left - bounds.left),
        right=clean_overflow(bounds.right - safe_bounds.right),
        top=clean_overflow(safe_bounds.top - bounds.top),
        bottom=clean_overflow(bounds.bottom - safe_bounds.bottom),
    )

    width, height = _block_size(text_block)
    in_duration_zone = (
        width > 0
        and height > 0
        and rects_intersect(
            (bounds.left, bounds.top, bounds.right, bounds.bottom),
            DURATION_ZONE.for_canvas(canvas.width, canvas.height).as_rect(),
        )
    )

    return ValidationResult(
        valid=not overflow.any(),
        overflow=overflow,
        text_bounds=bounds,
        safe_bounds=safe_bounds,
        in_duration_zone=in_duration_zone,
    )


def adjust_position_for_text(
    text_block: Any,
    position: Any,
    canvas_size: Any = None,
    safe_zone: SafeZoneInput = "desktop"
) -> PositionAdjustment:
    """
    Shift a position so the text block stays inside the safe zone

    Each axis moves by the minimum needed; a block larger than the safe
    span is centered in it. Applying it again to its own output is a no-op.

    Args:
        text_block: Anything with width/height
        position: Desired position
        canvas_size: CanvasSize or {width, height}
        safe_zone: Device name or SafeZoneProfile

    Returns:
        PositionAdjustment with a description of each shift
    """
    position = _resolve_position(position)
    validation = validate_safe_zone(text_block, position, canvas_size, safe_zone)

    if validation.valid:
        return PositionAdjustment(x=position.x, y=position.y, anchor=position.anchor)

    bounds = validation.text_bounds
    safe = validation.safe_bounds
    x, y = position.x, position.y
    adjustments: List[str] = []

    dx = axis_shift(bounds.left, bounds.right, safe.left, safe.right)
    if dx:
        x += dx
        if bounds.right - bounds.left > safe.width:
            adjustments.append(f"Centered horizontally in safe zone (text wider than {safe.width:.0f}px)")
        elif dx > 0:
            adjustments.append(f"Shifted right {dx:.0f}px to avoid left edge")
        else:
            adjustments.append(f"Shifted left {-dx:.0f}px to avoid right edge")

    dy = axis_shift(bounds.top, bounds.bottom, safe.top, safe.bottom)
    if dy:
        y += dy
        if bounds.bottom - bounds.top > safe.height:
            adjustments.append(f"Centered vertically in safe zone (text taller than {safe.height:.0f}px)")
        elif dy > 0:
            adjustments.append(f"Shifted down {dy:.0f}px to avoid top edge")
        else:
            adjustments.append(f"Shifted up {-dy:.0f}px to avoid bottom edge")

    if adjustments:
        logger.debug(f"Position adjusted: {'; '.join(adjustments)}")

    return PositionAdjustment(
        x=x,
        y=y,
        anchor=position.anchor,
        adjusted=bool(adjustments),
        adjustments=adjustments,
    )


def avoid_duration_zone(
    text_block: Any,
    position: Any,
    canvas_size: Any = None,
    safe_zone: SafeZoneInput = "desktop",
    padding: Optional[float] = None
) -> PositionAdjustment:
    """
    Lift a text block above the duration badge if it overlaps it

    The move is skipped when it would push the block past the top safe edge.

    Args:
        text_block: Anything with width/height
        position: Current position
        canvas_size: CanvasSize or {width, height}
        safe_zone: Device name or SafeZoneProfile
        padding: Gap kept above the badge (default from settings)

    Returns:
        PositionAdjustment
    """
    position = _resolve_position(position)
    validation = validate_safe_zone(text_block, position, canvas_size, safe_zone)
    unchanged = PositionAdjustment(x=position.x, y=position.y, anchor=position.anchor)

    if not validation.in_duration_zone:
        return unchanged

    if padding is None:
        padding = settings.DURATION_ZONE_PADDING

    canvas = CanvasSize.coerce(canvas_size)
    badge = DURATION_ZONE.for_canvas(canvas.width, canvas.height)

    _, height = _block_size(text_block)
    new_y = badge.y - height / 2 - padding
    if new_y - height / 2 < validation.safe_bounds.top:
        logger.debug("Duration zone overlap kept: no room above the badge")
        return unchanged

    shift = position.y - new_y
    return PositionAdjustment(
        x=position.x,
        y=new_y,
        anchor=position.anchor,
        adjusted=True,
        adjustments=[f"Moved up {shift:.0f}px to avoid the video duration badge"],
    )
