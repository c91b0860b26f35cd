"""
Thumbnail Caption Text-Fit Engine
"""

from .font_metrics import FontMetricsProfile, FONT_METRICS, get_font_metrics
from .measurer import (
    TextMeasurement,
    TextBlock,
    measure_text_width,
    measure_text_block,
    estimate_chars_per_line,
    will_text_fit,
)
from .wrapper import smart_word_wrap
from .autofit import FitConstraints, FitResult, auto_fit_text, find_optimal_font_size
from .position import Anchor, Position, POSITION_PRESETS, get_position
from .safe_zone import (
    CanvasSize,
    SafeZoneProfile,
    SAFE_ZONES,
    DURATION_ZONE,
    ValidationResult,
    PositionAdjustment,
    get_safe_zone_bounds,
    validate_safe_zone,
    adjust_position_for_text,
    avoid_duration_zone,
)
from .overlay import OverlayStyle, OverlayPlan, OverlayPlanner, available_width, prepare_text_overlay

__all__ = [
    "FontMetricsProfile",
    "FONT_METRICS",
    "get_font_metrics",
    "TextMeasurement",
    "TextBlock",
    "measure_text_width",
    "measure_text_block",
    "estimate_chars_per_line",
    "will_text_fit",
    "smart_word_wrap",
    "FitConstraints",
    "FitResult",
    "auto_fit_text",
    "find_optimal_font_size",
    "Anchor",
    "Position",
    "POSITION_PRESETS",
    "get_position",
    "CanvasSize",
    "SafeZoneProfile",
    "SAFE_ZONES",
    "DURATION_ZONE",
    "ValidationResult",
    "PositionAdjustment",
    "get_safe_zone_bounds",
    "validate_safe_zone",
    "adjust_position_for_text",
    "avoid_duration_zone",
    "OverlayStyle",
    "OverlayPlan",
    "OverlayPlanner",
    "available_width",
    "prepare_text_overlay",
]
