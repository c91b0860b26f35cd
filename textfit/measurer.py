"""
Text Measurer - Estimate rendered text size from font metric ratios
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from config import settings
from textfit.font_metrics import (
    FontMetricsProfile,
    WIDE_CHARS,
    NARROW_CHARS,
    get_font_metrics,
)


@dataclass
class BoundingBox:
    """Box relative to the text origin (baseline at y=0)"""
    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0


@dataclass
class LineMetrics:
    """Vertical metrics of a single line"""
    ascent: float = 0.0
    descent: float = 0.0
    line_height: float = 0.0


@dataclass
class TextMeasurement:
    """Measured footprint of a single line of text"""
    width: float = 0.0
    height: float = 0.0
    font_size: float = 0
    bounding_box: BoundingBox = field(default_factory=BoundingBox)
    metrics: LineMetrics = field(default_factory=LineMetrics)


@dataclass
class TextBlock:
    """Measured footprint of one or more lines"""
    lines: List[str] = field(default_factory=list)
    width: float = 0.0
    height: float = 0.0
    line_height: float = 0.0
    font_size: float = 0
    line_widths: Tuple[float, ...] = ()


def char_width(char: str, font_size: float, metrics: FontMetricsProfile) -> float:
    """
    Estimate the width of a single character

    Args:
        char: Character to measure
        font_size: Font size in pixels
        metrics: Font metrics profile

    Returns:
        Width in pixels
    """
    if char.isspace():
        return font_size * metrics.space_ratio
    if char in WIDE_CHARS:
        return font_size * metrics.capital_ratio * 1.15
    if char in NARROW_CHARS:
        return font_size * metrics.lower_ratio * 0.5
    if char.isupper():
        return font_size * metrics.capital_ratio
    if char.islower():
        return font_size * metrics.lower_ratio
    if char.isdigit():
        return font_size * metrics.number_ratio
    return font_size * metrics.average_char_width_ratio


def _weight_multiplier(font_weight: Optional[int]) -> float:
    if font_weight is not None and font_weight >= settings.BOLD_WEIGHT_THRESHOLD:
        return settings.BOLD_WIDTH_MULTIPLIER
    return 1.0


def measure_text_width(
    text: Optional[str],
    font_size: float,
    font_family: str = "Impact",
    font_weight: int = 900
) -> TextMeasurement:
    """
    Measure a single line of text

    Widths are summed per character class and left unrounded, so they grow
    strictly with both text length and font size.

    Args:
        text: Text to measure (empty or None gives a zero measurement)
        font_size: Font size in pixels
        font_family: CSS-style font family
        font_weight: Font weight (heavy weights are slightly wider)

    Returns:
        TextMeasurement
    """
    if not text:
        return TextMeasurement(font_size=font_size)

    metrics = get_font_metrics(font_family)

    width = sum(char_width(char, font_size, metrics) for char in text)
    width *= _weight_multiplier(font_weight)

    height = font_size * metrics.height_ratio
    ascent = font_size * metrics.ascent_ratio
    descent = font_size * metrics.descent_ratio

    return TextMeasurement(
        width=width,
        height=height,
        font_size=font_size,
        bounding_box=BoundingBox(left=0.0, right=width, top=-ascent, bottom=descent),
        metrics=LineMetrics(ascent=ascent, descent=descent, line_height=height),
    )


def measure_text_block(
    lines: Optional[Sequence[str]],
    font_size: float,
    font_family: str = "Impact",
    font_weight: int = 900,
    line_height_multiplier: Optional[float] = None
) -> TextBlock:
    """
    Measure a block of lines

    Args:
        lines: Lines of text
        font_size: Font size in pixels
        font_family: CSS-style font family
        font_weight: Font weight
        line_height_multiplier: Leading applied to the font height (default from settings)

    Returns:
        TextBlock whose width is the widest line and height is lines * line_height
    """
    if not lines:
        return TextBlock(font_size=font_size)

    if line_height_multiplier is None:
        line_height_multiplier = settings.LINE_HEIGHT_MULTIPLIER

    metrics = get_font_metrics(font_family)
    line_height = font_size * metrics.height_ratio * line_height_multiplier

    line_widths = tuple(
        measure_text_width(line, font_size, font_family, font_weight).width
        for line in lines
    )

    return TextBlock(
        lines=list(lines),
        width=max(line_widths),
        height=len(lines) * line_height,
        line_height=line_height,
        font_size=font_size,
        line_widths=line_widths,
    )


def estimate_chars_per_line(max_width: float, font_size: float, font_family: str = "Impact") -> int:
    """
    Approximate how many average characters fit in max_width

    Only a budgeting heuristic for wrapping, not an exact measurement.
    Non-positive or non-finite input gives 0.
    """
    if not (math.isfinite(max_width) and math.isfinite(font_size)):
        return 0
    if max_width <= 0 or font_size <= 0:
        return 0
    metrics = get_font_metrics(font_family)
    return int(math.floor(max_width / (font_size * metrics.average_char_width_ratio)))


def will_text_fit(text: Optional[str], font_size: float, max_width: float, font_family: str = "Impact") -> bool:
    """Quick single-line check: does text fit in max_width at font_size"""
    return measure_text_width(text, font_size, font_family).width <= max_width
