"""
Auto-Fit Solver - Pick the largest font size whose wrapped text fits a box
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from loguru import logger

from config import settings
from textfit.font_metrics import get_font_metrics
from textfit.measurer import (
    TextBlock,
    measure_text_block,
    measure_text_width,
    estimate_chars_per_line,
)
from textfit.wrapper import smart_word_wrap, normalize_text, count_dropped_characters


@dataclass
class FitConstraints:
    """Box and font-size limits for auto-fit"""
    max_width: float = field(default_factory=lambda: settings.FIT_MAX_WIDTH)
    max_height: float = field(default_factory=lambda: settings.FIT_MAX_HEIGHT)
    min_font_size: int = field(default_factory=lambda: settings.MIN_FONT_SIZE)
    max_font_size: int = field(default_factory=lambda: settings.MAX_FONT_SIZE)
    max_lines: int = field(default_factory=lambda: settings.MAX_LINES)
    stroke_width: float = field(default_factory=lambda: settings.STROKE_WIDTH)
    font_family: str = field(default_factory=lambda: settings.DEFAULT_FONT_FAMILY)
    font_weight: int = field(default_factory=lambda: settings.DEFAULT_FONT_WEIGHT)
    line_height_multiplier: float = field(default_factory=lambda: settings.LINE_HEIGHT_MULTIPLIER)
    shadow_dx: float = 0
    shadow_dy: float = 0

    def effective_box(self) -> Tuple[float, float]:
        """Box left after reserving room for the outline stroke and shadow (at least 1x1)"""
        width = _usable(self.max_width - 2 * self.stroke_width - abs(self.shadow_dx))
        height = _usable(self.max_height - 2 * self.stroke_width - abs(self.shadow_dy))
        return width, height


def _usable(length: float) -> float:
    if not math.isfinite(length):
        return 1.0
    return max(1.0, length)


def _valid_dimension(value: float) -> bool:
    return math.isfinite(value) and value > 0


@dataclass
class FitResult:
    """Outcome of auto-fit: chosen size, wrapped lines and diagnostics"""
    font_size: int
    lines: List[str]
    width: float
    height: float
    line_height: float
    fits: bool
    truncated: bool = False
    warnings: List[str] = field(default_factory=list)


def _layout_at_size(
    text: str,
    font_size: int,
    box: Tuple[float, float],
    constraints: FitConstraints,
    allow_truncation: bool
) -> Optional[Tuple[TextBlock, bool]]:
    """
    Find a wrapping of text at font_size that fits the box

    Starts from the estimated character budget and tightens it while the
    measured block is still too wide.

    Returns:
        (block, truncated) or None when no wrapping fits
    """
    box_width, box_height = box
    budget = estimate_chars_per_line(box_width, font_size, constraints.font_family)

    for chars in range(max(1, budget), 0, -1):
        lines = smart_word_wrap(text, chars, constraints.max_lines)
        truncated = count_dropped_characters(text, lines) > 0
        if truncated and not allow_truncation:
            # Tighter budgets only drop more
            return None

        block = measure_text_block(
            lines,
            font_size,
            constraints.font_family,
            constraints.font_weight,
            constraints.line_height_multiplier,
        )
        if block.height > box_height:
            # Tighter budgets only add lines
            return None
        if block.width <= box_width:
            return block, truncated

    return None


def _largest_candidate_size(box_height: float, constraints: FitConstraints) -> int:
    """Largest size whose single line could fit the box height"""
    metrics = get_font_metrics(constraints.font_family)
    single_line = metrics.height_ratio * constraints.line_height_multiplier
    if single_line <= 0:
        return constraints.max_font_size
    limit = box_height / single_line
    if not math.isfinite(limit):
        return constraints.max_font_size
    return min(constraints.max_font_size, int(math.floor(limit)))


def auto_fit_text(text: Optional[str], constraints: Optional[FitConstraints] = None) -> FitResult:
    """
    Fit text into a box by shrinking the font and wrapping lines

    Sizes are scanned from the largest candidate down to min_font_size; the
    first size with a complete layout inside the box wins. If none exists the
    result is clamped to min_font_size, truncated at max_lines when that
    makes it fit, and reported through warnings.

    The scan is linear because a fit at one size does not imply a fit at
    every smaller size (the character budget is an estimate). It visits at
    most max_font_size - min_font_size + 1 sizes, starting no higher than the
    tallest single line the box allows, and each size tries at most
    estimate_chars_per_line(box width) wrappings.

    Args:
        text: Text to fit
        constraints: Box, font-size range, line limit and stroke (defaults from settings)

    Returns:
        FitResult with min_font_size <= font_size <= max_font_size
    """
    constraints = constraints or FitConstraints()
    warnings: List[str] = []

    if not _valid_dimension(constraints.max_width):
        warnings.append(f"Invalid maxWidth ({constraints.max_width}px) - must be a finite number greater than 0")
    if not _valid_dimension(constraints.max_height):
        warnings.append(f"Invalid maxHeight ({constraints.max_height}px) - must be a finite number greater than 0")

    max_size = int(constraints.max_font_size)
    min_size = int(constraints.min_font_size)
    if min_size > max_size:
        warnings.append(
            f"minFontSize ({min_size}px) exceeds maxFontSize ({max_size}px) - using {max_size}px as minimum"
        )
        min_size = max_size

    clean_text = normalize_text(text)
    box_width, box_height = constraints.effective_box()

    if not clean_text:
        warnings.append("No text to fit")
        return FitResult(
            font_size=min_size,
            lines=[],
            width=0.0,
            height=0.0,
            line_height=0.0,
            fits=True,
            warnings=warnings,
        )

    start_size = max(min_size, _largest_candidate_size(box_height, constraints))
    for font_size in range(start_size, min_size - 1, -1):
        layout = _layout_at_size(clean_text, font_size, (box_width, box_height), constraints, False)
        if layout is None:
            continue

        block, _ = layout
        if font_size == min_size and min_size < max_size:
            warnings.append(f"Reached minimum font size ({min_size}px)")
        logger.debug(f"📏 Auto-fit: '{clean_text[:30]}' → {font_size}px, {len(block.lines)} line(s)")
        return FitResult(
            font_size=font_size,
            lines=block.lines,
            width=block.width,
            height=block.height,
            line_height=block.line_height,
            fits=True,
            warnings=warnings,
        )

    warnings.append(f"Reached minimum font size ({min_size}px) - text may still overflow")

    layout = _layout_at_size(clean_text, min_size, (box_width, box_height), constraints, True)
    if layout is not None:
        block, truncated = layout
        if truncated:
            warnings.append(f"Text truncated at {constraints.max_lines} lines")
        logger.warning(f"⚠️ Auto-fit: '{clean_text[:30]}' only fits at {min_size}px after truncation")
        return FitResult(
            font_size=min_size,
            lines=block.lines,
            width=block.width,
            height=block.height,
            line_height=block.line_height,
            fits=True,
            truncated=truncated,
            warnings=warnings,
        )

    # Best effort: estimated wrapping at the minimum size
    chars = estimate_chars_per_line(box_width, min_size, constraints.font_family)
    lines = smart_word_wrap(clean_text, chars, constraints.max_lines)
    block = measure_text_block(
        lines,
        min_size,
        constraints.font_family,
        constraints.font_weight,
        constraints.line_height_multiplier,
    )
    truncated = count_dropped_characters(clean_text, lines) > 0

    if truncated:
        warnings.append(f"Text truncated at {constraints.max_lines} lines")
    if block.width > box_width:
        warnings.append(f"Text width ({block.width:.0f}px) exceeds available width ({box_width:.0f}px)")
    if block.height > box_height:
        warnings.append(f"Text height ({block.height:.0f}px) exceeds available height ({box_height:.0f}px)")

    logger.warning(f"⚠️ Auto-fit: '{clean_text[:30]}' does not fit even at {min_size}px")

    return FitResult(
        font_size=min_size,
        lines=block.lines,
        width=block.width,
        height=block.height,
        line_height=block.line_height,
        fits=block.width <= box_width and block.height <= box_height,
        truncated=truncated,
        warnings=warnings,
    )


def find_optimal_font_size(
    text: Optional[str],
    max_width: float,
    min_size: int = 60,
    max_size: int = 280,
    font_family: str = "Impact"
) -> int:
    """
    Binary-search the largest size at which text fits max_width on one line

    Returns:
        Optimal font size, or min_size when nothing in range fits
    """
    low, high = int(min_size), int(max_size)
    optimal = int(min_size)

    while low <= high:
        mid = (low + high) // 2
        if measure_text_width(text, mid, font_family).width <= max_width:
            optimal = mid
            low = mid + 1
        else:
            high = mid - 1

    return optimal
