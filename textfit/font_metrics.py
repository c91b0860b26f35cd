"""
Font Metrics - Approximate per-family glyph ratios used for text measurement
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class FontMetricsProfile:
    """Glyph ratios for one font family, all relative to the font size"""
    average_char_width_ratio: float
    capital_ratio: float
    lower_ratio: float
    number_ratio: float
    space_ratio: float
    height_ratio: float
    ascent_ratio: float
    descent_ratio: float


DEFAULT_PROFILE_KEY = "default"

# Empirical ratios for common thumbnail fonts
FONT_METRICS: Mapping[str, FontMetricsProfile] = MappingProxyType({
    # Impact is tall and condensed
    "Impact": FontMetricsProfile(
        average_char_width_ratio=0.55,
        capital_ratio=0.70,
        lower_ratio=0.50,
        number_ratio=0.60,
        space_ratio=0.25,
        height_ratio=1.15,
        ascent_ratio=0.85,
        descent_ratio=0.15,
    ),
    "Arial Black": FontMetricsProfile(
        average_char_width_ratio=0.65,
        capital_ratio=0.75,
        lower_ratio=0.55,
        number_ratio=0.65,
        space_ratio=0.28,
        height_ratio=1.20,
        ascent_ratio=0.85,
        descent_ratio=0.20,
    ),
    "Helvetica Neue": FontMetricsProfile(
        average_char_width_ratio=0.55,
        capital_ratio=0.70,
        lower_ratio=0.50,
        number_ratio=0.60,
        space_ratio=0.28,
        height_ratio=1.15,
        ascent_ratio=0.80,
        descent_ratio=0.20,
    ),
    "Arial": FontMetricsProfile(
        average_char_width_ratio=0.55,
        capital_ratio=0.70,
        lower_ratio=0.50,
        number_ratio=0.60,
        space_ratio=0.28,
        height_ratio=1.15,
        ascent_ratio=0.80,
        descent_ratio=0.20,
    ),
    "Georgia": FontMetricsProfile(
        average_char_width_ratio=0.52,
        capital_ratio=0.72,
        lower_ratio=0.48,
        number_ratio=0.58,
        space_ratio=0.25,
        height_ratio=1.20,
        ascent_ratio=0.80,
        descent_ratio=0.25,
    ),
    DEFAULT_PROFILE_KEY: FontMetricsProfile(
        average_char_width_ratio=0.58,
        capital_ratio=0.70,
        lower_ratio=0.52,
        number_ratio=0.60,
        space_ratio=0.27,
        height_ratio=1.18,
        ascent_ratio=0.82,
        descent_ratio=0.18,
    ),
})

# Glyphs noticeably wider / narrower than their letter class
WIDE_CHARS = frozenset("WMOQGDwm@%")
NARROW_CHARS = frozenset("ilIjtfr1!.,:;'\"")


def primary_font_name(font_family: Optional[str]) -> str:
    """
    Extract the first family from a CSS font-family string

    Args:
        font_family: e.g. '"Arial Black", Impact, sans-serif'

    Returns:
        First family name without quotes or surrounding whitespace
    """
    if not isinstance(font_family, str):
        return ""
    first = font_family.split(",")[0]
    return first.replace('"', "").replace("'", "").strip()


def get_font_metrics(font_family: Optional[str]) -> FontMetricsProfile:
    """
    Look up metrics for a font family, falling back to the default profile

    Never raises: unknown, empty or non-string families get the default profile.
    """
    return FONT_METRICS.get(primary_font_name(font_family), FONT_METRICS[DEFAULT_PROFILE_KEY])
