"""
Example usage of the thumbnail caption text-fit engine

This script demonstrates how to plan text overlays programmatically
"""

import json
import sys

from loguru import logger

from config import settings
from textfit import prepare_text_overlay, find_optimal_font_size

# Configure logging
logger.remove()
logger.add(sys.stderr, level=settings.LOG_LEVEL)


def print_plan(title: str, plan) -> None:
    """Print the renderer-facing part of a plan"""
    print(f"\n{title}")
    print(f"  Font size: {plan.font_size}px")
    print(f"  Lines: {plan.lines}")
    print(f"  Position: ({plan.x:.0f}, {plan.y:.0f}) anchor={plan.anchor.value}")
    print(f"  Fits: {plan.fits}  Adjusted: {plan.position_adjusted}")
    for warning in plan.warnings:
        print(f"  ! {warning}")


def simple_caption_example():
    """
    Example: short caption centered on a full HD thumbnail
    """
    plan = prepare_text_overlay("HELLO", {}, "center", {"width": 1920, "height": 1080})
    print_plan("Simple caption", plan)


def constrained_box_example():
    """
    Example: long caption squeezed into a small box
    """
    plan = prepare_text_overlay(
        "THIS IS A VERY LONG TEXT THAT NEEDS SMALLER FONT",
        {"minFontSize": 20, "maxFontSize": 100, "strokeWidth": 4},
        "center",
        {"width": 1920, "height": 1080},
        {"maxWidth": 300, "maxHeight": 200},
    )
    print_plan("Constrained box", plan)


def edge_position_example():
    """
    Example: custom position hanging off the right edge gets pulled back
    """
    plan = prepare_text_overlay(
        "WIDE TEXT",
        {"fontFamily": "Impact, sans-serif"},
        {"x": 1900, "y": 540, "anchor": "start"},
    )
    print_plan("Edge position", plan)


def mobile_example():
    """
    Example: same caption with the stricter mobile safe zone, dumped as JSON
    """
    plan = prepare_text_overlay("SUBSCRIBE NOW", {}, "bottomRight", device="mobile")
    print_plan("Mobile safe zone", plan)
    print(json.dumps(plan.to_dict(), indent=2, default=str))


if __name__ == "__main__":
    print("=" * 60)
    print("Thumbnail Caption Text-Fit - Example Usage")
    print("=" * 60)

    simple_caption_example()
    constrained_box_example()
    edge_position_example()
    mobile_example()

    size = find_optimal_font_size("HELLO WORLD", 50, 40, 200, "Impact")
    print(f"\nSingle-line optimum for a 50px box: {size}px")

    print("\n" + "=" * 60)
