import json

import pytest

from textfit.overlay import OverlayPlanner, OverlayStyle, available_width, prepare_text_overlay
from textfit.position import Anchor, Position, POSITION_PRESETS
from textfit.safe_zone import adjust_position_for_text, get_safe_zone_bounds

CANVAS = {"width": 1920, "height": 1080}


def test_short_centered_caption():
    plan = prepare_text_overlay("HELLO", {}, "center", CANVAS)

    assert plan.fits is True
    assert plan.lines == ["HELLO"]
    assert 60 <= plan.font_size <= 280
    assert (plan.x, plan.y) == (960, 540)
    assert plan.anchor == Anchor.MIDDLE
    assert plan.validation.valid is True
    assert plan.position_adjusted is False


def test_long_caption_in_small_box_shrinks():
    plan = prepare_text_overlay(
        "THIS IS A VERY LONG TEXT THAT NEEDS SMALLER FONT",
        {"minFontSize": 20, "maxFontSize": 100},
        "center",
        CANVAS,
        {"maxWidth": 300, "maxHeight": 200},
    )

    assert plan.font_size < 100
    assert plan.config.max_width == 300
    assert plan.config.max_height == 200


def test_edge_position_is_pulled_back():
    plan = prepare_text_overlay("WIDE TEXT", {}, {"x": 1900, "y": 540, "anchor": "start"})

    assert plan.position_adjusted is True
    assert plan.x < 1900
    assert plan.validation.text_bounds.right == pytest.approx(1830)
    assert plan.validation.valid is True
    assert any("avoid right edge" in text for text in plan.adjustments)


def test_preset_anchor_is_kept():
    plan = prepare_text_overlay("TEST", {}, "topLeft")

    assert plan.anchor == Anchor.START
    assert plan.validation.valid is True


@pytest.mark.parametrize("preset", sorted(POSITION_PRESETS))
def test_short_caption_fits_at_every_preset(preset):
    plan = prepare_text_overlay("HELLO", {}, preset)

    assert plan.fits is True
    assert plan.validation.valid is True
    assert plan.validation.in_duration_zone is False


def test_plan_position_is_stable():
    plan = prepare_text_overlay("SUBSCRIBE NOW", {}, {"x": -300, "y": 2000})
    again = adjust_position_for_text(
        {"width": plan.text_width, "height": plan.text_height},
        Position(x=plan.x, y=plan.y, anchor=plan.anchor),
    )

    assert again.adjusted is False


def test_custom_style_is_used():
    plan = prepare_text_overlay("TEST", {"fontFamily": "Arial", "fontWeight": 700})

    assert plan.config.font_family == "Arial"
    assert plan.config.font_weight == 700
    assert plan.style.font_family == "Arial"


def test_snake_case_style_keys():
    plan = prepare_text_overlay("TEST", {"font_family": "Georgia", "max_lines": 2})

    assert plan.config.font_family == "Georgia"
    assert plan.config.max_lines == 2


def test_nested_shadow_is_reserved():
    plan = prepare_text_overlay("TEST", {"strokeWidth": 5, "shadow": {"dx": 4, "dy": -6}})

    assert plan.config.shadow_dx == 4
    assert plan.config.shadow_dy == -6
    assert plan.config.effective_box() == (1740 - 10 - 4, 980 - 10 - 6)


def test_invalid_style_values_are_dropped_with_warning():
    plan = prepare_text_overlay("TEST", {"minFontSize": "tiny", "strokeWidth": -3, "fontFamily": "Arial"})

    assert plan.style.min_font_size == 60
    assert plan.style.stroke_width == 0
    assert plan.style.font_family == "Arial"
    assert any("minFontSize" in warning for warning in plan.warnings)
    assert any("strokeWidth" in warning for warning in plan.warnings)


def test_non_mapping_style_is_ignored():
    plan = prepare_text_overlay("TEST", "bold please")

    assert plan.style == OverlayStyle()
    assert any("expected a mapping" in warning for warning in plan.warnings)


def test_zero_override_is_honored():
    plan = prepare_text_overlay("TEST", {}, "center", CANVAS, {"maxWidth": 0})

    assert plan.config.max_width == 0
    assert plan.fits is False
    assert any("Invalid maxWidth" in warning for warning in plan.warnings)


def test_stroke_never_enlarges_the_font():
    text = "THE BEST CAMERA UNDER 500 DOLLARS"
    plain = prepare_text_overlay(text, {"strokeWidth": 0})
    stroked = prepare_text_overlay(text, {"strokeWidth": 30})

    assert stroked.font_size <= plain.font_size


def test_text_that_cannot_fit_reports_warnings():
    plan = prepare_text_overlay(
        "EXTREMELY LONG TEXT THAT CANNOT POSSIBLY FIT IN THIS TINY BOX",
        {"minFontSize": 80},
        "center",
        CANVAS,
        {"maxWidth": 100, "maxHeight": 50},
    )

    assert plan.fits is False
    assert plan.warnings


def test_small_canvas_does_not_raise():
    plan = prepare_text_overlay("HELLO", {}, "center", {"width": 100, "height": 100})

    assert plan.warnings
    assert plan.input["canvas_size"] == {"width": 100, "height": 100}


def test_large_canvas_is_echoed():
    plan = prepare_text_overlay("HELLO", {}, {}, {"width": 3840, "height": 2160})

    assert plan.input["canvas_size"] == {"width": 3840, "height": 2160}
    assert (plan.x, plan.y) == (1920, 1080)
    assert plan.validation.safe_bounds.right == 3840 - 90


def test_mobile_device():
    plan = prepare_text_overlay("SUBSCRIBE NOW", {}, "bottomRight", device="mobile")

    assert plan.device == "mobile"
    assert plan.validation.safe_bounds.left == 160
    assert plan.validation.valid is True


def test_text_is_lifted_above_duration_badge():
    plan = prepare_text_overlay(
        "HI",
        {"minFontSize": 40, "maxFontSize": 40},
        {"x": 1830, "y": 1005, "anchor": "end"},
    )

    assert plan.fits is True
    assert plan.position_adjusted is True
    assert plan.y == pytest.approx(1000 - 40 * 1.15 * 1.1 / 2 - 20)
    assert plan.validation.in_duration_zone is False
    assert any("duration badge" in text for text in plan.adjustments)


def test_duration_overlap_is_only_a_warning():
    planner = OverlayPlanner(avoid_duration_badge=False)
    plan = planner.prepare(
        "HI",
        {"minFontSize": 40, "maxFontSize": 40},
        {"x": 1830, "y": 1005, "anchor": "end"},
    )

    assert plan.validation.in_duration_zone is True
    assert plan.fits is True
    assert "Text may conflict with the video duration overlay" in plan.warnings


def test_empty_text_plan():
    plan = prepare_text_overlay("   ")

    assert plan.lines == []
    assert "No text to fit" in plan.warnings


def test_plan_serializes_to_json():
    plan = prepare_text_overlay("HELLO WORLD", {"shadow": {"dx": 2, "dy": 2}}, "topRight")
    data = plan.to_dict()

    assert data["anchor"] == "end"
    assert data["style"]["shadow_dx"] == 2
    assert data["validation"]["valid"] is True
    assert json.loads(json.dumps(data))["lines"] == plan.lines


def test_centered_caption_on_large_canvas_is_not_lifted():
    plan = prepare_text_overlay("HELLO", {}, "center", {"width": 3840, "height": 2160})

    assert plan.position_adjusted is False
    assert plan.validation.in_duration_zone is False
    assert not any("duration" in warning for warning in plan.warnings)


def test_large_canvas_badge_is_in_its_corner():
    plan = prepare_text_overlay(
        "HI",
        {"minFontSize": 40, "maxFontSize": 40},
        {"x": 3750, "y": 2085, "anchor": "end"},
        {"width": 3840, "height": 2160},
    )

    assert plan.y == pytest.approx(2080 - 40 * 1.15 * 1.1 / 2 - 20)
    assert any("duration badge" in text for text in plan.adjustments)


def test_infinite_override_is_dropped():
    plan = prepare_text_overlay("HELLO", {}, "center", None, {"maxWidth": float("inf")})

    assert plan.config.max_width == 1740
    assert plan.fits is True
    assert any("maxWidth" in warning for warning in plan.warnings)


def test_infinite_canvas_falls_back_to_default():
    plan = prepare_text_overlay("HELLO", {}, "center", {"width": float("inf"), "height": 1080})

    assert plan.input["canvas_size"] == {"width": 1920, "height": 1080}
    assert plan.fits is True


def test_non_finite_style_values_are_dropped():
    plan = prepare_text_overlay("HELLO", {"lineHeight": float("nan"), "strokeWidth": float("inf")})

    assert plan.style.line_height == 1.1
    assert plan.style.stroke_width == 0
    assert any("lineHeight" in warning for warning in plan.warnings)
    assert any("strokeWidth" in warning for warning in plan.warnings)


def test_nan_coordinate_falls_back_to_canvas_center():
    plan = prepare_text_overlay("HELLO", {}, {"x": "nan", "y": 540})

    assert (plan.x, plan.y) == (960, 540)
    assert plan.fits is True


@pytest.mark.parametrize(
    "position, expected",
    [
        (Position(x=90, y=540, anchor=Anchor.START), 1740),
        (Position(x=220, y=400, anchor=Anchor.START), 1610),
        (Position(x=1700, y=400, anchor=Anchor.END), 1610),
        (Position(x=960, y=540, anchor=Anchor.MIDDLE), 1740),
        (Position(x=400, y=540, anchor=Anchor.MIDDLE), 620),
        (Position(x=1900, y=540, anchor=Anchor.START), 0),
        (Position(x=-100, y=540, anchor=Anchor.MIDDLE), 0),
    ],
)
def test_available_width_depends_on_anchor(position, expected):
    bounds = get_safe_zone_bounds(1920, 1080, "desktop")

    assert available_width(position, bounds) == expected


def test_anchored_caption_keeps_its_anchor():
    plan = prepare_text_overlay("THIS IS A VERY LONG TEXT THAT NEEDS SMALLER FONT", {}, "rightCenter")

    assert plan.config.max_width == 1610
    assert plan.x == 1700
    assert plan.validation.text_bounds.right == 1700
    assert not any("left edge" in text for text in plan.adjustments)
    assert plan.fits is True


def test_override_width_ignores_anchor():
    plan = prepare_text_overlay("HELLO", {}, "rightCenter", None, {"maxWidth": 500})

    assert plan.config.max_width == 500
