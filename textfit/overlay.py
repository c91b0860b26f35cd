"""
Overlay Planner - Combine auto-fit, positioning and safe-zone checks into one plan
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from config import settings
from textfit.autofit import FitConstraints, auto_fit_text
from textfit.position import Anchor, Position, PositionInput, get_position
from textfit.safe_zone import (
    CanvasSize,
    SafeZoneBounds,
    SafeZoneInput,
    ValidationResult,
    adjust_position_for_text,
    avoid_duration_zone,
    get_safe_zone_bounds,
    validate_safe_zone,
)


class _LenientModel(BaseModel):
    """Caller options: camelCase or snake_case keys, unknown keys ignored, finite numbers only"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        allow_inf_nan=False,
    )

    @classmethod
    def from_mapping(cls, data: Any, warnings: List[str], label: str):
        """
        Validate caller options, dropping invalid values instead of raising

        Args:
            data: Mapping of options (or an instance, or None)
            warnings: List that receives one warning per dropped option
            label: Option group name used in warnings

        Returns:
            Model instance with defaults for anything missing or invalid
        """
        if isinstance(data, cls):
            return data
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            warnings.append(f"Ignored {label} options: expected a mapping, got {type(data).__name__}")
            return cls()

        values = dict(data)
        # Each pass drops at least one key, so this terminates
        for _ in range(len(values) + 1):
            try:
                return cls.model_validate(values)
            except ValidationError as exc:
                bad_keys = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}
                dropped = cls._drop_keys(values, bad_keys)
                if not dropped:
                    break
                for key in dropped:
                    warnings.append(f"Ignored invalid {label} option '{key}'")
                logger.warning(f"⚠️ Ignored invalid {label} options: {', '.join(dropped)}")

        return cls()

    @classmethod
    def _drop_keys(cls, values: Dict[str, Any], bad_keys: set) -> List[str]:
        dropped = []
        for name, info in cls.model_fields.items():
            if name in bad_keys or info.alias in bad_keys:
                for key in (name, info.alias):
                    if key in values:
                        values.pop(key)
                        dropped.append(key)
        return dropped


class OverlayStyle(_LenientModel):
    """Text style options that influence layout"""
    font_family: str = Field(default_factory=lambda: settings.DEFAULT_FONT_FAMILY)
    font_weight: int = Field(default_factory=lambda: settings.DEFAULT_FONT_WEIGHT)
    stroke_width: float = Field(default_factory=lambda: settings.STROKE_WIDTH, ge=0)
    min_font_size: int = Field(default_factory=lambda: settings.MIN_FONT_SIZE, ge=1)
    max_font_size: int = Field(default_factory=lambda: settings.MAX_FONT_SIZE, ge=1)
    max_lines: int = Field(default_factory=lambda: settings.MAX_LINES, ge=1)
    line_height: float = Field(default_factory=lambda: settings.LINE_HEIGHT_MULTIPLIER, gt=0)
    shadow_dx: float = 0
    shadow_dy: float = 0

    @classmethod
    def from_mapping(cls, data: Any, warnings: List[str], label: str = "style"):
        # Renderer-style nested shadow: {"shadow": {"dx": 4, "dy": 4}}
        if isinstance(data, Mapping) and isinstance(data.get("shadow"), Mapping):
            data = dict(data)
            shadow = data.pop("shadow")
            data.setdefault("shadowDx", shadow.get("dx", 0))
            data.setdefault("shadowDy", shadow.get("dy", 0))
        return super().from_mapping(data, warnings, label)


class ConstraintsOverride(_LenientModel):
    """Explicit fit box replacing the safe-zone defaults"""
    max_width: Optional[float] = None
    max_height: Optional[float] = None


@dataclass
class OverlayPlan:
    """Renderer-ready text overlay"""
    font_size: int
    lines: List[str]
    line_height: float
    text_width: float
    text_height: float
    x: float
    y: float
    anchor: Anchor
    fits: bool
    warnings: List[str]
    position_adjusted: bool
    adjustments: List[str]
    validation: ValidationResult
    config: FitConstraints
    style: OverlayStyle
    device: str
    input: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict for renderers and logs"""
        data = asdict(self)
        data["anchor"] = self.anchor.value
        data["style"] = self.style.model_dump()
        return data


def available_width(position: Position, bounds: SafeZoneBounds) -> float:
    """
    Horizontal room for text anchored at position without leaving the safe zone

    Args:
        position: Anchor point
        bounds: Safe zone of the canvas

    Returns:
        Width between 0 and the safe-zone width
    """
    if position.anchor == Anchor.START:
        width = bounds.right - position.x
    elif position.anchor == Anchor.END:
        width = position.x - bounds.left
    else:
        width = 2 * min(position.x - bounds.left, bounds.right - position.x)
    return max(0.0, min(width, bounds.width))


class OverlayPlanner:
    """
    Prepares text overlays for a thumbnail canvas

    Fits the text to a box, resolves its anchor position, keeps it inside the
    device safe zone and reports everything it could not guarantee.
    """

    def __init__(self, device: SafeZoneInput = None, avoid_duration_badge: Optional[bool] = None):
        """
        Initialize Overlay Planner

        Args:
            device: Safe zone device ("desktop", "mobile") or SafeZoneProfile
            avoid_duration_badge: Lift text above the duration badge (default from settings)
        """
        self.device = device or settings.SAFE_ZONE_DEVICE
        self.avoid_duration_badge = (
            settings.AVOID_DURATION_ZONE if avoid_duration_badge is None else avoid_duration_badge
        )

    def prepare(
        self,
        text: Optional[str],
        style: Any = None,
        position_input: PositionInput = None,
        canvas_size: Any = None,
        constraints_override: Any = None
    ) -> OverlayPlan:
        """
        Build a complete overlay plan

        Args:
            text: Caption text
            style: Style options (fontFamily, fontWeight, strokeWidth, minFontSize,
                maxFontSize, maxLines, lineHeight, shadow)
            position_input: Preset name or partial {x, y, anchor}
            canvas_size: {width, height} (default 1920x1080)
            constraints_override: Optional {maxWidth, maxHeight}

        Returns:
            OverlayPlan
        """
        warnings: List[str] = []

        canvas = CanvasSize.coerce(canvas_size)
        effective_style = OverlayStyle.from_mapping(style, warnings)
        override = ConstraintsOverride.from_mapping(constraints_override, warnings, "constraints")
        position = get_position(position_input, canvas.width, canvas.height)
        bounds = get_safe_zone_bounds(canvas.width, canvas.height, self.device)

        constraints = FitConstraints(
            max_width=available_width(position, bounds) if override.max_width is None else override.max_width,
            max_height=bounds.height if override.max_height is None else override.max_height,
            min_font_size=effective_style.min_font_size,
            max_font_size=effective_style.max_font_size,
            max_lines=effective_style.max_lines,
            stroke_width=effective_style.stroke_width,
            font_family=effective_style.font_family,
            font_weight=effective_style.font_weight,
            line_height_multiplier=effective_style.line_height,
            shadow_dx=effective_style.shadow_dx,
            shadow_dy=effective_style.shadow_dy,
        )

        fit = auto_fit_text(text, constraints)
        warnings.extend(fit.warnings)

        adjustment = adjust_position_for_text(fit, position, canvas, self.device)
        adjustments = list(adjustment.adjustments)
        final_position = adjustment.position

        if self.avoid_duration_badge:
            lifted = avoid_duration_zone(fit, final_position, canvas, self.device)
            if lifted.adjusted:
                adjustments.extend(lifted.adjustments)
                final_position = lifted.position

        validation = validate_safe_zone(fit, final_position, canvas, self.device)

        warnings.extend(adjustments)
        warnings.extend(self._validation_warnings(validation))

        plan = OverlayPlan(
            font_size=fit.font_size,
            lines=fit.lines,
            line_height=fit.line_height,
            text_width=fit.width,
            text_height=fit.height,
            x=final_position.x,
            y=final_position.y,
            anchor=final_position.anchor,
            fits=fit.fits and validation.valid,
            warnings=warnings,
            position_adjusted=bool(adjustments),
            adjustments=adjustments,
            validation=validation,
            config=constraints,
            style=effective_style,
            device=bounds.device,
            input={
                "text": text,
                "style": style,
                "position": position_input,
                "canvas_size": {"width": canvas.width, "height": canvas.height},
                "constraints_override": constraints_override,
            },
        )

        logger.debug(
            f"Overlay plan: {plan.font_size}px, {len(plan.lines)} line(s) at "
            f"({plan.x:.0f}, {plan.y:.0f}) {plan.anchor.value}, fits={plan.fits}"
        )
        return plan

    @staticmethod
    def _validation_warnings(validation: ValidationResult) -> List[str]:
        warnings = []
        if validation.in_duration_zone:
            warnings.append("Text may conflict with the video duration overlay")
        for edge in ("left", "right", "top", "bottom"):
            value = getattr(validation.overflow, edge)
            if value > 0:
                warnings.append(f"{edge.capitalize()} overflow: {value:.0f}px")
        return warnings


def prepare_text_overlay(
    text: Optional[str],
    style: Any = None,
    position_input: PositionInput = None,
    canvas_size: Any = None,
    constraints_override: Any = None,
    device: SafeZoneInput = None
) -> OverlayPlan:
    """
    Prepare a complete text overlay plan (see OverlayPlanner.prepare)

    Never raises for malformed input: problems end up in plan.warnings and
    in the fits / validation.valid flags.
    """
    return OverlayPlanner(device=device).prepare(
        text,
        style=style,
        position_input=position_input,
        canvas_size=canvas_size,
        constraints_override=constraints_override,
    )
