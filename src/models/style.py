"""Text overlay style model."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from src.models.errors import InvalidInputError
from src.utils.color_utils import parse_color
from src.utils.config import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_PADDING,
    DEFAULT_SHADOW_BLUR,
    DEFAULT_SHADOW_COLOR,
    DEFAULT_SHADOW_OFFSET,
    DEFAULT_STROKE_COLOR,
    DEFAULT_TEXT_COLOR,
    FONT_STYLES,
    FONT_WEIGHTS,
    TEXT_ALIGNMENTS,
    TRANSPARENT,
)


@dataclass(frozen=True, slots=True)
class FontDescription:
    """What the metrics provider and the surface need to pick a font."""

    family: str = DEFAULT_FONT_FAMILY
    size: float = DEFAULT_FONT_SIZE
    weight: str = "normal"
    style: str = "normal"

    @property
    def bold(self) -> bool:
        return self.weight == "bold"

    @property
    def italic(self) -> bool:
        return self.style == "italic"


@dataclass(frozen=True, slots=True)
class TextMetrics:
    """Bounding box of a measured string, in pixels."""

    width: float
    height: float


@dataclass
class TextStyle:
    """Visual style for a text overlay."""

    font_family: str = DEFAULT_FONT_FAMILY
    font_size: float = DEFAULT_FONT_SIZE
    font_weight: str = "normal"   # normal, bold
    font_style: str = "normal"    # normal, italic
    color: str = DEFAULT_TEXT_COLOR
    stroke_color: str = DEFAULT_STROKE_COLOR
    stroke_width: float = 0
    background_color: str = TRANSPARENT
    padding: float = DEFAULT_PADDING
    border_radius: float = 0
    text_align: str = "center"    # left, center, right
    shadow: bool = False
    shadow_color: str = DEFAULT_SHADOW_COLOR
    shadow_blur: float = DEFAULT_SHADOW_BLUR
    shadow_offset_x: float = DEFAULT_SHADOW_OFFSET
    shadow_offset_y: float = DEFAULT_SHADOW_OFFSET

    def copy(self) -> TextStyle:
        """Return a shallow copy."""
        return replace(self)

    def font(self) -> FontDescription:
        return FontDescription(
            family=self.font_family,
            size=self.font_size,
            weight=self.font_weight,
            style=self.font_style,
        )

    @property
    def has_background(self) -> bool:
        return bool(self.background_color) and self.background_color != TRANSPARENT

    def merged(self, changes: Mapping[str, Any]) -> TextStyle:
        """Return a copy with *changes* applied after validating every key."""
        validated = {name: validate_style_value(name, value) for name, value in changes.items()}
        return replace(self, **validated)


STYLE_FIELDS: frozenset[str] = frozenset(f.name for f in fields(TextStyle))

_NUMERIC_FIELDS = {
    "font_size", "stroke_width", "padding", "border_radius",
    "shadow_blur", "shadow_offset_x", "shadow_offset_y",
}
_NON_NEGATIVE_FIELDS = {"font_size", "stroke_width", "padding", "border_radius", "shadow_blur"}
_FONT_NAME_FIELDS = {"font_family"}
_CHOICE_FIELDS = {
    "font_weight": FONT_WEIGHTS,
    "font_style": FONT_STYLES,
    "text_align": TEXT_ALIGNMENTS,
}


def validate_style_value(name: str, value: Any) -> Any:
    """Check a single style field; raise InvalidInputError when it does not fit."""
    if name not in STYLE_FIELDS:
        raise InvalidInputError(f"Unknown style field: {name}")
    if name in _NUMERIC_FIELDS:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInputError(f"{name} must be a number, got {value!r}")
        if name in _NON_NEGATIVE_FIELDS and value < 0:
            raise InvalidInputError(f"{name} must be >= 0, got {value!r}")
        if name == "font_size" and value == 0:
            raise InvalidInputError("font_size must be > 0")
        return value
    if name in _CHOICE_FIELDS:
        if value not in _CHOICE_FIELDS[name]:
            raise InvalidInputError(f"{name} must be one of {_CHOICE_FIELDS[name]}, got {value!r}")
        return value
    if name == "shadow":
        return bool(value)
    if not isinstance(value, str):
        raise InvalidInputError(f"{name} must be a color string, got {value!r}")
    if name in _FONT_NAME_FIELDS:
        if not value.strip():
            raise InvalidInputError(f"{name} must not be empty")
        return value
    try:
        parse_color(value)
    except ValueError as e:
        raise InvalidInputError(str(e)) from e
    return value
