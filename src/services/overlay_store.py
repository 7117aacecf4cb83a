"""Overlay store: the ordered collection of text overlays and the selection.

Insertion order is paint order (back to front). All mutation goes through
this class so cached geometry never drifts from the text and font it was
measured for.
"""

from __future__ import annotations

import logging
import math
import uuid
from typing import Any, Callable, Mapping

from src.models.errors import InvalidInputError, NotFoundError
from src.models.style import STYLE_FIELDS, TextStyle
from src.models.text_animation import AnimationBinding
from src.models.text_overlay import TextOverlay, TextOverlayTrack, clamp_opacity
from src.services.text_metrics import TextMetricsService
from src.utils.config import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_TEXT,
    DEFAULT_VIDEO_DURATION,
)

logger = logging.getLogger(__name__)

OVERLAY_FIELDS = frozenset({"text", "x", "y", "rotation", "opacity", "start_time", "end_time"})
_NUMERIC_OVERLAY_FIELDS = OVERLAY_FIELDS - {"text"}


def _new_overlay_id() -> str:
    return f"text_{uuid.uuid4().hex[:12]}"


def _check_number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    return value


def split_options(options: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Validate *options* and split them into (overlay fields, style fields).

    Unknown keys are rejected instead of being silently absorbed.
    """
    overlay_fields: dict[str, Any] = {}
    style_fields: dict[str, Any] = {}
    for key, value in options.items():
        if key in OVERLAY_FIELDS:
            if key == "text":
                if not isinstance(value, str):
                    raise InvalidInputError(f"text must be a string, got {value!r}")
            else:
                value = _check_number(key, value)
                if key == "opacity":
                    value = clamp_opacity(value)
            overlay_fields[key] = value
        elif key in STYLE_FIELDS:
            style_fields[key] = value
        else:
            raise InvalidInputError(f"Unknown text option: {key}")
    return overlay_fields, style_fields


class OverlayStore:
    """Ordered text overlays plus the auxiliary selection."""

    def __init__(
        self,
        metrics: TextMetricsService,
        canvas_size: tuple[int, int] = (DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT),
        video_duration: float | None = None,
        style_factory: Callable[[], TextStyle] = TextStyle,
    ):
        self._metrics = metrics
        self._track = TextOverlayTrack()
        self._selected_id: str | None = None
        self._canvas_width, self._canvas_height = canvas_size
        self._video_duration = video_duration
        self._style_factory = style_factory

    # ------------------------------------------------------------------ Environment

    @property
    def canvas_size(self) -> tuple[int, int]:
        return self._canvas_width, self._canvas_height

    def set_canvas_size(self, width: int, height: int) -> None:
        self._canvas_width, self._canvas_height = width, height

    @property
    def video_duration(self) -> float:
        if self._video_duration and self._video_duration > 0:
            return self._video_duration
        return DEFAULT_VIDEO_DURATION

    def set_video_duration(self, seconds: float | None) -> None:
        self._video_duration = seconds

    # ------------------------------------------------------------------ Query

    def get_texts(self) -> list[TextOverlay]:
        """The live ordered list of overlays."""
        return self._track.overlays

    @property
    def track(self) -> TextOverlayTrack:
        return self._track

    def get_text(self, overlay_id: str) -> TextOverlay:
        overlay = self._track.find(overlay_id)
        if overlay is None:
            raise NotFoundError(f"Text not found: {overlay_id}")
        return overlay

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def selected(self) -> TextOverlay | None:
        if self._selected_id is None:
            return None
        return self._track.find(self._selected_id)

    def __len__(self) -> int:
        return len(self._track)

    # ------------------------------------------------------------------ Geometry

    def _measure(self, overlay: TextOverlay) -> None:
        style = overlay.style
        metrics = self._metrics.measure(overlay.text, style.font())
        overlay.width = metrics.width + style.padding * 2
        overlay.height = metrics.height + style.padding * 2
        overlay.measured_key = overlay.geometry_key()

    def ensure_geometry(self, overlay: TextOverlay) -> bool:
        """Re-measure *overlay* if its geometry key changed. Returns True if measured."""
        if not overlay.geometry_stale:
            return False
        self._measure(overlay)
        return True

    def refresh_all(self) -> None:
        """Invalidate and re-measure every overlay (surface resize, font became available)."""
        for overlay in self._track:
            overlay.invalidate_geometry()
            self._measure(overlay)

    # ------------------------------------------------------------------ CRUD

    def add_text(self, **options: Any) -> TextOverlay:
        overlay_fields, style_fields = split_options(options)
        style = self._style_factory().merged(style_fields)
        start = overlay_fields.get("start_time", 0.0)
        end = overlay_fields.get("end_time", self.video_duration)
        if not end > start:
            raise InvalidInputError(f"end_time ({end}) must be greater than start_time ({start})")
        overlay = TextOverlay(
            overlay_id=_new_overlay_id(),
            text=overlay_fields.get("text", DEFAULT_TEXT),
            start_time=start,
            end_time=end,
            x=overlay_fields.get("x", self._canvas_width / 2),
            y=overlay_fields.get("y", self._canvas_height / 2),
            rotation=overlay_fields.get("rotation", 0.0),
            opacity=overlay_fields.get("opacity", 1.0),
            style=style,
        )
        self._measure(overlay)
        self._track.add_overlay(overlay)
        self._selected_id = overlay.overlay_id
        logger.info(f"Text added: {overlay.overlay_id} '{overlay.text[:20]}'")
        return overlay

    def update_text(self, overlay_id: str, **options: Any) -> TextOverlay:
        overlay = self.get_text(overlay_id)
        overlay_fields, style_fields = split_options(options)
        new_style = overlay.style.merged(style_fields) if style_fields else overlay.style
        start = overlay_fields.get("start_time", overlay.start_time)
        end = overlay_fields.get("end_time", overlay.end_time)
        if not end > start:
            raise InvalidInputError(f"end_time ({end}) must be greater than start_time ({start})")

        for key, value in overlay_fields.items():
            setattr(overlay, key, value)
        overlay.style = new_style
        self.ensure_geometry(overlay)
        logger.debug(f"Text updated: {overlay_id} {sorted(options)}")
        return overlay

    def delete_text(self, overlay_id: str) -> TextOverlay:
        index = self._track.index_of(overlay_id)
        if index < 0:
            raise NotFoundError(f"Text not found: {overlay_id}")
        removed = self._track.remove_overlay(index)
        if self._selected_id == overlay_id:
            self._selected_id = self._track[0].overlay_id if len(self._track) else None
        logger.info(f"Text deleted: {overlay_id}")
        return removed

    def select_text(self, overlay_id: str) -> TextOverlay:
        overlay = self.get_text(overlay_id)
        self._selected_id = overlay_id
        return overlay

    def clear_selection(self) -> None:
        self._selected_id = None

    def move_selected_text(self, x: float, y: float) -> TextOverlay:
        overlay = self.selected
        if overlay is None:
            raise NotFoundError("No text selected")
        x = _check_number("x", x)
        y = _check_number("y", y)
        overlay.x, overlay.y = x, y
        return overlay

    # ------------------------------------------------------------------ Style / animation slots

    def set_style(self, overlay_id: str, style: TextStyle) -> TextOverlay:
        """Replace the overlay's style (template application) and re-measure."""
        overlay = self.get_text(overlay_id)
        overlay.style = style
        overlay.invalidate_geometry()
        self._measure(overlay)
        return overlay

    def bind_animation(self, overlay_id: str, binding: AnimationBinding) -> TextOverlay:
        """Bind *binding*, replacing any previous animation (single slot)."""
        overlay = self.get_text(overlay_id)
        if overlay.animation is not None:
            logger.debug(f"Replacing animation {overlay.animation.animation_id} on {overlay_id}")
        overlay.animation = binding
        return overlay

    def clear_animation(self, overlay_id: str) -> TextOverlay:
        overlay = self.get_text(overlay_id)
        overlay.animation = None
        return overlay
