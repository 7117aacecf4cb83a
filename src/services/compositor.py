"""Compositor: draws every active overlay for one instant of the media clock.

Each overlay is painted inside its own save()/restore() scope, so no
transform, opacity, font or shadow set for one overlay reaches the next.
A failure while measuring or drawing one overlay is logged and the rest of
the frame is still drawn.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from src.infrastructure.render_surface import IRenderSurface
from src.models.errors import ErrorKind
from src.models.text_animation import AnimationFrame, FrameContext
from src.models.text_overlay import TextOverlay
from src.services.animation_registry import AnimationRegistry
from src.services.overlay_store import OverlayStore
from src.services.text_metrics import TextMetricsService
from src.utils.config import TRANSPARENT

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FrameReport:
    """What one render pass did."""

    current_time: float
    drawn: list[str] = field(default_factory=list)
    skipped: int = 0
    failed: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class Compositor:
    """Per-frame render loop over the overlay store. Has no timer of its own."""

    def __init__(
        self,
        store: OverlayStore,
        animations: AnimationRegistry,
        surface: IRenderSurface,
        metrics: TextMetricsService,
    ):
        self._store = store
        self._animations = animations
        self._surface = surface
        self._metrics = metrics

    @property
    def surface(self) -> IRenderSurface:
        return self._surface

    def frame_context(self) -> FrameContext:
        return FrameContext(width=self._surface.width, height=self._surface.height)

    # ------------------------------------------------------------------ Frame

    def render_texts(self, current_time: float) -> FrameReport:
        report = FrameReport(current_time=current_time)
        surface = self._surface
        ctx = self.frame_context()
        track = self._store.track
        surface.clear()
        try:
            active = track.overlays_at(current_time)
            report.skipped = len(track) - len(active)
            for overlay in active:
                try:
                    self._render_text(ctx, overlay, current_time)
                except Exception as e:
                    logger.exception(
                        f"[{ErrorKind.RENDER_ISOLATION_FAILURE.value}] "
                        f"Failed to draw {overlay.overlay_id} at t={current_time:.3f}: {e}"
                    )
                    report.failed.append(overlay.overlay_id)
                else:
                    report.drawn.append(overlay.overlay_id)
        finally:
            surface.flush()
        logger.debug(
            f"Frame t={current_time:.3f}: drawn={len(report.drawn)} "
            f"skipped={report.skipped} failed={len(report.failed)}"
        )
        return report

    def _render_text(self, ctx: FrameContext, overlay: TextOverlay, current_time: float) -> None:
        self._store.ensure_geometry(overlay)
        frame = self._animations.frame_for(ctx, overlay, current_time)
        surface = self._surface
        surface.save()
        try:
            surface.set_opacity(overlay.opacity * frame.opacity)
            self._apply_transform(overlay, frame)
            self._paint(overlay, frame)
        finally:
            surface.restore()

    def _apply_transform(self, overlay: TextOverlay, frame: AnimationFrame) -> None:
        surface = self._surface
        x, y = overlay.x, overlay.y
        if frame.translate_x or frame.translate_y:
            surface.translate(frame.translate_x, frame.translate_y)
        if frame.scale != 1.0:
            surface.translate(x, y)
            surface.scale(frame.scale, frame.scale)
            surface.translate(-x, -y)
        rotation = frame.rotation + overlay.rotation
        if rotation:
            surface.translate(x, y)
            surface.rotate(rotation)
            surface.translate(-x, -y)

    def _paint(self, overlay: TextOverlay, frame: AnimationFrame) -> None:
        """Background → stroke outline (with shadow) → fill."""
        surface = self._surface
        style = overlay.style
        text = overlay.text if frame.visible_chars is None else overlay.text[:frame.visible_chars]

        if style.has_background:
            left, top = overlay.box_origin()
            surface.fill_rect(
                left, top, overlay.width, overlay.height,
                style.background_color, style.border_radius,
            )

        surface.set_font(self._metrics.resolve_font(style.font()))
        if style.shadow:
            surface.set_shadow(
                style.shadow_color, style.shadow_blur,
                style.shadow_offset_x, style.shadow_offset_y,
            )

        if style.stroke_width > 0:
            surface.stroke_text(
                text, overlay.x, overlay.y,
                style.stroke_color, style.stroke_width, style.text_align,
            )
            if style.shadow:
                # the outline already cast the shadow
                surface.set_shadow(TRANSPARENT, 0, 0, 0)

        surface.fill_text(text, overlay.x, overlay.y, style.color, style.text_align)

    # ------------------------------------------------------------------ Schedule

    def current_word_index(self, overlay_id: str, current_time: float) -> int | None:
        """Audio-sync word index of *overlay_id* at *current_time* (None if unbound or before the first word)."""
        overlay = self._store.get_text(overlay_id)
        return self._animations.frame_for(self.frame_context(), overlay, current_time).word_index
