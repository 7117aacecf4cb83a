"""Animation registry: catalog of pure, time-local animation strategies.

Every strategy is ``apply(context, overlay, current_time, params) -> AnimationFrame``
and depends on nothing but its arguments, so rendering at arbitrary
(seeked, non-monotonic) times always yields the same frame.
"""

from __future__ import annotations

import bisect
import logging
import math
from typing import Any, Mapping

from src.models.errors import InvalidInputError, NotFoundError
from src.models.text_animation import (
    AnimationEffect,
    AnimationFrame,
    FrameContext,
    WordTiming,
)
from src.models.text_overlay import TextOverlay

logger = logging.getLogger(__name__)

SYNC_WITH_AUDIO = "sync-with-audio"


def ease_out_quad(p: float) -> float:
    return p * (2 - p)


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def entrance_progress(overlay: TextOverlay, current_time: float, duration: float) -> float:
    """Eased entrance progress: 0 at start, 1 from start + duration on."""
    if duration <= 0:
        return 1.0
    return ease_out_quad(clamp01((current_time - overlay.start_time) / duration))


def exit_progress(overlay: TextOverlay, current_time: float, duration: float) -> float:
    """Eased remaining share: 1 until the exit window, 0 at end_time."""
    remaining = overlay.end_time - current_time
    if duration <= 0 or remaining > duration:
        return 1.0
    return ease_out_quad(clamp01(remaining / duration))


# ---------------------------------------------------------------- Entrance


def _fade_in(ctx: FrameContext, ov: TextOverlay, t: float, params: Mapping[str, Any]) -> AnimationFrame:
    return AnimationFrame(opacity=entrance_progress(ov, t, params["duration"]))


def _slide_in_left(ctx, ov, t, params) -> AnimationFrame:
    p = entrance_progress(ov, t, params["duration"])
    start_x = -ov.width
    return AnimationFrame(translate_x=(start_x - ov.x) * (1 - p))


def _slide_in_right(ctx, ov, t, params) -> AnimationFrame:
    p = entrance_progress(ov, t, params["duration"])
    start_x = ctx.width
    return AnimationFrame(translate_x=(start_x - ov.x) * (1 - p))


def _slide_in_top(ctx, ov, t, params) -> AnimationFrame:
    p = entrance_progress(ov, t, params["duration"])
    start_y = -ov.height
    return AnimationFrame(translate_y=(start_y - ov.y) * (1 - p))


def _slide_in_bottom(ctx, ov, t, params) -> AnimationFrame:
    p = entrance_progress(ov, t, params["duration"])
    start_y = ctx.height
    return AnimationFrame(translate_y=(start_y - ov.y) * (1 - p))


def _zoom_in(ctx, ov, t, params) -> AnimationFrame:
    return AnimationFrame(scale=entrance_progress(ov, t, params["duration"]))


def _rotate_in(ctx, ov, t, params) -> AnimationFrame:
    p = entrance_progress(ov, t, params["duration"])
    return AnimationFrame(rotation=(1 - p) * 360.0 * params["rotations"])


# ---------------------------------------------------------------- Exit


def _fade_out(ctx, ov, t, params) -> AnimationFrame:
    return AnimationFrame(opacity=exit_progress(ov, t, params["duration"]))


def _zoom_out(ctx, ov, t, params) -> AnimationFrame:
    return AnimationFrame(scale=exit_progress(ov, t, params["duration"]))


# ---------------------------------------------------------------- Emphasis


def _bounce(ctx, ov, t, params) -> AnimationFrame:
    elapsed = t - ov.start_time
    offset = params["amplitude"] * math.sin(elapsed * params["frequency"] * math.pi)
    return AnimationFrame(translate_y=offset)


def _wave(ctx, ov, t, params) -> AnimationFrame:
    elapsed = t - ov.start_time
    offset = params["amplitude"] * math.sin(elapsed * params["frequency"])
    return AnimationFrame(translate_y=offset)


# ---------------------------------------------------------------- Text


def visible_prefix_length(text: str, start_time: float, duration: float, current_time: float) -> int:
    """Number of characters the typing effect shows at *current_time*."""
    if duration <= 0:
        return len(text)
    progress = clamp01((current_time - start_time) / duration)
    return math.floor(len(text) * progress)


def _typing(ctx, ov, t, params) -> AnimationFrame:
    return AnimationFrame(
        visible_chars=visible_prefix_length(ov.text, ov.start_time, params["duration"], t)
    )


# ---------------------------------------------------------------- Audio sync


def current_word_index(timings: tuple[WordTiming, ...] | list[WordTiming], current_time: float) -> int | None:
    """Index of the last timing whose start_time <= current_time, or None."""
    idx = bisect.bisect_right(timings, current_time, key=lambda w: w.start_time)
    return idx - 1 if idx > 0 else None


def _sync_with_audio(ctx, ov, t, params) -> AnimationFrame:
    return AnimationFrame(word_index=current_word_index(params["timings"], t))


_BUILTIN_EFFECTS: list[AnimationEffect] = [
    AnimationEffect("fade-in", "ظهور تدريجي", "entrance", {"duration": 1.0}, _fade_in),
    AnimationEffect("fade-out", "اختفاء تدريجي", "exit", {"duration": 1.0}, _fade_out),
    AnimationEffect("slide-in-right", "دخول من اليمين", "entrance", {"duration": 1.0}, _slide_in_right),
    AnimationEffect("slide-in-left", "دخول من اليسار", "entrance", {"duration": 1.0}, _slide_in_left),
    AnimationEffect("slide-in-top", "دخول من الأعلى", "entrance", {"duration": 1.0}, _slide_in_top),
    AnimationEffect("slide-in-bottom", "دخول من الأسفل", "entrance", {"duration": 1.0}, _slide_in_bottom),
    AnimationEffect("zoom-in", "تكبير", "entrance", {"duration": 1.0}, _zoom_in),
    AnimationEffect("zoom-out", "تصغير", "exit", {"duration": 1.0}, _zoom_out),
    AnimationEffect("rotate-in", "دوران للداخل", "entrance", {"duration": 1.0, "rotations": 1}, _rotate_in),
    AnimationEffect("typing", "كتابة", "text", {"duration": 2.0}, _typing),
    AnimationEffect("bounce", "ارتداد", "emphasis", {"amplitude": 20, "frequency": 2}, _bounce),
    AnimationEffect("wave", "موجة", "emphasis", {"amplitude": 10, "frequency": 2}, _wave),
    AnimationEffect(SYNC_WITH_AUDIO, "مزامنة مع الصوت", "sync", {"timings": ()}, _sync_with_audio),
]

_NON_NEGATIVE_PARAMS = {"duration", "amplitude", "frequency", "rotations"}


class AnimationRegistry:
    """Lookup table from animation id to strategy."""

    def __init__(self, effects: list[AnimationEffect] | None = None):
        effects = _BUILTIN_EFFECTS if effects is None else effects
        self._effects: dict[str, AnimationEffect] = {e.effect_id: e for e in effects}

    def list_animations(self, category: str | None = None) -> list[AnimationEffect]:
        items = list(self._effects.values())
        if category:
            items = [e for e in items if e.category == category]
        return items

    def get_animation(self, animation_id: str) -> AnimationEffect:
        effect = self._effects.get(animation_id)
        if effect is None:
            raise NotFoundError(f"Animation not found: {animation_id}")
        return effect

    def __contains__(self, animation_id: str) -> bool:
        return animation_id in self._effects

    def resolve_params(self, animation_id: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Defaults overlaid with *params*. Unknown keys and bad numbers are rejected."""
        effect = self.get_animation(animation_id)
        resolved = dict(effect.default_params)
        for key, value in (params or {}).items():
            if key not in effect.default_params:
                raise InvalidInputError(f"Unknown parameter '{key}' for animation {animation_id}")
            if key in _NON_NEGATIVE_PARAMS:
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise InvalidInputError(f"{key} must be a number, got {value!r}")
                if value < 0:
                    raise InvalidInputError(f"{key} must be >= 0, got {value!r}")
            resolved[key] = value
        return resolved

    def frame_for(
        self,
        ctx: FrameContext,
        overlay: TextOverlay,
        current_time: float,
    ) -> AnimationFrame:
        """Evaluate the overlay's bound animation; rest frame when unbound."""
        binding = overlay.animation
        if binding is None:
            return AnimationFrame()
        effect = self._effects.get(binding.animation_id)
        if effect is None:
            logger.warning(f"Overlay {overlay.overlay_id} bound to unknown animation {binding.animation_id}")
            return AnimationFrame()
        params = {**effect.default_params, **binding.params}
        return effect.apply(ctx, overlay, current_time, params)
