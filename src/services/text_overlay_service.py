"""Text overlay service: the public operations of the overlay engine.

Wires the store, template and animation registries, the audio-sync binder
and the compositor together. Every mutating operation returns an
``OverlayResult``; errors are logged and returned, never raised. Store
mutation and render passes are serialized with one re-entrant lock so a
host that calls from several threads cannot interleave them.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping, Sequence

from src.infrastructure.render_surface import IRenderSurface, QtPainterSurface
from src.infrastructure.text_metrics_provider import ITextMetricsProvider
from src.models.errors import InvalidInputError, OverlayError, OverlayResult
from src.models.overlay_template import TextTemplate
from src.models.style import TextStyle
from src.models.text_animation import AnimationBinding, AnimationEffect, WordTiming
from src.models.text_overlay import TextOverlay
from src.services.animation_registry import SYNC_WITH_AUDIO, AnimationRegistry
from src.services.audio_sync import AudioSyncBinder
from src.services.compositor import Compositor, FrameReport
from src.services.font_registry import FontRegistry, get_font_registry
from src.services.overlay_store import OverlayStore
from src.services.settings_manager import SettingsManager
from src.services.template_service import TemplateRegistry
from src.services.text_metrics import TextMetricsService

logger = logging.getLogger(__name__)

_ANIMATION_OPTIONS = ("animation", "animation_params")


class TextOverlayService:
    """Facade over the overlay core used by the preview and the editor panels."""

    def __init__(
        self,
        surface: IRenderSurface | None = None,
        *,
        settings: SettingsManager | None = None,
        font_registry: FontRegistry | None = None,
        metrics_provider: ITextMetricsProvider | None = None,
        templates: TemplateRegistry | None = None,
        animations: AnimationRegistry | None = None,
        video_duration: float | None = None,
    ):
        self._settings = settings or SettingsManager()
        if surface is None:
            surface = QtPainterSurface(*self._settings.get_canvas_size())
        self._fonts = font_registry or get_font_registry()
        self._metrics = TextMetricsService(metrics_provider, self._fonts)
        self._templates = templates or TemplateRegistry()
        self._animations = animations or AnimationRegistry()
        self._store = OverlayStore(
            self._metrics,
            canvas_size=(surface.width, surface.height),
            video_duration=video_duration or self._settings.get_default_duration(),
            style_factory=self._default_style,
        )
        self._compositor = Compositor(self._store, self._animations, surface, self._metrics)
        self._audio_sync = AudioSyncBinder(self._store)
        self._lock = threading.RLock()
        self._fonts.font_available.connect(self.on_font_available)
        self._connected = True

    def close(self) -> None:
        """Stop following font availability. The registry may outlive this service."""
        with self._lock:
            if self._connected:
                self._fonts.font_available.disconnect(self.on_font_available)
                self._connected = False

    def _default_style(self) -> TextStyle:
        return TextStyle(
            font_family=self._settings.get_default_font_family(),
            font_size=self._settings.get_default_font_size(),
            color=self._settings.get_default_text_color(),
        )

    def _run(self, action: str, fn: Callable[[], Any]) -> OverlayResult:
        with self._lock:
            try:
                return OverlayResult.success(fn())
            except OverlayError as e:
                logger.warning(f"{action} failed [{e.kind.value}]: {e}")
                return OverlayResult.failure(e)

    # ------------------------------------------------------------------ Accessors

    @property
    def store(self) -> OverlayStore:
        return self._store

    @property
    def compositor(self) -> Compositor:
        return self._compositor

    @property
    def selected_id(self) -> str | None:
        return self._store.selected_id

    # ------------------------------------------------------------------ Text CRUD

    def _binding_from_options(self, options: dict[str, Any]) -> tuple[bool, AnimationBinding | None]:
        """Pop animation options; returns (present, binding). Validates before any mutation."""
        present = "animation" in options
        animation_id = options.pop("animation", None)
        params = options.pop("animation_params", None)
        if animation_id is None:
            if params:
                raise InvalidInputError("animation_params given without animation")
            return present, None
        return True, self._make_binding(animation_id, params)

    def _make_binding(self, animation_id: str, params: Mapping[str, Any] | None) -> AnimationBinding:
        if animation_id == SYNC_WITH_AUDIO:
            raise InvalidInputError("Use sync_with_audio to bind a word-timing schedule")
        return AnimationBinding(animation_id, self._animations.resolve_params(animation_id, params))

    def add_text(self, **options: Any) -> OverlayResult:
        def _add() -> TextOverlay:
            opts = dict(options)
            _, binding = self._binding_from_options(opts)
            overlay = self._store.add_text(**opts)
            if binding is not None:
                self._store.bind_animation(overlay.overlay_id, binding)
            return overlay

        return self._run("add_text", _add)

    def update_text(self, overlay_id: str, **options: Any) -> OverlayResult:
        def _update() -> TextOverlay:
            self._store.get_text(overlay_id)
            opts = dict(options)
            present, binding = self._binding_from_options(opts)
            overlay = self._store.update_text(overlay_id, **opts)
            if binding is not None:
                self._store.bind_animation(overlay_id, binding)
            elif present:
                self._store.clear_animation(overlay_id)
            return overlay

        return self._run("update_text", _update)

    def delete_text(self, overlay_id: str) -> OverlayResult:
        return self._run("delete_text", lambda: self._store.delete_text(overlay_id))

    def select_text(self, overlay_id: str) -> OverlayResult:
        return self._run("select_text", lambda: self._store.select_text(overlay_id))

    def move_selected_text(self, x: float, y: float) -> OverlayResult:
        return self._run("move_selected_text", lambda: self._store.move_selected_text(x, y))

    # ------------------------------------------------------------------ Templates / animations

    def apply_template(self, overlay_id: str, template_id: str) -> OverlayResult:
        def _apply() -> TextOverlay:
            current = self._store.get_text(overlay_id)
            template = self._templates.get_template(template_id)
            style = TemplateRegistry.merged_style(current.style, template)
            overlay = self._store.set_style(overlay_id, style)
            logger.info(f"Template {template_id} applied to {overlay_id}")
            return overlay

        return self._run("apply_template", _apply)

    def apply_animation(
        self, overlay_id: str, animation_id: str, params: Mapping[str, Any] | None = None
    ) -> OverlayResult:
        def _apply() -> TextOverlay:
            self._store.get_text(overlay_id)
            binding = self._make_binding(animation_id, params)
            overlay = self._store.bind_animation(overlay_id, binding)
            logger.info(f"Animation {animation_id} applied to {overlay_id}")
            return overlay

        return self._run("apply_animation", _apply)

    def remove_animation(self, overlay_id: str) -> OverlayResult:
        return self._run("remove_animation", lambda: self._store.clear_animation(overlay_id))

    def sync_with_audio(
        self, overlay_id: str, timings: Sequence[WordTiming | Mapping[str, Any]]
    ) -> OverlayResult:
        return self._run("sync_with_audio", lambda: self._audio_sync.sync_with_audio(overlay_id, timings))

    def current_word_index(self, overlay_id: str, current_time: float) -> OverlayResult:
        return self._run(
            "current_word_index",
            lambda: self._compositor.current_word_index(overlay_id, current_time),
        )

    # ------------------------------------------------------------------ Rendering

    def render_texts(self, current_time: float) -> FrameReport:
        with self._lock:
            return self._compositor.render_texts(current_time)

    def resize_surface(self, width: int, height: int) -> None:
        """Follow the video's native size; every overlay is re-measured."""
        with self._lock:
            self._compositor.surface.resize(width, height)
            self._store.set_canvas_size(width, height)
            self._store.refresh_all()

    def set_video_duration(self, seconds: float | None) -> None:
        with self._lock:
            self._store.set_video_duration(seconds)

    def on_font_available(self, family: str) -> None:
        """Re-measure overlays drawn with *family* now that it can be used."""
        with self._lock:
            for overlay in self._store.get_texts():
                if overlay.style.font_family == family:
                    overlay.invalidate_geometry()
                    self._store.ensure_geometry(overlay)

    # ------------------------------------------------------------------ Catalogs

    def get_texts(self) -> list[TextOverlay]:
        return self._store.get_texts()

    def get_templates(self, category: str | None = None) -> list[TextTemplate]:
        return self._templates.list_templates(category)

    def get_animations(self, category: str | None = None) -> list[AnimationEffect]:
        return self._animations.list_animations(category)

    def get_fonts(self) -> list[dict]:
        return self._fonts.get_fonts()
