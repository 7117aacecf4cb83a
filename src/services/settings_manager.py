"""Settings manager for text overlay preferences."""

from PySide6.QtCore import QSettings

from src.utils.config import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_TEXT_COLOR,
    DEFAULT_VIDEO_DURATION,
    FALLBACK_FONT_FAMILY,
)


class SettingsManager:
    """Wrapper around QSettings for type-safe preference management."""

    def __init__(self, settings: QSettings | None = None):
        self._settings = settings if settings is not None else QSettings()

    # ---------------------------------------------------- Text Defaults

    def get_default_font_family(self) -> str:
        """Get the font family for new overlays (default: Arial)."""
        return self._settings.value("text/default_font_family", DEFAULT_FONT_FAMILY, str)

    def set_default_font_family(self, family: str) -> None:
        self._settings.setValue("text/default_font_family", family)

    def get_default_font_size(self) -> int:
        """Get the font pixel size for new overlays (default: 32)."""
        return self._settings.value("text/default_font_size", DEFAULT_FONT_SIZE, int)

    def set_default_font_size(self, size: int) -> None:
        self._settings.setValue("text/default_font_size", size)

    def get_default_text_color(self) -> str:
        """Get the fill color for new overlays (default: #ffffff)."""
        return self._settings.value("text/default_color", DEFAULT_TEXT_COLOR, str)

    def set_default_text_color(self, color: str) -> None:
        self._settings.setValue("text/default_color", color)

    def get_fallback_font_family(self) -> str:
        """Get the family drawn while a requested font is not available."""
        return self._settings.value("text/fallback_font_family", FALLBACK_FONT_FAMILY, str)

    def set_fallback_font_family(self, family: str) -> None:
        self._settings.setValue("text/fallback_font_family", family)

    # ---------------------------------------------------- Preview

    def get_default_duration(self) -> float:
        """Get the end time for new overlays when the video duration is unknown (seconds)."""
        return self._settings.value("preview/default_duration", DEFAULT_VIDEO_DURATION, float)

    def set_default_duration(self, seconds: float) -> None:
        self._settings.setValue("preview/default_duration", seconds)

    def get_canvas_size(self) -> tuple[int, int]:
        """Get the preview surface size used before a video is loaded."""
        width = self._settings.value("preview/canvas_width", DEFAULT_CANVAS_WIDTH, int)
        height = self._settings.value("preview/canvas_height", DEFAULT_CANVAS_HEIGHT, int)
        return width, height

    def set_canvas_size(self, width: int, height: int) -> None:
        self._settings.setValue("preview/canvas_width", width)
        self._settings.setValue("preview/canvas_height", height)

    # ---------------------------------------------------- Utility

    def reset_to_defaults(self) -> None:
        """Reset all settings to their default values."""
        self._settings.clear()
        self._settings.sync()
