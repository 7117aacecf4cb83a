"""Tests for SettingsManager (QSettings-backed preferences)."""

from src.utils.config import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_TEXT_COLOR,
    DEFAULT_VIDEO_DURATION,
    FALLBACK_FONT_FAMILY,
)


class TestDefaults:
    def test_text_defaults(self, settings):
        assert settings.get_default_font_family() == DEFAULT_FONT_FAMILY
        assert settings.get_default_font_size() == DEFAULT_FONT_SIZE
        assert settings.get_default_text_color() == DEFAULT_TEXT_COLOR
        assert settings.get_fallback_font_family() == FALLBACK_FONT_FAMILY

    def test_preview_defaults(self, settings):
        assert settings.get_default_duration() == DEFAULT_VIDEO_DURATION
        assert settings.get_canvas_size() == (DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT)


class TestRoundTrip:
    def test_font_settings(self, settings):
        settings.set_default_font_family("Tajawal")
        settings.set_default_font_size(40)
        settings.set_fallback_font_family("Noto Sans")
        assert settings.get_default_font_family() == "Tajawal"
        assert settings.get_default_font_size() == 40
        assert settings.get_fallback_font_family() == "Noto Sans"

    def test_duration_is_float(self, settings):
        settings.set_default_duration(12.5)
        value = settings.get_default_duration()
        assert isinstance(value, float)
        assert value == 12.5

    def test_canvas_size(self, settings):
        settings.set_canvas_size(1920, 1080)
        assert settings.get_canvas_size() == (1920, 1080)

    def test_reset_to_defaults(self, settings):
        settings.set_default_text_color("#ff00ff")
        settings.set_canvas_size(640, 360)
        settings.reset_to_defaults()
        assert settings.get_default_text_color() == DEFAULT_TEXT_COLOR
        assert settings.get_canvas_size() == (DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT)
