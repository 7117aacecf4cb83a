"""Text metrics service: font-aware bounding boxes for overlay layout."""

from __future__ import annotations

import logging
from dataclasses import replace

from src.infrastructure.text_metrics_provider import ITextMetricsProvider, QtTextMetricsProvider
from src.models.errors import ResourceUnavailableError
from src.models.style import FontDescription, TextMetrics
from src.services.font_registry import FontRegistry, get_font_registry

logger = logging.getLogger(__name__)

# Average glyph advance relative to the pixel size, used when no backend is ready
_ESTIMATE_ADVANCE = 0.6
_ESTIMATE_LINE_HEIGHT = 1.2


class TextMetricsService:
    """Measures strings with the font registry's resolved family.

    Families that are not AVAILABLE yet are measured with the fallback family.
    When the backend itself is not ready, a proportional estimate is returned
    so callers never fail.
    """

    def __init__(
        self,
        provider: ITextMetricsProvider | None = None,
        font_registry: FontRegistry | None = None,
    ):
        self._provider = provider or QtTextMetricsProvider()
        self._fonts = font_registry or get_font_registry()

    @property
    def font_registry(self) -> FontRegistry:
        return self._fonts

    def resolve_font(self, font: FontDescription) -> FontDescription:
        if self._fonts.state(font.family) is None:
            self._fonts.request(font.family)
        family = self._fonts.resolve(font.family)
        if family == font.family:
            return font
        return replace(font, family=family)

    def measure(self, text: str, font: FontDescription) -> TextMetrics:
        resolved = self.resolve_font(font)
        try:
            return self._provider.measure(text, resolved)
        except ResourceUnavailableError as e:
            logger.warning(f"Metrics backend unavailable, estimating: {e}")
            return self.estimate(text, resolved)

    @staticmethod
    def estimate(text: str, font: FontDescription) -> TextMetrics:
        return TextMetrics(
            width=len(text) * font.size * _ESTIMATE_ADVANCE,
            height=font.size * _ESTIMATE_LINE_HEIGHT,
        )
