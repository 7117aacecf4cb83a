"""텍스트 측정 추상화.

ITextMetricsProvider 프로토콜로 정의하여 Qt 외 다른 폰트 백엔드로
교체하거나 테스트 시 Mock으로 대체 가능하게 함.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from PySide6.QtGui import QFont, QFontMetricsF, QGuiApplication

from src.models.errors import ResourceUnavailableError
from src.models.style import FontDescription, TextMetrics


def build_qfont(desc: FontDescription) -> QFont:
    """FontDescription → QFont (pixel-sized, like a canvas font string)."""
    font = QFont(desc.family)
    font.setPixelSize(max(1, round(desc.size)))
    font.setWeight(QFont.Weight.Bold if desc.bold else QFont.Weight.Normal)
    font.setItalic(desc.italic)
    return font


@runtime_checkable
class ITextMetricsProvider(Protocol):
    """문자열의 경계 상자를 측정하는 인터페이스."""

    def measure(self, text: str, font: FontDescription) -> TextMetrics:
        ...


class QtTextMetricsProvider:
    """QFontMetricsF 기반 ITextMetricsProvider 구현체."""

    def measure(self, text: str, font: FontDescription) -> TextMetrics:
        # QFontMetricsF는 QGuiApplication 없이 사용할 수 없음
        if QGuiApplication.instance() is None:
            raise ResourceUnavailableError("No QGuiApplication: font backend not ready")
        fm = QFontMetricsF(build_qfont(font))
        return TextMetrics(width=fm.horizontalAdvance(text), height=fm.height())
