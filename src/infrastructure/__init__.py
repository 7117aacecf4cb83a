"""Infrastructure layer: external dependencies (Qt painting, font metrics).

이 계층은 외부 도구/라이브러리를 추상화하여 Application 계층이
구현체에 직접 의존하지 않도록 합니다.
"""

from src.infrastructure.render_surface import IRenderSurface, QtPainterSurface
from src.infrastructure.text_metrics_provider import ITextMetricsProvider, QtTextMetricsProvider

__all__ = [
    "IRenderSurface",
    "ITextMetricsProvider",
    "QtPainterSurface",
    "QtTextMetricsProvider",
]
