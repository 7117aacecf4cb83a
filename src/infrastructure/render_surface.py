"""렌더링 표면 추상화.

IRenderSurface는 Compositor가 사용하는 2D 드로잉 프리미티브 집합이며,
QtPainterSurface는 QImage 위에 QPainter로 그리는 구현체.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import (
    QBrush,
    QColor,
    QFont,
    QFontMetricsF,
    QImage,
    QPainter,
    QPainterPath,
    QPen,
)

from src.infrastructure.text_metrics_provider import build_qfont
from src.models.style import FontDescription
from src.utils.color_utils import parse_color


@runtime_checkable
class IRenderSurface(Protocol):
    """Compositor가 그리는 대상. save()/restore()는 모든 상태(변환, 투명도, 폰트, 그림자)를 포함."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def resize(self, width: int, height: int) -> None: ...

    def clear(self) -> None: ...

    def flush(self) -> None: ...

    def save(self) -> None: ...

    def restore(self) -> None: ...

    def set_opacity(self, opacity: float) -> None: ...

    def translate(self, dx: float, dy: float) -> None: ...

    def rotate(self, degrees: float) -> None: ...

    def scale(self, sx: float, sy: float) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str, radius: float = 0.0) -> None: ...

    def set_font(self, font: FontDescription) -> None: ...

    def set_shadow(self, color: str, blur: float, offset_x: float, offset_y: float) -> None: ...

    def stroke_text(self, text: str, x: float, y: float, color: str, line_width: float, align: str) -> None: ...

    def fill_text(self, text: str, x: float, y: float, color: str, align: str) -> None: ...


def to_qcolor(value: str) -> QColor:
    r, g, b, a = parse_color(value)
    return QColor(r, g, b, a)


@dataclass(frozen=True, slots=True)
class _Shadow:
    color: QColor
    blur: float
    offset_x: float
    offset_y: float


class QtPainterSurface:
    """QImage 기반 IRenderSurface 구현체.

    Text is anchored like a canvas with ``textBaseline = 'middle'``: *y* is the
    vertical centre, *x* the left / centre / right edge depending on *align*.
    """

    def __init__(self, width: int, height: int):
        self._image = self._new_image(width, height)
        self._painter: QPainter | None = None
        self._font = QFont()
        self._shadow: _Shadow | None = None
        self._stack: list[tuple[QFont, _Shadow | None]] = []

    @staticmethod
    def _new_image(width: int, height: int) -> QImage:
        image = QImage(max(1, width), max(1, height), QImage.Format.Format_ARGB32_Premultiplied)
        image.fill(Qt.GlobalColor.transparent)
        return image

    # ------------------------------------------------------------------ Frame

    @property
    def width(self) -> int:
        return self._image.width()

    @property
    def height(self) -> int:
        return self._image.height()

    @property
    def image(self) -> QImage:
        return self._image

    def resize(self, width: int, height: int) -> None:
        self.flush()
        self._image = self._new_image(width, height)

    def clear(self) -> None:
        self.flush()
        self._image.fill(Qt.GlobalColor.transparent)
        self._painter = QPainter(self._image)
        self._painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        self._painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        self._font = QFont()
        self._shadow = None
        self._stack.clear()

    def flush(self) -> None:
        if self._painter is not None:
            self._painter.end()
            self._painter = None

    def _p(self) -> QPainter:
        if self._painter is None:
            raise RuntimeError("Surface is not open; call clear() first")
        return self._painter

    # ------------------------------------------------------------------ State

    def save(self) -> None:
        self._p().save()
        self._stack.append((QFont(self._font), self._shadow))

    def restore(self) -> None:
        self._p().restore()
        if self._stack:
            self._font, self._shadow = self._stack.pop()

    def set_opacity(self, opacity: float) -> None:
        self._p().setOpacity(max(0.0, min(1.0, opacity)))

    def translate(self, dx: float, dy: float) -> None:
        self._p().translate(dx, dy)

    def rotate(self, degrees: float) -> None:
        self._p().rotate(degrees)

    def scale(self, sx: float, sy: float) -> None:
        self._p().scale(sx, sy)

    def set_font(self, font: FontDescription) -> None:
        self._font = build_qfont(font)

    def set_shadow(self, color: str, blur: float, offset_x: float, offset_y: float) -> None:
        self._shadow = _Shadow(to_qcolor(color), blur, offset_x, offset_y)

    # ------------------------------------------------------------------ Paint

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str, radius: float = 0.0) -> None:
        painter = self._p()
        rect = QRectF(x, y, w, h)
        brush = QBrush(to_qcolor(color))
        if radius > 0:
            r = min(radius, w / 2, h / 2)
            path = QPainterPath()
            path.addRoundedRect(rect, r, r)
            painter.fillPath(path, brush)
        else:
            painter.fillRect(rect, brush)

    def _text_path(self, text: str, x: float, y: float, align: str) -> QPainterPath:
        fm = QFontMetricsF(self._font)
        advance = fm.horizontalAdvance(text)
        if align == "center":
            x -= advance / 2
        elif align == "right":
            x -= advance
        baseline = y + (fm.ascent() - fm.descent()) / 2
        path = QPainterPath()
        path.addText(QPointF(x, baseline), self._font, text)
        return path

    def _draw_shadow(self, path: QPainterPath) -> None:
        shadow = self._shadow
        if shadow is None or shadow.color.alpha() == 0:
            return
        painter = self._p()
        # Shadow offset and blur are in device pixels, unaffected by rotation or scale
        device_path = painter.worldTransform().map(path)
        device_path.translate(shadow.offset_x, shadow.offset_y)
        painter.save()
        painter.resetTransform()
        if shadow.blur > 0:
            self._draw_blurred(painter, device_path, shadow)
        else:
            painter.fillPath(device_path, QBrush(shadow.color))
        painter.restore()

    @staticmethod
    def _draw_blurred(painter: QPainter, path: QPainterPath, shadow: _Shadow) -> None:
        margin = math.ceil(shadow.blur * 2)
        rect = path.boundingRect().adjusted(-margin, -margin, margin, margin).toAlignedRect()
        if rect.isEmpty():
            return
        layer = QImage(rect.size(), QImage.Format.Format_ARGB32_Premultiplied)
        layer.fill(Qt.GlobalColor.transparent)
        lp = QPainter(layer)
        lp.setRenderHint(QPainter.RenderHint.Antialiasing)
        lp.translate(-rect.x(), -rect.y())
        lp.fillPath(path, QBrush(shadow.color))
        lp.end()
        # Smooth downscale + upscale spreads each pixel over about `blur` pixels
        factor = max(1.0, shadow.blur / 2)
        small = layer.scaled(
            max(1, round(rect.width() / factor)),
            max(1, round(rect.height() / factor)),
            Qt.AspectRatioMode.IgnoreAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.drawImage(QRectF(rect), small)

    def stroke_text(self, text: str, x: float, y: float, color: str, line_width: float, align: str) -> None:
        path = self._text_path(text, x, y, align)
        self._draw_shadow(path)
        self._p().strokePath(path, QPen(to_qcolor(color), line_width))

    def fill_text(self, text: str, x: float, y: float, color: str, align: str) -> None:
        path = self._text_path(text, x, y, align)
        self._draw_shadow(path)
        self._p().fillPath(path, QBrush(to_qcolor(color)))
