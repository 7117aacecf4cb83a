"""QtPainterSurface pixel tests: shadow placement and blur."""

from __future__ import annotations

import pytest

from src.infrastructure.render_surface import QtPainterSurface
from src.models.style import FontDescription

ANCHOR = (200, 200)


def _painted(surface: QtPainterSurface, step: int = 2) -> list[tuple[int, int]]:
    image = surface.image
    return [
        (x, y)
        for y in range(0, image.height(), step)
        for x in range(0, image.width(), step)
        if image.pixelColor(x, y).alpha() > 0
    ]


def _centroid(points):
    assert points, "nothing was painted"
    return (
        sum(p[0] for p in points) / len(points),
        sum(p[1] for p in points) / len(points),
    )


def _draw_shadow_only(rotation: float = 0.0, scale: float = 1.0, blur: float = 0.0) -> QtPainterSurface:
    """Transparent text whose shadow (offset 0, 60) is the only visible ink."""
    surface = QtPainterSurface(400, 400)
    x, y = ANCHOR
    surface.clear()
    surface.save()
    surface.translate(x, y)
    surface.scale(scale, scale)
    surface.rotate(rotation)
    surface.translate(-x, -y)
    surface.set_font(FontDescription(family="DejaVu Sans", size=40))
    surface.set_shadow("#ff0000", blur, 0, 60)
    surface.fill_text("MMMM", x, y, "transparent", "center")
    surface.restore()
    surface.flush()
    return surface


@pytest.mark.parametrize("rotation, scale", [
    (0.0, 1.0),
    (90.0, 1.0),
    (45.0, 1.0),
    (0.0, 2.0),
])
def test_shadow_offset_is_in_device_space(rotation, scale):
    cx, cy = _centroid(_painted(_draw_shadow_only(rotation, scale)))
    assert cx == pytest.approx(ANCHOR[0], abs=10)
    assert cy == pytest.approx(ANCHOR[1] + 60, abs=10)


def test_blurred_shadow_spreads_around_same_centre():
    sharp = _painted(_draw_shadow_only(blur=0))
    soft = _painted(_draw_shadow_only(blur=8))
    assert len(soft) > len(sharp)
    cx, cy = _centroid(soft)
    assert cx == pytest.approx(ANCHOR[0], abs=12)
    assert cy == pytest.approx(ANCHOR[1] + 60, abs=12)


def test_transparent_shadow_paints_nothing():
    surface = QtPainterSurface(100, 100)
    surface.clear()
    surface.set_font(FontDescription(size=30))
    surface.set_shadow("transparent", 5, 2, 2)
    surface.fill_text("A", 50, 50, "transparent", "center")
    surface.flush()
    assert _painted(surface) == []


def test_save_restore_keeps_font_and_shadow_scoped():
    surface = QtPainterSurface(100, 100)
    surface.clear()
    surface.save()
    surface.set_shadow("#000000", 0, 0, 0)
    surface.restore()
    surface.fill_text("A", 50, 50, "transparent", "center")
    surface.flush()
    assert _painted(surface) == []
