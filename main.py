"""TextOverlayStudio preview entry point.

Renders a demo overlay set at the given media times into PNG files:

    python main.py [output_dir] [time ...]
"""

import logging
import os
import sys
from pathlib import Path

# Headless by default; a real preview host supplies its own platform
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtGui import QGuiApplication

from src.infrastructure.render_surface import QtPainterSurface
from src.services.font_registry import FontRegistry
from src.services.settings_manager import SettingsManager
from src.services.text_overlay_service import TextOverlayService
from src.utils.config import APP_NAME, ORG_NAME

logger = logging.getLogger(__name__)


def _build_demo(service: TextOverlayService) -> None:
    title = service.add_text(text="بسم الله الرحمن الرحيم", y=200, end_time=5.0)
    service.apply_template(title.value.overlay_id, "arabic-title")
    service.apply_animation(title.value.overlay_id, "fade-in", {"duration": 1.0})

    caption = service.add_text(text="Surah Al-Fatiha", y=520, start_time=0.5, end_time=5.0)
    service.apply_template(caption.value.overlay_id, "caption")
    service.apply_animation(caption.value.overlay_id, "typing", {"duration": 2.0})

    badge = service.add_text(text="LIVE", x=1150, y=60, rotation=-8)
    service.apply_template(badge.value.overlay_id, "neon")
    service.apply_animation(badge.value.overlay_id, "bounce", {"amplitude": 6})


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    QGuiApplication.setOrganizationName(ORG_NAME)
    QGuiApplication.setApplicationName(APP_NAME)
    app = QGuiApplication(sys.argv)  # noqa: F841  (fonts need a GUI application)

    out_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("preview_frames")
    times = [float(arg) for arg in sys.argv[2:]] or [0.0, 0.5, 1.0, 2.0, 4.0]
    out_dir.mkdir(parents=True, exist_ok=True)

    settings = SettingsManager()
    surface = QtPainterSurface(*settings.get_canvas_size())
    fonts = FontRegistry(fallback_family=settings.get_fallback_font_family())
    service = TextOverlayService(surface, settings=settings, font_registry=fonts, video_duration=5.0)
    _build_demo(service)

    for t in times:
        report = service.render_texts(t)
        path = out_dir / f"frame_{t:07.3f}.png"
        surface.image.save(str(path))
        logger.info(f"t={t:.3f}: drew {len(report.drawn)} overlay(s) -> {path}")

    sys.exit(0)


if __name__ == "__main__":
    main()
