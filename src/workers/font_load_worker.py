"""Background worker for reading font files off the GUI thread."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QObject, Signal

logger = logging.getLogger(__name__)


class FontLoadWorker(QObject):
    """Reads font files in a background thread.

    Registration itself (QFontDatabase) happens on the registry's thread
    through the ``loaded`` signal.

    Signals:
        loaded(str, bytes): Emitted per file with (family, font data).
        error(str, str): Emitted with (family, error message) on failure.
        finished(): Emitted after every file has been attempted.
    """

    loaded = Signal(str, object)
    error = Signal(str, str)
    finished = Signal()

    def __init__(self, fonts: dict[str, Path]):
        super().__init__()
        self._fonts = dict(fonts)
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def run(self) -> None:
        try:
            for family, path in self._fonts.items():
                if self._cancelled:
                    return
                try:
                    data = Path(path).read_bytes()
                except OSError as e:
                    logger.warning(f"Failed to read font file {path}: {e}")
                    self.error.emit(family, str(e))
                    continue
                self.loaded.emit(family, data)
        finally:
            self.finished.emit()


def connect_to_registry(worker: FontLoadWorker, registry) -> None:
    """Route worker results into a FontRegistry."""
    worker.loaded.connect(registry.register_font_data)
    worker.error.connect(registry.mark_failed)
