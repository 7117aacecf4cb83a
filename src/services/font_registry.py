"""Process-wide font registration state with an explicit lifecycle.

A family moves REQUESTED → LOADED → AVAILABLE (or FAILED). Measurement and
rendering only use families that are AVAILABLE; anything else resolves to
the fallback family so a frame never waits on a font download.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable

from PySide6.QtCore import QByteArray, QObject, Signal, Slot
from PySide6.QtGui import QFontDatabase, QGuiApplication

from src.utils.config import FALLBACK_FONT_FAMILY, FONT_CATALOG

logger = logging.getLogger(__name__)


class FontState(str, Enum):
    REQUESTED = "requested"
    LOADED = "loaded"
    AVAILABLE = "available"
    FAILED = "failed"


def _system_families() -> set[str]:
    if QGuiApplication.instance() is None:
        return set()
    return set(QFontDatabase.families())


class FontRegistry(QObject):
    """Tracks which font families may be used for measurement and drawing.

    Signals:
        font_available(str): Emitted when a family becomes AVAILABLE.
    """

    font_available = Signal(str)

    def __init__(
        self,
        fallback_family: str = FALLBACK_FONT_FAMILY,
        system_families: Iterable[str] | None = None,
    ):
        super().__init__()
        self._fallback = fallback_family
        self._system: set[str] | None = set(system_families) if system_families is not None else None
        self._states: dict[str, FontState] = {}

    @property
    def fallback_family(self) -> str:
        return self._fallback

    def _system_set(self) -> set[str]:
        # QFontDatabase needs a GUI application; look up lazily and cache once found
        if self._system is None:
            found = _system_families()
            if not found:
                return found
            self._system = found
        return self._system

    # ------------------------------------------------------------------ Lifecycle

    def request(self, family: str) -> FontState:
        """Note that *family* is wanted. System families become AVAILABLE at once."""
        state = self._states.get(family)
        if state in (FontState.AVAILABLE, FontState.LOADED):
            return state
        if family in self._system_set():
            self._states[family] = FontState.AVAILABLE
        else:
            self._states[family] = FontState.REQUESTED
            logger.info(f"Font requested: {family}")
        return self._states[family]

    @Slot(str, object)
    def register_font_data(self, family: str, data: bytes) -> bool:
        """Register downloaded/read font bytes for *family*."""
        self._states[family] = FontState.LOADED
        font_id = QFontDatabase.addApplicationFontFromData(QByteArray(data))
        if font_id < 0:
            self.mark_failed(family, "QFontDatabase rejected the font data")
            return False
        loaded = QFontDatabase.applicationFontFamilies(font_id)
        for name in loaded:
            self._make_available(name)
        if family not in loaded:
            self.mark_failed(family, f"font data provides {loaded}")
            return False
        return True

    def mark_available(self, family: str) -> None:
        """For families registered by other means (e.g. a CSS/web loader)."""
        self._make_available(family)

    @Slot(str, str)
    def mark_failed(self, family: str, reason: str = "") -> None:
        self._states[family] = FontState.FAILED
        logger.warning(f"Font unavailable, using {self._fallback} instead of {family}: {reason}")

    def _make_available(self, family: str) -> None:
        previous = self._states.get(family)
        self._states[family] = FontState.AVAILABLE
        if previous != FontState.AVAILABLE:
            logger.info(f"Font available: {family}")
            self.font_available.emit(family)

    # ------------------------------------------------------------------ Query

    def state(self, family: str) -> FontState | None:
        if family not in self._states and family in self._system_set():
            return FontState.AVAILABLE
        return self._states.get(family)

    def is_available(self, family: str) -> bool:
        return self.state(family) == FontState.AVAILABLE

    def resolve(self, family: str) -> str:
        """*family* when usable right now, otherwise the fallback family."""
        return family if self.is_available(family) else self._fallback

    def get_fonts(self) -> list[dict]:
        """Font catalog annotated with the current state of each family."""
        result = []
        for item in FONT_CATALOG:
            state = self.state(item["name"])
            result.append({**item, "state": state.value if state else None})
        return result


_default_registry: FontRegistry | None = None


def get_font_registry() -> FontRegistry:
    """기본 FontRegistry 인스턴스 반환 (프로세스 전역)."""
    global _default_registry
    if _default_registry is None:
        _default_registry = FontRegistry()
    return _default_registry
