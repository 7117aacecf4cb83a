"""Shared fixtures: offscreen Qt application, recording surface, fake metrics."""

from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtCore import QSettings
from PySide6.QtGui import QGuiApplication

from src.services.font_registry import FontRegistry
from src.services.overlay_store import OverlayStore
from src.services.settings_manager import SettingsManager
from src.services.text_metrics import TextMetricsService
from src.services.text_overlay_service import TextOverlayService
from tests.fakes import SYSTEM_FAMILIES, FakeMetricsProvider, RecordingSurface

# Fonts and painting need a GUI application
_app = QGuiApplication.instance() or QGuiApplication([])


@pytest.fixture
def settings(tmp_path) -> SettingsManager:
    return SettingsManager(QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat))


@pytest.fixture
def font_registry() -> FontRegistry:
    return FontRegistry(fallback_family="DejaVu Sans", system_families=SYSTEM_FAMILIES)


@pytest.fixture
def provider() -> FakeMetricsProvider:
    return FakeMetricsProvider()


@pytest.fixture
def metrics(provider, font_registry) -> TextMetricsService:
    return TextMetricsService(provider, font_registry)


@pytest.fixture
def store(metrics) -> OverlayStore:
    return OverlayStore(metrics, canvas_size=(1280, 720), video_duration=30.0)


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface(1280, 720)


@pytest.fixture
def service(surface, settings, font_registry, provider) -> TextOverlayService:
    return TextOverlayService(
        surface,
        settings=settings,
        font_registry=font_registry,
        metrics_provider=provider,
        video_duration=30.0,
    )
