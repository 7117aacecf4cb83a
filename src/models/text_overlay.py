"""Text overlay data models (pure Python, no Qt dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.models.style import TextStyle
from src.models.text_animation import AnimationBinding

GeometryKey = tuple[str, float, str, str, str, float]


def clamp_opacity(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


@dataclass(slots=True)
class TextOverlay:
    """A single timed, styled text overlay anchored at (x, y) on the preview surface."""

    overlay_id: str
    text: str
    start_time: float
    end_time: float
    x: float = 0.0  # Anchor point in surface pixels
    y: float = 0.0
    rotation: float = 0.0  # degrees
    opacity: float = 1.0  # 0.0-1.0
    style: TextStyle = field(default_factory=TextStyle)
    animation: AnimationBinding | None = None
    width: float = 0.0  # cached, see geometry_key
    height: float = 0.0
    measured_key: GeometryKey | None = None

    def __post_init__(self) -> None:
        self.opacity = clamp_opacity(self.opacity)

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def is_active(self, current_time: float) -> bool:
        return self.start_time <= current_time <= self.end_time

    def geometry_key(self) -> GeometryKey:
        s = self.style
        return (self.text, s.font_size, s.font_family, s.font_weight, s.font_style, s.padding)

    @property
    def geometry_stale(self) -> bool:
        return self.measured_key != self.geometry_key()

    def invalidate_geometry(self) -> None:
        self.measured_key = None

    def box_origin(self) -> tuple[float, float]:
        """Top-left corner of the background box, honoring text alignment."""
        left = self.x
        if self.style.text_align == "center":
            left -= self.width / 2
        elif self.style.text_align == "right":
            left -= self.width
        return left, self.y - self.height / 2


@dataclass(slots=True)
class TextOverlayTrack:
    """An ordered collection of text overlays. Order is paint order (back to front)."""

    overlays: list[TextOverlay] = field(default_factory=list)

    def overlays_at(self, current_time: float) -> list[TextOverlay]:
        """Return all text overlays active at *current_time*, in paint order."""
        return [ov for ov in self.overlays if ov.is_active(current_time)]

    def add_overlay(self, overlay: TextOverlay) -> None:
        self.overlays.append(overlay)

    def index_of(self, overlay_id: str) -> int:
        for i, ov in enumerate(self.overlays):
            if ov.overlay_id == overlay_id:
                return i
        return -1

    def find(self, overlay_id: str) -> TextOverlay | None:
        idx = self.index_of(overlay_id)
        return self.overlays[idx] if idx >= 0 else None

    def remove_overlay(self, index: int) -> TextOverlay | None:
        """Remove and return the text overlay at *index*."""
        if 0 <= index < len(self.overlays):
            return self.overlays.pop(index)
        return None

    def __len__(self) -> int:
        return len(self.overlays)

    def __iter__(self):
        return iter(self.overlays)

    def __getitem__(self, index: int) -> TextOverlay:
        return self.overlays[index]
