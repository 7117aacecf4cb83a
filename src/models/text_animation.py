"""Text overlay animation data classes (pure Python, no Qt dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Mapping

if TYPE_CHECKING:
    from src.models.text_overlay import TextOverlay

ANIMATION_CATEGORIES = ("entrance", "exit", "emphasis", "text", "sync")


@dataclass(frozen=True, slots=True)
class FrameContext:
    """Surface dimensions an animation may need (slide extremes)."""

    width: float
    height: float


@dataclass(slots=True)
class AnimationFrame:
    """Time-local delta produced by one animation strategy.

    Scale and rotation are applied about the overlay anchor. ``visible_chars``
    is a render-time text prefix length; ``word_index`` is the audio-sync
    position (None before the first word).
    """

    opacity: float = 1.0
    translate_x: float = 0.0
    translate_y: float = 0.0
    scale: float = 1.0
    rotation: float = 0.0
    visible_chars: int | None = None
    word_index: int | None = None

    @property
    def is_rest(self) -> bool:
        return (
            self.opacity == 1.0
            and self.translate_x == 0.0
            and self.translate_y == 0.0
            and self.scale == 1.0
            and self.rotation == 0.0
            and self.visible_chars is None
        )


AnimationApply = Callable[[FrameContext, "TextOverlay", float, Mapping[str, Any]], AnimationFrame]


@dataclass(frozen=True, slots=True)
class AnimationEffect:
    """A cataloged animation strategy."""

    effect_id: str
    name: str
    category: str  # entrance, exit, emphasis, text, sync
    default_params: Mapping[str, Any]
    apply: AnimationApply = field(compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_params", MappingProxyType(dict(self.default_params)))


@dataclass(frozen=True, slots=True)
class WordTiming:
    """One spoken word: its position in the text and when it starts (seconds)."""

    position: int
    start_time: float


@dataclass(slots=True)
class AnimationBinding:
    """The single animation bound to an overlay."""

    animation_id: str
    params: dict[str, Any] = field(default_factory=dict)

    def copy(self) -> AnimationBinding:
        """독립적인 복사본 반환."""
        return AnimationBinding(animation_id=self.animation_id, params=dict(self.params))
