"""Audio-sync binder: attaches a word-timing schedule to a text overlay."""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Sequence

from src.models.errors import InvalidInputError
from src.models.text_animation import AnimationBinding, WordTiming
from src.models.text_overlay import TextOverlay
from src.services.animation_registry import SYNC_WITH_AUDIO
from src.services.overlay_store import OverlayStore

logger = logging.getLogger(__name__)


def _to_word_timing(item: Any, index: int) -> WordTiming:
    if isinstance(item, WordTiming):
        return item
    if not isinstance(item, Mapping):
        raise InvalidInputError(f"Timing #{index} must be a mapping or WordTiming, got {type(item).__name__}")
    try:
        position = item["position"]
        start = item["start_time"] if "start_time" in item else item["startTime"]
    except KeyError as e:
        raise InvalidInputError(f"Timing #{index} is missing {e}") from e
    if isinstance(position, bool) or not isinstance(position, int) or position < 0:
        raise InvalidInputError(f"Timing #{index} position must be a non-negative int, got {position!r}")
    if isinstance(start, bool) or not isinstance(start, (int, float)) or math.isnan(start):
        raise InvalidInputError(f"Timing #{index} start time must be a number, got {start!r}")
    return WordTiming(position=position, start_time=float(start))


def normalize_timings(timings: Any) -> tuple[WordTiming, ...]:
    """Validate a word-timing schedule.

    Must be a non-empty list or tuple, ordered by start time.
    """
    if not isinstance(timings, (list, tuple)) or not timings:
        raise InvalidInputError("Timings must be a non-empty list")
    schedule = tuple(_to_word_timing(item, i) for i, item in enumerate(timings))
    for prev, cur in zip(schedule, schedule[1:]):
        if cur.start_time < prev.start_time:
            raise InvalidInputError(
                f"Timings must be ordered by start time ({cur.start_time} after {prev.start_time})"
            )
    return schedule


class AudioSyncBinder:
    """Binds ``sync-with-audio`` schedules through the overlay store."""

    def __init__(self, store: OverlayStore):
        self._store = store

    def sync_with_audio(self, overlay_id: str, timings: Sequence[WordTiming | Mapping[str, Any]]) -> TextOverlay:
        self._store.get_text(overlay_id)
        schedule = normalize_timings(timings)
        overlay = self._store.bind_animation(
            overlay_id, AnimationBinding(animation_id=SYNC_WITH_AUDIO, params={"timings": schedule})
        )
        logger.info(f"Audio sync bound to {overlay_id}: {len(schedule)} words")
        return overlay
