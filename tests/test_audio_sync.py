"""Audio-sync binding: schedule validation and word index lookup."""

from __future__ import annotations

import pytest

from src.models.errors import InvalidInputError, NotFoundError
from src.models.text_animation import AnimationBinding, WordTiming
from src.services.animation_registry import AnimationRegistry
from src.services.audio_sync import AudioSyncBinder, normalize_timings
from src.services.compositor import Compositor


TIMINGS = [
    {"position": 0, "start_time": 0.5},
    {"position": 4, "start_time": 1.2},
    {"position": 9, "start_time": 2.0},
]


@pytest.fixture
def binder(store) -> AudioSyncBinder:
    return AudioSyncBinder(store)


def test_normalize_accepts_mappings_and_word_timings():
    schedule = normalize_timings([WordTiming(0, 0.0), {"position": 3, "startTime": 1}])
    assert schedule == (WordTiming(0, 0.0), WordTiming(3, 1.0))


def test_equal_start_times_allowed():
    assert len(normalize_timings([WordTiming(0, 1.0), WordTiming(2, 1.0)])) == 2


@pytest.mark.parametrize("timings", [
    [],
    None,
    "0.5,1.2",
    [{"position": 0}],
    [{"start_time": 1.0}],
    [{"position": -1, "start_time": 1.0}],
    [{"position": 0, "start_time": "soon"}],
    [{"position": 0, "start_time": 2.0}, {"position": 3, "start_time": 1.0}],
    [(0, 1.0)],
])
def test_invalid_schedules_rejected(timings):
    with pytest.raises(InvalidInputError):
        normalize_timings(timings)


def test_sync_binds_schedule(store, binder):
    ov = store.add_text(text="one two three")
    binder.sync_with_audio(ov.overlay_id, TIMINGS)
    assert ov.animation.animation_id == "sync-with-audio"
    assert len(ov.animation.params["timings"]) == 3


def test_sync_replaces_previous_animation(store, binder):
    ov = store.add_text()
    ov.animation = AnimationBinding("fade-in", {"duration": 1.0})
    binder.sync_with_audio(ov.overlay_id, TIMINGS)
    assert ov.animation.animation_id == "sync-with-audio"


def test_invalid_schedule_leaves_binding_untouched(store, binder):
    ov = store.add_text()
    ov.animation = AnimationBinding("fade-in", {"duration": 1.0})
    with pytest.raises(InvalidInputError):
        binder.sync_with_audio(ov.overlay_id, [])
    assert ov.animation.animation_id == "fade-in"


def test_missing_overlay_reported_before_schedule(binder):
    with pytest.raises(NotFoundError):
        binder.sync_with_audio("text_missing", [])


def test_word_index_follows_media_clock(store, surface, metrics, binder):
    ov = store.add_text(text="one two three", start_time=0.0, end_time=5.0)
    binder.sync_with_audio(ov.overlay_id, TIMINGS)
    compositor = Compositor(store, AnimationRegistry(), surface, metrics)

    assert compositor.current_word_index(ov.overlay_id, 0.2) is None
    assert compositor.current_word_index(ov.overlay_id, 0.5) == 0
    assert compositor.current_word_index(ov.overlay_id, 1.5) == 1
    assert compositor.current_word_index(ov.overlay_id, 4.0) == 2
    # seeking back
    assert compositor.current_word_index(ov.overlay_id, 1.0) == 0


def test_synced_overlay_renders_full_text(store, surface, metrics, binder):
    ov = store.add_text(text="one two three", start_time=0.0, end_time=5.0)
    binder.sync_with_audio(ov.overlay_id, TIMINGS)
    Compositor(store, AnimationRegistry(), surface, metrics).render_texts(1.0)
    assert surface.draws("fill_text")[0][1][0] == "one two three"
