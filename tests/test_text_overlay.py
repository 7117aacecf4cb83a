import pytest

from src.models.errors import InvalidInputError
from src.models.overlay_template import TextTemplate
from src.models.style import STYLE_FIELDS, TextStyle
from src.models.text_animation import AnimationBinding
from src.models.text_overlay import TextOverlay, TextOverlayTrack
from src.utils.color_utils import parse_color


def _ov(overlay_id="text_1", start=1.0, end=3.0, text="Hello", **kw):
    return TextOverlay(overlay_id=overlay_id, text=text, start_time=start, end_time=end, **kw)


def test_text_overlay_initialization():
    """Test standard initialization and property defaults."""
    ov = _ov()
    assert ov.text == "Hello"
    assert ov.duration == 2.0
    assert ov.rotation == 0.0
    assert ov.opacity == 1.0
    assert ov.animation is None
    assert ov.style.text_align == "center"
    assert ov.geometry_stale


def test_opacity_is_clamped():
    assert _ov(opacity=1.7).opacity == 1.0
    assert _ov(opacity=-0.2).opacity == 0.0


@pytest.mark.parametrize("t, active", [
    (0.999, False),
    (1.0, True),
    (2.0, True),
    (3.0, True),
    (3.001, False),
])
def test_active_window_includes_both_ends(t, active):
    assert _ov(start=1.0, end=3.0).is_active(t) is active


def test_geometry_key_tracks_text_and_font():
    ov = _ov()
    ov.measured_key = ov.geometry_key()
    assert not ov.geometry_stale

    ov.style = ov.style.merged({"font_weight": "bold"})
    assert ov.geometry_stale

    ov.measured_key = ov.geometry_key()
    ov.style = ov.style.merged({"color": "#ff0000"})
    assert not ov.geometry_stale  # color is not part of the layout

    ov.style = ov.style.merged({"padding": 20})
    assert ov.geometry_stale


def test_box_origin_follows_alignment():
    ov = _ov(x=100.0, y=50.0)
    ov.width, ov.height = 40.0, 20.0
    assert ov.box_origin() == (80.0, 40.0)
    ov.style = ov.style.merged({"text_align": "left"})
    assert ov.box_origin() == (100.0, 40.0)
    ov.style = ov.style.merged({"text_align": "right"})
    assert ov.box_origin() == (60.0, 40.0)


def test_text_overlay_track_keeps_insertion_order():
    track = TextOverlayTrack()
    late = _ov("a", start=5.0, end=6.0)
    early = _ov("b", start=0.0, end=10.0)
    track.add_overlay(late)
    track.add_overlay(early)

    # Paint order is insertion order, not start time
    assert [o.overlay_id for o in track] == ["a", "b"]
    assert [o.overlay_id for o in track.overlays_at(5.5)] == ["a", "b"]
    assert [o.overlay_id for o in track.overlays_at(1.0)] == ["b"]

    assert track.index_of("b") == 1
    assert track.find("zzz") is None
    assert track.remove_overlay(0) is late
    assert track.remove_overlay(5) is None
    assert len(track) == 1


class TestTextStyle:
    def test_merged_returns_copy(self):
        base = TextStyle()
        merged = base.merged({"font_size": 48, "shadow": True})
        assert merged.font_size == 48
        assert merged.shadow is True
        assert base.font_size != 48

    def test_unknown_field_rejected(self):
        with pytest.raises(InvalidInputError):
            TextStyle().merged({"fontSize": 48})

    @pytest.mark.parametrize("changes", [
        {"font_weight": "heavy"},
        {"text_align": "justify"},
        {"font_size": 0},
        {"padding": -1},
        {"stroke_width": "2"},
        {"color": "not-a-color"},
        {"font_family": "  "},
    ])
    def test_invalid_values_rejected(self, changes):
        with pytest.raises(InvalidInputError):
            TextStyle().merged(changes)

    def test_font_description(self):
        font = TextStyle(font_family="Cairo", font_size=42, font_weight="bold").font()
        assert font.family == "Cairo"
        assert font.size == 42
        assert font.bold and not font.italic

    def test_background_transparent(self):
        assert not TextStyle().has_background
        assert TextStyle(background_color="rgba(0, 0, 0, 0.5)").has_background

    def test_style_fields(self):
        assert {"font_family", "shadow_offset_y", "border_radius"} <= STYLE_FIELDS


class TestTextTemplate:
    def test_style_is_read_only(self):
        t = TextTemplate("caption", "Caption", "captions", {"font_size": 24})
        with pytest.raises(TypeError):
            t.style["font_size"] = 10

    def test_invalid_style_rejected(self):
        with pytest.raises(InvalidInputError):
            TextTemplate("bad", "Bad", "titles", {"colour": "#fff"})

    def test_from_dict_defaults(self):
        t = TextTemplate.from_dict({"template_id": "min"})
        assert t.name == "min"
        assert t.category == "titles"
        assert dict(t.style) == {}


def test_binding_copy_is_independent():
    binding = AnimationBinding("fade-in", {"duration": 1.0})
    copied = binding.copy()
    copied.params["duration"] = 3.0
    assert binding.params["duration"] == 1.0


@pytest.mark.parametrize("value, expected", [
    ("#fff", (255, 255, 255, 255)),
    ("#00ffff", (0, 255, 255, 255)),
    ("#00000080", (0, 0, 0, 128)),
    ("rgba(0, 100, 200, 0.7)", (0, 100, 200, 178)),
    ("rgb(10,20,30)", (10, 20, 30, 255)),
    ("transparent", (0, 0, 0, 0)),
])
def test_parse_color(value, expected):
    assert parse_color(value) == expected


def test_parse_color_rejects_garbage():
    with pytest.raises(ValueError):
        parse_color("hsl(0, 100%, 50%)")
