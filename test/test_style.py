"""
Tests for style settings helpers and StyleStore.
"""

import dataclasses

import pytest

from setli.models import DEFAULT_STYLE, StyleSettings
from setli.style import OWNED_STYLE_KEYS, StyleStore, build_style_overrides, get_default, hex_to_obs_color


def make_style(**overrides):
    return dataclasses.replace(DEFAULT_STYLE, **overrides)


def test_default_style():
    """The built-in style targets the default element with a 1px outline."""
    style = get_default()
    assert style.target_scene == "シーン"
    assert style.target_text_element == "setli"
    assert style.font_family == "Arial"
    assert style.font_color == 0
    assert style.outline_enabled is True
    assert style.outline_width == 1
    assert style.line_break_count == 1


def test_style_settings_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_STYLE.font_family = "Helvetica"


class TestHexToObsColor:
    def test_swaps_red_and_blue(self):
        assert hex_to_obs_color("#112233") == 0x332211

    def test_without_hash(self):
        assert hex_to_obs_color("ff0000") == 0x0000FF

    def test_black_and_white(self):
        assert hex_to_obs_color("#000000") == 0
        assert hex_to_obs_color("#ffffff") == 0xFFFFFF

    def test_invalid_length(self):
        with pytest.raises(ValueError):
            hex_to_obs_color("#fff")

    def test_invalid_digits(self):
        with pytest.raises(ValueError):
            hex_to_obs_color("#gggggg")


def test_build_style_overrides():
    style = make_style(
        target_scene="Main",
        font_family="Noto Sans",
        font_color=255,
        outline_enabled=False,
        outline_width=4,
        outline_color=65280,
    )

    overrides = build_style_overrides(style, font_size=300)

    assert overrides == {
        "scene_name": "Main",
        "color": 255,
        "font": {"face": "Noto Sans", "size": 300},
        "outline": False,
        "outline_size": 4,
        "outline_color": 65280,
    }
    assert set(overrides) == set(OWNED_STYLE_KEYS)


def test_build_style_overrides_passes_out_of_range_values():
    """Negative widths are not validated locally."""
    overrides = build_style_overrides(make_style(outline_width=-3), font_size=120)
    assert overrides["outline_size"] == -3
    assert overrides["font"]["size"] == 120


def test_style_store_replace():
    store = StyleStore()
    assert store.get() == DEFAULT_STYLE

    new = make_style(line_break_count=3)
    store.replace(new)

    assert store.get() is new
    assert isinstance(store.get(), StyleSettings)
