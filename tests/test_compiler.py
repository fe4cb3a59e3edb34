"""
LayerLab — Transform Compiler Tests
Short-circuits, clamping, fallback, per-preset programs, monotonicity,
and the full-strength settings path.

Run with: pytest tests/test_compiler.py -v
"""

import logging
import math
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.compiler import clamp_intensity, compile, compile_settings, settings_css, WARM_RGB, COOL_RGB
from core.operations import (
    Brightness, Contrast, Saturate, HueRotate, Grayscale, SepiaOverlay, ColorOverlay,
    IDENTITY_VALUES,
)
from presets import list_preset_names, lookup


def _values(ops):
    return [op.value for op in ops]


def _kinds(ops):
    return [op.kind for op in ops]


class TestClamp:

    @pytest.mark.parametrize("raw,expected", [
        (-5, 0.0), (0, 0.0), (50, 50.0), (100, 100.0), (100.4, 100.0), (250, 100.0),
    ])
    def test_clamp_range(self, raw, expected):
        assert clamp_intensity(raw) == expected

    def test_nan_is_zero(self):
        assert clamp_intensity(float("nan")) == 0.0

    def test_non_number_is_zero(self):
        assert clamp_intensity("abc") == 0.0
        assert clamp_intensity(None) == 0.0

    def test_numeric_string(self):
        assert clamp_intensity("40") == 40.0


class TestIdentity:

    @pytest.mark.parametrize("name", list_preset_names())
    def test_zero_intensity_is_empty(self, name):
        assert compile(name, 0) == ()

    @pytest.mark.parametrize("intensity", [0, 1, 50, 100])
    def test_original_is_empty(self, intensity):
        assert compile("original", intensity) == ()

    @pytest.mark.parametrize("name", list_preset_names())
    def test_negative_intensity_clamps_to_empty(self, name):
        assert compile(name, -20) == ()

    def test_unknown_preset_falls_back(self):
        assert compile("nonexistent", 80) == ()

    def test_unknown_preset_logged_not_raised(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="core.compiler"):
            assert compile("nonexistent", 80) == ()
        assert "nonexistent" in caplog.text

    def test_returns_tuple(self):
        assert isinstance(compile("vivid", 50), tuple)


class TestPrograms:

    def test_vivid_full(self):
        ops = compile("vivid", 100)
        assert _kinds(ops) == ["saturate", "contrast", "brightness"]
        assert _values(ops) == [1.3, 1.25, 1.05]
        assert isinstance(ops[0], Saturate)
        assert isinstance(ops[1], Contrast)
        assert isinstance(ops[2], Brightness)

    def test_vivid_full_equals_literals(self):
        assert compile("vivid", 100) == (Saturate(1.3), Contrast(1.25), Brightness(1.05))

    def test_mono_half(self):
        assert compile("mono", 50) == (Grayscale(0.5),)

    def test_vivid_warm_half(self):
        ops = compile("vivid-warm", 50)
        assert _kinds(ops) == ["saturate", "contrast", "hue-rotate", "sepia"]
        assert _values(ops) == pytest.approx([1.15, 1.125, 0.015, 0.1])
        assert isinstance(ops[3], SepiaOverlay)

    def test_vivid_cool_has_no_overlay(self):
        ops = compile("vivid-cool", 100)
        assert _kinds(ops) == ["saturate", "contrast", "hue-rotate"]
        assert ops[2].value == -0.03

    def test_dramatic(self):
        ops = compile("dramatic", 100)
        assert _kinds(ops) == ["contrast", "saturate", "brightness"]
        assert _values(ops) == [1.35, 0.8, 0.9]

    def test_dramatic_warm(self):
        ops = compile("dramaticWarm", 100)
        assert _kinds(ops) == ["contrast", "brightness", "saturate", "sepia"]
        assert _values(ops) == [1.4, 0.93, 0.85, 0.12]

    def test_dramatic_cool(self):
        ops = compile("dramatic-cool", 100)
        assert _kinds(ops) == ["contrast", "saturate", "brightness", "hue-rotate"]
        assert _values(ops) == [1.35, 0.75, 0.9, math.radians(15)]
        assert isinstance(ops[3], HueRotate)

    def test_silvertone_low_intensity_keeps_gray_floor(self):
        ops = compile("silvertone", 10)
        assert _kinds(ops) == ["grayscale", "contrast", "brightness"]
        assert _values(ops) == pytest.approx([0.19, 1.01, 1.005])

    def test_noir(self):
        ops = compile("noir", 100)
        assert _values(ops) == [1.0, 1.25, 0.95]

    def test_intensity_above_100_clamps(self):
        assert compile("vivid", 180) == compile("vivid", 100)


FULL_STRENGTH = {
    "vivid": (Saturate(1.3), Contrast(1.25), Brightness(1.05)),
    "vivid-warm": (Saturate(1.3), Contrast(1.25), HueRotate(0.03), SepiaOverlay(0.2)),
    "vivid-cool": (Saturate(1.3), Contrast(1.25), HueRotate(-0.03)),
    "dramatic": (Contrast(1.35), Saturate(0.8), Brightness(0.9)),
    "dramaticWarm": (Contrast(1.4), Brightness(0.93), Saturate(0.85), SepiaOverlay(0.12)),
    "dramatic-cool": (Contrast(1.35), Saturate(0.75), Brightness(0.9), HueRotate(math.radians(15))),
    "mono": (Grayscale(1.0),),
    "silvertone": (Grayscale(1.0), Contrast(1.1), Brightness(1.05)),
    "noir": (Grayscale(1.0), Contrast(1.25), Brightness(0.95)),
}


class TestFullStrength:

    def test_table_covers_catalog(self):
        assert set(FULL_STRENGTH) == set(list_preset_names()) - {"original"}

    @pytest.mark.parametrize("name", sorted(FULL_STRENGTH))
    def test_full_intensity_is_literal(self, name):
        """No attenuation at t=1 and no float drift: exact catalog literals."""
        assert compile(name, 100) == FULL_STRENGTH[name]

    def test_dramatic_warm_brightness_matches_settings(self):
        ops = compile("dramaticWarm", 100)
        assert ops[1].value == lookup("dramaticWarm").settings.brightness == 0.93

    @pytest.mark.parametrize("name", sorted(FULL_STRENGTH))
    def test_just_below_full_stays_below_full(self, name):
        """99.9 interpolates; only 100 snaps to the literal endpoint."""
        for op, full in zip(compile(name, 99.9), FULL_STRENGTH[name]):
            if full.value != IDENTITY_VALUES[op.kind]:
                assert op.value != full.value


class TestMonotonicity:

    @pytest.mark.parametrize("name", [n for n in list_preset_names() if n != "original"])
    def test_each_value_moves_one_way(self, name):
        preset = lookup(name)
        series = [compile(name, i) for i in range(1, 101)]
        for idx, row in enumerate(preset.curve):
            values = [ops[idx].value for ops in series]
            if row.full > IDENTITY_VALUES[row.kind]:
                assert all(b >= a for a, b in zip(values, values[1:])), row.kind
            elif row.full < IDENTITY_VALUES[row.kind]:
                assert all(b <= a for a, b in zip(values, values[1:])), row.kind

    def test_fractional_intensity(self):
        assert compile("mono", 12.5) == (Grayscale(0.125),)


class TestCompileSettings:

    def test_original_empty(self):
        assert compile_settings("original") == ()

    def test_unknown_empty(self):
        assert compile_settings("nonexistent") == ()

    def test_vivid_all_four_primitives(self):
        ops = compile_settings("vivid")
        assert ops == (Brightness(1.05), Contrast(1.25), Saturate(1.3), HueRotate(0.0))

    def test_vivid_warm_orange_overlay_last(self):
        ops = compile_settings("vivid-warm")
        assert _kinds(ops) == ["brightness", "contrast", "saturate", "hue-rotate", "color-overlay"]
        overlay = ops[-1]
        assert isinstance(overlay, ColorOverlay)
        assert overlay.rgb == WARM_RGB
        assert overlay.alpha == 0.2
        assert overlay.blend_mode == "overlay"

    def test_vivid_cool_blue_overlay(self):
        overlay = compile_settings("vivid-cool")[-1]
        assert overlay.rgb == COOL_RGB
        assert overlay.alpha == 0.2

    def test_identity_settings_kept(self):
        ops = compile_settings("mono")
        assert ops == (Brightness(1.0), Contrast(1.0), Saturate(0.0), HueRotate(0.0))

    def test_dramatic_warm_hue_radians(self):
        ops = compile_settings("dramaticWarm")
        hue = [op for op in ops if op.kind == "hue-rotate"][0]
        assert hue.radians == 5.0


class TestSettingsCss:

    def test_original_and_unknown_are_none(self):
        assert settings_css("original") == "none"
        assert settings_css("nonexistent") == "none"

    def test_vivid(self):
        assert settings_css("vivid") == "brightness(1.05) contrast(1.25) saturate(1.3) hue-rotate(0rad)"

    def test_dramatic_warm_drops_overlay(self):
        assert settings_css("dramaticWarm") == "brightness(0.93) contrast(1.4) saturate(0.85) hue-rotate(5rad)"

    @pytest.mark.parametrize("name", [n for n in list_preset_names() if n != "original"])
    def test_always_four_primitives(self, name):
        css = settings_css(name)
        assert [part.split("(")[0] for part in css.split()] == [
            "brightness", "contrast", "saturate", "hue-rotate",
        ]
