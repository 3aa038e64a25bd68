import logging

import pytest

from color_ramp.colorspace import parse
from color_ramp.interpolation import (
    SCALE_TYPES,
    ChannelSpec,
    advanced_defaults,
    hue_at,
    hue_gradient,
    lightness_at,
    lightness_gradient,
    position_to_value,
    saturation_at,
    saturation_gradient,
    scale_position,
    value_at,
    value_to_position,
)


@pytest.mark.parametrize("scale", SCALE_TYPES)
@pytest.mark.parametrize("n", [2, 5, 10, 13, 20])
def test_scale_positions_span_unit_interval(scale, n):
    ts = [scale_position(i, n, scale) for i in range(n)]
    assert ts[0] == pytest.approx(0.0)
    assert ts[-1] == pytest.approx(1.0)
    assert all(0.0 <= t <= 1.0 for t in ts)
    assert all(a <= b + 1e-12 for a, b in zip(ts, ts[1:]))


def test_scale_position_edge_cases():
    assert scale_position(0, 1, "geometric") == 0.0
    assert scale_position(3, 5, "no-such-curve") == scale_position(3, 5, "linear") == 0.75
    # ease-in lags linear, ease-out leads it
    assert scale_position(2, 5, "ease-in") < 0.5 < scale_position(2, 5, "ease-out")


def test_simple_lightness_is_centred_on_base():
    spec = ChannelSpec(range=100.0)
    assert lightness_at(spec, 5, 10, 0.6) == 0.6
    assert lightness_at(spec, 0, 10, 0.6) == pytest.approx(0.6 - 5 / 9)
    # clamped at the top
    assert lightness_at(spec, 9, 10, 0.6) == 1.0


def test_advanced_lightness_runs_start_to_end():
    spec = ChannelSpec(start=10.0, end=90.0, advanced=True)
    assert lightness_at(spec, 0, 5, 0.3) == pytest.approx(0.1)
    assert lightness_at(spec, 2, 5, 0.3) == pytest.approx(0.5)
    assert lightness_at(spec, 4, 5, 0.3) == pytest.approx(0.9)


def test_advanced_needs_both_ends():
    spec = ChannelSpec(range=0.0, start=10.0, advanced=True)
    assert not spec.is_advanced
    assert lightness_at(spec, 0, 5, 0.3) == 0.3


def test_hue_wraps_around():
    spec = ChannelSpec(range=40.0)
    assert hue_at(spec, 4, 5, 350.0) == pytest.approx(10.0)
    assert hue_at(spec, 0, 5, 350.0) == pytest.approx(330.0)
    assert hue_at(spec, 0, 5, 5.0) == pytest.approx(345.0)


def test_advanced_hue_is_a_shift_from_base():
    spec = ChannelSpec(start=-10.0, end=-10.0, advanced=True)
    assert hue_at(spec, 0, 3, 5.0) == pytest.approx(355.0)
    spec = ChannelSpec(start=0.0, end=90.0, advanced=True)
    assert hue_at(spec, 2, 3, 200.0) == pytest.approx(290.0)


def test_saturation_is_inverted():
    spec = ChannelSpec(start=0.0, end=100.0, advanced=True)
    assert saturation_at(spec, 0, 10, 0.5) == 1.0
    assert saturation_at(spec, 9, 10, 0.5) == 0.0

    simple = ChannelSpec(range=100.0)
    assert saturation_at(simple, 5, 10, 0.9) == 0.9
    assert saturation_at(simple, 0, 10, 0.9) < 0.9
    assert saturation_at(simple, 9, 10, 0.9) < 0.9


def test_value_at_dispatch():
    spec = ChannelSpec(range=100.0)
    assert value_at("lightness", spec, 0, 10, 0.6) == lightness_at(spec, 0, 10, 0.6)
    assert value_at("chroma", spec, 0, 10, 100.0) == hue_at(spec, 0, 10, 100.0)
    assert value_at("saturation", spec, 0, 10, 0.6) == saturation_at(spec, 0, 10, 0.6)
    with pytest.raises(ValueError):
        value_at("alpha", spec, 0, 10, 0.6)


def test_single_step_returns_base():
    spec = ChannelSpec(range=100.0)
    assert lightness_at(spec, 0, 1, 0.42) == 0.42
    assert hue_at(spec, 0, 1, 42.0) == 42.0
    assert saturation_at(spec, 0, 1, 0.42) == 0.42


def test_lightness_gradient():
    stops = lightness_gradient("#3b82f6")
    assert len(stops) == 11
    assert stops[0] == "#000000"
    assert stops[-1] == "#ffffff"


def test_hue_gradient_closes_the_wheel():
    stops = hue_gradient("#ff0000")
    assert len(stops) == 11
    assert stops[0] == stops[-1] == "#ff0000"


def test_saturation_gradient_ends_gray():
    stops = saturation_gradient("#3b82f6")
    r, g, b = parse(stops[-1]).rounded()
    assert r == g == b
    assert stops[0] != stops[-1]


def test_gradients_fall_back_on_bad_input(caplog):
    with caplog.at_level(logging.WARNING):
        stops = lightness_gradient("nope")
    assert all(len(set(parse(s).rounded())) == 1 for s in stops)
    assert "fell back" in caplog.text
    assert hue_gradient("nope")[0] == "#ff0000"
    assert len(saturation_gradient("nope")) == 11


def test_slider_mapping_linear_and_inverted():
    assert value_to_position(25, 0, 100) == 25
    assert value_to_position(25, 0, 100, invert=True) == 75
    assert position_to_value(25, 0, 100) == 25.0
    assert position_to_value(25, 0, 100, invert=True) == 75.0
    assert position_to_value(33.333, 0, 1) == 0.3
    assert position_to_value(150, 0, 100) == 100


def test_slider_mapping_relative_hue():
    kw = dict(reference=180.0, is_hue=True)
    assert value_to_position(0, -180, 180, **kw) == 50
    assert value_to_position(90, -180, 180, **kw) == 75
    assert position_to_value(50, -180, 180, **kw) == 0
    assert position_to_value(75, -180, 180, **kw) == 90


def test_advanced_defaults_straddle_the_base():
    assert advanced_defaults("#3b82f6", "lightness", 40) == (39.8, 79.8)
    assert advanced_defaults("#3b82f6", "saturation", 20) == (81.2, 100.0)
    assert advanced_defaults("#3b82f6", "hue", 30) == (-15.0, 15.0)
    assert advanced_defaults("#3b82f6", "chroma", 25) == (-12.5, 12.5)


def test_advanced_defaults_treat_zero_base_as_half():
    assert advanced_defaults("#000000", "lightness", 100) == (0.0, 100.0)
    assert advanced_defaults("#808080", "saturation", 40) == (30.0, 70.0)


def test_advanced_defaults_bad_input(caplog):
    with caplog.at_level(logging.WARNING):
        assert advanced_defaults("nope", "lightness", 40) == (0.0, 0.0)
    assert "nope" in caplog.text
    with pytest.raises(ValueError):
        advanced_defaults("#3b82f6", "alpha", 40)
