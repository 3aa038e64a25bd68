import logging
import math

import numpy as np
import pytest

from color_ramp.colorspace import (
    ParseError,
    Rgb,
    clamp_value,
    format_color,
    format_number,
    hsl_to_rgb,
    parse,
    rgb_to_hsl,
    round_half_up,
    to_hex,
    to_hsl,
    to_oklch,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("#3b82f6", (59, 130, 246)),
        ("3b82f6", (59, 130, 246)),
        ("#3B82F6", (59, 130, 246)),
        ("#abc", (170, 187, 204)),
        ("#3b82f680", (59, 130, 246)),
        ("hsl(0, 100%, 50%)", (255, 0, 0)),
        ("hsl(120 100% 50%)", (0, 255, 0)),
        ("hsla(240, 100%, 50%, 0.5)", (0, 0, 255)),
        ("rgb(255 0 0)", (255, 0, 0)),
        ("rebeccapurple", (102, 51, 153)),
    ],
)
def test_parse_supported_literals(text, expected):
    assert parse(text).rounded() == expected


def test_parse_alpha():
    assert parse("#3b82f680").alpha == 0.5
    assert parse("#3b82f6").alpha == 1.0
    assert parse("hsla(240, 100%, 50%, 0.5)").alpha == 0.5


@pytest.mark.parametrize("text", ["", "   ", "not a color", "#12345", "#ggg", "hsl(1, 2, 3)", None])
def test_parse_rejects_garbage(text):
    with pytest.raises(ParseError):
        parse(text)


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse("nope")


def test_rgb_is_clipped_and_nan_free():
    c = Rgb(300.0, -5.0, math.nan, alpha=2.0)
    assert c.channels() == (255.0, 0.0, 0.0)
    assert c.alpha == 1.0


def test_rgb_to_hsl_reference_color():
    h, s, l = rgb_to_hsl(59, 130, 246)
    assert np.allclose((h, s, l), (217.2193, 0.9122, 0.5980), atol=1e-4)


def test_rgb_to_hsl_achromatic_hue_is_nan():
    h, s, l = rgb_to_hsl(128, 128, 128)
    assert math.isnan(h)
    assert s == 0.0
    assert l == pytest.approx(128 / 255)


def test_hsl_rgb_round_trip():
    for rgb in [(59, 130, 246), (16, 185, 129), (245, 158, 11), (1, 2, 3)]:
        assert np.allclose(hsl_to_rgb(*rgb_to_hsl(*rgb)), rgb, atol=1e-9)


def test_hsl_to_rgb_primaries():
    assert np.allclose(hsl_to_rgb(0, 1, 0.5), (255, 0, 0), atol=1e-9)
    assert np.allclose(hsl_to_rgb(120, 1, 0.5), (0, 255, 0), atol=1e-9)
    assert np.allclose(hsl_to_rgb(240, 1, 0.5), (0, 0, 255), atol=1e-9)
    assert hsl_to_rgb(0, 0, 0.5) == (127.5, 127.5, 127.5)


def test_to_hex_rounds_half_up():
    assert to_hex(Rgb(127.5, 0.49, 254.5)) == "#8000ff"
    assert to_hex(parse("#ABCDEF")) == "#abcdef"


def test_to_hsl():
    assert to_hsl(parse("#3b82f6")) == "hsl(217, 91%, 60%)"
    assert to_hsl(parse("#ffffff")) == "hsl(0, 0%, 100%)"
    assert to_hsl(parse("#000000")) == "hsl(0, 0%, 0%)"


def test_to_oklch():
    assert to_oklch(parse("#ff0000")) == "oklch(0.63 0.26 29)"
    assert to_oklch(parse("#000000")).startswith("oklch(0 0 ")
    assert to_oklch(parse("#ff000080")).endswith("/ 0.5)")


def test_format_color_dispatch(caplog):
    c = parse("#3b82f6")
    assert format_color(c, "hex") == "#3b82f6"
    assert format_color(c, "hsl") == "hsl(217, 91%, 60%)"
    assert format_color(c, "oklch").startswith("oklch(")
    with caplog.at_level(logging.WARNING):
        assert format_color(c, "cmyk") == "#3b82f6"
    assert "cmyk" in caplog.text


def test_numeric_helpers():
    assert round_half_up(2.5) == 3
    assert round_half_up(-0.5) == 0
    assert round_half_up(0.49) == 0
    assert clamp_value(math.nan, 0.0, 1.0) == 0.0
    assert clamp_value(math.inf, 0.0, 1.0) == 0.0
    assert clamp_value(1.5, 0.0, 1.0) == 1.0
    assert format_number(1.0) == "1"
    assert format_number(0.25) == "0.25"
