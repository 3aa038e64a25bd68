import pytest

from color_ramp.colorspace import ParseError
from color_ramp.contrast import (
    color_delta_e,
    get_wcag_passing_levels,
    relative_luminance,
    round2,
    wcag_contrast_ratio,
)


def test_relative_luminance_extremes():
    assert relative_luminance(0, 0, 0) == 0.0
    assert relative_luminance(255, 255, 255) == pytest.approx(1.0)


def test_contrast_ratio():
    assert wcag_contrast_ratio("#000000", "#ffffff") == pytest.approx(21.0)
    assert wcag_contrast_ratio("#ffffff", "#000000") == pytest.approx(21.0)
    assert wcag_contrast_ratio("#3b82f6", "#3b82f6") == pytest.approx(1.0)
    assert round2(wcag_contrast_ratio("#777777", "#ffffff")) == 4.48


def test_contrast_ratio_bad_color():
    with pytest.raises(ParseError):
        wcag_contrast_ratio("nope", "#ffffff")


def test_passing_levels():
    assert [lvl.id for lvl in get_wcag_passing_levels(21.0)] == [
        "aaa-normal",
        "aaa-large",
        "aa-normal",
        "aa-large",
    ]
    assert [lvl.id for lvl in get_wcag_passing_levels(4.5)] == ["aaa-large", "aa-normal", "aa-large"]
    assert [lvl.id for lvl in get_wcag_passing_levels(3.2)] == ["aa-large"]
    assert get_wcag_passing_levels(1.0) == []


def test_delta_e():
    assert color_delta_e("#3b82f6", "#3b82f6") == pytest.approx(0.0)
    assert color_delta_e("#000000", "#ffffff") == pytest.approx(100.0, abs=0.1)
    assert 0 < color_delta_e("#3b82f6", "#3b83f6") < 1


def test_round2():
    assert round2(3.14159) == 3.14
    assert round2(1.005001) == 1.01
