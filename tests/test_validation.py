import pytest

from color_ramp.validation import (
    ValidationResult,
    parse_color_for_editing,
    parse_number,
    validate_hex_value,
    validate_hsl_values,
    validate_oklch_values,
)

HEX_ERROR = "Invalid hex format. Use 3, 6 or 8 characters (0-9, A-F)"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("3B82F6", "#3b82f6"),
        ("#3b82f6", "#3b82f6"),
        ("#abc", "#aabbcc"),
        ("  fff ", "#ffffff"),
        ("#3b82f680", "#3b82f6"),
    ],
)
def test_valid_hex(text, expected):
    assert validate_hex_value(text) == ValidationResult(True, formatted_color=expected)


@pytest.mark.parametrize("text", ["", "#", "12345", "#ggg", "#1234567", "blue", None])
def test_invalid_hex(text):
    result = validate_hex_value(text)
    assert not result.is_valid
    assert result.formatted_color is None
    assert result.error == HEX_ERROR


def test_valid_hsl():
    assert validate_hsl_values("217", "91", "60").formatted_color == "hsl(217, 91%, 60%)"
    assert validate_hsl_values("217.4", "91%", "59.5").formatted_color == "hsl(217, 91%, 60%)"


def test_hsl_wraps_hue_and_clamps_the_rest():
    assert validate_hsl_values("400", "120", "-5").formatted_color == "hsl(40, 100%, 0%)"
    assert validate_hsl_values("-30deg", "50", "50").formatted_color == "hsl(330, 50%, 50%)"
    assert validate_hsl_values("359.6", "50", "50").formatted_color == "hsl(0, 50%, 50%)"


@pytest.mark.parametrize("values", [("abc", "1", "1"), ("1", "", "1"), ("1", "1", None)])
def test_invalid_hsl(values):
    result = validate_hsl_values(*values)
    assert result == ValidationResult(False, error="All values must be numbers")


def test_valid_oklch_in_gamut():
    result = validate_oklch_values("0.6", "0.05", "250")
    assert result == ValidationResult(True, formatted_color="oklch(0.6 0.05 250)")


def test_oklch_out_of_gamut_is_mapped():
    result = validate_oklch_values("0.9", "0.4", "140")
    assert result.is_valid
    l, c, h = result.formatted_color[len("oklch(") : -1].split()
    assert float(c) < 0.4
    assert 0.0 <= float(l) <= 1.0


def test_oklch_lightness_is_clamped():
    result = validate_oklch_values("1.5", "0", "0")
    assert result.formatted_color.startswith("oklch(1 0 ")


def test_invalid_oklch():
    assert not validate_oklch_values("x", "0.1", "10").is_valid


def test_to_dict_drops_missing_fields():
    assert ValidationResult(True, formatted_color="#ffffff").to_dict() == {
        "is_valid": True,
        "formatted_color": "#ffffff",
    }


def test_parse_number():
    assert parse_number("12.5%") == 12.5
    assert parse_number(" -3deg") == -3.0
    assert parse_number(".5") == 0.5
    assert parse_number(7) == 7.0
    assert parse_number("abc") is None
    assert parse_number(float("nan")) is None
    assert parse_number(True) is None


def test_parse_color_for_editing():
    assert parse_color_for_editing("#3b82f6", "hex") == {"hex": "3B82F6"}
    assert parse_color_for_editing("#3b82f6", "hsl") == {
        "hsl": {"hue": 217, "saturation": 91, "lightness": 60}
    }
    assert parse_color_for_editing("oklch(0.7 0.1 180)", "oklch") == {
        "oklch": {"lightness": 0.7, "chroma": 0.1, "hue": 180}
    }
    assert parse_color_for_editing("nope", "hsl") == {}

