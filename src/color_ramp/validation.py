"""Free-text color input → canonical color strings.

These three ``validate_*`` functions are the only way user-typed text becomes
a color the ramp engine consumes.  They never raise: every problem comes back
as ``ValidationResult(is_valid=False, error=...)`` and the caller decides
whether to keep the previous value.
"""

from __future__ import annotations

import logging
import re
import string
from dataclasses import asdict, dataclass
from typing import Any

from coloraide import Color

from .colorspace import (
    FIT_SRGB,
    Oklch,
    ParseError,
    clamp_value,
    format_oklch_string,
    is_finite,
    oklch_from_coloraide,
    parse,
    round_half_up,
)
from .oklch import MAX_CHROMA, convert_to_oklch, parse_oklch_string

log = logging.getLogger(__name__)

# leading numeric prefix, like JavaScript's parseFloat
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    formatted_color: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


def _fail(error: str) -> ValidationResult:
    return ValidationResult(False, error=error)


def parse_number(text: Any) -> float | None:
    """``"12.5%"`` → 12.5, ``"abc"`` → None; numbers pass through."""
    if isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        return float(text) if is_finite(text) else None
    m = _FLOAT_PREFIX.match(str(text or ""))
    if not m:
        return None
    value = float(m.group(1))
    return value if is_finite(value) else None


def validate_hex_value(text: str) -> ValidationResult:
    """3, 6 or 8 hex digits with optional ``#`` → lowercase ``#rrggbb``."""
    raw = str(text or "").strip()
    if raw.startswith("#"):
        raw = raw[1:]
    if len(raw) not in (3, 6, 8) or not all(c in string.hexdigits for c in raw):
        return _fail("Invalid hex format. Use 3, 6 or 8 characters (0-9, A-F)")
    if len(raw) == 3:
        raw = "".join(ch * 2 for ch in raw)
    # alpha is not part of ramp math
    return ValidationResult(True, formatted_color="#" + raw[:6].lower())


def validate_hsl_values(hue: str, saturation: str, lightness: str) -> ValidationResult:
    h, s, l = parse_number(hue), parse_number(saturation), parse_number(lightness)
    if h is None or s is None or l is None:
        return _fail("All values must be numbers")
    h = round_half_up(h % 360) % 360
    s = round_half_up(clamp_value(s, 0.0, 100.0))
    l = round_half_up(clamp_value(l, 0.0, 100.0))
    return ValidationResult(True, formatted_color=f"hsl({h}, {s}%, {l}%)")


def validate_oklch_values(lightness: str, chroma: str, hue: str) -> ValidationResult:
    """Clamp, gamut-map into sRGB, and format as ``oklch(L C H)``.

    Out-of-gamut input is mapped, not rejected.
    """
    l, c, h = parse_number(lightness), parse_number(chroma), parse_number(hue)
    if l is None or c is None or h is None:
        return _fail("All values must be numbers")
    color = Color(
        "oklch",
        [clamp_value(l, 0.0, 1.0), clamp_value(c, 0.0, MAX_CHROMA), h % 360],
    )
    try:
        mapped = oklch_from_coloraide(color.fit("srgb", **FIT_SRGB))
    except (ValueError, ZeroDivisionError):
        log.exception("Gamut mapping failed for oklch(%s %s %s)", l, c, h)
        return _fail("Invalid OKLCH values")
    return ValidationResult(True, formatted_color=format_oklch_string(mapped))


# ----------------------------- editing helpers -----------------------------


def parse_color_for_editing(color: str, color_format: str) -> dict[str, Any]:
    """Split a stored color into the fields an editor shows for ``color_format``.

    Returns ``{}`` when the color cannot be read.
    """
    try:
        if color_format == "hex":
            return {"hex": color.replace("#", "").upper()}
        if color_format == "hsl":
            h, s, l = parse(color).hsl()
            return {
                "hsl": {
                    "hue": round_half_up(h if is_finite(h) else 0.0),
                    "saturation": round_half_up(s * 100),
                    "lightness": round_half_up(l * 100),
                }
            }
        if color_format == "oklch":
            value: Oklch | None = parse_oklch_string(color)
            if value is None:
                value = convert_to_oklch(color)
            return {
                "oklch": {
                    "lightness": round(value.l, 3),
                    "chroma": round(value.c, 3),
                    "hue": round_half_up(value.h),
                }
            }
    except ParseError:
        log.warning("Cannot read %r for editing as %s", color, color_format)
    return {}


__all__ = [
    "ValidationResult",
    "parse_color_for_editing",
    "parse_number",
    "validate_hex_value",
    "validate_hsl_values",
    "validate_oklch_values",
]
