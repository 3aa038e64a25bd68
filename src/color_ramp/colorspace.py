"""Conversions between hex, HSL and OKLCH text and the internal ``Rgb`` value.

The HSL <-> RGB arithmetic below deliberately keeps the operation order of the
classic CSS/chroma style routine (``t1``/``t2``/``t3`` form).  Ramp output is
compared byte-for-byte against captured fixtures, and some of them depend on
last-ulp effects: ``hsl(217, 47%, 100%)`` must come back as
``hsl(60, 100%, 100%)``, not as an achromatic ``hsl(0, 0%, 100%)``.

Everything that is not plain hex/HSL (``oklch()``, ``rgb()``, named colors)
goes through ColorAide.
"""

from __future__ import annotations

import logging
import math
import re
import string
from dataclasses import dataclass

from coloraide import Color

log = logging.getLogger(__name__)

COLOR_FORMATS = ("hex", "hsl", "oklch")

# consistent gamut-fit for anything leaving a wide-gamut space
FIT_SRGB = {"method": "raytrace", "pspace": "oklch"}


class ParseError(ValueError):
    """Text could not be read as a color."""


class ComputationFallback(ArithmeticError):
    """A conversion or blend produced no finite color."""


# ----------------------------- numeric helpers -----------------------------


def is_finite(value: float) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value)


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp into [lo, hi]; NaN and infinities collapse to ``lo``."""
    if not is_finite(value):
        return lo
    return max(lo, min(hi, float(value)))


def round_half_up(x: float) -> int:
    # Math.round semantics; Python's round() is banker's rounding
    return int(math.floor(x + 0.5))


def format_number(x: float) -> str:
    """Shortest text for a float, without a trailing ``.0`` on integers."""
    x = float(x)
    if x.is_integer():
        return str(int(x))
    return repr(x)


# ----------------------------- HSL <-> RGB ---------------------------------


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[float, float, float]:
    """HSL (h degrees, s/l fractions) → unrounded RGB on the 0–255 scale."""
    if s == 0:
        v = l * 255
        return v, v, v
    t2 = l * (1 + s) if l < 0.5 else l + s - l * s
    t1 = 2 * l - t2
    h_ = h / 360
    t3 = [h_ + 1 / 3, h_, h_ - 1 / 3]
    c = [0.0, 0.0, 0.0]
    for i in range(3):
        if t3[i] < 0:
            t3[i] += 1
        if t3[i] > 1:
            t3[i] -= 1
        if 6 * t3[i] < 1:
            c[i] = t1 + (t2 - t1) * 6 * t3[i]
        elif 2 * t3[i] < 1:
            c[i] = t2
        elif 3 * t3[i] < 2:
            c[i] = t1 + (t2 - t1) * ((2 / 3) - t3[i]) * 6
        else:
            c[i] = t1
    return c[0] * 255, c[1] * 255, c[2] * 255


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """RGB on the 0–255 scale → (h, s, l); ``h`` is NaN for achromatic input."""
    r = r / 255
    g = g / 255
    b = b / 255
    lo = min(r, g, b)
    hi = max(r, g, b)
    l = (hi + lo) / 2
    if hi == lo:
        return math.nan, 0.0, l
    s = (hi - lo) / (hi + lo) if l < 0.5 else (hi - lo) / (2 - hi - lo)
    if r == hi:
        h = (g - b) / (hi - lo)
    elif g == hi:
        h = 2 + (b - r) / (hi - lo)
    else:
        h = 4 + (r - g) / (hi - lo)
    h *= 60
    if h < 0:
        h += 360
    return h, s, l


# ----------------------------- internal color ------------------------------


@dataclass(frozen=True)
class Rgb:
    """Unrounded sRGB on the 0–255 scale plus alpha; always clipped, never NaN."""

    r: float
    g: float
    b: float
    alpha: float = 1.0

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            object.__setattr__(self, name, clamp_value(getattr(self, name), 0.0, 255.0))
        object.__setattr__(self, "alpha", clamp_value(self.alpha, 0.0, 1.0))

    @classmethod
    def from_hsl(cls, h: float, s: float, l: float, alpha: float = 1.0) -> "Rgb":
        return cls(*hsl_to_rgb(h, s, l), alpha=alpha)

    def channels(self) -> tuple[float, float, float]:
        return self.r, self.g, self.b

    def rounded(self) -> tuple[int, int, int]:
        return (
            round_half_up(self.r),
            round_half_up(self.g),
            round_half_up(self.b),
        )

    def hsl(self) -> tuple[float, float, float]:
        return rgb_to_hsl(self.r, self.g, self.b)


def to_coloraide(rgb: Rgb) -> Color:
    return Color("srgb", [rgb.r / 255, rgb.g / 255, rgb.b / 255], rgb.alpha)


def from_coloraide(color: Color) -> Rgb:
    """Gamut-map a ColorAide color into sRGB and return it as ``Rgb``."""
    srgb = color.convert("srgb")
    if not srgb.in_gamut():
        srgb = srgb.fit(**FIT_SRGB)
    r, g, b = (0.0 if math.isnan(v) else v * 255 for v in srgb.coords())
    alpha = srgb["alpha"]
    return Rgb(r, g, b, 1.0 if math.isnan(alpha) else alpha)


# ----------------------------- parsing -------------------------------------

_NUM = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_HSL_RE = re.compile(
    rf"^hsla?\(\s*({_NUM})(?:deg)?\s*[,\s]\s*({_NUM})%\s*[,\s]\s*({_NUM})%"
    rf"\s*(?:[,/]\s*({_NUM})(%?)\s*)?\)$",
    re.IGNORECASE,
)


def parse_hex(text: str) -> Rgb:
    """``#rgb``, ``#rrggbb`` or ``#rrggbbaa`` (``#`` optional)."""
    raw = (text or "").strip().lstrip("#")
    if len(raw) == 3 and all(c in string.hexdigits for c in raw):
        raw = "".join(ch * 2 for ch in raw)
    if len(raw) not in (6, 8) or not all(c in string.hexdigits for c in raw):
        raise ParseError(f"invalid hex: {text!r}")
    r, g, b = (int(raw[i : i + 2], 16) for i in (0, 2, 4))
    alpha = 1.0
    if len(raw) == 8:
        alpha = round_half_up(int(raw[6:8], 16) / 255 * 100) / 100
    return Rgb(r, g, b, alpha)


def parse_hsl(text: str) -> Rgb:
    m = _HSL_RE.match((text or "").strip())
    if not m:
        raise ParseError(f"invalid hsl: {text!r}")
    h, s, l = float(m.group(1)), float(m.group(2)), float(m.group(3))
    alpha = 1.0
    if m.group(4) is not None:
        alpha = float(m.group(4)) * (0.01 if m.group(5) else 1)
    return Rgb.from_hsl(h, s * 0.01, l * 0.01, alpha)


def parse(text: str) -> Rgb:
    """Read any supported color literal, raising ``ParseError`` on failure."""
    if not isinstance(text, str) or not text.strip():
        raise ParseError("empty color")
    s = text.strip()
    if s.startswith("#") or all(c in string.hexdigits for c in s):
        return parse_hex(s)
    if s.lower().startswith("hsl"):
        return parse_hsl(s)
    try:
        color = Color(s)
    except ValueError as exc:
        raise ParseError(f"invalid color: {text!r}") from exc
    return from_coloraide(color)


# ----------------------------- formatting ----------------------------------


def to_hex(rgb: Rgb) -> str:
    r, g, b = rgb.rounded()
    return f"#{r:02x}{g:02x}{b:02x}"


def to_hsl(rgb: Rgb) -> str:
    h, s, l = rgb.hsl()
    h = clamp_value(h, 0.0, 360.0)
    s = clamp_value(s, 0.0, 1.0)
    l = clamp_value(l, 0.0, 1.0)
    return f"hsl({round_half_up(h)}, {round_half_up(s * 100)}%, {round_half_up(l * 100)}%)"


@dataclass(frozen=True)
class Oklch:
    l: float  # 0–1
    c: float  # 0–0.4+
    h: float  # degrees
    alpha: float | None = None


def oklch_from_coloraide(color: Color) -> Oklch:
    """Any ColorAide color → ``Oklch`` with powerless/NaN channels read as 0."""
    lch = color.convert("oklch")
    l, c, h = (0.0 if math.isnan(v) else float(v) for v in lch.coords())
    alpha = lch["alpha"]
    return Oklch(l, c, h, None if math.isnan(alpha) else float(alpha))


def round_oklch(value: Oklch) -> Oklch:
    """Display precision: L and C to 2 decimals, H to whole degrees."""
    return Oklch(
        round_half_up(value.l * 100) / 100,
        round_half_up(value.c * 100) / 100,
        round_half_up(value.h),
        None if value.alpha is None else round_half_up(value.alpha * 100) / 100,
    )


def format_oklch_string(value: Oklch) -> str:
    r = round_oklch(value)
    body = f"{format_number(r.l)} {format_number(r.c)} {format_number(r.h)}"
    if r.alpha is not None and r.alpha < 1:
        return f"oklch({body} / {format_number(r.alpha)})"
    return f"oklch({body})"


def to_oklch(rgb: Rgb) -> str:
    return format_oklch_string(oklch_from_coloraide(to_coloraide(rgb)))


def format_color(rgb: Rgb, color_format: str) -> str:
    if color_format == "hsl":
        return to_hsl(rgb)
    if color_format == "oklch":
        return to_oklch(rgb)
    if color_format != "hex":
        log.warning("Unknown color format %r, using hex", color_format)
    return to_hex(rgb)


__all__ = [
    "COLOR_FORMATS",
    "ComputationFallback",
    "Oklch",
    "ParseError",
    "Rgb",
    "clamp_value",
    "format_color",
    "format_oklch_string",
    "hsl_to_rgb",
    "parse",
    "rgb_to_hsl",
    "to_hex",
    "to_hsl",
    "to_oklch",
]
