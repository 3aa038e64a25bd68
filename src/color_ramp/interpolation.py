from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Literal

from .colorspace import ParseError, Rgb, clamp_value, is_finite, parse, round_half_up, to_hex

log = logging.getLogger(__name__)

Channel = Literal["lightness", "chroma", "saturation"]

SCALE_TYPES = (
    "linear",
    "geometric",
    "fibonacci",
    "golden-ratio",
    "logarithmic",
    "powers-of-2",
    "musical-ratio",
    "cielab-uniform",
    "ease-in",
    "ease-out",
    "ease-in-out",
)

GEOMETRIC_RATIO = 3.0
PHI = 1.61803398875
MUSICAL_RATIOS = (1, 16 / 15, 9 / 8, 6 / 5, 5 / 4, 4 / 3, 45 / 32, 3 / 2, 8 / 5, 5 / 3, 15 / 8, 2)


@dataclass(frozen=True)
class ChannelSpec:
    """One ramp axis: a simple ``range`` or an advanced ``start``→``end`` pair."""

    range: float = 0.0
    start: float | None = None
    end: float | None = None
    advanced: bool = False
    scale: str = "linear"

    @property
    def is_advanced(self) -> bool:
        return self.advanced and self.start is not None and self.end is not None


# ----------------------------- scale curves --------------------------------


def _normalized(seq: list[float], i: int) -> float:
    lo, hi = seq[0], seq[-1]
    if hi == lo:
        return 0.0
    return clamp_value((seq[i] - lo) / (hi - lo), 0.0, 1.0)


def _fibonacci(n: int) -> list[float]:
    fibs = [0.0, 1.0]
    for _ in range(2, n):
        fibs.append(fibs[-1] + fibs[-2])
    return fibs


def _musical(n: int) -> list[float]:
    if n <= len(MUSICAL_RATIOS):
        return list(MUSICAL_RATIOS[:n])
    return [2 ** (j / (n - 1)) for j in range(n)]


def scale_position(i: int, n: int, scale: str = "linear") -> float:
    """Position of step ``i`` of ``n`` in [0, 1] along the named curve.

    Unknown names behave like ``linear``.  Fewer than two steps always sit
    at 0.
    """
    if n < 2:
        return 0.0
    t = i / (n - 1)
    if scale == "geometric":
        return _normalized([GEOMETRIC_RATIO**k for k in range(n)], i)
    if scale == "fibonacci":
        return _normalized(_fibonacci(n), i)
    if scale == "golden-ratio":
        return _normalized([PHI**k for k in range(n)], i)
    if scale == "logarithmic":
        return clamp_value(math.log(i + 1) / math.log(n), 0.0, 1.0)
    if scale == "powers-of-2":
        return _normalized([2.0**k for k in range(n)], i)
    if scale == "musical-ratio":
        return _normalized(_musical(n), i)
    if scale == "ease-in":
        return clamp_value(t * t, 0.0, 1.0)
    if scale == "ease-out":
        return clamp_value(1 - (1 - t) * (1 - t), 0.0, 1.0)
    if scale == "ease-in-out":
        v = 2 * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 2 / 2
        return clamp_value(v, 0.0, 1.0)
    # linear, cielab-uniform and anything unrecognised
    return clamp_value(t, 0.0, 1.0)


# ----------------------------- channel values ------------------------------


def _step(magnitude: float, n: int) -> float:
    return magnitude / (n - 1) if n > 1 else 0.0


def lightness_at(spec: ChannelSpec, i: int, n: int, base: float) -> float:
    """Lightness fraction for step ``i``; simple mode walks away from the base."""
    if spec.is_advanced:
        t = scale_position(i, n, spec.scale)
        start, end = spec.start / 100, spec.end / 100
        value = start + (end - start) * t
    else:
        value = base + (i - n // 2) * _step(spec.range / 100, n)
    return clamp_value(value, 0.0, 1.0)


def hue_at(spec: ChannelSpec, i: int, n: int, base: float) -> float:
    """Hue in degrees; the channel shifts the base hue rather than replacing it."""
    if spec.is_advanced:
        t = scale_position(i, n, spec.scale)
        value = math.fmod(base + spec.start + (spec.end - spec.start) * t, 360)
    else:
        value = math.fmod(base + (i - n // 2) * _step(spec.range, n), 360)
    while value < 0:
        value += 360
    return clamp_value(value, 0.0, 360.0)


def saturation_at(spec: ChannelSpec, i: int, n: int, base: float) -> float:
    """Saturation fraction; inverted so ramp ends read less saturated."""
    if spec.is_advanced:
        t = 1 - scale_position(i, n, spec.scale)
        start, end = spec.start / 100, spec.end / 100
        value = start + (end - start) * t
    else:
        value = base - abs(i - n // 2) * _step(spec.range / 100, n)
    return clamp_value(value, 0.0, 1.0)


_CHANNELS = {
    "lightness": lightness_at,
    "chroma": hue_at,
    "saturation": saturation_at,
}


def value_at(channel: Channel, spec: ChannelSpec, i: int, n: int, base: float) -> float:
    try:
        fn = _CHANNELS[channel]
    except KeyError:
        raise ValueError(f"unknown channel '{channel}'") from None
    return fn(spec, i, n, base)


# ----------------------------- isolated gradients --------------------------

GRADIENT_STOPS = 11


def _base_hsl(base_color: str) -> tuple[float, float, float]:
    h, s, l = parse(base_color).hsl()
    return (h if is_finite(h) else 0.0), s, l


def lightness_gradient(base_color: str) -> list[str]:
    """Base hue/saturation from black (l=0) to white (l=1)."""
    try:
        h, s, _ = _base_hsl(base_color)
    except ParseError:
        log.warning("Lightness gradient for %r fell back to grayscale", base_color)
        h, s = 0.0, 0.0
    return [to_hex(Rgb.from_hsl(h, s, k / 10)) for k in range(GRADIENT_STOPS)]


def hue_gradient(base_color: str) -> list[str]:
    """Full hue wheel at the base color's saturation and lightness."""
    try:
        _, s, l = _base_hsl(base_color)
        s, l = s or 0.5, l or 0.5
    except ParseError:
        log.warning("Hue gradient for %r fell back to the standard wheel", base_color)
        s, l = 1.0, 0.5
    return [to_hex(Rgb.from_hsl(k / 10 * 360, s, l)) for k in range(GRADIENT_STOPS)]


def saturation_gradient(base_color: str) -> list[str]:
    """Full saturation down to gray, left to right."""
    try:
        h, _, l = _base_hsl(base_color)
        l = l or 0.5
    except ParseError:
        log.warning("Saturation gradient for %r fell back to neutral", base_color)
        h, l = 0.0, 0.5
    return [to_hex(Rgb.from_hsl(h, (10 - k) / 10, l)) for k in range(GRADIENT_STOPS)]


# ----------------------------- slider mapping ------------------------------


def round_to_one_decimal(x: float) -> float:
    return round_half_up(x * 10) / 10


def advanced_defaults(base_color: str, channel: str, range: float) -> tuple[float, float]:
    """``(start, end)`` for a channel switching from simple ``range`` to advanced mode.

    Lightness and saturation straddle the base value (a zero base counts as
    50%); hue straddles zero shift.  An unreadable base gives (0, 0).
    """
    if channel in ("hue", "chroma"):
        return round_to_one_decimal(-range / 2), round_to_one_decimal(range / 2)
    if channel not in ("lightness", "saturation"):
        raise ValueError(f"unknown channel '{channel}'")
    try:
        _, s, l = parse(base_color).hsl()
    except ParseError:
        log.warning("Advanced defaults for %r fell back to zero", base_color)
        return 0.0, 0.0
    base = ((l if channel == "lightness" else s) or 0.5) * 100
    start = clamp_value(base - range / 2, 0.0, 100.0)
    end = clamp_value(base + range / 2, 0.0, 100.0)
    return round_to_one_decimal(start), round_to_one_decimal(end)


def _is_relative_hue(min_: float, max_: float, reference: float | None, is_hue: bool) -> bool:
    return is_hue and min_ == -180 and max_ == 180 and reference is not None


def value_to_position(
    value: float,
    min_: float,
    max_: float,
    *,
    reference: float | None = None,
    is_hue: bool = False,
    invert: bool = False,
) -> float:
    """Slider value → position in percent (0–100).

    Hue sliders spanning -180..180 are drawn relative to ``reference`` (an
    absolute hue), wrapping around the ends of the track.
    """
    if invert:
        return (max_ - value) / (max_ - min_) * 100
    if _is_relative_hue(min_, max_, reference, is_hue):
        position = reference / 360 * 100 + value / 360 * 100
        if position > 100:
            position -= 100
        if position < 0:
            position += 100
        return position
    return (value - min_) / (max_ - min_) * 100


def position_to_value(
    position: float,
    min_: float,
    max_: float,
    *,
    reference: float | None = None,
    is_hue: bool = False,
    invert: bool = False,
) -> float:
    if invert:
        value = max_ - position / 100 * (max_ - min_)
    elif _is_relative_hue(min_, max_, reference, is_hue):
        offset = position - reference / 360 * 100
        if offset > 50:
            offset -= 100
        if offset < -50:
            offset += 100
        value = offset / 100 * 360
    else:
        value = min_ + position / 100 * (max_ - min_)
    return round_to_one_decimal(max(min_, min(max_, value)))


__all__ = [
    "SCALE_TYPES",
    "ChannelSpec",
    "advanced_defaults",
    "hue_at",
    "hue_gradient",
    "lightness_at",
    "lightness_gradient",
    "position_to_value",
    "saturation_at",
    "saturation_gradient",
    "scale_position",
    "value_at",
    "value_to_position",
]
