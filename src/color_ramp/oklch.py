from __future__ import annotations

import logging
from dataclasses import replace
from typing import Literal

from coloraide import Color

from .colorspace import (
    FIT_SRGB,
    Oklch,
    ParseError,
    format_oklch_string,
    oklch_from_coloraide,
    parse,
    round_half_up,
    to_coloraide,
    to_hex,
    from_coloraide,
)

log = logging.getLogger(__name__)

InterpolationMode = Literal["oklch", "lab", "rgb"]

MAX_CHROMA = 0.5  # practical upper bound for sRGB-displayable OKLCH
ACHROMATIC_C = 0.002
_MIDDLE_GRAY = Oklch(0.5, 0.0, 0.0, 1.0)

# ColorAide space names for the non-OKLCH interpolation modes
_MIX_SPACES = {"lab": "lab", "rgb": "srgb"}


def _ca(value: Oklch) -> Color:
    alpha = 1.0 if value.alpha is None else value.alpha
    return Color("oklch", [value.l, value.c, value.h], alpha)


def round_oklch_precise(value: Oklch) -> Oklch:
    """Intermediate precision: L and C to 3 decimals, H to whole degrees."""
    return Oklch(
        round_half_up(value.l * 1000) / 1000,
        round_half_up(value.c * 1000) / 1000,
        round_half_up(value.h),
        None if value.alpha is None else round_half_up(value.alpha * 1000) / 1000,
    )


def convert_to_oklch(text: str) -> Oklch:
    """Any supported color text → OKLCH; middle gray if it cannot be read."""
    try:
        return oklch_from_coloraide(to_coloraide(parse(text)))
    except ParseError:
        log.warning("Cannot convert %r to OKLCH, using middle gray", text)
        return _MIDDLE_GRAY


def convert_from_oklch(value: Oklch) -> str:
    """OKLCH → ``#rrggbb``, gamut-mapped into sRGB."""
    return to_hex(from_coloraide(_ca(value)))


def parse_oklch_string(text: str) -> Oklch | None:
    """Read an ``oklch(l c h [/ a])`` literal; anything else gives ``None``."""
    s = (text or "").strip()
    if not s.lower().startswith("oklch("):
        return None
    try:
        color = Color(s)
    except ValueError:
        log.debug("Unreadable OKLCH literal %r", text)
        return None
    return oklch_from_coloraide(color)


def is_valid_oklch(value: Oklch) -> bool:
    return (
        0.0 <= value.l <= 1.0
        and 0.0 <= value.c <= 1.0
        and 0.0 <= value.h <= 360.0
        and (value.alpha is None or 0.0 <= value.alpha <= 1.0)
    )


def is_in_srgb_gamut(value: Oklch) -> bool:
    return _ca(value).in_gamut("srgb")


def clamp_oklch_to_srgb(value: Oklch) -> Oklch:
    """Gamut-map into sRGB while staying in OKLCH."""
    return oklch_from_coloraide(_ca(value).fit("srgb", **FIT_SRGB))


def get_max_chroma_for_lh(l: float, h: float, *, iters: int = 20) -> float:
    """Largest in-gamut chroma at lightness ``l`` and hue ``h`` (bisection)."""
    lo, hi = 0.0, MAX_CHROMA
    for _ in range(iters):
        if not is_in_srgb_gamut(Oklch(l, hi, h)):
            break
        lo = hi
        hi *= 2
    for _ in range(iters):
        if hi - lo <= 0.001:
            break
        mid = 0.5 * (lo + hi)
        if is_in_srgb_gamut(Oklch(l, mid, h)):
            lo = mid
        else:
            hi = mid
    return max(0.0, lo)


def clamp_chroma_smooth(value: Oklch) -> Oklch:
    cmax = get_max_chroma_for_lh(value.l, value.h)
    return replace(value, c=cmax) if value.c > cmax else value


def is_chroma_at_max(l: float, c: float, h: float) -> bool:
    return c >= get_max_chroma_for_lh(l, h) * 0.95


def constrain_oklch_values(value: Oklch, preserve_lc: bool = False) -> Oklch:
    """Clamp L and alpha, wrap H, then pull chroma back inside sRGB.

    With ``preserve_lc`` the components are first stabilised at 3 decimals so
    repeated hue edits do not drift lightness/chroma.
    """
    l = min(1.0, max(0.0, value.l))
    h = value.h % 360.0
    alpha = None if value.alpha is None else min(1.0, max(0.0, value.alpha))
    if preserve_lc:
        stable = round_oklch_precise(Oklch(l, value.c, h, alpha))
        return replace(stable, c=min(stable.c, get_max_chroma_for_lh(stable.l, stable.h)))
    return clamp_chroma_smooth(Oklch(l, value.c, h, alpha))


# ----------------------------- mixing --------------------------------------


def _short_arc_lerp(h1: float, h2: float, t: float) -> float:
    d = ((h2 - h1 + 180.0) % 360.0) - 180.0
    return (h1 + t * d) % 360.0


def mix_colors(color1: str, color2: str, t: float) -> str:
    """Mix two colors in OKLCH at ratio ``t`` (0 → color1, 1 → color2).

    Hue travels the shorter arc; an achromatic end takes the other end's hue
    so blends with gray/white/black do not swing through unrelated hues.
    """
    a = convert_to_oklch(color1)
    b = convert_to_oklch(color2)
    if a.c < ACHROMATIC_C and b.c < ACHROMATIC_C:
        h = 0.0
    elif a.c < ACHROMATIC_C:
        h = b.h
    elif b.c < ACHROMATIC_C:
        h = a.h
    else:
        h = _short_arc_lerp(a.h, b.h, t)
    mixed = Oklch(a.l + t * (b.l - a.l), a.c + t * (b.c - a.c), h)
    return convert_from_oklch(constrain_oklch_values(mixed))


def mix_with_mode(
    color1: str, color2: str, t: float, mode: InterpolationMode = "oklch"
) -> str:
    if mode == "oklch":
        return mix_colors(color1, color2, t)
    a = to_coloraide(parse(color1))
    b = to_coloraide(parse(color2))
    mixed = a.mix(b, t, space=_MIX_SPACES[mode], out_space="srgb")
    return to_hex(from_coloraide(mixed))


def generate_linear_space(
    start: str, end: str, steps: int, mode: InterpolationMode = "oklch"
) -> list[str]:
    """``steps`` colors from ``start`` to ``end`` inclusive."""
    if steps < 1:
        raise ValueError("steps must be ≥ 1")
    if mode not in ("oklch", *_MIX_SPACES):
        raise ValueError(f"unknown interpolation mode '{mode}'")
    if steps == 1:
        return [mix_with_mode(start, end, 0.5, mode)]
    return [mix_with_mode(start, end, i / (steps - 1), mode) for i in range(steps)]


def to_oklch_string(text: str) -> str:
    return format_oklch_string(convert_to_oklch(text))


__all__ = [
    "clamp_chroma_smooth",
    "clamp_oklch_to_srgb",
    "constrain_oklch_values",
    "convert_from_oklch",
    "convert_to_oklch",
    "generate_linear_space",
    "get_max_chroma_for_lh",
    "is_chroma_at_max",
    "is_in_srgb_gamut",
    "is_valid_oklch",
    "mix_colors",
    "mix_with_mode",
    "parse_oklch_string",
    "round_oklch_precise",
    "to_oklch_string",
]
