# blending.py – CSS mix-blend-mode compositing of a tint over a ramp color
#   - separable modes act per channel on normalised [0, 1] sRGB
#   - non-separable modes use Lum / Sat / ClipColor on the whole triple
#   - opacity lerps from the unblended base to the blended result

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from .colorspace import ComputationFallback, Rgb

log = logging.getLogger(__name__)

BLEND_MODES = (
    "normal",
    "darken",
    "multiply",
    "plus-darker",
    "color-burn",
    "lighten",
    "screen",
    "plus-lighter",
    "color-dodge",
    "overlay",
    "soft-light",
    "hard-light",
    "difference",
    "exclusion",
    "hue",
    "saturation",
    "color",
    "luminosity",
)

Blender = Callable[[np.ndarray, np.ndarray], np.ndarray]


# --- separable ---------------------------------------------------------------
def _color_burn(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    # a black tint channel burns to 0, whatever the backdrop
    return np.where(cs == 0.0, 0.0, 1.0 - (1.0 - cb) / cs)


def _color_dodge(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    return np.where(cs == 1.0, 1.0, cb / (1.0 - cs))


def _hard_light(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    return np.where(cs < 0.5, 2.0 * cb * cs, 1.0 - 2.0 * (1.0 - cb) * (1.0 - cs))


def _soft_light(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    d = np.where(cb <= 0.25, ((16.0 * cb - 12.0) * cb + 4.0) * cb, np.sqrt(cb))
    return np.where(
        cs <= 0.5,
        cb - (1.0 - 2.0 * cs) * cb * (1.0 - cb),
        cb + (2.0 * cs - 1.0) * (d - cb),
    )


# --- non-separable -----------------------------------------------------------
def _lum(c: np.ndarray) -> float:
    return float(0.3 * c[0] + 0.59 * c[1] + 0.11 * c[2])


def _clip_color(c: np.ndarray) -> np.ndarray:
    l = _lum(c)
    n = float(c.min())
    x = float(c.max())
    if n < 0.0 and l != n:
        c = l + (c - l) * l / (l - n)
    if x > 1.0 and x != l:
        c = l + (c - l) * (1.0 - l) / (x - l)
    return c


def _set_lum(c: np.ndarray, l: float) -> np.ndarray:
    return _clip_color(c + (l - _lum(c)))


def _sat(c: np.ndarray) -> float:
    return float(c.max() - c.min())


def _set_sat(c: np.ndarray, s: float) -> np.ndarray:
    lo, hi = float(c.min()), float(c.max())
    if hi > lo:
        return (c - lo) * s / (hi - lo)
    return np.zeros_like(c)


_BLENDERS: dict[str, Blender] = {
    "darken": np.minimum,
    "multiply": lambda cb, cs: cb * cs,
    "plus-darker": lambda cb, cs: cb + cs - 1.0,
    "color-burn": _color_burn,
    "lighten": np.maximum,
    "screen": lambda cb, cs: 1.0 - (1.0 - cb) * (1.0 - cs),
    "plus-lighter": lambda cb, cs: cb + cs,
    "color-dodge": _color_dodge,
    "overlay": lambda cb, cs: _hard_light(cs, cb),
    "soft-light": _soft_light,
    "hard-light": _hard_light,
    "difference": lambda cb, cs: np.abs(cb - cs),
    "exclusion": lambda cb, cs: cb + cs - 2.0 * cb * cs,
    "hue": lambda cb, cs: _set_lum(_set_sat(cs, _sat(cb)), _lum(cb)),
    "saturation": lambda cb, cs: _set_lum(_set_sat(cb, _sat(cs)), _lum(cb)),
    "color": lambda cb, cs: _set_lum(cs, _lum(cb)),
    "luminosity": lambda cb, cs: _set_lum(cb, _lum(cs)),
}


def resolve_blend_mode(mode: str | None) -> str:
    """Known mode name, or ``normal`` for anything else."""
    if mode in BLEND_MODES:
        return mode
    if mode is not None:
        log.warning("Unknown blend mode %r, using normal", mode)
    return "normal"


def blend(base: Rgb, tint: Rgb, mode: str | None) -> np.ndarray:
    """Fully blended result (opacity 1) as a 0–255 float array."""
    mode = resolve_blend_mode(mode)
    if mode == "normal":
        return np.asarray(tint.channels(), dtype=np.float64)
    cb = np.asarray(base.rounded(), dtype=np.float64) / 255.0
    cs = np.asarray(tint.rounded(), dtype=np.float64) / 255.0
    with np.errstate(divide="ignore", invalid="ignore"):
        out = _BLENDERS[mode](cb, cs)
    return np.clip(out, 0.0, 1.0) * 255.0


def composite(base: Rgb, tint: Rgb, opacity: float, mode: str | None) -> Rgb:
    """Blend ``tint`` over ``base`` and lerp by ``opacity`` (0–1).

    Raises ``ComputationFallback`` if the blend produced non-finite channels.
    """
    b = np.asarray(base.channels(), dtype=np.float64)
    blended = blend(base, tint, mode)
    out = b + opacity * (blended - b)
    if not np.all(np.isfinite(out)):
        raise ComputationFallback(f"{mode} blend produced {out.tolist()}")
    r, g, bl = out.tolist()
    return Rgb(r, g, bl, base.alpha)


__all__ = ["BLEND_MODES", "blend", "composite", "resolve_blend_mode"]
