"""Ramp generation: config → ordered list of formatted colors.

Per step ``i``:

1. lightness / hue / saturation from the channel specs
2. HSL → RGB
3. tint composite (when configured)
4. locked swatch overrides everything above
5. format as hex / hsl / oklch

``generate`` always returns ``total_steps`` strings.  A base color that cannot
be read switches unlocked steps to a grayscale ramp; a step that cannot be
computed becomes neutral gray.  Both are logged, never raised.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from .blending import composite, resolve_blend_mode
from .colorspace import (
    ComputationFallback,
    ParseError,
    Rgb,
    format_color,
    is_finite,
    parse,
)
from .config import ColorRampConfig, ColorSwatch
from .interpolation import hue_at, lightness_at, saturation_at

log = logging.getLogger(__name__)

NEUTRAL_HSL = (0.0, 0.0, 0.5)


class Tint(NamedTuple):
    color: Rgb
    opacity: float  # 0–1
    mode: str


def _resolve_tint(config: ColorRampConfig) -> Tint | None:
    if not config.has_tint:
        return None
    try:
        color = parse(config.tint_color)
    except ParseError:
        log.warning("Ignoring unreadable tint color %r", config.tint_color)
        return None
    opacity = min(100.0, config.tint_opacity) / 100
    return Tint(color, opacity, resolve_blend_mode(config.tint_blend_mode))


def _locked_colors(config: ColorRampConfig) -> dict[int, str]:
    """Locked colors by ramp position; swatches beyond ``total_steps`` are ignored."""
    n = config.total_steps
    if config.swatches and len(config.swatches) != n:
        log.debug(
            "Ramp %r has %d swatches for %d steps; matching by position",
            config.id,
            len(config.swatches),
            n,
        )
    locked: dict[int, str] = {}
    for pos, swatch in enumerate(config.swatches[:n]):
        if not swatch.locked:
            continue
        if not swatch.color:
            log.warning("Swatch %d of ramp %r is locked without a color", pos, config.id)
            continue
        locked[pos] = swatch.color
    return locked


def compute_step(config: ColorRampConfig, i: int, base: Rgb, tint: Tint | None) -> Rgb:
    """Unformatted color for step ``i``; raises ``ComputationFallback``."""
    n = config.total_steps
    h, s, l = base.hsl()
    h = h if is_finite(h) else 0.0
    s = s if is_finite(s) else 0.0
    l = l if is_finite(l) else 0.0

    new_l = lightness_at(config.lightness, i, n, l)
    new_h = hue_at(config.chroma, i, n, h)
    new_s = saturation_at(config.saturation, i, n, s)
    if not all(is_finite(v) for v in (new_h, new_s, new_l)):
        raise ComputationFallback(f"step {i}: h={new_h} s={new_s} l={new_l}")

    color = Rgb.from_hsl(new_h, new_s, new_l)
    if tint is None:
        return color
    try:
        return composite(color, tint.color, tint.opacity, tint.mode)
    except ComputationFallback:
        log.warning("Tint failed at step %d of ramp %r; leaving it untinted", i, config.id)
        return color


def fallback_ramp(total_steps: int, color_format: str) -> list[str]:
    """Dark-to-light grayscale used when the base color is unusable."""
    out: list[str] = []
    for i in range(total_steps):
        t = i / (total_steps - 1) if total_steps > 1 else 0.0
        out.append(format_color(Rgb.from_hsl(0.0, 0.0, t * 0.8 + 0.1), color_format))
    return out


def generate(config: ColorRampConfig) -> list[str]:
    n = config.total_steps
    locked = _locked_colors(config)
    try:
        base = parse(config.base_color)
    except ParseError:
        log.warning("Base color %r unreadable; using grayscale ramp", config.base_color)
        fallback = fallback_ramp(n, config.color_format)
        return [locked.get(i, fallback[i]) for i in range(n)]

    tint = _resolve_tint(config)
    colors: list[str] = []
    for i in range(n):
        if i in locked:
            colors.append(locked[i])
            continue
        try:
            color = compute_step(config, i, base, tint)
        except ComputationFallback as exc:
            log.warning("Using neutral gray for ramp %r: %s", config.id, exc)
            color = Rgb.from_hsl(*NEUTRAL_HSL)
        colors.append(format_color(color, config.color_format))
    return colors


def generate_swatches(config: ColorRampConfig) -> tuple[ColorSwatch, ...]:
    """``generate`` as swatch records, carrying lock state and format across."""
    colors = generate(config)
    previous = config.swatches
    out = []
    for i, color in enumerate(colors):
        old = previous[i] if i < len(previous) else None
        if old is not None and old.locked and old.color:
            out.append(ColorSwatch(i, old.color, old.color_format, True))
        else:
            out.append(ColorSwatch(i, color, config.color_format, False))
    return tuple(out)


__all__ = ["compute_step", "fallback_ramp", "generate", "generate_swatches"]
