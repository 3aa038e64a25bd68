"""WCAG 2.x contrast and CIEDE2000 difference between ramp colors."""

from __future__ import annotations

from dataclasses import dataclass

from .colorspace import parse, round_half_up, to_coloraide


@dataclass(frozen=True)
class WcagLevel:
    id: str
    name: str
    min_ratio: float


WCAG_LEVELS = (
    WcagLevel("aaa-normal", "AAA Normal text", 7.0),
    WcagLevel("aaa-large", "AAA Large text", 4.5),
    WcagLevel("aa-normal", "AA Normal text", 4.5),
    WcagLevel("aa-large", "AA Large text", 3.0),
)


def relative_luminance(r: float, g: float, b: float) -> float:
    """WCAG relative luminance of 0–255 sRGB channels."""

    def lin(c: float) -> float:
        s = c / 255
        return s / 12.92 if s <= 0.03928 else ((s + 0.055) / 1.055) ** 2.4

    return 0.2126 * lin(r) + 0.7152 * lin(g) + 0.0722 * lin(b)


def wcag_contrast_ratio(fg: str, bg: str) -> float:
    """Contrast ratio ≥ 1, independent of argument order.  Raises ``ParseError``."""
    l1 = relative_luminance(*parse(fg).rounded())
    l2 = relative_luminance(*parse(bg).rounded())
    return (max(l1, l2) + 0.05) / (min(l1, l2) + 0.05)


def get_wcag_passing_levels(ratio: float) -> list[WcagLevel]:
    return [level for level in WCAG_LEVELS if ratio >= level.min_ratio]


def color_delta_e(a: str, b: str) -> float:
    return to_coloraide(parse(a)).delta_e(to_coloraide(parse(b)), method="2000")


def round2(x: float) -> float:
    return round_half_up(x * 100) / 100


__all__ = [
    "WCAG_LEVELS",
    "WcagLevel",
    "color_delta_e",
    "get_wcag_passing_levels",
    "relative_luminance",
    "round2",
    "wcag_contrast_ratio",
]
