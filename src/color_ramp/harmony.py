from __future__ import annotations

from typing import Callable, Literal

from .colorspace import Rgb, is_finite, parse, to_hex

HarmonyType = Literal[
    "analogous", "triad", "complementary", "split-complementary", "square", "compound"
]

ANALOGOUS_STEP = 30.0


def _rotate(base_color: str, offsets: tuple[float, ...]) -> list[str]:
    """``base_color`` followed by copies rotated by each hue offset."""
    h, s, l = parse(base_color).hsl()
    h = h if is_finite(h) else 0.0
    return [base_color] + [to_hex(Rgb.from_hsl((h + d) % 360, s, l)) for d in offsets]


def get_analogous_colors(base_color: str, count: int = 2) -> list[str]:
    return _rotate(base_color, tuple(ANALOGOUS_STEP * i for i in range(1, count)))


def get_triad_colors(base_color: str) -> list[str]:
    return _rotate(base_color, (120.0, 240.0))


def get_complementary_colors(base_color: str) -> list[str]:
    return _rotate(base_color, (180.0,))


def get_split_complementary_colors(base_color: str) -> list[str]:
    return _rotate(base_color, (150.0, 210.0))


def get_square_colors(base_color: str) -> list[str]:
    return _rotate(base_color, (90.0, 180.0, 270.0))


def get_compound_colors(base_color: str) -> list[str]:
    return _rotate(base_color, (180.0, 150.0, 210.0))


# harmony → (colors including the base, name prefix for generated ramps)
HARMONIES: dict[str, tuple[Callable[[str], list[str]], str]] = {
    "analogous": (get_analogous_colors, "Analogue"),
    "triad": (get_triad_colors, "Triad"),
    "complementary": (get_complementary_colors, "Complementary"),
    "split-complementary": (get_split_complementary_colors, "Split Comp."),
    "square": (get_square_colors, "Square"),
    "compound": (get_compound_colors, "Compound"),
}


def harmony_colors(base_color: str, harmony: HarmonyType) -> list[str]:
    """Companion colors for ``harmony``, without the base itself."""
    try:
        fn, _ = HARMONIES[harmony]
    except KeyError:
        raise ValueError(f"unknown harmony '{harmony}'") from None
    return fn(base_color)[1:]


__all__ = [
    "HARMONIES",
    "get_analogous_colors",
    "get_complementary_colors",
    "get_compound_colors",
    "get_split_complementary_colors",
    "get_square_colors",
    "get_triad_colors",
    "harmony_colors",
]
