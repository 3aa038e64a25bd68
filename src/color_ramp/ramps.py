"""Pure operations over a collection of ramps.

A collection is a tuple of ``ColorRampConfig``.  Every function returns a new
tuple and leaves its input untouched; the caller holds the current value.
Unknown ids leave the collection unchanged.
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Any, Callable, Iterable, Sequence

from .config import DEFAULT_NEW_RAMP_VALUES, ColorRampConfig, ColorSwatch
from .engine import generate_swatches
from .harmony import HARMONIES, HarmonyType, harmony_colors

Collection = tuple[ColorRampConfig, ...]


def new_ramp_id() -> str:
    return uuid.uuid4().hex


def blank_swatches(total_steps: int, color: str, color_format: str = "hex") -> tuple[ColorSwatch, ...]:
    return tuple(ColorSwatch(i, color, color_format, False) for i in range(total_steps))


def _resized(ramp: ColorRampConfig, total_steps: int) -> tuple[ColorSwatch, ...]:
    kept = ramp.swatches[:total_steps]
    pad = (
        ColorSwatch(i, ramp.base_color, ramp.color_format, False)
        for i in range(len(kept), total_steps)
    )
    return kept + tuple(pad)


def _map(
    collection: Iterable[ColorRampConfig], id: str, fn: Callable[[ColorRampConfig], ColorRampConfig]
) -> Collection:
    return tuple(fn(ramp) if ramp.id == id else ramp for ramp in collection)


def create_color_ramp(
    *, id: str | None = None, name: str = "Primary", **fields: Any
) -> ColorRampConfig:
    """New ramp with default channels and one unlocked swatch per step."""
    ramp = ColorRampConfig(
        id=id or new_ramp_id(),
        name=name,
        base_color=fields.pop("base_color", DEFAULT_NEW_RAMP_VALUES["baseColor"]),
        total_steps=fields.pop("total_steps", DEFAULT_NEW_RAMP_VALUES["totalSteps"]),
        **fields,
    )
    return ramp.with_swatches(
        blank_swatches(ramp.total_steps, ramp.base_color, ramp.color_format)
    )


def get_color_ramp(collection: Iterable[ColorRampConfig], id: str) -> ColorRampConfig | None:
    return next((ramp for ramp in collection if ramp.id == id), None)


def add_color_ramp(collection: Sequence[ColorRampConfig], ramp: ColorRampConfig | None = None) -> Collection:
    if ramp is None:
        ramp = create_color_ramp(name=f"Ramp {len(collection) + 1}")
    return tuple(collection) + (ramp,)


def remove_color_ramp(collection: Iterable[ColorRampConfig], id: str) -> Collection:
    return tuple(ramp for ramp in collection if ramp.id != id)


def duplicate_color_ramp(
    collection: Sequence[ColorRampConfig], id: str, new_id: str | None = None
) -> Collection:
    source = get_color_ramp(collection, id)
    if source is None:
        return tuple(collection)
    copy = replace(source, id=new_id or new_ramp_id(), name=f"{source.name} Copy")
    return tuple(collection) + (copy,)


def update_color_ramp(collection: Iterable[ColorRampConfig], id: str, **patch: Any) -> Collection:
    """Apply a field patch to ramp ``id``; swatches follow a ``total_steps`` change."""

    def apply(ramp: ColorRampConfig) -> ColorRampConfig:
        updated = replace(ramp, **patch)
        if "total_steps" in patch and "swatches" not in patch:
            updated = updated.with_swatches(_resized(updated, updated.total_steps))
        return updated

    return _map(collection, id, apply)


def set_total_steps(collection: Iterable[ColorRampConfig], id: str, total_steps: int) -> Collection:
    return update_color_ramp(collection, id, total_steps=total_steps)


def set_color_format(collection: Iterable[ColorRampConfig], id: str, color_format: str) -> Collection:
    return update_color_ramp(collection, id, color_format=color_format)


def lock_ramp_color(
    collection: Iterable[ColorRampConfig], id: str, index: int, color: str
) -> Collection:
    """Toggle the lock on swatch ``index``, pinning ``color`` to it."""

    def apply(ramp: ColorRampConfig) -> ColorRampConfig:
        swatches = _resized(ramp, ramp.total_steps)
        if not 0 <= index < len(swatches):
            raise IndexError(f"swatch {index} out of range for {ramp.total_steps} steps")
        old = swatches[index]
        new = ColorSwatch(index, color, ramp.color_format, not old.locked)
        return ramp.with_swatches(swatches[:index] + (new,) + swatches[index + 1 :])

    return _map(collection, id, apply)


def lock_all_ramp_colors(
    collection: Iterable[ColorRampConfig], id: str, colors: Sequence[str], lock: bool
) -> Collection:
    def apply(ramp: ColorRampConfig) -> ColorRampConfig:
        return ramp.with_swatches(
            tuple(
                ColorSwatch(i, colors[i], ramp.color_format, lock)
                for i in range(min(ramp.total_steps, len(colors)))
            )
        )

    return _map(collection, id, apply)


def materialize_swatches(collection: Iterable[ColorRampConfig], id: str) -> Collection:
    """Store freshly generated colors in the unlocked swatches of ramp ``id``."""
    return _map(collection, id, lambda ramp: ramp.with_swatches(generate_swatches(ramp)))


def create_harmony_ramps(
    collection: Sequence[ColorRampConfig],
    base_id: str,
    harmony: HarmonyType,
    id_factory: Callable[[], str] = new_ramp_id,
) -> Collection:
    """Insert one ramp per harmony color right after ramp ``base_id``."""
    ramps = tuple(collection)
    base = get_color_ramp(ramps, base_id)
    if base is None:
        return ramps
    _, prefix = HARMONIES[harmony]
    new = tuple(
        replace(
            base,
            id=id_factory(),
            name=f"{prefix} {i + 1}",
            base_color=color,
            swatches=blank_swatches(base.total_steps, color, base.color_format),
        )
        for i, color in enumerate(harmony_colors(base.base_color, harmony))
    )
    at = next(i for i, ramp in enumerate(ramps) if ramp.id == base_id) + 1
    return ramps[:at] + new + ramps[at:]


__all__ = [
    "Collection",
    "add_color_ramp",
    "blank_swatches",
    "create_color_ramp",
    "create_harmony_ramps",
    "duplicate_color_ramp",
    "get_color_ramp",
    "lock_all_ramp_colors",
    "lock_ramp_color",
    "materialize_swatches",
    "new_ramp_id",
    "remove_color_ramp",
    "set_color_format",
    "set_total_steps",
    "update_color_ramp",
]
