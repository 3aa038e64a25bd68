from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from .colorspace import COLOR_FORMATS
from .interpolation import ChannelSpec

DEFAULT_COLOR_RAMP_VALUES: Mapping[str, Any] = {
    "baseColor": "#3b82f6",
    "totalSteps": 10,
    "lightnessRange": 100,
    "lightnessAdvanced": False,
    "chromaRange": 0,
    "chromaAdvanced": False,
    "saturationRange": 100,
    "saturationAdvanced": False,
}

DEFAULT_NEW_RAMP_VALUES: Mapping[str, Any] = {
    **DEFAULT_COLOR_RAMP_VALUES,
    "baseColor": "#6366f1",
}

# wire prefix per channel, and the key its scale curve is stored under
_CHANNEL_KEYS = {
    "lightness": ("lightness", "lightnessScaleType"),
    "chroma": ("chroma", "hueScaleType"),
    "saturation": ("saturation", "saturationScaleType"),
}


@dataclass(frozen=True)
class ColorSwatch:
    index: int
    color: str = ""
    color_format: str = "hex"
    locked: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], index: int) -> "ColorSwatch":
        return cls(
            index=int(data.get("index", index)),
            color=str(data.get("color") or ""),
            color_format=str(data.get("colorFormat") or "hex"),
            locked=bool(data.get("locked", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "color": self.color,
            "colorFormat": self.color_format,
            "locked": self.locked,
        }


def _opt_float(value: Any) -> float | None:
    return None if value is None else float(value)


@dataclass(frozen=True)
class ColorRampConfig:
    """Everything needed to generate one ramp.  Immutable; patch with ``replace``."""

    id: str
    name: str = "Primary"
    base_color: str = DEFAULT_COLOR_RAMP_VALUES["baseColor"]
    total_steps: int = DEFAULT_COLOR_RAMP_VALUES["totalSteps"]
    lightness: ChannelSpec = field(default_factory=lambda: ChannelSpec(range=100.0))
    chroma: ChannelSpec = field(default_factory=lambda: ChannelSpec(range=0.0))
    saturation: ChannelSpec = field(default_factory=lambda: ChannelSpec(range=100.0))
    tint_color: str | None = None
    tint_opacity: float | None = None
    tint_blend_mode: str | None = None
    color_format: str = "hex"
    swatches: tuple[ColorSwatch, ...] = ()

    def __post_init__(self) -> None:
        if int(self.total_steps) < 1:
            raise ValueError("total_steps must be ≥ 1")
        if self.color_format not in COLOR_FORMATS:
            raise ValueError(f"unknown color format '{self.color_format}'")
        object.__setattr__(self, "total_steps", int(self.total_steps))
        object.__setattr__(self, "swatches", tuple(self.swatches))

    @property
    def has_tint(self) -> bool:
        """Tint applies only with a color, a blend mode and a positive opacity."""
        return bool(
            self.tint_color
            and self.tint_blend_mode
            and self.tint_opacity is not None
            and self.tint_opacity > 0
        )

    def channel(self, name: str) -> ChannelSpec:
        return getattr(self, name)

    def with_swatches(self, swatches: tuple[ColorSwatch, ...]) -> "ColorRampConfig":
        return replace(self, swatches=tuple(swatches))

    # ---- wire format (camelCase) ----

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ColorRampConfig":
        def channel(name: str) -> ChannelSpec:
            prefix, scale_key = _CHANNEL_KEYS[name]
            return ChannelSpec(
                range=float(data.get(f"{prefix}Range", DEFAULT_COLOR_RAMP_VALUES[f"{prefix}Range"])),
                start=_opt_float(data.get(f"{prefix}Start")),
                end=_opt_float(data.get(f"{prefix}End")),
                advanced=bool(data.get(f"{prefix}Advanced", False)),
                scale=str(data.get(scale_key) or "linear"),
            )

        swatches = data.get("swatches") or ()
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "Primary")),
            base_color=str(data.get("baseColor", DEFAULT_COLOR_RAMP_VALUES["baseColor"])),
            total_steps=int(data.get("totalSteps", DEFAULT_COLOR_RAMP_VALUES["totalSteps"])),
            lightness=channel("lightness"),
            chroma=channel("chroma"),
            saturation=channel("saturation"),
            tint_color=data.get("tintColor"),
            tint_opacity=_opt_float(data.get("tintOpacity")),
            tint_blend_mode=data.get("tintBlendMode"),
            color_format=str(data.get("colorFormat") or "hex"),
            swatches=tuple(
                ColorSwatch(i) if s is None else ColorSwatch.from_dict(s, i)
                for i, s in enumerate(swatches)
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "baseColor": self.base_color,
            "totalSteps": self.total_steps,
            "colorFormat": self.color_format,
        }
        for name, (prefix, scale_key) in _CHANNEL_KEYS.items():
            spec = self.channel(name)
            out[f"{prefix}Range"] = spec.range
            out[f"{prefix}Advanced"] = spec.advanced
            if spec.start is not None:
                out[f"{prefix}Start"] = spec.start
            if spec.end is not None:
                out[f"{prefix}End"] = spec.end
            out[scale_key] = spec.scale
        if self.tint_color is not None:
            out["tintColor"] = self.tint_color
        if self.tint_opacity is not None:
            out["tintOpacity"] = self.tint_opacity
        if self.tint_blend_mode is not None:
            out["tintBlendMode"] = self.tint_blend_mode
        out["swatches"] = [s.to_dict() for s in self.swatches]
        return out


__all__ = [
    "DEFAULT_COLOR_RAMP_VALUES",
    "DEFAULT_NEW_RAMP_VALUES",
    "ColorRampConfig",
    "ColorSwatch",
]
