from dataclasses import dataclass, field, replace
from typing import Tuple

Color = Tuple[int, int, int]


def hex_to_rgb(value: str) -> Color:
    """Convert '#rrggbb' (or 'rrggbb') to an RGB tuple"""
    value = value.strip().lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6:
        raise ValueError(f"Invalid hex color: {value!r}")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


DEFAULT_PALETTE: Tuple[Color, ...] = tuple(
    hex_to_rgb(c)
    for c in ("#ff3ea5", "#00d1ff", "#00d36f", "#ffa500", "#ffd83e", "#ffffff")
)


@dataclass(frozen=True)
class WallConfig:
    cell_size: int = 204
    hold_frames: int = 100  # frames a tile keeps its module
    fade_frames: int = 50  # crossfade duration in frames
    hold_jitter: int = 10  # +/- frames added to each hold
    noise_scale: float = 0.08  # grid-space scale for light/dark variant noise
    light_threshold: float = 0.6
    bg_light: Color = (245, 245, 245)
    bg_dark: Color = (0, 0, 0)
    fps: int = 60
    palette: Tuple[Color, ...] = field(default_factory=lambda: DEFAULT_PALETTE)
    capture_dir: str = "."

    def validated(self) -> "WallConfig":
        """Return a copy with every value clamped into its usable range"""
        palette = tuple(self.palette) or DEFAULT_PALETTE
        return replace(
            self,
            cell_size=max(1, int(self.cell_size)),
            hold_frames=max(1, int(self.hold_frames)),
            fade_frames=max(1, int(self.fade_frames)),
            hold_jitter=max(0, int(self.hold_jitter)),
            fps=max(1, int(self.fps)),
            palette=palette,
        )

    @classmethod
    def from_settings(cls, settings: dict) -> "WallConfig":
        """Build a config from a settings dict, ignoring unknown keys"""
        known = {name for name in cls.__dataclass_fields__}
        values = {k: v for k, v in settings.items() if k in known}
        palette = values.get("palette")
        if isinstance(palette, str):
            palette = [c for c in palette.split(",") if c.strip()]
        if palette is not None:
            values["palette"] = tuple(
                hex_to_rgb(c) if isinstance(c, str) else tuple(c) for c in palette
            )
        for key in ("bg_light", "bg_dark"):
            if key in values and isinstance(values[key], str):
                values[key] = hex_to_rgb(values[key])
            elif key in values:
                values[key] = tuple(values[key])
        return cls(**values).validated()


# Default configuration for our setup
DEFAULT_CONFIG = WallConfig()
