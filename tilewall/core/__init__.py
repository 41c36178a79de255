"""Noise field and drawing surfaces shared by every layer of the wall"""

from tilewall.core.noise_field import NoiseField, clamp, lerp, pick, remap
from tilewall.core.surface import (
    Surface,
    RecordingSurface,
    RasterSurface,
    DrawCommand,
)

__all__ = [
    "NoiseField",
    "clamp",
    "lerp",
    "pick",
    "remap",
    "Surface",
    "RecordingSurface",
    "RasterSurface",
    "DrawCommand",
]
