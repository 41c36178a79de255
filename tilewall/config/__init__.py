from tilewall.config.wall_config import (
    WallConfig,
    DEFAULT_CONFIG,
    DEFAULT_PALETTE,
    Color,
    hex_to_rgb,
)
from tilewall.config.settings import Settings

__all__ = [
    "WallConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_PALETTE",
    "Color",
    "hex_to_rgb",
    "Settings",
]
