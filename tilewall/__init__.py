"""Tile Wall: an animated grid of crossfading procedural tiles"""

from tilewall.config import WallConfig, DEFAULT_CONFIG, Settings
from tilewall.core.wall import (
    Command,
    WallState,
    initialize,
    on_resize,
    render_frame,
    on_command,
)
from tilewall.core.surface import Surface, RecordingSurface, RasterSurface
from tilewall.patterns import ModuleKind, ModuleRegistry

__all__ = [
    "WallConfig",
    "DEFAULT_CONFIG",
    "Settings",
    "Command",
    "WallState",
    "initialize",
    "on_resize",
    "render_frame",
    "on_command",
    "Surface",
    "RecordingSurface",
    "RasterSurface",
    "ModuleKind",
    "ModuleRegistry",
]
