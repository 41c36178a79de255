"""
Host-facing API of the tile wall.

All mutable state lives in a WallState value that the host threads through
initialize / on_resize / render_frame / on_command. Nothing is kept at
module level.
"""

import os
import random
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tilewall.config.wall_config import WallConfig, DEFAULT_CONFIG
from tilewall.core.grid import Grid, GridManager
from tilewall.core.noise_field import NoiseField
from tilewall.core.surface import Surface

logger = logging.getLogger("tilewall")


class Command(Enum):
    CAPTURE_FRAME = "capture"
    REINITIALIZE = "reinitialize"

    @classmethod
    def parse(cls, value: str) -> "Command":
        """Accept a command name or its host key ('S' capture, 'R' reshuffle)"""
        keys = {"S": cls.CAPTURE_FRAME, "R": cls.REINITIALIZE}
        if value in keys:
            return keys[value]
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown command: {value!r}") from None


@dataclass
class WallState:
    config: WallConfig
    manager: GridManager
    grid: Grid
    frame_count: int = 0
    elapsed: float = 0.0

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height


def initialize(
    width: int,
    height: int,
    config: Optional[WallConfig] = None,
    seed: Optional[int] = None,
    noise: Optional[NoiseField] = None,
) -> WallState:
    """Create a fresh wall; the frame counter starts at zero"""
    config = (config or DEFAULT_CONFIG).validated()
    rng = random.Random(seed)
    if noise is None:
        noise = NoiseField(base=rng.randrange(256))
    manager = GridManager(config, noise, rng)
    grid = manager.initialize(width, height, now=0)
    return WallState(config=config, manager=manager, grid=grid)


def on_resize(
    state: WallState, width: int, height: int, surface: Optional[Surface] = None
) -> WallState:
    state.grid = state.manager.resize(
        state.grid, width, height, now=state.frame_count, surface=surface
    )
    return state


def render_frame(
    state: WallState, surface: Surface, elapsed_seconds: Optional[float] = None
) -> WallState:
    """Advance one frame and draw every tile in row-major order"""
    state.frame_count += 1
    if elapsed_seconds is None:
        elapsed_seconds = state.frame_count / state.config.fps
    state.elapsed = elapsed_seconds

    surface.reset()
    surface.clear(state.config.bg_dark)
    for tile in state.grid.tiles:
        tile.draw(surface, state.frame_count, elapsed_seconds)
    return state


def capture_path(state: WallState) -> str:
    return os.path.join(state.config.capture_dir, f"frame-{state.frame_count:05d}.png")


def on_command(
    state: WallState,
    command: Command,
    surface: Optional[Surface] = None,
    path: Optional[str] = None,
) -> WallState:
    if command == Command.CAPTURE_FRAME:
        if surface is None:
            logger.warning("Capture requested without a surface; ignoring")
            return state
        path = path or capture_path(state)
        logger.info(f"Capturing frame {state.frame_count} to {path}")
        surface.capture(path)
    elif command == Command.REINITIALIZE:
        logger.info("Reinitializing grid")
        state.grid = state.manager.reinitialize(
            state.grid, now=state.frame_count, surface=surface
        )
    return state
