import math
import random
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from tilewall.config.wall_config import Color, WallConfig
from tilewall.core.noise_field import NoiseField
from tilewall.core.surface import Surface
from tilewall.core.tile import Tile

logger = logging.getLogger("tilewall")

# Tile seeds are drawn uniformly from [0, SEED_RANGE)
SEED_RANGE = 10000.0

# Spatial noise is sampled from a per-wall offset in [0, NOISE_OFFSET_RANGE)
# so the grid origin does not sit on a Perlin lattice point, where noise is 0
NOISE_OFFSET_RANGE = 256.0


@dataclass
class Grid:
    """The tiles covering one viewport, in row-major order"""

    cols: int
    rows: int
    cell_size: int
    width: int
    height: int
    tiles: List[Tile] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles)

    def tile_at(self, col: int, row: int) -> Tile:
        return self.tiles[row * self.cols + col]


def grid_dimensions(width: int, height: int, cell_size: int) -> Tuple[int, int]:
    """Columns and rows needed to cover the viewport; 0 for a degenerate side"""
    cols = math.ceil(width / cell_size) if width > 0 else 0
    rows = math.ceil(height / cell_size) if height > 0 else 0
    return cols, rows


class GridManager:
    """Builds and rebuilds the tile set for a viewport"""

    def __init__(
        self,
        config: WallConfig,
        noise: NoiseField,
        rng: random.Random,
        palette: Optional[Sequence[Color]] = None,
    ):
        self.config = config.validated()
        self.noise = noise
        self.rng = rng
        self.offset_x = rng.random() * NOISE_OFFSET_RANGE
        self.offset_y = rng.random() * NOISE_OFFSET_RANGE
        self.palette = tuple(palette) if palette is not None else tuple(self.config.palette)

    def is_light(self, col: int, row: int) -> bool:
        scale = self.config.noise_scale
        u = self.noise.noise(col * scale + self.offset_x, row * scale + self.offset_y)
        return u > self.config.light_threshold

    def _create_tile(self, col: int, row: int, now: int) -> Tile:
        size = self.config.cell_size
        return Tile(
            x=col * size,
            y=row * size,
            size=size,
            is_light=self.is_light(col, row),
            seed=self.rng.random() * SEED_RANGE,
            palette=self.palette,
            noise=self.noise,
            rng=self.rng,
            config=self.config,
            # Desync so the whole wall never switches on the same frame
            phase_start_tick=now + self.rng.randrange(self.config.hold_frames),
        )

    def initialize(self, width: int, height: int, now: int = 0) -> Grid:
        cols, rows = grid_dimensions(width, height, self.config.cell_size)
        tiles = [
            self._create_tile(col, row, now) for row in range(rows) for col in range(cols)
        ]
        logger.info(
            f"Built {cols}x{rows} grid ({len(tiles)} tiles) for {width}x{height} viewport"
        )
        return Grid(
            cols=cols,
            rows=rows,
            cell_size=self.config.cell_size,
            width=width,
            height=height,
            tiles=tiles,
        )

    def resize(
        self,
        grid: Grid,
        width: int,
        height: int,
        now: int = 0,
        surface: Optional[Surface] = None,
    ) -> Grid:
        """Discard every tile and rebuild for the new viewport"""
        if surface is not None:
            surface.resize(max(0, width), max(0, height))
            surface.clear(self.config.bg_dark)
        return self.initialize(width, height, now)

    def reinitialize(
        self, grid: Grid, now: int = 0, surface: Optional[Surface] = None
    ) -> Grid:
        """Fresh seeds and instances at the same dimensions"""
        if surface is not None:
            surface.clear(self.config.bg_dark)
        return self.initialize(grid.width, grid.height, now)
