import math
import random
import logging
from enum import Enum
from typing import Optional, Sequence, Tuple

from tilewall.config.wall_config import Color, WallConfig, DEFAULT_CONFIG
from tilewall.core.noise_field import NoiseField, clamp, pick, remap
from tilewall.core.surface import Surface
from tilewall.patterns import Module, ModuleRegistry

logger = logging.getLogger("tilewall")

# Salt mixed into the seed of every replacement instance
NEXT_SALT = 123

# Rotation wobble bounds and speed
MAX_ROTATION = math.pi / 8
ROTATION_TIME_SCALE = 0.12

# Extra pixels on each background rect so neighbouring tiles never leave a seam
SEAM_OVERLAP = 1


class Phase(Enum):
    HOLD = "hold"
    FADE = "fade"


class Tile:
    """One grid cell and its Hold/Fade crossfade lifecycle.

    A tile shows `current` during Hold. When the hold expires it builds a
    `next` instance and fades it in over `fade_frames`; once the fade is
    complete `next` becomes `current` and the tile holds again.
    """

    def __init__(
        self,
        x: float,
        y: float,
        size: float,
        is_light: bool,
        seed: float,
        palette: Sequence[Color],
        noise: NoiseField,
        rng: random.Random,
        config: WallConfig = DEFAULT_CONFIG,
        phase_start_tick: int = 0,
    ):
        self.x = x
        self.y = y
        self.size = size
        self.is_light = is_light
        self.seed = seed
        self.palette = tuple(palette)
        self.noise = noise
        self.rng = rng
        self.config = config.validated()

        self.phase = Phase.HOLD
        self.phase_start_tick = phase_start_tick
        self.hold_jitter = self._roll_jitter()
        self.current: Module = self.make_instance(seed)
        self.next: Optional[Module] = None

    def _roll_jitter(self) -> int:
        spread = self.config.hold_jitter
        return self.rng.randint(-spread, spread) if spread else 0

    def make_instance(self, seed: float) -> Module:
        kind = pick(self.rng, ModuleRegistry.kinds())
        instance = ModuleRegistry.create(kind, seed, self.palette, self.noise, self.is_light)
        logger.debug(f"Tile ({self.x}, {self.y}) created {kind.value} instance")
        return instance

    def advance(self, now: int) -> Optional[Phase]:
        """Run the transition check; returns the new phase if one fired"""
        elapsed = now - self.phase_start_tick
        if self.phase == Phase.HOLD:
            if elapsed > self.config.hold_frames + self.hold_jitter:
                self.phase = Phase.FADE
                self.phase_start_tick = now
                self.next = self.make_instance(self.seed + now + NEXT_SALT)
                logger.debug(f"Tile ({self.x}, {self.y}) fading in at frame {now}")
                return self.phase
        elif elapsed >= self.config.fade_frames:
            self.phase = Phase.HOLD
            self.phase_start_tick = now
            self.current = self.next
            self.next = None
            self.hold_jitter = self._roll_jitter()
            logger.debug(
                f"Tile ({self.x}, {self.y}) holding at frame {now} "
                f"(jitter {self.hold_jitter:+d})"
            )
            return self.phase
        return None

    def blend_weight(self, now: int) -> float:
        if self.phase != Phase.FADE:
            return 0.0
        return clamp((now - self.phase_start_tick) / self.config.fade_frames, 0.0, 1.0)

    def opacities(self, now: int) -> Tuple[float, float]:
        """(current, next) opacities; they always sum to 1"""
        k = self.blend_weight(now)
        return 1.0 - k, k

    def rotation(self, t: float) -> float:
        u = self.noise.noise(self.seed, t * ROTATION_TIME_SCALE)
        return remap(u, 0.0, 1.0, -MAX_ROTATION, MAX_ROTATION)

    @property
    def background(self) -> Color:
        return self.config.bg_light if self.is_light else self.config.bg_dark

    def draw(self, surface: Surface, now: int, t: float):
        self.advance(now)

        with surface.saved():
            surface.rect(
                self.x,
                self.y,
                self.size + SEAM_OVERLAP,
                self.size + SEAM_OVERLAP,
                self.background,
                center=False,
            )

        with surface.saved():
            surface.translate(self.x + self.size / 2, self.y + self.size / 2)
            surface.rotate(self.rotation(t))

            current_alpha, next_alpha = self.opacities(now)
            with surface.saved():
                surface.set_alpha(current_alpha)
                self.current.render(surface, self.size, t)

            if next_alpha > 0 and self.next is not None:
                with surface.saved():
                    surface.set_alpha(next_alpha)
                    self.next.render(surface, self.size, t)
