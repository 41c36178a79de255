"""
Noise field and random helpers.

Continuous noise drives everything that changes over time (rotation, density,
thickness) so parameters drift instead of jumping between frames. The same
noise, sampled at a fixed point, gives repeatable discrete choices.
"""

import math
import random
from typing import Optional, Sequence, TypeVar

from noise import pnoise1, pnoise2, pnoise3

T = TypeVar("T")

# Multiplier applied to a seed before a stable lookup
STABLE_SEED_SCALE = 1.371


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def remap(value: float, lo1: float, hi1: float, lo2: float, hi2: float) -> float:
    """Linearly map value from [lo1, hi1] into [lo2, hi2]"""
    if hi1 == lo1:
        return lo2
    return lo2 + (value - lo1) * (hi2 - lo2) / (hi1 - lo1)


def pick(rng: random.Random, options: Sequence[T]) -> T:
    """Uniform random choice among options"""
    return options[int(rng.random() * len(options))]


class NoiseField:
    """Deterministic Perlin noise in [0, 1].

    Wraps the `noise` library's pnoise1/2/3 with fractal octaves so that
    1, 2 or 3 coordinates can be sampled through one call.
    """

    def __init__(self, base: int = 0, octaves: int = 4, persistence: float = 0.5):
        self.base = base
        self.octaves = octaves
        self.persistence = persistence

    def noise(self, x: float, y: Optional[float] = None, z: Optional[float] = None) -> float:
        if y is None:
            value = pnoise1(
                x, octaves=self.octaves, persistence=self.persistence, base=self.base
            )
        elif z is None:
            value = pnoise2(
                x, y, octaves=self.octaves, persistence=self.persistence, base=self.base
            )
        else:
            value = pnoise3(
                x,
                y,
                z,
                octaves=self.octaves,
                persistence=self.persistence,
                base=self.base,
            )
        return clamp((value + 1.0) * 0.5, 0.0, 1.0)

    def stable_index(self, seed: float, salt: float, n: int) -> int:
        """Repeatable index in [0, n) derived only from (seed, salt)"""
        if n <= 0:
            raise ValueError("stable_index needs at least one option")
        u = self.noise(seed * STABLE_SEED_SCALE + salt)
        return math.floor(u * n) % n

    def stable_choice(self, options: Sequence[T], seed: float, salt: float) -> T:
        return options[self.stable_index(seed, salt, len(options))]
