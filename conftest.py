import random

import pytest

from tilewall.config import WallConfig, DEFAULT_PALETTE
from tilewall.core.noise_field import NoiseField


class ConstantNoise(NoiseField):
    """Noise stub that returns the same value everywhere"""

    def __init__(self, value=0.5):
        super().__init__()
        self.value = value

    def noise(self, x, y=None, z=None):
        return self.value


@pytest.fixture
def constant_noise():
    return ConstantNoise(0.5)


@pytest.fixture
def noise_field():
    return NoiseField(base=7)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def palette():
    return DEFAULT_PALETTE


@pytest.fixture
def quick_config():
    """Short, jitter-free timings"""
    return WallConfig(cell_size=200, hold_frames=100, fade_frames=50, hold_jitter=0)
