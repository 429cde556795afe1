"""Deterministic noise and random sources consumed by the growth policies.

The growth engine only talks to the ``NoiseOracle`` and ``RandomSource``
protocols; the classes here are the default implementations.
"""

import random
from typing import Protocol, Sequence

import noise

from .geometry_utils import Point

# pnoise2's ``base`` offsets into a 256-entry permutation table; larger
# values alias or collapse the field
MAX_NOISE_BASE = 255
# Fields multiplied by ``ProductNoiseOracle.seeded`` (seeds seed .. seed + 2)
PRODUCT_NOISE_FIELDS = 3


class NoiseOracle(Protocol):
    """Coherent noise sampled at a map coordinate, roughly in [-1, 1]."""

    def sample(self, point: Point) -> float:
        ...


class RandomSource(Protocol):
    """Seeded pseudo-random generator."""

    def uniform_real(self) -> float:
        ...

    def uniform_int(self, n: int) -> int:
        ...


class PerlinNoiseOracle:
    """2-D Perlin noise, with coordinates divided by ``scale`` before sampling.

    ``seed`` selects the permutation table through ``pnoise2``'s ``base``
    argument, so equal seeds always return equal samples. Only seeds in
    ``[0, MAX_NOISE_BASE]`` select distinct fields.
    """

    def __init__(self, seed: int, scale: float = 100.0):
        if not 0 <= seed <= MAX_NOISE_BASE:
            raise ValueError(f"Noise seed must be between 0 and {MAX_NOISE_BASE}, got {seed}")
        self.seed = seed
        self.scale = scale

    def sample(self, point: Point) -> float:
        return noise.pnoise2(point.x / self.scale, point.y / self.scale, base=self.seed)


class ProductNoiseOracle:
    """Product of several noise oracles.

    Multiplying independent fields sharpens the contrast between the few
    strongly positive or negative regions and the near-zero background.
    """

    def __init__(self, oracles: Sequence[NoiseOracle]):
        if not oracles:
            raise ValueError("ProductNoiseOracle needs at least one oracle")
        self.oracles = list(oracles)

    @classmethod
    def seeded(cls, seed: int, scale: float = 100.0,
               count: int = PRODUCT_NOISE_FIELDS) -> 'ProductNoiseOracle':
        return cls([PerlinNoiseOracle(seed + i, scale) for i in range(count)])

    def sample(self, point: Point) -> float:
        value = 1.0
        for oracle in self.oracles:
            value *= oracle.sample(point)
        return value


class SeededRandom:
    """``RandomSource`` backed by the standard library Mersenne Twister."""

    def __init__(self, seed: int):
        self.seed = seed
        self.random = random.Random(seed)

    def uniform_real(self) -> float:
        return self.random.random()

    def uniform_int(self, n: int) -> int:
        return self.random.randrange(n)
