"""
Random number sources for Monte Carlo sampling.

Every random draw in the renderer goes through a RandomSource instance that
is passed in explicitly, so a fixed seed reproduces an image exactly.
"""

from __future__ import annotations
import math
from typing import Optional, List

import numpy as np

from .vec3 import Vec3


class RandomSource:
    """Seedable uniform generator backed by numpy's PCG64.

    Draw order matters for reproduction. Per bounce the integrator draws the
    lobe selection first, then the two unit-vector numbers (z, azimuth),
    then the Russian roulette number when that is enabled.
    """

    def __init__(self, seed: Optional[int] = None, *, seed_sequence: Optional[np.random.SeedSequence] = None):
        """Create a random source.

        Args:
            seed: Integer seed, or None for OS entropy
            seed_sequence: Explicit numpy SeedSequence (takes precedence over seed)
        """
        if seed_sequence is None:
            seed_sequence = np.random.SeedSequence(seed)
        self._seed_sequence = seed_sequence
        self._rng = np.random.Generator(np.random.PCG64(seed_sequence))

    def uniform(self) -> float:
        """Uniform float in [0, 1)."""
        return float(self._rng.random())

    def random_unit_vector(self) -> Vec3:
        """Uniformly distributed direction on the unit sphere.

        Uses the spherical construction z = 2u - 1, azimuth = 2*pi*u',
        r = sqrt(1 - z^2).
        """
        z = self.uniform() * 2.0 - 1.0
        azimuth = self.uniform() * 2.0 * math.pi
        return Vec3.from_spherical(z, azimuth)

    def spawn(self, count: int) -> List[RandomSource]:
        """Create statistically independent child sources."""
        return [RandomSource(seed_sequence=child) for child in self._seed_sequence.spawn(count)]
