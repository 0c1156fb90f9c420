#!/usr/bin/env python3
"""
Coherent noise source backed by OpenSimplex.
"""

from opensimplex import OpenSimplex

from .core.cost_field import NoiseSource


class OpenSimplexNoise(NoiseSource):
    """2D OpenSimplex noise with a fixed seed; reads only, safe across threads."""

    def __init__(self, seed: int = 0):
        self.seed = seed
        self._generator = OpenSimplex(seed=seed)

    def sample(self, u: float, v: float) -> float:
        return float(self._generator.noise2(u, v))
