#!/usr/bin/env python3
"""
Cost Field Module

Pure, thread-safe cost functions between a node in one column and a node
in the next column. The simulation engine only sees the CostField interface.
"""

import logging
import math
from abc import ABC, abstractmethod

from .nodes import GridNode
from .score import Score

logger = logging.getLogger(__name__)


class NoiseSource(ABC):
    """Deterministic coherent noise sampled at real coordinates."""

    @abstractmethod
    def sample(self, u: float, v: float) -> float:
        """Return the noise value at (u, v), roughly in [-1, 1]."""
        raise NotImplementedError("Subclasses must implement sample")


class CostField(ABC):
    """
    Abstract traversal cost between adjacent-column nodes.

    Implementations must be pure functions of the two nodes' coordinates so
    that many sweep workers can call them concurrently without locking.
    """

    @abstractmethod
    def cost(self, prev: GridNode, curr: GridNode) -> Score:
        """
        Cost of stepping from prev (previous column) to curr (current column).

        Args:
            prev: Predecessor node
            curr: Successor node

        Returns:
            Non-negative Score
        """
        raise NotImplementedError("Subclasses must implement cost")


class NoiseCostField(CostField):
    """
    Energy times distance cost over a coherent noise field.

    The noise is sampled at the midpoint of the two nodes, scaled relative to
    the grid dimensions; the baseline keeps the energy factor positive.
    """

    def __init__(self, width: int, height: int, noise: NoiseSource,
                 noise_scale: float = 6.0, baseline: float = 1.05):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.noise = noise
        self.noise_scale = noise_scale
        self.baseline = baseline

        logger.debug(f"NoiseCostField over {width}x{height} grid, scale={noise_scale}, baseline={baseline}")

    def cost(self, prev: GridNode, curr: GridNode) -> Score:
        mid_x = (curr.x + prev.x) / 2.0
        mid_y = (curr.y + prev.y) / 2.0
        energy_needed = self.baseline + self.noise.sample(
            mid_x / self.width * self.noise_scale,
            mid_y / self.height * self.noise_scale,
        )

        # unit horizontal advance between columns
        y_diff = curr.y - prev.y
        distance = math.sqrt(y_diff * y_diff + 1.0)
        return Score(energy_needed * distance)


class UniformCostField(CostField):
    """Same cost for every pair of nodes."""

    def __init__(self, score: Score = Score(1.0)):
        self.score = score

    def cost(self, prev: GridNode, curr: GridNode) -> Score:
        return self.score
