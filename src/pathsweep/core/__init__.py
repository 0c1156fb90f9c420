"""
Core Sweep Module

Score type, grid nodes, cost fields, configuration and the simulation engine
for the column sweep. The engine lives in core.simulation_engine and is
imported from there, since it depends on the strategies package.
"""

from .score import Score
from .errors import InvariantViolation
from .nodes import GridNode, DenseNode, TreeNode, AncestryLink
from .cost_field import CostField, NoiseCostField, NoiseSource, UniformCostField

__all__ = [
    'Score',
    'InvariantViolation',
    'GridNode',
    'DenseNode',
    'TreeNode',
    'AncestryLink',
    'CostField',
    'NoiseCostField',
    'NoiseSource',
    'UniformCostField',
]
