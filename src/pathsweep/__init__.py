# Column sweep backpointer storage experiments

from .core.score import Score
from .core.cost_field import CostField, NoiseCostField, UniformCostField
from .core.config import SimulationConfig
from .core.simulation_engine import SimulationEngine
from .metrics.memory_profiler import MemoryProfiler
from .strategies import create_strategy, DenseStrategy, TreeStrategy, FlattenedStrategy

__all__ = [
    'Score',
    'CostField',
    'NoiseCostField',
    'UniformCostField',
    'SimulationConfig',
    'SimulationEngine',
    'MemoryProfiler',
    'create_strategy',
    'DenseStrategy',
    'TreeStrategy',
    'FlattenedStrategy',
]
