#!/usr/bin/env python3
"""
Run Driver

Ties one experiment together: builds the cost field and the selected
storage strategy, sweeps every column while sampling memory around each
step, reconstructs the minimum-cost path and dumps the memory profile.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Any, List, Optional

from .core.config import SimulationConfig
from .core.cost_field import CostField, NoiseCostField
from .core.nodes import GridNode
from .core.simulation_engine import SimulationEngine
from .metrics.memory_profiler import MemoryProfiler, ProcessAllocatorStats
from .metrics.performance_tracker import PerformanceTracker
from .noise import OpenSimplexNoise
from .strategies import create_strategy
from .strategies.dense_strategy import DenseStrategy
from .visualization import render_dense_grid

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Outcome of one sweep run."""
    strategy: str
    width: int
    height: int
    path: List[int]
    terminal_cost: float
    samples_taken: int
    performance_stats: Dict[str, Any] = field(default_factory=dict)
    debug_render: Optional[str] = None


def build_cost_field(config: SimulationConfig) -> CostField:
    """Noise cost field described by the grid section of config."""
    return NoiseCostField(
        width=config.grid.width,
        height=config.grid.height,
        noise=OpenSimplexNoise(seed=config.grid.noise_seed),
        noise_scale=config.grid.noise_scale,
        baseline=config.grid.energy_baseline,
    )


def run_simulation(config: SimulationConfig,
                   profiler: Optional[MemoryProfiler] = None,
                   cost_field: Optional[CostField] = None,
                   progress_callback: Optional[Callable[[int, List[GridNode]], None]] = None) -> SimulationResult:
    """
    Run one sweep and write its memory profile.

    Args:
        config: Run configuration
        profiler: Memory profiler for this run (a new one if None and
            profiling is enabled)
        cost_field: Cost field override (noise field from config if None)
        progress_callback: Called with (iteration, column) after each step

    Returns:
        SimulationResult with the reconstructed path
    """
    process_stats = None
    if profiler is None and config.profiler.enable_profiling:
        process_stats = ProcessAllocatorStats()
        profiler = MemoryProfiler(stats_source=process_stats)

    try:
        return _run(config, profiler, cost_field, progress_callback)
    finally:
        if process_stats is not None:
            process_stats.close()


def _run(config: SimulationConfig,
         profiler: Optional[MemoryProfiler],
         cost_field: Optional[CostField],
         progress_callback: Optional[Callable[[int, List[GridNode]], None]]) -> SimulationResult:
    width, height = config.grid.width, config.grid.height

    def take_sample():
        if profiler is not None:
            profiler.sample()

    take_sample()

    cost_field = cost_field or build_cost_field(config)
    strategy = create_strategy(config.execution.strategy, width, height)
    tracker = PerformanceTracker(max_history_size=config.profiler.max_step_history)
    interval = config.logging.progress_log_interval

    logger.info(f"Starting '{strategy.name}' sweep over {width}x{height} grid")

    def after_step(iteration: int, column: List[GridNode]):
        take_sample()
        if iteration % interval == 0 or iteration == width - 1:
            logger.info(f"Column {iteration + 1}/{width} done")
        if progress_callback:
            progress_callback(iteration, column)

    with SimulationEngine(strategy, cost_field,
                          max_workers=config.execution.max_workers,
                          tracker=tracker) as engine:
        engine.run(width, progress_callback=after_step)

    logger.info("Sweep done")

    tracker.start_operation("reconstruct_path")
    terminal = strategy.select_terminal()
    path = strategy.reconstruct_path(terminal)
    tracker.end_operation("reconstruct_path")

    debug_render = None
    if config.execution.debug:
        if isinstance(strategy, DenseStrategy):
            debug_render = render_dense_grid(strategy, cost_field)
            logger.info(f"Grid after sweep:\n{debug_render}")
        else:
            logger.warning(f"Debug render needs the full grid; strategy '{strategy.name}' does not retain it")

    terminal_cost = terminal.aggregated_cost.value
    strategy.release()
    del strategy, terminal

    logger.info(f"Minimum cost {terminal_cost:.4f} along path {path}")
    take_sample()

    tracker.log_performance_summary()
    samples_taken = 0
    if profiler is not None:
        profiler.log_profile_summary()
        profiler.dump_to_path(config.profiler.out_file)
        samples_taken = len(profiler)

    return SimulationResult(
        strategy=config.execution.strategy,
        width=width,
        height=height,
        path=path,
        terminal_cost=terminal_cost,
        samples_taken=samples_taken,
        performance_stats=tracker.get_summary_stats(),
        debug_render=debug_render,
    )
