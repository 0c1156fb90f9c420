#!/usr/bin/env python3
"""
Simulation Engine Module

Column-by-column dynamic-programming sweep. The engine asks the active
storage strategy for the previous and current columns, relaxes every node of
the current column against the whole previous column in parallel, and hands
the winning predecessor back to the strategy to record.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

from .cost_field import CostField
from .nodes import GridNode
from ..metrics.performance_tracker import PerformanceTracker
from ..strategies.base_strategy import BaseStorageStrategy

logger = logging.getLogger(__name__)


class SimulationEngine:
    """
    Strategy-agnostic sweep over grid columns.

    Iterations are strictly sequential because column i+1 reads column i.
    Within one iteration every worker writes only the node it was given and
    reads only the previous column, so nodes are relaxed without locks.
    """

    def __init__(self, strategy: BaseStorageStrategy, cost_field: CostField,
                 max_workers: Optional[int] = None,
                 tracker: Optional[PerformanceTracker] = None):
        """
        Initialize the simulation engine.

        Args:
            strategy: Backpointer storage strategy providing column slices
            cost_field: Cost between adjacent-column nodes
            max_workers: Worker threads per step (executor default if None)
            tracker: Step timing tracker (a fresh one if None)
        """
        self.strategy = strategy
        self.cost_field = cost_field
        self.tracker = tracker or PerformanceTracker()
        self._executor = ThreadPoolExecutor(max_workers=max_workers,
                                            thread_name_prefix="sweep")

        logger.info(f"SimulationEngine initialized with strategy '{strategy.name}' "
                    f"on a {strategy.width}x{strategy.height} grid")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        """Shut the worker pool down."""
        self._executor.shutdown(wait=True)

    def step(self, iteration: int) -> List[GridNode]:
        """
        Run one sweep iteration.

        Args:
            iteration: Column index being computed

        Returns:
            The current column after relaxation
        """
        step_start = time.perf_counter()

        self.tracker.start_operation("prepare_slices")
        previous, current = self.strategy.provide_slices(iteration)
        self.tracker.end_operation("prepare_slices")

        # list() drains the map so worker exceptions surface here
        list(self._executor.map(lambda node: self._relax(previous, node), current))

        duration = time.perf_counter() - step_start
        self.tracker.record_step(iteration, duration)
        logger.debug(f"Step {iteration}: relaxed {len(current)} nodes against {len(previous)} in {duration:.4f}s")
        return current

    def run(self, width: int,
            progress_callback: Optional[Callable[[int, List[GridNode]], None]] = None):
        """
        Sweep every column from 0 to width - 1.

        Args:
            width: Number of columns to compute
            progress_callback: Called with (iteration, column) after each step
        """
        for iteration in range(width):
            column = self.step(iteration)
            if progress_callback:
                progress_callback(iteration, column)

    def _relax(self, previous: Sequence[GridNode], node: GridNode):
        """Pick the cheapest predecessor of node; first minimum wins ties."""
        best_cost = None
        best_prev = None

        for prev in previous:
            candidate = self.cost_field.cost(prev, node) + prev.aggregated_cost
            if candidate is None:
                continue
            if best_cost is None or candidate < best_cost:
                best_cost = candidate
                best_prev = prev

        # An empty previous column is the base case: cost stays zero, no backpointer
        if best_prev is not None:
            node.aggregated_cost = best_cost
            self.strategy.link(best_prev, node)
