#!/usr/bin/env python3
"""
Unit tests for the SimulationEngine column sweep.
"""

import math
import unittest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from pathsweep.core.cost_field import CostField, NoiseCostField, UniformCostField
from pathsweep.core.nodes import GridNode
from pathsweep.core.score import Score
from pathsweep.core.simulation_engine import SimulationEngine
from pathsweep.metrics.performance_tracker import PerformanceTracker
from pathsweep.noise import OpenSimplexNoise
from pathsweep.strategies import STRATEGY_NAMES, create_strategy
from pathsweep.strategies.base_strategy import BaseStorageStrategy


class RecordingStrategy(BaseStorageStrategy):
    """Minimal two-column strategy that records every link() call."""

    def __init__(self, width, height):
        super().__init__("recording", width, height)
        self.previous = []
        self.current = []
        self.links = []

    def provide_slices(self, iteration):
        self.previous, self.current = self.current, [GridNode(iteration, y) for y in range(self.height)]
        return self.previous, self.current

    def link(self, parent, child):
        self.links.append(((parent.x, parent.y), (child.x, child.y)))

    def terminal_column(self):
        return self.current

    def reconstruct_path(self, terminal):
        return []

    def retained_columns(self):
        return 2

    def release(self):
        self.previous = self.current = []


class NaNTrapCostField(CostField):
    """
    Column 1 row 0 becomes infinitely expensive; stepping from row 0 into
    column 2 costs -inf, so that candidate sums to NaN and must be skipped.
    """

    def cost(self, prev, curr):
        if curr.x == 1:
            return Score(math.inf) if curr.y == 0 else Score(1.0)
        if prev.y == 0:
            return Score(-math.inf)
        return Score(5.0)


def sweep(strategy_name, width, height, cost_field):
    """Run a full sweep, returning the strategy and per-column (cost, node) snapshots."""
    strategy = create_strategy(strategy_name, width, height)
    columns = []

    def capture(iteration, column):
        columns.append([(node, node.aggregated_cost.value) for node in column])

    with SimulationEngine(strategy, cost_field, max_workers=4) as engine:
        engine.run(width, progress_callback=capture)
    return strategy, columns


class TestSimulationEngine(unittest.TestCase):
    """Test cases for SimulationEngine."""

    def test_base_case_column_zero(self):
        """Test that column 0 keeps zero cost and no backpointer."""
        strategy = RecordingStrategy(3, 4)
        with SimulationEngine(strategy, UniformCostField()) as engine:
            column = engine.step(0)

        self.assertEqual(len(column), 4)
        for node in column:
            self.assertEqual(node.aggregated_cost, Score.ZERO)
        self.assertEqual(strategy.links, [])

    def test_link_called_once_per_node(self):
        """Test that every node past column 0 gets exactly one link."""
        strategy = RecordingStrategy(3, 4)
        with SimulationEngine(strategy, UniformCostField(), max_workers=3) as engine:
            engine.run(3)

        children = [child for _, child in strategy.links]
        self.assertEqual(len(children), 8)
        self.assertEqual(len(set(children)), 8)
        # All predecessors tie, so the first one (row 0) always wins
        for parent, child in strategy.links:
            self.assertEqual(parent, (child[0] - 1, 0))

    def test_constant_cost_scenario(self):
        """Test width=4, height=3 with every step costing 1.0."""
        for name in STRATEGY_NAMES:
            with self.subTest(strategy=name):
                strategy, columns = sweep(name, 4, 3, UniformCostField(Score(1.0)))

                for x, column in enumerate(columns):
                    self.assertEqual([cost for _, cost in column], [float(x)] * 3)

                terminal = strategy.select_terminal()
                self.assertEqual(terminal.aggregated_cost, Score(3.0))
                self.assertEqual(terminal.y, 0)
                self.assertEqual(strategy.reconstruct_path(terminal), [0, 0, 0, 0])

    def test_nan_candidates_are_skipped(self):
        """Test that a candidate whose sum is NaN never wins."""
        strategy, columns = sweep('naive', 3, 2, NaNTrapCostField())

        self.assertEqual([cost for _, cost in columns[1]], [math.inf, 1.0])
        self.assertEqual([cost for _, cost in columns[2]], [6.0, 6.0])
        for node, _ in columns[2]:
            self.assertEqual(node.parent_row, 1)

    def test_strategies_agree(self):
        """Test that every strategy computes the same costs and path."""
        width, height = 7, 6
        cost_field = NoiseCostField(width, height, OpenSimplexNoise(seed=11))
        results = {}

        for name in STRATEGY_NAMES:
            strategy, columns = sweep(name, width, height, cost_field)
            costs = [[cost for _, cost in column] for column in columns]
            path = strategy.reconstruct_path(strategy.select_terminal())
            results[name] = (costs, path)

        reference_costs, reference_path = results['naive']
        self.assertEqual(len(reference_path), width)
        for name, (costs, path) in results.items():
            self.assertEqual(costs, reference_costs, name)
            self.assertEqual(path, reference_path, name)

    def test_columns_are_write_once(self):
        """Test that nodes of a finished column never change afterwards."""
        width, height = 6, 5
        cost_field = NoiseCostField(width, height, OpenSimplexNoise(seed=2))

        for name in STRATEGY_NAMES:
            with self.subTest(strategy=name):
                snapshots = []
                strategy = create_strategy(name, width, height)

                def capture(iteration, column):
                    snapshots.append([(node, node.aggregated_cost, getattr(node, 'parent_row', None),
                                       getattr(node, 'ancestry', None)) for node in column])

                with SimulationEngine(strategy, cost_field) as engine:
                    engine.run(width, progress_callback=capture)

                for column in snapshots:
                    for node, cost, parent_row, ancestry in column:
                        self.assertEqual(node.aggregated_cost, cost)
                        self.assertEqual(getattr(node, 'parent_row', None), parent_row)
                        self.assertIs(getattr(node, 'ancestry', None), ancestry)

    def test_path_follows_minimum_costs(self):
        """Test that costs along the reconstructed path add up to the terminal cost."""
        width, height = 5, 4
        cost_field = NoiseCostField(width, height, OpenSimplexNoise(seed=5))
        strategy, _ = sweep('naive', width, height, cost_field)
        terminal = strategy.select_terminal()
        path = strategy.reconstruct_path(terminal)

        total = 0.0
        for x in range(1, width):
            total += cost_field.cost(strategy.column(x - 1)[path[x - 1]], strategy.column(x)[path[x]]).value
        self.assertAlmostEqual(total, terminal.aggregated_cost.value)

    def test_step_timing_recorded(self):
        """Test that each step is recorded in the performance tracker."""
        tracker = PerformanceTracker()
        strategy = create_strategy('rc', 4, 2)
        with SimulationEngine(strategy, UniformCostField(), tracker=tracker) as engine:
            engine.run(4)

        stats = tracker.get_summary_stats()
        self.assertEqual(stats['total_steps'], 4)
        self.assertEqual(stats['operation_stats']['prepare_slices']['count'], 4)

    def test_worker_errors_propagate(self):
        """Test that an exception inside a worker surfaces from step()."""
        class FailingCostField(CostField):
            def cost(self, prev, curr):
                raise RuntimeError("cost failure")

        strategy = create_strategy('naive', 2, 2)
        with SimulationEngine(strategy, FailingCostField()) as engine:
            engine.step(0)
            with self.assertRaises(RuntimeError):
                engine.step(1)


if __name__ == '__main__':
    unittest.main()
