#!/usr/bin/env python3
"""
Unit tests for profile analysis and visualization.
"""

import os
import sys
import tempfile
import unittest

import pandas as pd

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from pathsweep.analysis import compare_profiles, load_profile, summarize_profile
from pathsweep.core.cost_field import UniformCostField
from pathsweep.core.score import Score
from pathsweep.core.simulation_engine import SimulationEngine
from pathsweep.strategies import DenseStrategy
from pathsweep.visualization import plot_memory_profiles, render_dense_grid

PROFILE_A = (
    "id\tallocated\tresident\tcorrection\n"
    "1\t1500\t9000\t72\n"
    "0\t1000\t8000\t0\n"
    "2\t1200\t9500\t144\n"
)


class TestProfileAnalysis(unittest.TestCase):
    """Test cases for loading and summarizing profiles."""

    def setUp(self):
        """Set up test fixtures."""
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, 'naive.tsv')
        with open(self.path, 'w', encoding='utf-8') as f:
            f.write(PROFILE_A)

    def tearDown(self):
        """Clean up temporary files."""
        self.tmp.cleanup()

    def test_load_profile_sorted(self):
        """Test that profiles load sorted by id."""
        df = load_profile(self.path)
        self.assertEqual(list(df.columns), ['id', 'allocated', 'resident', 'correction'])
        self.assertEqual(df['id'].tolist(), [0, 1, 2])
        self.assertEqual(df['allocated'].tolist(), [1000, 1500, 1200])

    def test_load_profile_bad_header(self):
        """Test that a wrong header is rejected."""
        path = os.path.join(self.tmp.name, 'bad.tsv')
        with open(path, 'w', encoding='utf-8') as f:
            f.write("id\tbytes\n0\t1\n")
        with self.assertRaises(ValueError):
            load_profile(path)

    def test_summarize_profile(self):
        """Test the summary figures."""
        summary = summarize_profile(load_profile(self.path))
        self.assertEqual(summary['samples'], 3)
        self.assertEqual(summary['peak_allocated'], 1500)
        self.assertEqual(summary['peak_net_allocated'], 1428)
        self.assertEqual(summary['final_allocated'], 1200)
        self.assertEqual(summary['peak_resident'], 9500)
        self.assertEqual(summary['allocated_growth'], 428)

    def test_summarize_empty_profile(self):
        """Test the summary of a header-only dump."""
        path = os.path.join(self.tmp.name, 'empty.tsv')
        with open(path, 'w', encoding='utf-8') as f:
            f.write("id\tallocated\tresident\tcorrection\n")
        self.assertEqual(summarize_profile(load_profile(path))['samples'], 0)

    def test_compare_profiles(self):
        """Test one summary row per dump."""
        other = os.path.join(self.tmp.name, 'rc.tsv')
        with open(other, 'w', encoding='utf-8') as f:
            f.write("id\tallocated\tresident\tcorrection\n0\t10\t20\t0\n")

        table = compare_profiles([self.path, other])
        self.assertEqual(list(table.index), ['naive', 'rc'])
        self.assertEqual(table.loc['rc', 'peak_allocated'], 10)

    def test_plot_memory_profiles(self):
        """Test that a comparison plot is written."""
        output = os.path.join(self.tmp.name, 'plots', 'compare.png')
        result = plot_memory_profiles({'naive': load_profile(self.path)}, output)
        self.assertEqual(result, output)
        self.assertTrue(os.path.getsize(output) > 0)


class TestRenderDenseGrid(unittest.TestCase):
    """Test cases for the plain-text grid render."""

    def test_render_marks_path(self):
        """Test that the render shows costs, backpointers and the path."""
        strategy = DenseStrategy(3, 2)
        with SimulationEngine(strategy, UniformCostField()) as engine:
            engine.run(3)
        strategy.reconstruct_path(strategy.select_terminal())

        lines = render_dense_grid(strategy).splitlines()
        # two cost rows, a blank separator, two backpointer rows
        self.assertEqual(len(lines), 5)
        self.assertEqual(lines[2], '')
        self.assertEqual(lines[0].split(), ['x*', '+1.00*', '+2.00*'])
        self.assertEqual(lines[1].split(), ['x', '+1.00', '+2.00'])
        self.assertEqual(lines[3].split(), ['x', '0', '0'])

    def test_render_step_costs(self):
        """Test the third table of per-edge step costs along each backpointer."""
        field = UniformCostField(Score(1.5))
        strategy = DenseStrategy(3, 2)
        with SimulationEngine(strategy, field) as engine:
            engine.run(3)
        strategy.reconstruct_path(strategy.select_terminal())

        lines = render_dense_grid(strategy, field).splitlines()
        # cost table, backpointer table and step cost table, blank-separated
        self.assertEqual(len(lines), 8)
        self.assertEqual(lines[5], '')
        self.assertEqual(lines[6].split(), ['x*', '+1.50*', '+1.50*'])
        self.assertEqual(lines[7].split(), ['x', '+1.50', '+1.50'])
        self.assertNotIn('\x1b', '\n'.join(lines))


if __name__ == '__main__':
    unittest.main()
