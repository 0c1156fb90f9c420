#!/usr/bin/env python3
"""
Sweep Visualization Module

Plain-text rendering of a fully retained grid for debugging, and plots of
memory profiles so storage strategies can be compared side by side.
"""

from typing import Dict, Optional
from pathlib import Path
import logging

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pandas as pd

from .core.cost_field import CostField
from .strategies.dense_strategy import DenseStrategy

logger = logging.getLogger(__name__)

MIB = 1024 * 1024


def render_dense_grid(strategy: DenseStrategy, cost_field: Optional[CostField] = None) -> str:
    """
    Render aggregated costs and backpointers of a dense grid as text.

    Rows of the output are grid rows, columns are grid columns. Column 0
    nodes have no predecessor and show as 'x'; nodes on the reconstructed
    path are suffixed with '*'. When a cost field is given, a third table
    shows the step cost of the edge each node's backpointer follows.
    """
    width = strategy.retained_columns()
    lines = []

    for y in range(strategy.height):
        cells = []
        for x in range(width):
            node = strategy.column(x)[y]
            mark = '*' if node.on_path else ' '
            if x == 0:
                cells.append(f"{'x':>7}{mark}")
            else:
                cells.append(f"{node.aggregated_cost.value:+7.2f}{mark}")
        lines.append(' '.join(cells).rstrip())

    lines.append('')

    for y in range(strategy.height):
        cells = []
        for x in range(width):
            parent_row = strategy.column(x)[y].parent_row
            cells.append(f"{'x' if parent_row is None else parent_row:>3}")
        lines.append(' '.join(cells).rstrip())

    if cost_field is None:
        return '\n'.join(lines)

    lines.append('')

    for y in range(strategy.height):
        cells = []
        for x in range(width):
            node = strategy.column(x)[y]
            mark = '*' if node.on_path else ' '
            if node.parent_row is None:
                cells.append(f"{'x':>7}{mark}")
            else:
                parent = strategy.column(x - 1)[node.parent_row]
                cells.append(f"{cost_field.cost(parent, node).value:+7.2f}{mark}")
        lines.append(' '.join(cells).rstrip())

    return '\n'.join(lines)


def plot_memory_profiles(profiles: Dict[str, pd.DataFrame], output_path: str) -> str:
    """
    Plot allocated (net of profiler overhead) and resident memory per sample.

    Args:
        profiles: Mapping of label to a profile loaded with analysis.load_profile
        output_path: Image file to write

    Returns:
        Path to saved plot file
    """
    fig, (ax_alloc, ax_rss) = plt.subplots(1, 2, figsize=(14, 5))

    for label, df in profiles.items():
        net_allocated = (df['allocated'] - df['correction']) / MIB
        ax_alloc.plot(df['id'], net_allocated, label=label)
        ax_rss.plot(df['id'], df['resident'] / MIB, label=label)

    ax_alloc.set_title('Allocated (net of profiler)')
    ax_alloc.set_xlabel('sample')
    ax_alloc.set_ylabel('MiB')
    ax_rss.set_title('Resident')
    ax_rss.set_xlabel('sample')
    ax_rss.set_ylabel('MiB')
    for ax in (ax_alloc, ax_rss):
        ax.grid(True, alpha=0.3)
        if profiles:
            ax.legend()

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output, dpi=150)
    plt.close(fig)

    logger.info(f"Saved memory profile plot to {output}")
    return str(output)
