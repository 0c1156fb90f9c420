#!/usr/bin/env python3
"""
Base Strategy Module for Backpointer Storage

Provides the abstract base class for all backpointer storage strategies.
A strategy owns node storage: it decides how the previous and current
columns are materialized and retained, how the winning predecessor is
recorded, and how the minimum-cost path is walked back afterwards.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple, Dict, Any

from ..core.nodes import GridNode

logger = logging.getLogger(__name__)


class BaseStorageStrategy(ABC):
    """
    Abstract base class for backpointer storage strategies.

    The simulation engine only calls provide_slices() and link(); everything
    else is used by the run driver once the sweep is complete.
    """

    def __init__(self, name: str, width: int, height: int):
        """
        Initialize the strategy.

        Args:
            name: Run name identifying the strategy
            width: Number of columns the sweep will compute
            height: Number of nodes per column
        """
        if width <= 0:
            raise ValueError(f"Grid width must be positive, got {width}")
        if height <= 0:
            raise ValueError(f"Grid height must be positive, got {height}")

        self.name = name
        self.width = width
        self.height = height

        logger.debug(f"Initialized strategy '{self.name}' for a {width}x{height} grid")

    @abstractmethod
    def provide_slices(self, iteration: int) -> Tuple[Sequence[GridNode], List[GridNode]]:
        """
        Materialize the columns for one sweep iteration.

        Args:
            iteration: Column index about to be computed

        Returns:
            (previous, current): the read-only previous column (empty at
            iteration 0) and the freshly allocated current column
        """
        raise NotImplementedError("Subclasses must implement provide_slices")

    @abstractmethod
    def link(self, parent: GridNode, child: GridNode):
        """Record parent as the winning predecessor of child."""
        raise NotImplementedError("Subclasses must implement link")

    @abstractmethod
    def terminal_column(self) -> Sequence[GridNode]:
        """The most recently computed column."""
        raise NotImplementedError("Subclasses must implement terminal_column")

    @abstractmethod
    def reconstruct_path(self, terminal: GridNode) -> List[int]:
        """
        Walk the backpointers from terminal back to column 0.

        Returns:
            Row indices ordered from column 0 to terminal.x, one per column

        Raises:
            InvariantViolation: if a backpointer is missing past column 0
        """
        raise NotImplementedError("Subclasses must implement reconstruct_path")

    @abstractmethod
    def retained_columns(self) -> int:
        """Number of column arrays the strategy currently holds."""
        raise NotImplementedError("Subclasses must implement retained_columns")

    @abstractmethod
    def release(self):
        """Drop every column the strategy holds."""
        raise NotImplementedError("Subclasses must implement release")

    def _check_iteration(self, iteration: int, computed: int):
        """Reject iterations out of sweep order or past the grid width."""
        if iteration != computed:
            raise ValueError(f"Columns must be computed in order: expected iteration "
                             f"{computed}, got {iteration}")
        if computed >= self.width:
            raise ValueError(f"Grid has only {self.width} columns, cannot compute column {iteration}")

    def select_terminal(self) -> GridNode:
        """Minimum-cost node of the last column, first one on ties."""
        column = self.terminal_column()
        if not column:
            raise ValueError(f"Strategy '{self.name}' has no computed column to select from")
        return min(column, key=lambda node: node.aggregated_cost)

    def get_strategy_info(self) -> Dict[str, Any]:
        """Get information about this strategy for logging and reports."""
        return {
            'name': self.name,
            'type': self.__class__.__name__,
            'width': self.width,
            'height': self.height,
            'retained_columns': self.retained_columns(),
            'description': self.__doc__.strip().split('\n')[0] if self.__doc__ else "No description"
        }
