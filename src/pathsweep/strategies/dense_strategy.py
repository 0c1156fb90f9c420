#!/usr/bin/env python3
"""
Dense Storage Strategy

Arena-style storage: every column ever computed is retained, and each
node's backpointer is a plain row index into the column before it.
Memory grows with width x height and nothing is freed until release().
"""

import logging
from typing import List, Sequence, Tuple

from .base_strategy import BaseStorageStrategy
from ..core.errors import InvariantViolation
from ..core.nodes import DenseNode

logger = logging.getLogger(__name__)


class DenseStrategy(BaseStorageStrategy):
    """
    Retains the whole grid and stores predecessor row indices.

    Row indices are only meaningful for strictly adjacent columns: the
    predecessor of a node in column x always lives in column x - 1.
    """

    def __init__(self, width: int, height: int, name: str = "naive", preallocate: bool = False):
        """
        Initialize the dense strategy.

        Args:
            width: Number of columns the sweep will compute
            height: Number of nodes per column
            name: Run name identifying the strategy
            preallocate: Reserve the full column table up front instead of
                growing it column by column
        """
        super().__init__(name, width, height)
        self.preallocate = preallocate
        self.columns: List[List[DenseNode]] = [None] * width if preallocate else []
        self._filled = 0

    def provide_slices(self, iteration: int) -> Tuple[Sequence[DenseNode], List[DenseNode]]:
        self._check_iteration(iteration, self._filled)

        column = [DenseNode(iteration, y) for y in range(self.height)]
        if self.preallocate:
            self.columns[self._filled] = column
        else:
            self.columns.append(column)
        self._filled += 1

        previous = self.columns[self._filled - 2] if self._filled > 1 else []
        return previous, column

    def link(self, parent: DenseNode, child: DenseNode):
        child.parent_row = parent.y

    def terminal_column(self) -> Sequence[DenseNode]:
        if self._filled == 0:
            return []
        return self.columns[self._filled - 1]

    def column(self, x: int) -> Sequence[DenseNode]:
        """Retained column x."""
        if not 0 <= x < self._filled:
            raise IndexError(f"Column {x} is not retained (have {self._filled})")
        return self.columns[x]

    def reconstruct_path(self, terminal: DenseNode) -> List[int]:
        node = terminal
        node.on_path = True
        reverse_path = [node.y]

        for x in range(terminal.x, 0, -1):
            if node.parent_row is None:
                raise InvariantViolation(f"Node ({node.x}, {node.y}) has no backpointer "
                                         f"after {x} computed columns")
            node = self.columns[x - 1][node.parent_row]
            node.on_path = True
            reverse_path.append(node.y)

        reverse_path.reverse()
        return reverse_path

    def retained_columns(self) -> int:
        return self._filled

    def release(self):
        logger.debug(f"Releasing {self._filled} dense columns")
        self.columns = [None] * self.width if self.preallocate else []
        self._filled = 0
