#!/usr/bin/env python3
"""
Flattened Tree Storage Strategy

Same ancestry chains as the tree strategy, but the oldest column is dropped
before the next one is allocated, so at most two column arrays ever exist.
Ancestry links that only the dropped column reached are reclaimed at that
point rather than after the new column is built.
"""

from typing import List, Sequence, Tuple

from .tree_strategy import TreeStrategy
from ..core.nodes import TreeNode


class FlattenedStrategy(TreeStrategy):
    """Shared-ownership ancestry chains holding never more than two columns."""

    def __init__(self, width: int, height: int, name: str = "rc+"):
        super().__init__(width, height, name=name)

    def provide_slices(self, iteration: int) -> Tuple[Sequence[TreeNode], List[TreeNode]]:
        self._check_iteration(iteration, self._computed)
        # Demote first: the old previous column loses its last reference here
        self.previous = self.current
        self.current = []
        self.current = self._allocate_column(iteration)
        self._computed += 1
        return self.previous, self.current
