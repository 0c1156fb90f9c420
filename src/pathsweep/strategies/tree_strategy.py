#!/usr/bin/env python3
"""
Tree Storage Strategy

Only the previous and current columns are held as arrays. Each node's
backpointer is a shared reference into an ancestry chain; path prefixes
that several nodes agree on are stored once, and a link disappears when no
surviving node references it any more.
"""

import logging
from typing import List, Sequence, Tuple

from .base_strategy import BaseStorageStrategy
from ..core.errors import InvariantViolation
from ..core.nodes import AncestryLink, TreeNode

logger = logging.getLogger(__name__)


class TreeStrategy(BaseStorageStrategy):
    """
    Shared-ownership ancestry chains with a rotating pair of columns.

    The new column is allocated before the old previous column is let go,
    so three columns exist for a moment on every step.
    """

    def __init__(self, width: int, height: int, name: str = "rc"):
        super().__init__(name, width, height)
        self.previous: List[TreeNode] = []
        self.current: List[TreeNode] = []
        self._computed = 0

    def _allocate_column(self, iteration: int) -> List[TreeNode]:
        return [TreeNode(iteration, y) for y in range(self.height)]

    def provide_slices(self, iteration: int) -> Tuple[Sequence[TreeNode], List[TreeNode]]:
        self._check_iteration(iteration, self._computed)
        column = self._allocate_column(iteration)
        self.previous, self.current = self.current, column
        self._computed += 1
        return self.previous, self.current

    def link(self, parent: TreeNode, child: TreeNode):
        child.ancestry = AncestryLink(parent.y, parent.ancestry)

    def terminal_column(self) -> Sequence[TreeNode]:
        return self.current

    def reconstruct_path(self, terminal: TreeNode) -> List[int]:
        if terminal.x > 0 and terminal.ancestry is None:
            raise InvariantViolation(f"Node ({terminal.x}, {terminal.y}) has no backpointer "
                                     f"after {terminal.x} computed columns")

        reverse_path = [terminal.y]
        link = terminal.ancestry
        while link is not None:
            reverse_path.append(link.row)
            link = link.parent

        if len(reverse_path) != terminal.x + 1:
            raise InvariantViolation(f"Ancestry of node ({terminal.x}, {terminal.y}) covers "
                                     f"{len(reverse_path)} columns, expected {terminal.x + 1}")

        reverse_path.reverse()
        return reverse_path

    def retained_columns(self) -> int:
        return sum(1 for column in (self.previous, self.current) if column)

    def release(self):
        logger.debug(f"Releasing tree columns held by '{self.name}'")
        self.previous = []
        self.current = []
        self._computed = 0
