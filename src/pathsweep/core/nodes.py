#!/usr/bin/env python3
"""
Grid Node Types

Node representations used by the storage strategies. Every node carries its
column/row and the aggregated cost of the cheapest path reaching it; the
backpointer shape is strategy specific.
"""

from typing import NamedTuple, Optional

from .score import Score


class GridNode:
    """Common node state read by the simulation engine and cost fields."""

    __slots__ = ('x', 'y', 'aggregated_cost')

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        self.aggregated_cost = Score.ZERO

    def __repr__(self):
        return f"{self.__class__.__name__}(x={self.x}, y={self.y}, cost={self.aggregated_cost.value:.4f})"


class DenseNode(GridNode):
    """Node whose backpointer is a row index into the preceding retained column."""

    __slots__ = ('parent_row', 'on_path')

    def __init__(self, x: int, y: int):
        super().__init__(x, y)
        self.parent_row: Optional[int] = None
        self.on_path = False


class AncestryLink(NamedTuple):
    """
    One link of a shared ancestry chain.

    Links are immutable once created and never point forward, so the chain
    is acyclic and a link is freed as soon as its last holder drops it.
    """
    row: int
    parent: Optional['AncestryLink']


class TreeNode(GridNode):
    """Node whose backpointer is a shared reference into an ancestry chain."""

    __slots__ = ('ancestry',)

    def __init__(self, x: int, y: int):
        super().__init__(x, y)
        self.ancestry: Optional[AncestryLink] = None
