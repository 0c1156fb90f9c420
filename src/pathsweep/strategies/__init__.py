#!/usr/bin/env python3
"""
Strategies Module for Backpointer Storage

Interchangeable ways to store the per-node backpointer of the column sweep.
All strategies follow the BaseStorageStrategy interface; create_strategy()
maps the run names of the command line tool onto them.
"""

from typing import List

from .base_strategy import BaseStorageStrategy
from .dense_strategy import DenseStrategy
from .tree_strategy import TreeStrategy
from .flattened_strategy import FlattenedStrategy

STRATEGY_NAMES = ('naive', 'linear', 'rc', 'rc+')


def create_strategy(name: str, width: int, height: int) -> BaseStorageStrategy:
    """
    Build the storage strategy registered under a run name.

    Args:
        name: One of STRATEGY_NAMES
        width: Number of columns
        height: Nodes per column

    Returns:
        Fresh strategy instance
    """
    if name == 'naive':
        return DenseStrategy(width, height, name=name)
    if name == 'linear':
        return DenseStrategy(width, height, name=name, preallocate=True)
    if name == 'rc':
        return TreeStrategy(width, height, name=name)
    if name == 'rc+':
        return FlattenedStrategy(width, height, name=name)
    raise ValueError(f"Unknown strategy '{name}', expected one of {list(STRATEGY_NAMES)}")


def available_strategies() -> List[str]:
    """Run names accepted by create_strategy()."""
    return list(STRATEGY_NAMES)


__all__ = [
    'BaseStorageStrategy',
    'DenseStrategy',
    'TreeStrategy',
    'FlattenedStrategy',
    'STRATEGY_NAMES',
    'create_strategy',
    'available_strategies',
]
