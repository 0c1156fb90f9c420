"""
Memory and Performance Metrics Module

Allocator sampling used to compare backpointer storage strategies, plus
step timing for the sweep.
"""

from .memory_profiler import (
    MemoryProfiler, MemorySample, AllocatorStatsSource, ProcessAllocatorStats, DUMP_HEADER
)
from .performance_tracker import PerformanceTracker
from .rw_lock import ReadWriteLock

__all__ = [
    'MemoryProfiler',
    'MemorySample',
    'AllocatorStatsSource',
    'ProcessAllocatorStats',
    'DUMP_HEADER',
    'PerformanceTracker',
    'ReadWriteLock',
]
