#!/usr/bin/env python3
"""
Performance Tracker Module

Timing for sweep steps and named operations (slice preparation,
path reconstruction). Step history is bounded to keep long sweeps from
growing the tracker itself, which would skew the memory comparison.
"""

import time
import logging
from typing import Dict, Any

logger = logging.getLogger(__name__)


class PerformanceTracker:
    """Tracks wall-clock time of sweep steps and named operations."""

    def __init__(self, max_history_size: int = 1000):
        """
        Initialize performance tracker with configurable bounds.

        Args:
            max_history_size: Maximum number of step entries to keep
        """
        self.max_history_size = max_history_size
        self.reset()

    def reset(self):
        """Reset all performance metrics."""
        self.start_time = time.perf_counter()
        self.total_steps = 0
        self.step_times = []
        self.operation_times = {}
        self._current_ops = {}

    def start_operation(self, operation_name: str):
        """Start timing an operation."""
        if operation_name not in self.operation_times:
            self.operation_times[operation_name] = []
        self._current_ops[operation_name] = time.perf_counter()

    def end_operation(self, operation_name: str):
        """End timing an operation. Ignored if it was never started."""
        if operation_name in self._current_ops:
            duration = time.perf_counter() - self._current_ops.pop(operation_name)
            self.operation_times[operation_name].append(duration)

    def record_step(self, iteration: int, duration: float):
        """Record a completed sweep step with bounds checking."""
        self.total_steps += 1
        self.step_times.append((iteration, duration))

        if len(self.step_times) > self.max_history_size:
            self.step_times = self.step_times[-self.max_history_size:]

    def get_summary_stats(self) -> Dict[str, Any]:
        """Get performance summary."""
        total_time = time.perf_counter() - self.start_time
        durations = [duration for _, duration in self.step_times]

        operation_stats = {}
        for op_name, times in self.operation_times.items():
            if times:
                operation_stats[op_name] = {
                    'count': len(times),
                    'total_time': sum(times),
                    'avg_time': sum(times) / len(times),
                    'max_time': max(times),
                }

        return {
            'total_time': total_time,
            'total_steps': self.total_steps,
            'avg_step_time': sum(durations) / len(durations) if durations else 0,
            'max_step_time': max(durations) if durations else 0,
            'steps_per_second': self.total_steps / total_time if total_time > 0 else 0,
            'operation_stats': operation_stats,
        }

    def log_performance_summary(self):
        """Log a human-readable performance summary."""
        stats = self.get_summary_stats()

        logger.info("=== SWEEP PERFORMANCE SUMMARY ===")
        logger.info(f"Total time: {stats['total_time']:.2f}s")
        logger.info(f"Total steps: {stats['total_steps']}")
        logger.info(f"Avg step time: {stats['avg_step_time']:.4f}s (max {stats['max_step_time']:.4f}s)")

        for op_name, op_stats in sorted(stats['operation_stats'].items(),
                                        key=lambda x: x[1]['total_time'], reverse=True):
            logger.info(f"  {op_name}: {op_stats['total_time']:.3f}s over {op_stats['count']} calls")
