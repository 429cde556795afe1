#!/usr/bin/env python3
"""
Performance Tracker Module

Timing for the phases of a growth run (local constraints, spatial index
inserts and queries, expansion). History lists are bounded so long runs
cannot grow memory without limit.
"""

import time
import logging
from typing import Dict, Any, List

logger = logging.getLogger(__name__)


class PerformanceTracker:
    """
    Collects per-operation timings and accepted-road throughput.

    Operation names are free-form; the growth engine uses
    ``local_constraints``, ``index_insert`` and ``global_goals``.
    """

    def __init__(self, max_history_size: int = 1000):
        """
        Initialize performance tracker with configurable bounds.

        Args:
            max_history_size: Maximum number of timings kept per operation
        """
        self.max_history_size = max_history_size
        self.reset()

    def reset(self):
        """Reset all performance metrics."""
        self.start_time = time.perf_counter()
        self.operation_times: Dict[str, List[float]] = {}
        self.operation_counts: Dict[str, int] = {}
        self.roads_accepted = 0
        self._current_ops: Dict[str, float] = {}

    def start_operation(self, operation_name: str):
        """Start timing an operation."""
        self._current_ops[operation_name] = time.perf_counter()

    def end_operation(self, operation_name: str):
        """End timing an operation started with ``start_operation``."""
        if operation_name in self._current_ops:
            duration = time.perf_counter() - self._current_ops.pop(operation_name)
            self.record_operation_time(operation_name, duration)

    def record_operation_time(self, operation_name: str, duration: float):
        """Record a duration with bounds checking."""
        times = self.operation_times.setdefault(operation_name, [])
        times.append(duration)
        self.operation_counts[operation_name] = self.operation_counts.get(operation_name, 0) + 1

        # Keep only the most recent entries
        if len(times) > self.max_history_size:
            del times[:-self.max_history_size]

    def record_road(self):
        self.roads_accepted += 1

    def get_summary_stats(self) -> Dict[str, Any]:
        """Get performance summary over the recorded history."""
        total_time = time.perf_counter() - self.start_time

        operation_stats = {}
        for op_name, times in self.operation_times.items():
            if times:
                operation_stats[op_name] = {
                    'count': self.operation_counts[op_name],
                    'recent_total_time': sum(times),
                    'avg_time': sum(times) / len(times),
                    'min_time': min(times),
                    'max_time': max(times)
                }

        return {
            'total_time': total_time,
            'roads_accepted': self.roads_accepted,
            'roads_per_second': self.roads_accepted / total_time if total_time > 0 else 0,
            'operation_stats': operation_stats
        }

    def log_performance_summary(self):
        """Log a human-readable performance summary."""
        stats = self.get_summary_stats()

        logger.info("=== PERFORMANCE SUMMARY ===")
        logger.info(f"Total time: {stats['total_time']:.2f}s")
        logger.info(f"Roads accepted: {stats['roads_accepted']}")
        logger.info(f"Roads per second: {stats['roads_per_second']:.1f}")

        if stats['operation_stats']:
            logger.info("Average time per operation:")
            sorted_ops = sorted(stats['operation_stats'].items(),
                                key=lambda x: x[1]['avg_time'], reverse=True)
            for op_name, op_stats in sorted_ops:
                logger.info(f"  {op_name}: {op_stats['avg_time'] * 1e6:.1f}us over {op_stats['count']} calls")
