"""
Performance Metrics Module

Timing of growth-run phases.
"""

from .performance_tracker import PerformanceTracker

__all__ = [
    'PerformanceTracker',
]
