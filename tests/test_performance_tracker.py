#!/usr/bin/env python3
"""
Unit tests for PerformanceTracker module.
"""

import time
import unittest
from unittest.mock import patch
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from citygrowth.metrics.performance_tracker import PerformanceTracker


class TestPerformanceTracker(unittest.TestCase):
    """Test cases for PerformanceTracker class."""

    def setUp(self):
        """Set up test fixtures."""
        self.tracker = PerformanceTracker(max_history_size=10)

    def test_initialization(self):
        """Test PerformanceTracker initialization."""
        tracker = PerformanceTracker(max_history_size=500)
        self.assertEqual(tracker.max_history_size, 500)
        self.assertIsInstance(tracker.operation_times, dict)
        self.assertIsInstance(tracker.operation_counts, dict)
        self.assertEqual(tracker.roads_accepted, 0)

    def test_reset(self):
        """Test reset functionality."""
        self.tracker.record_operation_time('test', 0.5)
        self.tracker.record_road()
        self.tracker.start_operation('pending')

        self.tracker.reset()

        self.assertEqual(len(self.tracker.operation_times), 0)
        self.assertEqual(len(self.tracker.operation_counts), 0)
        self.assertEqual(self.tracker.roads_accepted, 0)
        # A reset drops operations that were still running
        self.tracker.end_operation('pending')
        self.assertNotIn('pending', self.tracker.operation_times)

    def test_operation_timing(self):
        """Test operation timing functionality."""
        self.tracker.start_operation("test_operation")
        time.sleep(0.01)
        self.tracker.end_operation("test_operation")

        self.assertIn("test_operation", self.tracker.operation_times)
        self.assertEqual(len(self.tracker.operation_times["test_operation"]), 1)
        self.assertGreater(self.tracker.operation_times["test_operation"][0], 0)
        self.assertEqual(self.tracker.operation_counts["test_operation"], 1)

    def test_operation_timing_without_start(self):
        """Test ending operation that was never started."""
        self.tracker.end_operation("nonexistent_operation")
        self.assertNotIn("nonexistent_operation", self.tracker.operation_times)

    def test_operation_time_recording_is_bounded(self):
        """Only the most recent timings are kept; the count keeps growing."""
        for i in range(15):  # More than max_history_size (10)
            self.tracker.record_operation_time("index_insert", float(i))

        self.assertEqual(len(self.tracker.operation_times["index_insert"]), 10)
        expected = [5.0, 6.0, 7.0, 8.0, 9.0, 10.0, 11.0, 12.0, 13.0, 14.0]
        self.assertEqual(self.tracker.operation_times["index_insert"], expected)
        self.assertEqual(self.tracker.operation_counts["index_insert"], 15)

    def test_get_summary_stats_empty(self):
        """Test summary stats with no data."""
        stats = self.tracker.get_summary_stats()

        for key in ['total_time', 'roads_accepted', 'roads_per_second', 'operation_stats']:
            self.assertIn(key, stats)

        self.assertEqual(stats['roads_accepted'], 0)
        self.assertEqual(stats['roads_per_second'], 0)
        self.assertEqual(stats['operation_stats'], {})

    def test_get_summary_stats_with_data(self):
        """Test summary stats with recorded data."""
        for duration in (0.5, 1.0):
            self.tracker.record_operation_time('op1', duration)
        for duration in (0.2, 0.3, 0.4):
            self.tracker.record_operation_time('op2', duration)
        for _ in range(3):
            self.tracker.record_road()

        stats = self.tracker.get_summary_stats()

        self.assertEqual(stats['roads_accepted'], 3)
        self.assertGreater(stats['roads_per_second'], 0)

        op1_stats = stats['operation_stats']['op1']
        self.assertEqual(op1_stats['count'], 2)
        self.assertAlmostEqual(op1_stats['recent_total_time'], 1.5)
        self.assertAlmostEqual(op1_stats['avg_time'], 0.75)
        self.assertAlmostEqual(op1_stats['min_time'], 0.5)
        self.assertAlmostEqual(op1_stats['max_time'], 1.0)

        op2_stats = stats['operation_stats']['op2']
        self.assertEqual(op2_stats['count'], 3)
        self.assertAlmostEqual(op2_stats['avg_time'], 0.3)

    @patch('citygrowth.metrics.performance_tracker.logger')
    def test_log_performance_summary(self, mock_logger):
        """Test performance summary logging."""
        self.tracker.record_operation_time('global_goals', 1e-4)
        self.tracker.record_road()
        self.tracker.record_road()

        self.tracker.log_performance_summary()

        mock_logger.info.assert_called()
        logged_text = ' '.join(str(call) for call in mock_logger.info.call_args_list)

        self.assertIn("PERFORMANCE SUMMARY", logged_text)
        self.assertIn("Total time:", logged_text)
        self.assertIn("Roads accepted: 2", logged_text)
        self.assertIn("global_goals", logged_text)

    def test_multiple_operations_timing(self):
        """Test timing multiple concurrent operations."""
        self.tracker.start_operation("op1")
        self.tracker.start_operation("op2")

        time.sleep(0.01)

        # End them in different order
        self.tracker.end_operation("op2")
        self.tracker.end_operation("op1")

        self.assertEqual(len(self.tracker.operation_times["op1"]), 1)
        self.assertEqual(len(self.tracker.operation_times["op2"]), 1)
        self.assertGreaterEqual(self.tracker.operation_times["op1"][0],
                                self.tracker.operation_times["op2"][0])


if __name__ == '__main__':
    unittest.main()
