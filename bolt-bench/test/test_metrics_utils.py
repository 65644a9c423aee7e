"""
Tests for the perf-stats aggregation.
"""

import unittest
import random
import sys
import os

# Add the parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from common.errors import PerfStatsError
from common.metrics_utils import (
    compute_perf_stats,
    calculate_percentile_stats,
    calculate_throughput,
    format_value,
    elapsed_ms,
    now,
)


class TestPercentileStats(unittest.TestCase):
    """Average and index-based percentiles."""

    def test_five_samples(self):
        stats = calculate_percentile_stats([50, 10, 40, 20, 30])
        self.assertEqual(stats, {'average': 30.0, 'p50': 30.0, 'p90': 50.0})

    def test_single_sample(self):
        stats = calculate_percentile_stats([42])
        self.assertEqual(stats, {'average': 42.0, 'p50': 42.0, 'p90': 42.0})

    def test_ten_samples_use_floor_indexes(self):
        # p50 = index 5, p90 = index 9
        stats = calculate_percentile_stats(list(range(10, 0, -1)))
        self.assertEqual(stats['p50'], 6.0)
        self.assertEqual(stats['p90'], 10.0)
        self.assertAlmostEqual(stats['average'], 5.5)

    def test_sorts_in_place(self):
        samples = [3, 1, 2]
        calculate_percentile_stats(samples)
        self.assertEqual(samples, [1, 2, 3])

    def test_empty_samples_raise(self):
        with self.assertRaises(PerfStatsError):
            calculate_percentile_stats([])

    def test_average_between_min_and_max(self):
        rng = random.Random(7)
        for _ in range(50):
            samples = [rng.uniform(0, 500) for _ in range(rng.randint(2, 40))]
            low, high = min(samples), max(samples)
            stats = calculate_percentile_stats(samples)
            self.assertGreaterEqual(stats['average'], low - 1e-9)
            self.assertLessEqual(stats['average'], high + 1e-9)
            self.assertLessEqual(stats['p50'], stats['p90'])


class TestThroughput(unittest.TestCase):
    """Throughput derived from latencies."""

    def test_count_over_total_time(self):
        self.assertAlmostEqual(calculate_throughput([1, 1, 1, 1]), 1.0)
        self.assertAlmostEqual(calculate_throughput([2.0, 6.0]), 0.25)

    def test_zero_total_time_raises(self):
        with self.assertRaises(PerfStatsError):
            calculate_throughput([0, 0, 0])

    def test_empty_raises(self):
        with self.assertRaises(PerfStatsError):
            calculate_throughput([])


class TestComputePerfStats(unittest.TestCase):
    """Formatted perf-stat summaries."""

    def test_latency_with_derived_throughput(self):
        stats = compute_perf_stats([10, 20, 30, 40, 50])

        self.assertEqual(stats['latency'], {
            'average': '30.00 ms',
            'p50': '30.00 ms',
            'p90': '50.00 ms',
        })
        self.assertEqual(stats['throughput'], {'throughput': '0.03 objects/ms'})
        self.assertNotIn('objectSize', stats)

    def test_derived_throughput_of_unit_latencies(self):
        stats = compute_perf_stats([1, 1, 1, 1])
        self.assertEqual(stats['throughput'], {'throughput': '1.00 objects/ms'})

    def test_single_sample(self):
        stats = compute_perf_stats([42])
        self.assertEqual(stats['latency']['average'], '42.00 ms')
        self.assertEqual(stats['latency']['p50'], '42.00 ms')
        self.assertEqual(stats['latency']['p90'], '42.00 ms')

    def test_explicit_throughput_samples(self):
        stats = compute_perf_stats([10, 20], op_tp=[5.0, 1.5])
        self.assertEqual(stats['throughput'], {
            'average': '3.25 objects/ms',
            'p50': '5.00 objects/ms',
            'p90': '5.00 objects/ms',
        })

    def test_object_sizes(self):
        stats = compute_perf_stats([1, 2, 3], obj_sizes=[300, 100, 200])
        self.assertEqual(stats['objectSize'], {
            'average': '200.00 bytes',
            'p50': '200.00 bytes',
            'p90': '300.00 bytes',
        })

    def test_empty_object_sizes_raise(self):
        with self.assertRaises(PerfStatsError):
            compute_perf_stats([1, 2], obj_sizes=[])

    def test_zero_latencies_raise(self):
        with self.assertRaises(PerfStatsError):
            compute_perf_stats([0, 0])


class TestTiming(unittest.TestCase):

    def test_format_value(self):
        self.assertEqual(format_value(3.14159, 'ms'), '3.14 ms')
        self.assertEqual(format_value(7, 'bytes'), '7.00 bytes')

    def test_elapsed_ms_is_non_negative(self):
        start = now()
        self.assertGreaterEqual(elapsed_ms(start), 0.0)


if __name__ == '__main__':
    unittest.main()
