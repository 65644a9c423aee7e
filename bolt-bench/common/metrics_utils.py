"""
Shared utilities for benchmark metrics: timing, percentiles and perf-stat summaries.
"""

import time
import logging
from typing import Dict, List, Optional

import pandas as pd

from configuration import MS_PER_SECOND
from common.errors import PerfStatsError

logger = logging.getLogger(__name__)

LATENCY_UNIT = "ms"
THROUGHPUT_UNIT = "objects/ms"
SIZE_UNIT = "bytes"


def now() -> float:
    """High-resolution monotonic timestamp for latency measurement."""
    return time.perf_counter()


def elapsed_ms(start: float) -> float:
    """Milliseconds elapsed since ``start`` (a value returned by :func:`now`)."""
    return (time.perf_counter() - start) * MS_PER_SECOND


def format_value(value: float, unit: str) -> str:
    """Display string with two decimals and a unit suffix, e.g. ``30.00 ms``."""
    return f"{value:.2f} {unit}"


def calculate_percentile_stats(samples: List[float]) -> Dict[str, float]:
    """
    Calculate average, p50 and p90 of a list of samples.

    The list is sorted in place. Percentiles are taken by index, not
    interpolated: p50 is ``samples[n // 2]`` and p90 is ``samples[int(n * 0.9)]``.

    Args:
        samples: Non-empty list of numeric samples

    Returns:
        Dictionary with average, p50 and p90

    Raises:
        PerfStatsError: If ``samples`` is empty
    """
    if not samples:
        raise PerfStatsError("Cannot compute statistics of an empty sample list")

    average = pd.Series(samples, dtype="float64").mean()

    samples.sort()
    count = len(samples)

    return {
        'average': float(average),
        'p50': float(samples[count // 2]),
        'p90': float(samples[int(count * 0.9)]),
    }


def calculate_throughput(op_times: List[float]) -> float:
    """
    Aggregate throughput in objects/ms: number of operations over total elapsed time.

    Raises:
        PerfStatsError: If there are no samples or the total elapsed time is zero
    """
    if not op_times:
        raise PerfStatsError("Cannot compute throughput of an empty sample list")

    total_ms = pd.Series(op_times, dtype="float64").sum()
    if total_ms <= 0:
        raise PerfStatsError(
            f"Cannot derive throughput: {len(op_times)} operations took a total of {total_ms} ms"
        )
    return len(op_times) / total_ms


def _format_stats(stats: Dict[str, float], unit: str) -> Dict[str, str]:
    return {name: format_value(value, unit) for name, value in stats.items()}


def compute_perf_stats(
    op_times: List[float],
    op_tp: Optional[List[float]] = None,
    obj_sizes: Optional[List[int]] = None,
) -> Dict[str, Dict[str, str]]:
    """
    Summarize benchmark samples into display strings.

    Every list passed in is sorted in place. When ``op_tp`` is omitted the
    throughput is derived from the latencies (count / total time) and
    reported as a single ``throughput`` value instead of percentiles.

    Args:
        op_times: Per-operation latencies in milliseconds
        op_tp: Optional per-operation throughput samples in objects/ms
        obj_sizes: Optional object sizes in bytes

    Returns:
        Dictionary with ``latency``, ``throughput`` and, if ``obj_sizes`` was
        given, ``objectSize`` sub-summaries

    Raises:
        PerfStatsError: If a supplied list is empty or the derived throughput
            would divide by zero
    """
    if op_tp is not None:
        tp_perf_stats = _format_stats(calculate_percentile_stats(op_tp), THROUGHPUT_UNIT)
    else:
        tp_perf_stats = {'throughput': format_value(calculate_throughput(op_times), THROUGHPUT_UNIT)}

    perf_stats = {
        'latency': _format_stats(calculate_percentile_stats(op_times), LATENCY_UNIT),
        'throughput': tp_perf_stats,
    }

    if obj_sizes is not None:
        perf_stats['objectSize'] = _format_stats(calculate_percentile_stats(obj_sizes), SIZE_UNIT)

    return perf_stats
