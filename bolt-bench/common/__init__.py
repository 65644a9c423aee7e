"""
Common utilities for the Bolt S3 benchmarks.
"""

from .errors import InvalidRequestError, PerfStatsError, AutoHealTimeoutError, error_response
from .metrics_utils import compute_perf_stats

__all__ = [
    'InvalidRequestError',
    'PerfStatsError',
    'AutoHealTimeoutError',
    'error_response',
    'compute_perf_stats',
]
