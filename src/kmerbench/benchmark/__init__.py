"""Timing harness for the k-mer counting structures.

This package provides comparative benchmarking with:
- Identical input for every structure at a given sequence length
- Build-only timing, optionally repeated with summary statistics
- YAML suite configuration and text table reporting
"""

from __future__ import annotations

from kmerbench.benchmark.runner import (
    ConsistencyError,
    ExperimentRunner,
    ExperimentSession,
    ExperimentSuite,
    TrialResult,
    TrialRow,
    format_results_table,
    load_suite_config,
)
from kmerbench.benchmark.stats import TimingStats, compute_stats

__all__ = [
    "ConsistencyError",
    "ExperimentRunner",
    "ExperimentSession",
    "ExperimentSuite",
    "TimingStats",
    "TrialResult",
    "TrialRow",
    "compute_stats",
    "format_results_table",
    "load_suite_config",
]
