"""Summary statistics for repeated build timings.

A trial can be repeated several times on the same input; this module reduces
the raw timings to a single record with:
- mean, median and standard deviation
- coefficient of variation (stddev/mean)
- IQR outlier detection
- 95% confidence interval for the mean
"""

from __future__ import annotations

import math
import statistics
from dataclasses import dataclass, field

# Two-tailed 95% t critical values, keyed by sample size.
_T_95 = {
    2: 12.706,
    3: 4.303,
    4: 3.182,
    5: 2.776,
    6: 2.571,
    7: 2.447,
    8: 2.365,
    9: 2.306,
    10: 2.262,
    15: 2.145,
    20: 2.093,
    30: 2.045,
    50: 2.009,
    100: 1.984,
}


@dataclass(frozen=True)
class TimingStats:
    """Timing summary of one trial.

    Attributes:
        times: Raw build times in seconds, in run order.
        mean: Mean of the retained times.
        median: Median of the retained times.
        stddev: Sample standard deviation (0 for a single run).
        cv: Coefficient of variation.
        min: Fastest retained time.
        max: Slowest retained time.
        outliers: Times excluded by the IQR rule.
        confidence_95: 95% confidence interval for the mean.
    """

    times: tuple[float, ...]
    mean: float
    median: float
    stddev: float
    cv: float
    min: float
    max: float
    outliers: tuple[float, ...] = field(default_factory=tuple)
    confidence_95: tuple[float, float] = field(default_factory=lambda: (0.0, 0.0))

    @property
    def mean_ms(self) -> float:
        return self.mean * 1000.0

    @property
    def runs(self) -> int:
        return len(self.times)


def quartiles(data: list[float]) -> tuple[float, float, float]:
    """Return (Q1, median, Q3) using medians of the lower and upper halves.

    With fewer than 4 values every quartile is the median.
    """
    if len(data) < 4:
        med = statistics.median(data)
        return med, med, med

    ordered = sorted(data)
    half = len(ordered) // 2
    lower = ordered[:half]
    upper = ordered[half + len(ordered) % 2 :]
    return statistics.median(lower), statistics.median(ordered), statistics.median(upper)


def detect_outliers(data: list[float], factor: float = 1.5) -> list[float]:
    """Values outside ``[Q1 - factor*IQR, Q3 + factor*IQR]``."""
    if len(data) < 4:
        return []
    q1, _, q3 = quartiles(data)
    spread = factor * (q3 - q1)
    return [x for x in data if x < q1 - spread or x > q3 + spread]


def confidence_interval(data: list[float]) -> tuple[float, float]:
    """95% confidence interval for the mean using a t approximation."""
    n = len(data)
    if n < 2:
        value = data[0] if data else 0.0
        return value, value

    mean = statistics.mean(data)
    stderr = statistics.stdev(data) / math.sqrt(n)
    t = next((_T_95[size] for size in sorted(_T_95) if n <= size), 1.96)
    return mean - t * stderr, mean + t * stderr


def compute_stats(times: list[float], remove_outliers: bool = True) -> TimingStats:
    """Summarize timing measurements (seconds).

    Args:
        times: Raw measurements; may be empty.
        remove_outliers: Exclude IQR outliers from the summary values.

    Returns:
        TimingStats; all zeros for empty input.
    """
    if not times:
        return TimingStats(
            times=(), mean=0.0, median=0.0, stddev=0.0, cv=0.0, min=0.0, max=0.0
        )

    outliers = detect_outliers(times)
    kept = times
    if remove_outliers and outliers:
        rejected = set(outliers)
        kept = [t for t in times if t not in rejected]
        if len(kept) < 2:
            kept = times

    mean = statistics.mean(kept)
    stddev = statistics.stdev(kept) if len(kept) > 1 else 0.0

    return TimingStats(
        times=tuple(times),
        mean=mean,
        median=statistics.median(kept),
        stddev=stddev,
        cv=stddev / mean if mean > 0 else 0.0,
        min=min(kept),
        max=max(kept),
        outliers=tuple(outliers),
        confidence_95=confidence_interval(kept),
    )


def format_stats(stats: TimingStats, unit: str = "ms") -> str:
    """Format like ``"12.3ms +/- 0.4ms (CV=3.25%, 5 runs)"``.

    A single run prints just the value.
    """
    scale = 1000.0 if unit == "ms" else 1.0
    mean = stats.mean * scale
    if stats.runs <= 1:
        return f"{mean:.3f}{unit}"
    stddev = stats.stddev * scale
    return (
        f"{mean:.3f}{unit} +/- {stddev:.3f}{unit} "
        f"(CV={stats.cv * 100:.2f}%, {stats.runs} runs)"
    )
