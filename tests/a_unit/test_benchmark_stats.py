"""Unit tests for kmerbench.benchmark.stats module."""

from __future__ import annotations

import dataclasses

import pytest

from kmerbench.benchmark.stats import (
    TimingStats,
    compute_stats,
    confidence_interval,
    detect_outliers,
    format_stats,
    quartiles,
)


class TestQuartiles:
    """Tests for quartiles function."""

    def test_even_length(self) -> None:
        """Quartiles of an even-sized sample."""
        assert quartiles([1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0]) == (2.5, 4.5, 6.5)

    def test_odd_length(self) -> None:
        """The median is excluded from both halves."""
        assert quartiles([7.0, 1.0, 3.0, 2.0, 5.0, 4.0, 6.0]) == (2.0, 4.0, 6.0)

    def test_small_sample(self) -> None:
        """Fewer than 4 values collapse to the median."""
        assert quartiles([1.0, 2.0, 3.0]) == (2.0, 2.0, 2.0)


class TestDetectOutliers:
    """Tests for detect_outliers function."""

    def test_no_outliers(self) -> None:
        """Tight data has no outliers."""
        assert detect_outliers([10.0, 11.0, 10.5, 10.2, 10.8, 11.1, 10.3]) == []

    def test_with_outliers(self) -> None:
        """Far values on both sides are detected."""
        outliers = detect_outliers([10.0, 11.0, 10.5, 10.2, 10.8, 1.0, 100.0])
        assert sorted(outliers) == [1.0, 100.0]

    def test_small_sample(self) -> None:
        """Too few values to judge."""
        assert detect_outliers([1.0, 2.0, 100.0]) == []


class TestConfidenceInterval:
    """Tests for confidence_interval function."""

    def test_contains_mean(self) -> None:
        """The interval brackets the sample mean."""
        data = [10.0, 10.5, 9.5, 10.2, 9.8]
        lower, upper = confidence_interval(data)
        assert lower < sum(data) / len(data) < upper

    def test_degenerate(self) -> None:
        """One value or none gives a zero-width interval."""
        assert confidence_interval([4.0]) == (4.0, 4.0)
        assert confidence_interval([]) == (0.0, 0.0)

    def test_narrows_with_samples(self) -> None:
        """More samples give a narrower interval."""
        lo_s, hi_s = confidence_interval([10.0, 10.5, 9.5])
        lo_l, hi_l = confidence_interval(
            [10.0, 10.5, 9.5, 10.2, 9.8, 10.1, 9.9, 10.3, 9.7, 10.0]
        )
        assert hi_l - lo_l < hi_s - lo_s


class TestComputeStats:
    """Tests for compute_stats function."""

    def test_basic(self) -> None:
        """Summary values for a small sample."""
        stats = compute_stats([0.1, 0.11, 0.09, 0.10, 0.105])
        assert stats.mean == pytest.approx(0.101, rel=0.01)
        assert stats.median == 0.10
        assert stats.min == 0.09
        assert stats.max == 0.11
        assert stats.cv > 0
        assert stats.runs == 5

    def test_single_run(self) -> None:
        """A single timing has no spread."""
        stats = compute_stats([0.25])
        assert stats.mean == 0.25
        assert stats.stddev == 0.0
        assert stats.cv == 0.0
        assert stats.mean_ms == pytest.approx(250.0)

    def test_empty(self) -> None:
        """Empty input gives zeros."""
        stats = compute_stats([])
        assert stats.mean == 0.0
        assert stats.runs == 0

    def test_outlier_removal(self) -> None:
        """Outliers are reported and excluded from the mean."""
        times = [10.0, 10.1, 9.9, 10.0, 10.2, 100.0, 1.0]
        stats = compute_stats(times)
        assert 100.0 in stats.outliers
        assert 9.0 < stats.mean < 11.0
        assert list(stats.times) == times

    def test_keep_outliers(self) -> None:
        """remove_outliers=False uses every value."""
        times = [10.0, 10.1, 9.9, 10.0, 10.2, 100.0]
        assert compute_stats(times, remove_outliers=False).max == 100.0

    def test_frozen(self) -> None:
        """TimingStats is immutable."""
        stats = compute_stats([0.1])
        with pytest.raises(dataclasses.FrozenInstanceError):
            stats.mean = 0.5  # type: ignore[misc]


class TestFormatStats:
    """Tests for format_stats function."""

    def test_repeated(self) -> None:
        """Repeated runs show spread and run count."""
        stats = TimingStats(
            times=(0.012, 0.013, 0.011),
            mean=0.012,
            median=0.012,
            stddev=0.001,
            cv=0.0833,
            min=0.011,
            max=0.013,
        )
        assert format_stats(stats) == "12.000ms +/- 1.000ms (CV=8.33%, 3 runs)"

    def test_single(self) -> None:
        """A single run prints only the value."""
        assert format_stats(compute_stats([0.0015])) == "1.500ms"

    def test_seconds(self) -> None:
        """Seconds unit skips the scaling."""
        assert format_stats(compute_stats([2.0]), unit="s") == "2.000s"
