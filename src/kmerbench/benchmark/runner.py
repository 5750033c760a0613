"""Experiment orchestration for the k-mer counting structures.

Provides the harness that:
- Loads experiment suites from YAML
- Generates one shared DNA sequence per length
- Builds every counting structure on identical input for each (n, k)
- Times the builds and collects collision / unique-key counts
- Formats the results as text tables
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import yaml

from kmerbench.benchmark.stats import TimingStats, compute_stats, format_stats
from kmerbench.counters import STRUCTURES, OrderedCounter, create_counter
from kmerbench.distribution import build_distribution
from kmerbench.sequence import generate, generate_many

DEFAULT_LENGTHS = (10_000, 100_000, 1_000_000)
DEFAULT_KS = (5, 6, 7)
PREVIEW_LENGTH = 80


class ConsistencyError(RuntimeError):
    """Counting structures disagreed on the same input."""


@dataclass
class ExperimentSuite:
    """Configuration of an experiment matrix.

    Attributes:
        name: Suite name.
        lengths: Sequence lengths n.
        ks: k-mer sizes.
        structures: Structures to build ("bst", "djb2", "polynomial").
        seed: RNG seed; None for a fresh random sequence on every run.
        lowercase: Generate "acgt" instead of "ACGT".
        repeats: Timed builds per (n, k, structure).
        shared_base: Use prefixes of one base sequence for every length.
            Otherwise each length gets its own sequence from one RNG stream.
        include_teardown: Count BST destruction inside the timed region.
    """

    name: str = "kmer-distribution"
    lengths: list[int] = field(default_factory=lambda: list(DEFAULT_LENGTHS))
    ks: list[int] = field(default_factory=lambda: list(DEFAULT_KS))
    structures: list[str] = field(default_factory=lambda: list(STRUCTURES))
    seed: int | None = None
    lowercase: bool = True
    repeats: int = 1
    shared_base: bool = True
    include_teardown: bool = False

    def __post_init__(self) -> None:
        unknown = [s for s in self.structures if s not in STRUCTURES]
        if unknown:
            raise ValueError(
                f"Unknown structure(s): {', '.join(unknown)} "
                f"(expected {', '.join(STRUCTURES)})"
            )
        if not self.structures:
            raise ValueError("At least one structure is required")
        if self.repeats < 1:
            raise ValueError(f"repeats must be >= 1, got {self.repeats}")
        if any(n < 0 for n in self.lengths):
            raise ValueError("Sequence lengths must be non-negative")
        # Drop duplicates, keeping first-seen order: one trial per (n, k).
        self.lengths = list(dict.fromkeys(self.lengths))
        self.ks = list(dict.fromkeys(self.ks))
        self.structures = list(dict.fromkeys(self.structures))


@dataclass(frozen=True)
class TrialResult:
    """Outcome of building one structure for one (n, k).

    Attributes:
        n: Sequence length.
        k: k-mer size.
        structure: Structure name.
        stats: Build timing over all repeats.
        collisions: Collision count (0 for the BST).
        unique_kmers: Distinct k-mers stored.
    """

    n: int
    k: int
    structure: str
    stats: TimingStats
    collisions: int
    unique_kmers: int


@dataclass(frozen=True)
class TrialRow:
    """One reporting row: all structures for a single (n, k).

    Columns for structures that were not run are None.
    """

    n: int
    k: int
    bst_time_ms: float | None = None
    ht1_time_ms: float | None = None
    ht1_collisions: int | None = None
    ht2_time_ms: float | None = None
    ht2_collisions: int | None = None


@dataclass
class ExperimentProgress:
    """Progress callback information.

    Attributes:
        n: Current sequence length.
        k: Current k.
        structure: Structure being built.
        run: 1-based repeat index.
        total_runs: Repeats per trial.
    """

    n: int
    k: int
    structure: str
    run: int
    total_runs: int


# Type for progress callbacks
ProgressCallback = Callable[[ExperimentProgress], None]


@dataclass
class ExperimentSession:
    """All results of one harness run.

    Attributes:
        suite: Configuration used.
        timestamp: Start time.
        sequences: The input sequence used for each length.
        results: One TrialResult per (n, k, structure), in run order.
    """

    suite: ExperimentSuite
    timestamp: datetime
    sequences: dict[int, str]
    results: list[TrialResult] = field(default_factory=list)

    def result(self, n: int, k: int, structure: str) -> TrialResult | None:
        for r in self.results:
            if (r.n, r.k, r.structure) == (n, k, structure):
                return r
        return None

    def rows(self) -> list[TrialRow]:
        """Collapse results into one TrialRow per (n, k)."""
        rows = []
        for n in self.suite.lengths:
            for k in self.suite.ks:
                bst = self.result(n, k, "bst")
                ht1 = self.result(n, k, "djb2")
                ht2 = self.result(n, k, "polynomial")
                rows.append(
                    TrialRow(
                        n=n,
                        k=k,
                        bst_time_ms=bst.stats.mean_ms if bst else None,
                        ht1_time_ms=ht1.stats.mean_ms if ht1 else None,
                        ht1_collisions=ht1.collisions if ht1 else None,
                        ht2_time_ms=ht2.stats.mean_ms if ht2 else None,
                        ht2_collisions=ht2.collisions if ht2 else None,
                    )
                )
        return rows


def load_suite_config(config_path: Path | str) -> ExperimentSuite:
    """Load an experiment suite from YAML.

    Missing keys keep their ExperimentSuite defaults.

    Args:
        config_path: Path to a suite.yaml file.

    Returns:
        ExperimentSuite configuration.
    """
    with Path(config_path).open() as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{config_path}: invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: expected a mapping at top level")

    known = set(ExperimentSuite.__dataclass_fields__)
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"{config_path}: unknown key(s): {', '.join(unknown)}")

    for key in ("lengths", "ks", "structures"):
        if key in data and not isinstance(data[key], list):
            data[key] = [data[key]]

    return ExperimentSuite(**data)


def prepare_sequences(suite: ExperimentSuite) -> dict[int, str]:
    """Generate the input sequence for every length in the suite.

    With `shared_base`, one sequence of the largest length is generated and
    every length uses its prefix, so all trials see the same bases.
    """
    if not suite.lengths:
        return {}
    if suite.shared_base:
        base = generate(max(suite.lengths), suite.seed, lowercase=suite.lowercase)
        return {n: base[:n] for n in suite.lengths}
    sequences = generate_many(suite.lengths, suite.seed, lowercase=suite.lowercase)
    return dict(zip(suite.lengths, sequences))


def time_build(
    structure: str, sequence: str, k: int, include_teardown: bool = False
) -> tuple[float, int, int]:
    """Build one structure over `sequence` and time it.

    Only construction and population are timed; reading the statistics
    afterwards is not. The BST is always destroyed after the measurement, and
    that teardown is added to the elapsed time when `include_teardown` is set.

    Returns:
        Tuple of (elapsed_seconds, collisions, unique_kmers).
    """
    start = time.perf_counter()
    counter = build_distribution(
        sequence, k, create_counter(structure, table_size=len(sequence))
    )
    elapsed = time.perf_counter() - start

    unique = counter.unique_kmers
    collisions = getattr(counter, "collisions", 0)

    if isinstance(counter, OrderedCounter):
        start = time.perf_counter()
        counter.destroy()
        if include_teardown:
            elapsed += time.perf_counter() - start

    return elapsed, collisions, unique


@dataclass
class ExperimentRunner:
    """Runs an ExperimentSuite.

    Attributes:
        suite: Experiment configuration.
        progress_callback: Optional callback for progress updates.
    """

    suite: ExperimentSuite
    progress_callback: ProgressCallback | None = None

    def run_trial(self, sequence: str, k: int, structure: str) -> TrialResult:
        """Build `structure` for (sequence, k) `suite.repeats` times."""
        times: list[float] = []
        collisions = unique = 0
        for run in range(1, self.suite.repeats + 1):
            if self.progress_callback:
                self.progress_callback(
                    ExperimentProgress(
                        n=len(sequence),
                        k=k,
                        structure=structure,
                        run=run,
                        total_runs=self.suite.repeats,
                    )
                )
            elapsed, collisions, unique = time_build(
                structure, sequence, k, self.suite.include_teardown
            )
            times.append(elapsed)

        return TrialResult(
            n=len(sequence),
            k=k,
            structure=structure,
            stats=compute_stats(times),
            collisions=collisions,
            unique_kmers=unique,
        )

    def run_all(self) -> ExperimentSession:
        """Run every (n, k, structure) trial in the suite.

        Returns:
            Session with all results.

        Raises:
            ConsistencyError: If structures built from the same input report
                different numbers of distinct k-mers.
        """
        session = ExperimentSession(
            suite=self.suite,
            timestamp=datetime.now(),
            sequences=prepare_sequences(self.suite),
        )

        for n in self.suite.lengths:
            sequence = session.sequences[n]
            for k in self.suite.ks:
                trial = [
                    self.run_trial(sequence, k, structure)
                    for structure in self.suite.structures
                ]
                _check_consistency(trial)
                session.results.extend(trial)

        return session


def _check_consistency(trial: list[TrialResult]) -> None:
    counts = {r.structure: r.unique_kmers for r in trial}
    if len(set(counts.values())) > 1:
        first = trial[0]
        detail = ", ".join(f"{name}={count}" for name, count in counts.items())
        raise ConsistencyError(
            f"Distinct k-mer counts differ for n={first.n}, k={first.k}: {detail}"
        )


# (structure, header, width, value getter)
_COLUMNS: list[tuple[str, str, int, Callable[[TrialRow], float | int | None]]] = [
    ("bst", "BST (ms)", 9, lambda r: r.bst_time_ms),
    ("djb2", "HT1 djb2 (ms)", 14, lambda r: r.ht1_time_ms),
    ("djb2", "HT1 coll", 10, lambda r: r.ht1_collisions),
    ("polynomial", "HT2 poly (ms)", 14, lambda r: r.ht2_time_ms),
    ("polynomial", "HT2 coll", 10, lambda r: r.ht2_collisions),
]


def _cell(value: float | int | None, width: int) -> str:
    if value is None:
        return f"{'-':>{width}}"
    if isinstance(value, int):
        return f"{value:>{width}d}"
    return f"{value:>{width}.3f}"


def format_results_table(session: ExperimentSession) -> str:
    """Format session results as one table per sequence length.

    Args:
        session: Session with results.

    Returns:
        Formatted table string.
    """
    columns = [c for c in _COLUMNS if c[0] in session.suite.structures]
    widths = [2] + [c[2] for c in columns]
    rule = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    lines = [
        "k-mer distribution timing: " + ", ".join(session.suite.structures),
        "(Times are in milliseconds)",
        "",
    ]

    rows = session.rows()
    for n in session.suite.lengths:
        sequence = session.sequences[n]
        preview = min(PREVIEW_LENGTH, n)
        lines.append(f"String length n = {n}")
        lines.append(f"DNA prefix (first {preview} bases):")
        lines.append(sequence[:preview])
        lines.append("")

        lines.append(rule)
        header = "| " + f"{'k':>2}"
        for _, title, width, _ in columns:
            header += f" | {title:>{width}}"
        lines.append(header + " |")
        lines.append(rule)

        for row in rows:
            if row.n != n:
                continue
            line = "| " + f"{row.k:>2d}"
            for _, _, width, getter in columns:
                line += " | " + _cell(getter(row), width)
            lines.append(line + " |")

        lines.append(rule)
        lines.append("")

    if session.suite.repeats > 1:
        lines.append("Timing detail:")
        for r in session.results:
            lines.append(
                f"  n={r.n:<8} k={r.k:<3} {r.structure:<11} {format_stats(r.stats)}"
            )

    return "\n".join(lines)
