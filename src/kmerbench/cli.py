"""Command-line interface for kmerbench.

Provides the `kmerbench` command with subcommands for:
- Running the comparative timing experiments
- Printing the k-mer distribution of a sequence
- Showing hash values and bucket indexes for keys
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from kmerbench.benchmark.runner import (
    ConsistencyError,
    ExperimentProgress,
    ExperimentRunner,
    ExperimentSuite,
    format_results_table,
    load_suite_config,
)
from kmerbench.counters import STRUCTURES, OrderedCounter, create_counter
from kmerbench.distribution import build_distribution
from kmerbench.hashing import (
    djb2_hash,
    djb2_index,
    polynomial_hash,
    polynomial_index,
)
from kmerbench.sequence import generate


def _int_list(value: str) -> list[int]:
    try:
        return [int(v.strip().replace("_", "")) for v in value.split(",") if v.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected comma-separated integers: {value}"
        ) from None


def _build_suite(args: argparse.Namespace) -> ExperimentSuite:
    suite = load_suite_config(args.suite) if args.suite else ExperimentSuite()

    overrides: dict[str, object] = {}
    if args.lengths:
        overrides["lengths"] = args.lengths
    if args.ks:
        overrides["ks"] = args.ks
    if args.structures:
        overrides["structures"] = [s.strip() for s in args.structures.split(",")]
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.repeats is not None:
        overrides["repeats"] = args.repeats
    if args.independent:
        overrides["shared_base"] = False
    if args.include_teardown:
        overrides["include_teardown"] = True
    if args.uppercase:
        overrides["lowercase"] = False

    if not overrides:
        return suite
    return ExperimentSuite(**{**vars(suite), **overrides})


def cmd_run(args: argparse.Namespace) -> int:
    """Run the timing experiments."""
    if args.suite and not Path(args.suite).exists():
        print(f"Error: Suite configuration not found: {args.suite}")
        return 1

    try:
        suite = _build_suite(args)
    except (OSError, ValueError, TypeError) as e:
        print(f"Error loading suite configuration: {e}")
        return 1

    def progress(p: ExperimentProgress) -> None:
        print(
            f"  [n={p.n} k={p.k}] {p.structure} {p.run}/{p.total_runs}...",
            end="\r",
            flush=True,
        )

    runner = ExperimentRunner(
        suite=suite,
        progress_callback=progress if not args.quiet else None,
    )

    if not args.quiet:
        print(f"Running suite '{suite.name}'")
        print(f"  Lengths:    {', '.join(str(n) for n in suite.lengths)}")
        print(f"  k values:   {', '.join(str(k) for k in suite.ks)}")
        print(f"  Structures: {', '.join(suite.structures)}")
        print(f"  Seed:       {suite.seed if suite.seed is not None else 'random'}")
        print()

    try:
        session = runner.run_all()
    except ConsistencyError as e:
        print(f"\nError: {e}")
        return 1

    if not args.quiet:
        # Clear progress line
        print(" " * 60, end="\r")
    print(format_results_table(session))
    return 0


def cmd_count(args: argparse.Namespace) -> int:
    """Print the k-mer distribution of one sequence."""
    if args.sequence:
        sequence = args.sequence
    elif args.length is not None:
        try:
            sequence = generate(args.length, args.seed, lowercase=args.lowercase)
        except ValueError as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Error: give a SEQUENCE or --length")
        return 1

    counter = build_distribution(
        sequence, args.k, create_counter(args.structure, table_size=len(sequence))
    )

    if args.table:
        print(counter.dump())
    elif isinstance(counter, OrderedCounter):
        for record in counter.traverse_in_order():
            print(f"{record.key}\t{record.count}")
    else:
        for key, count in sorted(counter.distribution().items()):
            print(f"{key}\t{count}")

    stats = counter.stats()
    print("-" * 40)
    print(f"Structure:       {stats.structure}")
    print(f"Unique k-mers:   {stats.unique_kmers}")
    print(f"Total k-mers:    {stats.total_count}")
    if stats.table_size:
        print(f"Table size:      {stats.table_size}")
        print(f"Collisions:      {stats.collisions}")
        print(f"Longest chain:   {stats.longest_chain}")
        print(f"Load factor:     {stats.load_factor:.4f}")
    else:
        print(f"Tree height:     {stats.height}")

    if isinstance(counter, OrderedCounter):
        counter.destroy()
    return 0


def cmd_hash(args: argparse.Namespace) -> int:
    """Show hash values and bucket indexes."""
    if args.size <= 0:
        print("Error: --size must be positive")
        return 1

    print(f"{'Key':<20} {'djb2':>21} {'idx':>8} {'polynomial':>12} {'idx':>8}")
    print("-" * 73)
    for key in args.keys:
        print(
            f"{key:<20} {djb2_hash(key):>21} {djb2_index(key, args.size):>8} "
            f"{polynomial_hash(key):>12} {polynomial_index(key, args.size):>8}"
        )
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="kmerbench",
        description="Compare BST and chained hash tables for k-mer counting",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser("run", help="Run timing experiments")
    run_parser.add_argument(
        "--suite",
        help="Path to suite.yaml configuration",
    )
    run_parser.add_argument(
        "--lengths",
        type=_int_list,
        help="Comma-separated sequence lengths (default: 10000,100000,1000000)",
    )
    run_parser.add_argument(
        "--ks",
        type=_int_list,
        help="Comma-separated k values (default: 5,6,7)",
    )
    run_parser.add_argument(
        "--structures",
        help=f"Comma-separated structures ({','.join(STRUCTURES)})",
    )
    run_parser.add_argument(
        "--seed",
        type=int,
        help="RNG seed (default: unseeded)",
    )
    run_parser.add_argument(
        "--repeats",
        type=int,
        help="Timed builds per trial (default: 1)",
    )
    run_parser.add_argument(
        "--independent",
        action="store_true",
        help="Generate a separate sequence per length instead of shared prefixes",
    )
    run_parser.add_argument(
        "--include-teardown",
        action="store_true",
        help="Include BST destruction in the timed region",
    )
    run_parser.add_argument(
        "--uppercase",
        action="store_true",
        help="Generate ACGT instead of acgt",
    )
    run_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    run_parser.set_defaults(func=cmd_run)

    # count command
    count_parser = subparsers.add_parser("count", help="Print a k-mer distribution")
    count_parser.add_argument("sequence", nargs="?", help="DNA sequence")
    count_parser.add_argument("-k", type=int, required=True, help="k-mer size")
    count_parser.add_argument(
        "--structure",
        choices=STRUCTURES,
        default="bst",
        help="Counting structure (default: bst)",
    )
    count_parser.add_argument(
        "--length",
        type=int,
        help="Generate a random sequence of this length instead",
    )
    count_parser.add_argument("--seed", type=int, help="RNG seed for --length")
    count_parser.add_argument(
        "--lowercase",
        action="store_true",
        help="Generate acgt instead of ACGT",
    )
    count_parser.add_argument(
        "--table",
        action="store_true",
        help="Print the raw structure layout",
    )
    count_parser.set_defaults(func=cmd_count)

    # hash command
    hash_parser = subparsers.add_parser("hash", help="Show hash values for keys")
    hash_parser.add_argument("keys", nargs="+", help="Keys to hash")
    hash_parser.add_argument(
        "--size",
        type=int,
        default=1_000_000,
        help="Table size for bucket indexes (default: 1000000)",
    )
    hash_parser.set_defaults(func=cmd_hash)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
