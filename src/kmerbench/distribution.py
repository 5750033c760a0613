"""Sliding-window k-mer extraction."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TypeVar

from kmerbench.counters import Djb2Counter, OrderedCounter, PolynomialCounter
from kmerbench.counters.base import KeyedCounter

C = TypeVar("C", bound=KeyedCounter)


def kmer_count(sequence: str, k: int) -> int:
    """Number of k-mers in `sequence` (0 when k <= 0 or k > len)."""
    if k <= 0 or len(sequence) < k:
        return 0
    return len(sequence) - k + 1


def iter_kmers(sequence: str, k: int) -> Iterator[str]:
    """Yield every length-k substring of `sequence`, left to right."""
    for i in range(kmer_count(sequence, k)):
        yield sequence[i : i + k]


def build_distribution(sequence: str, k: int, counter: C) -> C:
    """Insert every k-mer of `sequence` into `counter`.

    Insertion order is left to right, which fixes the shape of a BST.
    Invalid `k` performs no insertions.

    Returns:
        The same counter, populated.
    """
    for kmer in iter_kmers(sequence, k):
        counter.insert(kmer)
    return counter


def build_ordered(sequence: str, k: int) -> OrderedCounter:
    return build_distribution(sequence, k, OrderedCounter.create())


def build_djb2(sequence: str, k: int) -> Djb2Counter:
    # Tables are sized to the sequence length, whatever k is.
    return build_distribution(sequence, k, Djb2Counter(len(sequence)))


def build_polynomial(sequence: str, k: int) -> PolynomialCounter:
    return build_distribution(sequence, k, PolynomialCounter(len(sequence)))
