"""kmerbench: k-mer counting with a BST and two chained hash tables."""

from __future__ import annotations

from kmerbench.counters import (
    CountRecord,
    Djb2Counter,
    OrderedCounter,
    PolynomialCounter,
    create_counter,
)
from kmerbench.distribution import build_distribution, iter_kmers
from kmerbench.sequence import generate

__all__ = [
    "CountRecord",
    "Djb2Counter",
    "OrderedCounter",
    "PolynomialCounter",
    "build_distribution",
    "create_counter",
    "generate",
    "iter_kmers",
]
