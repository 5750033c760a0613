"""k-mer counting structures: one BST and two chained hash tables."""

from __future__ import annotations

from kmerbench.counters.base import CountRecord, KeyedCounter, StructureStats
from kmerbench.counters.chained import (
    ChainedCounter,
    ChainEntry,
    Djb2Counter,
    PolynomialCounter,
)
from kmerbench.counters.ordered import OrderedCounter, TreeNode

STRUCTURES = ("bst", "djb2", "polynomial")


def create_counter(structure: str, table_size: int = 0) -> KeyedCounter:
    """Create an empty counter by structure name.

    Args:
        structure: One of "bst", "djb2", "polynomial".
        table_size: Bucket count for the hash tables (ignored by the BST).

    Returns:
        A fresh, empty counter.
    """
    if structure == "bst":
        return OrderedCounter.create()
    if structure == "djb2":
        return Djb2Counter(table_size)
    if structure == "polynomial":
        return PolynomialCounter(table_size)
    raise ValueError(
        f"Unknown structure '{structure}' (expected one of {', '.join(STRUCTURES)})"
    )


__all__ = [
    "STRUCTURES",
    "ChainEntry",
    "ChainedCounter",
    "CountRecord",
    "Djb2Counter",
    "KeyedCounter",
    "OrderedCounter",
    "PolynomialCounter",
    "StructureStats",
    "TreeNode",
    "create_counter",
]
