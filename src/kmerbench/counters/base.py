"""Shared types for the k-mer counting structures."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class CountRecord:
    """A key and the number of times it was inserted.

    Attributes:
        key: The k-mer.
        count: Occurrences seen so far (always >= 1).
    """

    key: str
    count: int


@dataclass(frozen=True)
class StructureStats:
    """Structural summary of a populated counter.

    Attributes:
        structure: Structure identifier ("bst", "djb2", "polynomial").
        unique_kmers: Number of distinct keys stored.
        total_count: Sum of all counts (equals the number of inserts).
        collisions: Inserts that landed on a non-empty bucket (0 for the BST).
        table_size: Number of buckets (0 for the BST).
        occupied_buckets: Buckets holding at least one key (0 for the BST).
        longest_chain: Longest bucket chain (0 for the BST).
        height: Tree height (0 for hash tables and for an empty tree).
    """

    structure: str
    unique_kmers: int
    total_count: int
    collisions: int = 0
    table_size: int = 0
    occupied_buckets: int = 0
    longest_chain: int = 0
    height: int = 0

    @property
    def load_factor(self) -> float:
        """Distinct keys per bucket."""
        if self.table_size == 0:
            return 0.0
        return self.unique_kmers / self.table_size


class KeyedCounter(Protocol):
    """Insert-or-increment counter over string keys."""

    name: str

    def insert(self, key: str) -> None: ...

    def search(self, key: str) -> bool: ...

    def items(self) -> Iterator[CountRecord]: ...

    def distribution(self) -> dict[str, int]: ...

    def stats(self) -> StructureStats: ...

    @property
    def unique_kmers(self) -> int: ...
