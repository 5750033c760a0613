"""Separate-chaining hash tables keyed by k-mer.

Both variants share one fixed-size table layout and one collision policy and
differ only in the hash function, so collision counts can be compared with
the layout held constant. Tables are never resized.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from kmerbench.counters.base import CountRecord, StructureStats
from kmerbench.hashing import djb2_index, polynomial_index


@dataclass(eq=False)
class ChainEntry:
    """Mutable (key, count) cell owned by a bucket."""

    key: str
    count: int = 1


class ChainedCounter:
    """Fixed-size separate-chaining table.

    Subclasses provide `index_for`. A bucket is a list of entries kept in
    insertion order; a key appears at most once per bucket.

    Attributes:
        table_size: Number of buckets.
        collisions: Inserts that arrived at a non-empty bucket.
    """

    name = "chained"

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"Table size must be non-negative, got {size}")
        # A zero-length sequence still gets one bucket so inserts stay total.
        self.table_size = max(size, 1)
        self.table: list[list[ChainEntry] | None] = [None] * self.table_size
        self.collisions = 0

    def index_for(self, key: str) -> int:
        raise NotImplementedError

    def insert(self, key: str) -> None:
        """Insert `key`, or increment its count if already chained."""
        index = self.index_for(key)
        bucket = self.table[index]

        if bucket is None:
            self.table[index] = [ChainEntry(key)]
            return

        # Any arrival at an occupied slot counts, repeat or not.
        self.collisions += 1
        for entry in bucket:
            if entry.key == key:
                entry.count += 1
                return
        bucket.append(ChainEntry(key))

    def _find(self, key: str) -> ChainEntry | None:
        bucket = self.table[self.index_for(key)]
        if bucket is None:
            return None
        for entry in bucket:
            if entry.key == key:
                return entry
        return None

    def search(self, key: str) -> bool:
        return self._find(key) is not None

    def count(self, key: str) -> int:
        """Occurrences of `key` (0 when absent)."""
        entry = self._find(key)
        return entry.count if entry else 0

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.search(key)

    def __len__(self) -> int:
        return self.unique_kmers

    def __iter__(self) -> Iterator[CountRecord]:
        return self.items()

    def buckets(self) -> Iterator[tuple[int, list[ChainEntry]]]:
        """Yield ``(index, chain)`` for every non-empty bucket."""
        for index, bucket in enumerate(self.table):
            if bucket:
                yield index, bucket

    def items(self) -> Iterator[CountRecord]:
        """Yield records in bucket order, then chain order."""
        for _, bucket in self.buckets():
            for entry in bucket:
                yield CountRecord(entry.key, entry.count)

    def get_collisions(self) -> int:
        return self.collisions

    @property
    def unique_kmers(self) -> int:
        return sum(len(bucket) for _, bucket in self.buckets())

    def get_unique_kmers(self) -> int:
        return self.unique_kmers

    def distribution(self) -> dict[str, int]:
        """Mapping of every key to its count; no ordering guarantee."""
        return {record.key: record.count for record in self.items()}

    def get_distribution(self) -> dict[str, int]:
        return self.distribution()

    def stats(self) -> StructureStats:
        chain_lengths = [len(bucket) for _, bucket in self.buckets()]
        return StructureStats(
            structure=self.name,
            unique_kmers=sum(chain_lengths),
            total_count=sum(record.count for record in self.items()),
            collisions=self.collisions,
            table_size=self.table_size,
            occupied_buckets=len(chain_lengths),
            longest_chain=max(chain_lengths, default=0),
        )

    def dump(self) -> str:
        """Render non-empty buckets as ``Index i: [key:count] -> ...`` lines."""
        lines = []
        for index, bucket in self.buckets():
            chain = " -> ".join(f"[{e.key}:{e.count}]" for e in bucket)
            lines.append(f"Index {index}: {chain}")
        return "\n".join(lines)


class Djb2Counter(ChainedCounter):
    """Chained table indexed by the 64-bit djb2 hash."""

    name = "djb2"

    def index_for(self, key: str) -> int:
        return djb2_index(key, self.table_size)


class PolynomialCounter(ChainedCounter):
    """Chained table indexed by the 32-bit polynomial string hash."""

    name = "polynomial"

    def index_for(self, key: str) -> int:
        return polynomial_index(key, self.table_size)
