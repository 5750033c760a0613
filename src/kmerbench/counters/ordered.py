"""Unbalanced binary search tree keyed by k-mer.

Keys are kept in lexicographic order using plain BST insertion with no
rebalancing. Already-sorted input degenerates the tree into a linked chain,
so every walk below uses an explicit loop or stack rather than recursion.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from kmerbench.counters.base import CountRecord, StructureStats


@dataclass(eq=False)
class TreeNode:
    """A BST node.

    Attributes:
        key: The k-mer; ordering key of the tree.
        count: Times the k-mer was inserted.
        left: Subtree of strictly smaller keys.
        right: Subtree of strictly greater keys.
    """

    key: str
    count: int = 1
    left: TreeNode | None = None
    right: TreeNode | None = None


class OrderedCounter:
    """k-mer counter backed by an ordinary binary search tree."""

    name = "bst"

    def __init__(self) -> None:
        self.root: TreeNode | None = None
        self._size = 0

    @classmethod
    def create(cls) -> OrderedCounter:
        """Return an empty tree."""
        return cls()

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[CountRecord]:
        return self.traverse_in_order()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.search(key)

    @property
    def unique_kmers(self) -> int:
        return self._size

    def insert(self, key: str) -> None:
        """Insert `key`, or increment its count if already present."""
        if self.root is None:
            self.root = TreeNode(key)
            self._size += 1
            return

        node = self.root
        while True:
            if key == node.key:
                node.count += 1
                return
            if key < node.key:
                if node.left is None:
                    node.left = TreeNode(key)
                    self._size += 1
                    return
                node = node.left
            else:
                if node.right is None:
                    node.right = TreeNode(key)
                    self._size += 1
                    return
                node = node.right

    def search_node(self, key: str) -> TreeNode | None:
        """Return the node holding `key`, or None."""
        node = self.root
        while node is not None:
            if key == node.key:
                return node
            node = node.left if key < node.key else node.right
        return None

    def search(self, key: str) -> bool:
        return self.search_node(key) is not None

    def count(self, key: str) -> int:
        """Occurrences of `key` (0 when absent)."""
        node = self.search_node(key)
        return node.count if node else 0

    def traverse_in_order(self) -> Iterator[CountRecord]:
        """Yield records in ascending key order.

        Each call returns a fresh iterator, so the traversal can be restarted.
        """
        stack: list[TreeNode] = []
        node = self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield CountRecord(node.key, node.count)
            node = node.right

    def items(self) -> Iterator[CountRecord]:
        return self.traverse_in_order()

    def distribution(self) -> dict[str, int]:
        return {record.key: record.count for record in self.traverse_in_order()}

    def height(self) -> int:
        """Number of nodes on the longest root-to-leaf path."""
        if self.root is None:
            return 0
        best = 0
        stack: list[tuple[TreeNode, int]] = [(self.root, 1)]
        while stack:
            node, depth = stack.pop()
            best = max(best, depth)
            if node.left is not None:
                stack.append((node.left, depth + 1))
            if node.right is not None:
                stack.append((node.right, depth + 1))
        return best

    def stats(self) -> StructureStats:
        return StructureStats(
            structure=self.name,
            unique_kmers=self._size,
            total_count=sum(record.count for record in self.traverse_in_order()),
            height=self.height(),
        )

    def destroy(self) -> None:
        """Sever every child link in post-order and empty the tree.

        Safe to call more than once.
        """
        if self.root is None:
            return

        # Reversed pre-order (node, right, left) gives children before parents.
        order: list[TreeNode] = []
        stack = [self.root]
        while stack:
            node = stack.pop()
            order.append(node)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)

        for node in reversed(order):
            node.left = None
            node.right = None

        self.root = None
        self._size = 0

    def dump(self) -> str:
        """Render the tree as ``key<TAB>count`` lines in key order."""
        return "\n".join(f"{r.key}\t{r.count}" for r in self.traverse_in_order())
