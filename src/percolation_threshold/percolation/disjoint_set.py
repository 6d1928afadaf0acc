"""
Array-backed union-find (disjoint set) structure.

Elements are the integers 0..n-1. Parent and size arrays are numpy integer
arrays; find() compresses paths and union() links the smaller tree under the
larger one, which keeps tree height logarithmic.
"""

import numpy as np


class DisjointSet:
    """
    Weighted quick-union with path compression.

    Example:
        ds = DisjointSet(4)
        ds.union(0, 1)
        ds.connected(0, 1)  # True
    """

    def __init__(self, n: int):
        """
        Initialize n singleton components.

        Args:
            n: Number of elements in the universe (must be > 0)
        """
        if n <= 0:
            raise ValueError(f"Universe size must be > 0, got n = {n}")

        self.parent = np.arange(n, dtype=np.int64)
        self.size = np.ones(n, dtype=np.int64)
        self._count = n

    def __len__(self) -> int:
        return len(self.parent)

    @property
    def count(self) -> int:
        """Number of disjoint components."""
        return self._count

    def _validate(self, x: int) -> None:
        n = len(self.parent)
        if x < 0 or x >= n:
            raise IndexError(f"Element {x} is not between 0 and {n - 1}")

    def find(self, x: int) -> int:
        """
        Return the root of the component containing x.

        Every node on the path from x is re-pointed at the root.
        """
        self._validate(x)
        parent = self.parent

        root = x
        while root != parent[root]:
            root = parent[root]

        while x != root:
            nxt = parent[x]
            parent[x] = root
            x = nxt

        return int(root)

    def union(self, x: int, y: int) -> None:
        """Merge the components containing x and y."""
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x == root_y:
            return

        if self.size[root_x] < self.size[root_y]:
            root_x, root_y = root_y, root_x

        self.parent[root_y] = root_x
        self.size[root_x] += self.size[root_y]
        self._count -= 1

    def connected(self, x: int, y: int) -> bool:
        """True if x and y are in the same component."""
        return self.find(x) == self.find(y)
