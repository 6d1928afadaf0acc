"""
N-by-N site percolation grid.

Sites are addressed by 1-indexed (row, col). Each site maps to the union-find
element N*(row-1) + col; element 0 is a virtual top site and element N*N+1 a
virtual bottom site. Every open site in row 1 is joined to the top sentinel and
every open site in row N to the bottom sentinel, so the grid percolates exactly
when the two sentinels share a component.
"""

from typing import List

import numpy as np

from .disjoint_set import DisjointSet


class PercolationGrid:
    """
    Site percolation state for a square grid, all sites initially blocked.

    Example:
        grid = PercolationGrid(2)
        grid.open(1, 1)
        grid.open(2, 1)
        grid.percolates()  # True
    """

    def __init__(self, n: int):
        """
        Args:
            n: Grid side length (must be > 0)
        """
        if n <= 0:
            raise ValueError(f"Cannot create a grid of size <= 0, got n = {n}")

        self.n = n
        self.sites = np.zeros((n, n), dtype=bool)
        self.uf = DisjointSet(n * n + 2)
        self.top = 0
        self.bottom = n * n + 1
        self._open_count = 0

    @property
    def number_of_open_sites(self) -> int:
        return self._open_count

    def _validate(self, i: int, j: int) -> None:
        if i < 1 or i > self.n:
            raise IndexError(f"Row index out of bounds: i = {i} (expected 1..{self.n})")
        if j < 1 or j > self.n:
            raise IndexError(f"Column index out of bounds: j = {j} (expected 1..{self.n})")

    def _site_id(self, i: int, j: int) -> int:
        return self.n * (i - 1) + j

    def open(self, i: int, j: int) -> None:
        """
        Open site (i, j) if it is not open already.

        The site is joined to the top and bottom sentinels when it lies in the
        first or last row, and to each of its open neighbours.
        """
        self._validate(i, j)
        if self.sites[i - 1, j - 1]:
            return

        self.sites[i - 1, j - 1] = True
        self._open_count += 1

        site = self._site_id(i, j)
        if i == 1:
            self.uf.union(site, self.top)
        if i == self.n:
            self.uf.union(site, self.bottom)

        for ni, nj in ((i - 1, j), (i + 1, j), (i, j - 1), (i, j + 1)):
            if 1 <= ni <= self.n and 1 <= nj <= self.n and self.sites[ni - 1, nj - 1]:
                self.uf.union(site, self._site_id(ni, nj))

    def is_open(self, i: int, j: int) -> bool:
        self._validate(i, j)
        return bool(self.sites[i - 1, j - 1])

    def is_full(self, i: int, j: int) -> bool:
        """
        Is site (i, j) connected to the top row through open sites?

        Only open sites are ever joined in the union-find, so connectivity to
        the top sentinel alone decides fullness.
        """
        self._validate(i, j)
        return self.uf.connected(self.top, self._site_id(i, j))

    def percolates(self) -> bool:
        """Does an open path join the top row to the bottom row?"""
        return self.uf.connected(self.top, self.bottom)

    def render(self) -> str:
        """
        Text picture of the grid, one row per line.

        'F' marks a full site, 'O' an open site that is not full and 'B' a
        blocked site.
        """
        lines: List[str] = []
        for i in range(1, self.n + 1):
            row = []
            for j in range(1, self.n + 1):
                if self.is_full(i, j):
                    row.append('F')
                elif self.sites[i - 1, j - 1]:
                    row.append('O')
                else:
                    row.append('B')
            lines.append(' '.join(row))
        return '\n'.join(lines)
