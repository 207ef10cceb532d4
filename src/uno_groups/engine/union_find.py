"""Union-Find (disjoint set) over dense record ids."""

from __future__ import annotations


class UnionFind:
    """Union-Find with path compression and union by rank.

    Elements are the integers ``0..n-1``. ``find`` is iterative so long
    parent chains cannot exhaust the interpreter stack.
    """

    __slots__ = ("_parent", "_rank")

    def __init__(self, n: int) -> None:
        self._parent = list(range(n))
        self._rank = [0] * n

    def __len__(self) -> int:
        return len(self._parent)

    def find(self, x: int) -> int:
        """Find root, then point every node on the walked path at it."""
        parent = self._parent
        root = x
        while parent[root] != root:
            root = parent[root]
        while parent[x] != root:
            parent[x], x = root, parent[x]
        return root

    def union(self, x: int, y: int) -> bool:
        """Merge the sets containing x and y.

        On equal rank y's root is attached under x's root.

        Returns:
            True if two distinct sets were merged.
        """
        rx, ry = self.find(x), self.find(y)
        if rx == ry:
            return False

        rank = self._rank
        if rank[rx] < rank[ry]:
            self._parent[rx] = ry
        elif rank[rx] > rank[ry]:
            self._parent[ry] = rx
        else:
            self._parent[ry] = rx
            rank[rx] += 1
        return True

    def connected(self, x: int, y: int) -> bool:
        return self.find(x) == self.find(y)

    def groups(self) -> dict[int, list[int]]:
        """Return all groups as root -> member indices (ascending)."""
        result: dict[int, list[int]] = {}
        for i in range(len(self._parent)):
            root = self.find(i)
            result.setdefault(root, []).append(i)
        return result
