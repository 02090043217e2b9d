"""Graph algorithms used by the dependency analysis."""

from __future__ import annotations

from collections import defaultdict, deque
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Collection, Hashable, Iterable, Mapping

T = TypeVar("T", bound="Hashable")


class CycleError(ValueError):
    """Raised by topological_sort when the graph contains a cycle."""

    def __init__(self, members: list[Hashable]) -> None:
        self.members = members
        super().__init__(f"Cycle detected in graph involving {len(members)} node(s)")


def topological_sort(successors: Mapping[T, Collection[T]]) -> list[T]:
    """Sort a graph topologically (dependencies before dependents).

    Given a graph represented as a mapping from nodes to their successors
    (nodes that depend on them), return nodes in an order where each node
    appears before all nodes that depend on it.

    Args:
        successors: Mapping from node to collection of nodes that depend on it.
            An edge (a -> b) means "b depends on a".

    Returns:
        List of nodes in topological order.

    Raises:
        CycleError: If the graph contains a cycle. ``members`` holds the nodes
            that could not be ordered (the cycles and everything downstream).

    Example:
        >>> # a -> b -> c means c depends on b, b depends on a
        >>> topological_sort({"a": ["b"], "b": ["c"], "c": []})
        ['a', 'b', 'c']

    """
    # Calculate in-degree for each node
    indegree: defaultdict[T, int] = defaultdict(int)
    for node, deps in successors.items():
        indegree[node] = indegree.get(node, 0)
        for dep in deps:
            indegree[dep] += 1

    # Start with nodes that have no predecessors (in-degree 0)
    queue = deque([node for node, deg in indegree.items() if deg == 0])
    order: list[T] = []

    while queue:
        node = queue.popleft()
        order.append(node)
        for successor in successors.get(node, []):
            indegree[successor] -= 1
            if indegree[successor] == 0:
                queue.append(successor)

    if len(order) != len(indegree):
        ordered = set(order)
        raise CycleError([node for node in indegree if node not in ordered])

    return order


def breadth_first_closure(
    seeds: Iterable[T],
    neighbours: Callable[[T], Iterable[T] | None],
) -> tuple[list[T], list[T]]:
    """Collect everything reachable from ``seeds``, seeds included.

    Each node is processed once, so cycles, self-loops and diamonds terminate
    without duplicates.

    Args:
        seeds: Starting nodes.
        neighbours: Returns the direct neighbours of a node, or None when the
            node is unknown. Unknown nodes are still part of the closure.

    Returns:
        Tuple of (visited nodes in visiting order, unknown nodes in visiting order).

    Example:
        >>> breadth_first_closure(["a"], {"a": ["b"], "b": ["a"]}.get)
        (['a', 'b'], [])

    """
    visited: dict[T, None] = {}
    unknown: list[T] = []
    queue = deque(seeds)

    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited[current] = None

        upstream = neighbours(current)
        if upstream is None:
            unknown.append(current)
            continue
        queue.extend(dep for dep in upstream if dep not in visited)

    return list(visited), unknown


class UnionFind(Generic[T]):
    """Disjoint-set forest over a fixed set of elements.

    Elements are mapped to slots of a parent array; ``find`` compresses paths
    by halving and ``union`` attaches the smaller tree under the larger one.

    Example:
        >>> uf = UnionFind(["a", "b", "c"])
        >>> uf.union("a", "b")
        True
        >>> uf.connected("a", "b"), uf.connected("a", "c")
        (True, False)

    """

    __slots__ = ("_elements", "_index", "_parent", "_size")

    def __init__(self, elements: Iterable[T]) -> None:
        self._elements: list[T] = list(dict.fromkeys(elements))
        self._index: dict[T, int] = {element: i for i, element in enumerate(self._elements)}
        self._parent: list[int] = list(range(len(self._elements)))
        self._size: list[int] = [1] * len(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, element: object) -> bool:
        return element in self._index

    def _root(self, i: int) -> int:
        parent = self._parent
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    def find(self, element: T) -> T:
        """Return the representative of the set containing ``element``.

        Raises:
            KeyError: If ``element`` is not part of the structure.

        """
        return self._elements[self._root(self._index[element])]

    def union(self, a: T, b: T) -> bool:
        """Merge the sets containing ``a`` and ``b``.

        Returns:
            True if two distinct sets were merged, False if already joined.

        """
        root_a = self._root(self._index[a])
        root_b = self._root(self._index[b])
        if root_a == root_b:
            return False
        if self._size[root_a] < self._size[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        self._size[root_a] += self._size[root_b]
        return True

    def connected(self, a: T, b: T) -> bool:
        """Check whether ``a`` and ``b`` are in the same set."""
        return self._root(self._index[a]) == self._root(self._index[b])

    def groups(self) -> list[list[T]]:
        """Group elements by set.

        Groups are ordered by their first element's insertion order, and
        elements within a group keep insertion order.
        """
        by_root: dict[int, list[T]] = {}
        for i, element in enumerate(self._elements):
            by_root.setdefault(self._root(i), []).append(element)
        return list(by_root.values())


def connected_components(
    nodes: Iterable[T],
    edges: Iterable[tuple[T, T]],
) -> list[frozenset[T]]:
    """Find connected components, treating edges as undirected.

    Edges with an endpoint outside ``nodes`` are ignored. A node without edges
    forms its own component.

    Example:
        >>> components = connected_components(["a", "b", "c"], [("a", "b"), ("b", "zzz")])
        >>> [sorted(component) for component in components]
        [['a', 'b'], ['c']]

    """
    uf = UnionFind(nodes)
    for src, dst in edges:
        if src in uf and dst in uf:
            uf.union(src, dst)
    return [frozenset(group) for group in uf.groups()]
