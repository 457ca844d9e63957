"""Graph algorithms over nodes whose edges are derived on demand."""

from collections.abc import Callable, Hashable, Iterable, Iterator
from enum import Enum, auto
from typing import Any, TypeVar

from chartdag._errors import CyclicDependencyError

T = TypeVar("T", bound=Hashable)


class _Mark(Enum):
    IN_PROGRESS = auto()
    DONE = auto()


def _node_dependencies(node: Any) -> Iterable[Any]:
    return node.dependencies()


def topological_sort(
    nodes: Iterable[T],
    dependencies: Callable[[T], Iterable[T]] = _node_dependencies,
) -> list[T]:
    """Sort nodes topologically (dependencies before dependents).

    Depth-first, post-order. Dependencies that are not part of ``nodes``
    are ignored, which allows sorting any sub-graph. Ties are broken by
    the order in which nodes are first discovered.

    Visitation state lives in a table local to this call, so sorting
    never touches the nodes and concurrent or nested calls do not
    interfere.

    Args:
        nodes: The collection to sort.
        dependencies: Returns the direct dependencies of a node.
            Defaults to ``node.dependencies()``.

    Returns:
        List of nodes in topological order.

    Raises:
        CyclicDependencyError: If the collection contains a cycle.

    Example:
        >>> deps = {"a": [], "b": ["a"], "c": ["b"]}
        >>> topological_sort(["c", "a", "b"], deps.__getitem__)
        ['a', 'b', 'c']

    """
    members = list(dict.fromkeys(nodes))
    in_collection = set(members)
    marks: dict[T, _Mark] = {}
    order: list[T] = []

    # Explicit stack of (node, remaining dependencies) frames, no recursion
    for root in members:
        if root in marks:
            continue
        marks[root] = _Mark.IN_PROGRESS
        stack: list[tuple[T, Iterator[T]]] = [(root, iter(dependencies(root)))]
        while stack:
            node, pending = stack[-1]
            for dep in pending:
                if dep not in in_collection:
                    continue
                mark = marks.get(dep)
                if mark is _Mark.DONE:
                    continue
                if mark is _Mark.IN_PROGRESS:
                    raise CyclicDependencyError(dep)
                marks[dep] = _Mark.IN_PROGRESS
                stack.append((dep, iter(dependencies(dep))))
                break
            else:
                stack.pop()
                marks[node] = _Mark.DONE
                order.append(node)

    return order


def upstream_nodes(
    start: T,
    dependencies: Callable[[T], Iterable[T]] = _node_dependencies,
) -> list[T]:
    """Return ``start`` and every node it transitively depends on.

    Nodes are listed in discovery order, ``start`` first.

    Example:
        >>> deps = {"a": [], "b": ["a"], "c": ["b"], "d": []}
        >>> upstream_nodes("c", deps.__getitem__)
        ['c', 'b', 'a']

    """
    found: dict[T, None] = {start: None}
    frontier = [start]
    while frontier:
        node = frontier.pop()
        for dep in dependencies(node):
            if dep not in found:
                found[dep] = None
                frontier.append(dep)
    return list(found)


def downstream_nodes(
    start: T,
    nodes: Iterable[T],
    dependencies: Callable[[T], Iterable[T]] = _node_dependencies,
) -> list[T]:
    """Return ``start`` and every node that transitively depends on it.

    The closure is grown to a fixed point: a node joins as soon as one of
    its direct dependencies is already included. The result is
    topologically sorted, so ``start`` comes first and each consumer
    follows all of its producers.

    Args:
        start: The node whose consumers are wanted.
        nodes: The full node collection to search.
        dependencies: Returns the direct dependencies of a node.

    Returns:
        The downstream closure of ``start`` in topological order.

    Example:
        >>> deps = {"a": [], "b": ["a"], "c": ["b"], "d": []}
        >>> downstream_nodes("b", ["a", "b", "c", "d"], deps.__getitem__)
        ['b', 'c']

    """
    candidates = list(dict.fromkeys(nodes))
    closure: dict[T, None] = {start: None}

    # Each round adds at least one node or stops, so this is bounded by len(candidates)
    changed = True
    while changed:
        changed = False
        for node in candidates:
            if node in closure:
                continue
            if any(dep in closure for dep in dependencies(node)):
                closure[node] = None
                changed = True

    return topological_sort(closure, dependencies)
