"""Chart graph containing all nodes built from one specification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chartdag._graph import downstream_nodes, topological_sort

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ._node import Node, NodeKind


@dataclass(frozen=True, slots=True)
class ChartGraph:
    """The complete node set of a compiled chart.

    Attributes:
        nodes: All nodes in creation order. The render node is last.
        width: The operator node holding the chart width.
        height: The operator node holding the chart height.
        render: The root node depending on every mark and both dimensions.

    """

    nodes: tuple[Node, ...]
    width: Node
    height: Node
    render: Node

    def get_node(self, node_id: str) -> Node:
        """Get a node by its handle.

        Raises:
            KeyError: If no node has the given handle.

        """
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(node_id)

    def get_nodes_by_kind(self, kind: NodeKind) -> list[Node]:
        """Get all nodes of a specific kind, in creation order."""
        return [node for node in self.nodes if node.kind == kind]

    def dependents(self, node: Node) -> list[Node]:
        """Get the nodes that directly depend on ``node``."""
        return [other for other in self.nodes if any(dep is node for dep in other.dependencies())]

    def topological_order(self) -> list[Node]:
        """Return all nodes with every node after its dependencies."""
        return topological_sort(self.nodes)

    def downstream(self, node: Node | str) -> list[Node]:
        """Return ``node`` and everything that transitively depends on it.

        This is the set of nodes to re-evaluate when ``node`` changes.
        """
        start = self.get_node(node) if isinstance(node, str) else node
        return downstream_nodes(start, self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __contains__(self, node: object) -> bool:
        return any(node is n for n in self.nodes)
