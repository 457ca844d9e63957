"""Graph query functions for CLI commands.

This module provides pure functions for querying the chart graph.
These are the functional core - no I/O, no Rich rendering.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from chartdag._ir import Node, NodeKind

if TYPE_CHECKING:
    from chartdag._ir import ChartGraph


@dataclass(frozen=True, slots=True)
class NodeInfo:
    """Basic information about a node for listing."""

    id: str
    kind: NodeKind
    dependency_count: int


@dataclass(frozen=True, slots=True)
class NodeDetail:
    """Detailed information about a node."""

    id: str
    kind: NodeKind
    params: dict[str, str]
    direct_dependencies: list[str]
    direct_dependents: list[str]


def describe_param(value: Any) -> str:
    """Summarize a parameter value, showing referenced nodes by handle."""
    if isinstance(value, Node):
        return f"<{value.id}>"
    if isinstance(value, tuple):
        return "[" + ", ".join(describe_param(v) for v in value) + "]"
    if isinstance(value, Mapping):
        return "{" + ", ".join(f"{k}: {describe_param(v)}" for k, v in value.items()) + "}"
    return repr(value)


def list_nodes(graph: ChartGraph, *, kinds: list[NodeKind] | None = None) -> list[NodeInfo]:
    """List nodes in evaluation order, optionally filtered by kind."""
    nodes = graph.topological_order()
    if kinds:
        nodes = [n for n in nodes if n.kind in kinds]
    return [NodeInfo(id=n.id, kind=n.kind, dependency_count=len(n.dependencies())) for n in nodes]


def get_node_detail(graph: ChartGraph, node_id: str) -> NodeDetail:
    """Get detailed information about a specific node.

    Raises:
        KeyError: If no node has the given handle.

    """
    node = graph.get_node(node_id)
    # Dataset rows can be long, only report their count
    params = {
        name: f"<{len(value)} rows>" if node.kind == NodeKind.DATA and name == "rows" else describe_param(value)
        for name, value in node.params.items()
    }
    return NodeDetail(
        id=node.id,
        kind=node.kind,
        params=params,
        direct_dependencies=[dep.id for dep in node.dependencies()],
        direct_dependents=[dep.id for dep in graph.dependents(node)],
    )


def get_downstream(graph: ChartGraph, node_id: str) -> list[NodeInfo]:
    """Get the nodes to re-evaluate when ``node_id`` changes, in evaluation order.

    Raises:
        KeyError: If no node has the given handle.

    """
    return [
        NodeInfo(id=n.id, kind=n.kind, dependency_count=len(n.dependencies())) for n in graph.downstream(node_id)
    ]
