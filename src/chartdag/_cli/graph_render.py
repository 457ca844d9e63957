"""Rich rendering utilities for graph query commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from chartdag._ir import NodeKind

if TYPE_CHECKING:
    from rich.console import Console

    from .graph_query import NodeDetail, NodeInfo


def render_node_table(nodes: list[NodeInfo], console: Console, *, title: str | None = None) -> None:
    """Render node list as a Rich table.

    Args:
        nodes: List of NodeInfo to render.
        console: Rich Console to output to.
        title: Optional table title.

    """
    if not nodes:
        console.print("[dim]No nodes match the given filters[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan", title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Node")
    table.add_column("Kind")
    table.add_column("Deps", justify="right")

    for index, node in enumerate(nodes, start=1):
        kind_style = _get_kind_style(node.kind)
        table.add_row(
            str(index),
            escape(node.id),
            f"[{kind_style}]{node.kind.upper()}[/{kind_style}]",
            str(node.dependency_count),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(nodes)} nodes[/dim]")


def render_node_detail(detail: NodeDetail, console: Console) -> None:
    """Render detailed node information."""
    console.print(f"[bold]Node:[/bold] {escape(detail.id)}")
    console.print()

    kind_style = _get_kind_style(detail.kind)
    console.print(f"[cyan]Kind:[/cyan] [{kind_style}]{detail.kind.upper()}[/{kind_style}]")
    console.print()

    console.print("[cyan]Params:[/cyan]")
    for name, value in detail.params.items():
        console.print(f"  {escape(name)}: {escape(value)}")
    console.print()

    for label, ids in (("Dependencies", detail.direct_dependencies), ("Dependents", detail.direct_dependents)):
        if ids:
            console.print(f"[cyan]{label} ({len(ids)} direct):[/cyan]")
            for node_id in ids:
                console.print(f"  {escape(node_id)}")
        else:
            console.print(f"[cyan]{label}:[/cyan] [dim]None[/dim]")
        console.print()


def _get_kind_style(kind: NodeKind) -> str:
    """Get Rich style string for a node kind."""
    match kind:
        case NodeKind.OPERATOR:
            return "blue"
        case NodeKind.DATA:
            return "magenta"
        case NodeKind.DATA_MANIPULATION:
            return "green"
        case NodeKind.SCALE:
            return "yellow"
        case NodeKind.MARK:
            return "cyan"
        case NodeKind.RENDER:
            return "bold red"
