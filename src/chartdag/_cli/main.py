import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from chartdag._compile import compile_chart
from chartdag._errors import ChartError
from chartdag._io import load_chart_spec
from chartdag._ir import ChartGraph, NodeKind, build_chart_graph
from chartdag._render import render_svg

from .config import ChartdagConfig, ConfigError, get_config
from .graph_query import get_downstream, get_node_detail, list_nodes
from .graph_render import render_node_detail, render_node_table

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

SpecArgument = Annotated[
    Path | None,
    typer.Argument(help="Path to a JSON or TOML chart specification (defaults to the configured spec)"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Chartdag CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _get_config() -> ChartdagConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _resolve_spec_path(spec: Path | None, config: ChartdagConfig) -> Path:
    if spec is not None:
        return spec
    if config.spec is None:
        err_console.print("[red]Error: No chart specification given and no spec configured in pyproject.toml[/red]")
        raise typer.Exit(code=1)
    return config.spec


def _load_graph(spec: Path | None) -> ChartGraph:
    spec_path = _resolve_spec_path(spec, _get_config())
    err_console.print(f"[cyan]Loading chart specification from:[/cyan] {spec_path}")
    try:
        return build_chart_graph(load_chart_spec(spec_path))
    except (ChartError, ValidationError, ValueError, OSError) as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


@app.command()
def render(
    spec: SpecArgument = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output SVG file (defaults to the configured output, then stdout)"),
    ] = None,
    band_padding: Annotated[
        float | None,
        typer.Option("--band-padding", help="Padding of band scales as a fraction of the step"),
    ] = None,
) -> None:
    """Compile a chart specification and render it to SVG."""
    config = _get_config()
    spec_path = _resolve_spec_path(spec, config)
    output = output if output is not None else config.output
    padding = band_padding if band_padding is not None else config.band_padding

    err_console.print(f"[cyan]Loading chart specification from:[/cyan] {spec_path}")
    try:
        compiled = compile_chart(load_chart_spec(spec_path), band_padding=padding)
    except (ChartError, ValidationError, ValueError, OSError) as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    logger.debug("Evaluated %d nodes", len(compiled.evaluation))
    svg = render_svg(compiled.plan)

    if output is None:
        sys.stdout.write(svg + "\n")
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(svg, encoding="utf-8")
    err_console.print(f"[green]✓ Rendered {len(compiled.plan.marks)} marks to {output}[/green]")


@app.command()
def nodes(
    spec: SpecArgument = None,
    *,
    kind: Annotated[
        list[NodeKind] | None,
        typer.Option("--kind", "-k", help="Only list nodes of this kind (repeatable)"),
    ] = None,
) -> None:
    """List the graph's nodes in evaluation order."""
    graph = _load_graph(spec)
    render_node_table(list_nodes(graph, kinds=kind), out_console)


@app.command()
def show(
    node_id: Annotated[str, typer.Argument(help="Node handle, e.g. 'scale:x' or 'mark[0].y'")],
    spec: SpecArgument = None,
) -> None:
    """Show a node's parameters, dependencies and dependents."""
    graph = _load_graph(spec)
    try:
        detail = get_node_detail(graph, node_id)
    except KeyError:
        err_console.print(f"[red]Error: Unknown node '{escape(node_id)}'[/red]")
        raise typer.Exit(code=1) from None
    render_node_detail(detail, out_console)


@app.command()
def downstream(
    node_id: Annotated[str, typer.Argument(help="Node handle, e.g. 'width'")],
    spec: SpecArgument = None,
) -> None:
    """List the nodes to re-evaluate when a node changes."""
    graph = _load_graph(spec)
    try:
        infos = get_downstream(graph, node_id)
    except KeyError:
        err_console.print(f"[red]Error: Unknown node '{escape(node_id)}'[/red]")
        raise typer.Exit(code=1) from None
    render_node_table(infos, out_console, title=f"Downstream of {node_id}")


def main() -> None:
    app()
