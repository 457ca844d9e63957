"""Compile a chart specification end to end."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ._eval_engine import evaluate_nodes
from ._ir import build_chart_graph
from ._render import build_render_plan, render_svg
from ._scales import DEFAULT_BAND_PADDING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import TextIO

    from ._eval_engine import Evaluation
    from ._ir import ChartGraph, Node
    from ._render import RenderPlan
    from ._spec import ChartSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompiledChart:
    """Everything produced by one compile pass.

    Attributes:
        graph: The node graph built from the specification.
        order: The graph's nodes in evaluation order.
        evaluation: Resolved values of every node.
        plan: Input for the rendering surface.

    """

    graph: ChartGraph
    order: list[Node]
    evaluation: Evaluation
    plan: RenderPlan


def compile_chart(
    spec: ChartSpec | Mapping[str, Any],
    *,
    band_padding: float = DEFAULT_BAND_PADDING,
) -> CompiledChart:
    """Build, sort and evaluate the graph of a chart specification.

    Any error propagates unchanged; no partial result is returned.
    """
    graph = build_chart_graph(spec)
    order = graph.topological_order()
    logger.debug("Evaluation order: %s", ", ".join(node.id for node in order))
    evaluation = evaluate_nodes(order, band_padding=band_padding)
    plan = build_render_plan(graph.render, evaluation)
    return CompiledChart(graph=graph, order=order, evaluation=evaluation, plan=plan)


def render(
    spec: ChartSpec | Mapping[str, Any],
    target: TextIO | None = None,
    *,
    band_padding: float = DEFAULT_BAND_PADDING,
) -> str:
    """Render a chart specification to SVG.

    Args:
        spec: The chart specification.
        target: Optional text stream the SVG document is written to.
        band_padding: Padding used when building band scales.

    Returns:
        The SVG document.

    """
    compiled = compile_chart(spec, band_padding=band_padding)
    svg = render_svg(compiled.plan)
    if target is not None:
        target.write(svg)
    return svg
