"""Compile declarative chart specifications into an evaluable computation graph."""

__all__ = [
    "BandScale",
    "ChartError",
    "ChartEvaluationError",
    "ChartGraph",
    "ChartSpec",
    "ChartSpecError",
    "CompiledChart",
    "Concrete",
    "CyclicDependencyError",
    "DuplicateNameError",
    "Evaluation",
    "Evaluator",
    "InvalidRangeError",
    "LinearScale",
    "MarkDescriptor",
    "MissingContextError",
    "MissingDimensionError",
    "Node",
    "NodeKind",
    "RenderPlan",
    "RowTransform",
    "UnknownReferenceError",
    "UnsupportedOperationError",
    "UnsupportedScaleTypeError",
    "build_chart_graph",
    "build_render_plan",
    "compile_chart",
    "downstream_nodes",
    "evaluate_nodes",
    "load_chart_spec",
    "make_scale",
    "render",
    "render_svg",
    "topological_sort",
]

from ._compile import CompiledChart, compile_chart, render
from ._errors import (
    ChartError,
    ChartEvaluationError,
    ChartSpecError,
    CyclicDependencyError,
    DuplicateNameError,
    InvalidRangeError,
    MissingContextError,
    MissingDimensionError,
    UnknownReferenceError,
    UnsupportedOperationError,
    UnsupportedScaleTypeError,
)
from ._eval_engine import Concrete, Evaluation, Evaluator, RowTransform, evaluate_nodes
from ._graph import downstream_nodes, topological_sort
from ._io import load_chart_spec
from ._ir import ChartGraph, Node, NodeKind, build_chart_graph
from ._render import MarkDescriptor, RenderPlan, build_render_plan, render_svg
from ._scales import BandScale, LinearScale, make_scale
from ._spec import ChartSpec
