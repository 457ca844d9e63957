"""Builder turning a chart specification into a node graph."""

import logging
from collections.abc import Mapping
from typing import Any

from chartdag._errors import DuplicateNameError, InvalidRangeError, MissingDimensionError, UnknownReferenceError
from chartdag._spec import ChartSpec, EncodeEntry, ScaleSpec

from ._chart_graph import ChartGraph
from ._node import Node, NodeKind

logger = logging.getLogger(__name__)


class _GraphBuilder:
    """Allocates nodes in creation order and keeps the name lookups."""

    def __init__(self) -> None:
        self.nodes: list[Node] = []
        self.datasets: dict[str, Node] = {}
        self.scales: dict[str, Node] = {}

    def add(self, node_id: str, kind: NodeKind, params: Mapping[str, Any]) -> Node:
        node = Node(node_id, kind, params)
        self.nodes.append(node)
        logger.debug("Created %r with %d dependencies", node, len(node.dependencies()))
        return node

    def dataset(self, name: str) -> Node:
        try:
            return self.datasets[name]
        except KeyError:
            raise UnknownReferenceError("dataset", name) from None

    def scale(self, name: str) -> Node:
        try:
            return self.scales[name]
        except KeyError:
            raise UnknownReferenceError("scale", name) from None


def _build_domain(builder: _GraphBuilder, scale: ScaleSpec) -> Node | tuple[Any, ...]:
    """Create the domain computation for a scale.

    Band scales use the distinct field values, zero-anchored scales use
    ``(0, max)`` and everything else uses the ``(min, max)`` extent.

    A zero-anchored domain assumes non-negative values; fields with
    negative values end up with an inverted domain.
    """
    data = builder.dataset(scale.domain.data)
    node_id = f"domain:{scale.name}"
    field = scale.domain.field

    if scale.type == "band":
        return builder.add(
            node_id,
            NodeKind.DATA_MANIPULATION,
            {"operation": "distinct_values", "field": field, "data": data},
        )
    if scale.zero_anchored:
        max_node = builder.add(
            f"{node_id}:max",
            NodeKind.DATA_MANIPULATION,
            {"operation": "max", "field": field, "data": data},
        )
        return (0, max_node)
    return builder.add(
        node_id,
        NodeKind.DATA_MANIPULATION,
        {"operation": "extent", "field": field, "data": data},
    )


def _build_range(scale: ScaleSpec, width: Node, height: Node) -> tuple[Any, ...]:
    # Vertical ranges are flipped so values grow upwards on a y-down surface
    match scale.range:
        case "width":
            return (0, width)
        case "height":
            return (height, 0)
        case _:
            raise InvalidRangeError(scale.name, scale.range)


def _build_attribute(builder: _GraphBuilder, node_id: str, entry: EncodeEntry, data: Node) -> Node:
    if entry.scale is None:
        return builder.add(node_id, NodeKind.OPERATOR, {"value": entry.value})

    params: dict[str, Any] = {"operation": "call_scale"}
    if entry.has_value:
        params["value"] = entry.value
    elif entry.band is not None:
        params["band"] = entry.band
    else:
        params["field"] = entry.field
    params["data"] = data
    params["scale"] = builder.scale(entry.scale)
    return builder.add(node_id, NodeKind.DATA_MANIPULATION, params)


def build_chart_graph(spec: ChartSpec | Mapping[str, Any]) -> ChartGraph:
    """Build the full node graph for a chart specification.

    Nodes are created in this order: width, height, datasets, scales
    (domain helpers first), marks (attribute nodes first) and finally
    the render node. Later nodes look up earlier ones by name, so a
    reference to an undefined dataset or scale fails. No node is
    evaluated here.

    Args:
        spec: A ``ChartSpec`` or a mapping that validates into one.

    Returns:
        The ``ChartGraph`` holding every node.

    Raises:
        MissingDimensionError: If width or height is missing.
        InvalidRangeError: If a scale range is not "width" or "height".
        UnknownReferenceError: If a dataset or scale name does not resolve.
        DuplicateNameError: If two datasets or two scales share a name.
        pydantic.ValidationError: If a mapping does not match the schema.

    Example:
        >>> graph = build_chart_graph({"width": 200, "height": 200})
        >>> [node.id for node in graph]
        ['width', 'height', 'render']

    """
    # Both dimensions are checked before validation and before anything is allocated
    for dimension in ("width", "height"):
        value = getattr(spec, dimension) if isinstance(spec, ChartSpec) else spec.get(dimension)
        if value is None:
            raise MissingDimensionError(dimension)

    if not isinstance(spec, ChartSpec):
        spec = ChartSpec.model_validate(spec)

    builder = _GraphBuilder()
    width = builder.add("width", NodeKind.OPERATOR, {"value": spec.width})
    height = builder.add("height", NodeKind.OPERATOR, {"value": spec.height})

    for dataset in spec.data:
        if dataset.name in builder.datasets:
            raise DuplicateNameError("dataset", dataset.name)
        builder.datasets[dataset.name] = builder.add(
            f"data:{dataset.name}",
            NodeKind.DATA,
            {"name": dataset.name, "rows": dataset.rows},
        )

    for scale in spec.scales:
        if scale.name in builder.scales:
            raise DuplicateNameError("scale", scale.name)
        domain = _build_domain(builder, scale)
        builder.scales[scale.name] = builder.add(
            f"scale:{scale.name}",
            NodeKind.SCALE,
            {"type": scale.type, "domain": domain, "range": _build_range(scale, width, height)},
        )

    marks: list[Node] = []
    for index, mark in enumerate(spec.marks):
        data = builder.dataset(mark.from_.data)
        mark_id = f"mark[{index}]"
        attributes = [
            {"name": name, "value": _build_attribute(builder, f"{mark_id}.{name}", entry, data)}
            for name, entry in mark.encode.items()
        ]
        marks.append(
            builder.add(mark_id, NodeKind.MARK, {"type": mark.type, "attributes": attributes, "data": data}),
        )

    render = builder.add("render", NodeKind.RENDER, {"marks": marks, "width": width, "height": height})

    logger.debug("Built chart graph with %d nodes", len(builder.nodes))
    return ChartGraph(nodes=tuple(builder.nodes), width=width, height=height, render=render)
