"""Evaluation engine for chart graphs."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from chartdag._errors import MissingContextError, UnsupportedOperationError
from chartdag._graph import topological_sort, upstream_nodes
from chartdag._ir import Node, NodeKind
from chartdag._numeric import distinct_values, extent, maximum
from chartdag._scales import DEFAULT_BAND_PADDING, BandScale, LinearScale, make_scale

from ._resolved import Concrete, Resolved, Row, RowTransform

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Evaluation:
    """Result of one evaluation pass.

    Attributes:
        values: Mapping from node to its resolved value, in evaluation order.

    """

    values: dict[Node, Resolved] = field(default_factory=dict)

    def get(self, node: Node) -> Resolved:
        """Get the resolved value of a node.

        Raises:
            KeyError: If the node was not evaluated in this pass.

        """
        return self.values[node]

    def value_of(self, node: Node) -> Any:
        """Get the context-free value of a node.

        Raises:
            KeyError: If the node was not evaluated in this pass.
            MissingContextError: If the node needs a row.

        """
        resolved = self.values[node]
        if isinstance(resolved, RowTransform):
            raise MissingContextError(node.id, node.param("field"))
        return resolved.value

    def __contains__(self, node: object) -> bool:
        return node in self.values

    def __len__(self) -> int:
        return len(self.values)


class Evaluator:
    """Resolves nodes lazily, memoizing each one for the lifetime of the pass.

    One evaluator is one pass. A fresh evaluator starts from an empty
    memo; nothing is invalidated automatically.
    """

    def __init__(self, *, band_padding: float = DEFAULT_BAND_PADDING) -> None:
        self.band_padding = band_padding
        self._memo: dict[Node, Resolved] = {}

    def evaluate(self, nodes: Iterable[Node]) -> Evaluation:
        """Resolve every node of a topologically sorted sequence, in order."""
        for node in nodes:
            self.resolve(node)
        return Evaluation(values=dict(self._memo))

    def resolve(self, node: Node) -> Resolved:
        """Resolve a node, computing it at most once.

        Unresolved dependencies are computed first, in topological order.
        """
        if node in self._memo:
            return self._memo[node]
        pending = upstream_nodes(node, self._unresolved_dependencies)
        for current in topological_sort(pending, self._unresolved_dependencies):
            logger.debug("Evaluating %r", current)
            resolved = self._compute(current)
            logger.debug("Result for %r: %r", current, resolved)
            self._memo[current] = resolved
        return self._memo[node]

    def _unresolved_dependencies(self, node: Node) -> list[Node]:
        return [dep for dep in node.dependencies() if dep not in self._memo]

    def value_of(self, node: Node) -> Any:
        """Resolve a node without a row context.

        Raises:
            MissingContextError: If the node needs a per-row field lookup.

        """
        resolved = self.resolve(node)
        if isinstance(resolved, RowTransform):
            raise MissingContextError(node.id, node.param("field"))
        return resolved.value

    def resolve_in_context(self, node: Node, row: Row) -> Any:
        """Resolve a node for one row."""
        return self.resolve(node).at(row)

    def _param_value(self, value: Any) -> Any:
        """Resolve a parameter value without context, descending into containers."""
        if isinstance(value, Node):
            return self.value_of(value)
        if isinstance(value, Mapping):
            return {k: self._param_value(v) for k, v in value.items()}
        if isinstance(value, tuple):
            return [self._param_value(v) for v in value]
        return value

    def _compute(self, node: Node) -> Resolved:
        match node.kind:
            case NodeKind.OPERATOR:
                return Concrete(self._param_value(node.param("value")))
            case NodeKind.DATA:
                return Concrete(node.param("rows", ()))
            case NodeKind.DATA_MANIPULATION:
                return self._compute_data_manipulation(node)
            case NodeKind.SCALE:
                return Concrete(self._build_scale(node))
            case NodeKind.MARK | NodeKind.RENDER:
                return Concrete(None)
        raise UnsupportedOperationError(str(node.kind))

    def _compute_data_manipulation(self, node: Node) -> Resolved:
        operation = node.param("operation")
        field_name = node.param("field")
        match operation:
            case "distinct_values":
                return Concrete(distinct_values(self.value_of(node.param("data")), field_name))
            case "extent":
                return Concrete(extent(self.value_of(node.param("data")), field_name))
            case "max":
                return Concrete(maximum(self.value_of(node.param("data")), field_name))
            case "call_scale":
                return self._call_scale(node)
        raise UnsupportedOperationError(str(operation))

    def _call_scale(self, node: Node) -> Resolved:
        scale = self.value_of(node.param("scale"))
        if "value" in node.params:
            return Concrete(scale(self._param_value(node.param("value"))))
        if "band" in node.params:
            return Concrete(scale.bandwidth())
        field_name = node.param("field")
        if field_name is None:
            raise MissingContextError(node.id)
        return RowTransform(lambda row: scale(row.get(field_name)))

    def _build_scale(self, node: Node) -> LinearScale | BandScale:
        domain = self._param_value(node.param("domain"))
        range_ = self._param_value(node.param("range"))
        logger.debug("Scale %s: domain=%r range=%r", node.id, domain, range_)
        return make_scale(node.param("type"), domain, range_, band_padding=self.band_padding)


def evaluate_nodes(nodes: Iterable[Node], *, band_padding: float = DEFAULT_BAND_PADDING) -> Evaluation:
    """Evaluate a topologically sorted node sequence in a fresh pass.

    Every node is computed once, after its dependencies. A dependency
    that is not part of ``nodes`` is computed on first use.

    Args:
        nodes: Nodes in topological order.
        band_padding: Padding used when building band scales.

    Returns:
        The ``Evaluation`` holding every resolved node.

    Example:
        >>> graph = build_chart_graph(spec)
        >>> evaluation = evaluate_nodes(graph.topological_order())
        >>> evaluation.value_of(graph.width)
        200

    """
    return Evaluator(band_padding=band_padding).evaluate(nodes)
