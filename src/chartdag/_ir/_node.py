"""Node model for chart computation graphs."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum, auto
from types import MappingProxyType
from typing import Any, TypeAlias


class NodeKind(StrEnum):
    """The kind of node in the computation graph."""

    OPERATOR = auto()  # Literal value
    DATA = auto()  # Rows of a dataset
    DATA_MANIPULATION = auto()  # Aggregation or scale invocation
    SCALE = auto()  # Domain -> range transform
    MARK = auto()  # Visual primitive instantiated per row
    RENDER = auto()  # Root of the graph


ParamValue: TypeAlias = Any
"""A scalar, a ``Node``, a tuple of param values or a mapping of them."""


def freeze_param(value: Any) -> ParamValue:
    """Return an immutable copy of a parameter value.

    Lists and tuples become tuples, mappings become read-only
    ``MappingProxyType`` views. Nodes and scalars are returned as is.
    """
    if isinstance(value, Node):
        return value
    if isinstance(value, Mapping):
        return MappingProxyType({str(k): freeze_param(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze_param(v) for v in value)
    return value


def iter_node_refs(value: ParamValue) -> Iterator[Node]:
    """Yield every node referenced inside a parameter value, depth first.

    Nested tuples and mappings are descended into; a node is yielded but
    not entered, so only direct references are produced.
    """
    if isinstance(value, Node):
        yield value
    elif isinstance(value, Mapping):
        for item in value.values():
            yield from iter_node_refs(item)
    elif isinstance(value, tuple):
        for item in value:
            yield from iter_node_refs(item)


@dataclass(frozen=True, slots=True, eq=False)
class Node:
    """A unit of the computation graph.

    Nodes are immutable once constructed. Equality and hashing are by
    identity, so two nodes with the same parameters are still two
    distinct vertices.

    Attributes:
        id: Stable handle, unique within one ``ChartGraph``.
        kind: Discriminant used by the evaluator.
        params: Parameter bag. May reference other nodes, also inside
            nested tuples and mappings.

    Example:
        >>> width = Node("width", NodeKind.OPERATOR, {"value": 200})
        >>> rng = Node("range", NodeKind.OPERATOR, {"value": (0, width)})
        >>> rng.dependencies() == [width]
        True

    """

    id: str
    kind: NodeKind
    params: Mapping[str, ParamValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Frozen dataclass, so bypass __setattr__
        object.__setattr__(self, "params", freeze_param(self.params))

    def dependencies(self) -> list[Node]:
        """Return the nodes referenced anywhere in the parameter bag.

        The order is the order of first discovery. A node referenced more
        than once is listed once.
        """
        seen: set[int] = set()
        deps: list[Node] = []
        for node in iter_node_refs(self.params):
            if id(node) not in seen:
                seen.add(id(node))
                deps.append(node)
        return deps

    def param(self, name: str, default: Any = None) -> ParamValue:
        """Get a parameter by name."""
        return self.params.get(name, default)

    def __repr__(self) -> str:
        return f"Node({self.id!r}, {self.kind.value})"
