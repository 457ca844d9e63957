"""What the rendering surface receives from an evaluated graph."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chartdag._eval_engine import Evaluation, Resolved
    from chartdag._ir import Node


@dataclass(frozen=True, slots=True)
class MarkDescriptor:
    """One mark, ready to be drawn once per row.

    Attributes:
        type: Name of the visual primitive (e.g. "rect", "circle").
        rows: The rows of the mark's dataset.
        attributes: ``(attribute name, resolved value)`` pairs in encode order.

    """

    type: str
    rows: Sequence[Mapping[str, Any]]
    attributes: tuple[tuple[str, Resolved], ...]

    def attribute_values(self, row: Mapping[str, Any]) -> dict[str, Any]:
        """Resolve every attribute for one row."""
        return {name: resolved.at(row) for name, resolved in self.attributes}


@dataclass(frozen=True, slots=True)
class RenderPlan:
    width: Any
    height: Any
    marks: tuple[MarkDescriptor, ...]


def build_render_plan(render: Node, evaluation: Evaluation) -> RenderPlan:
    """Collect the resolved dimensions and mark descriptors below a render node.

    Raises:
        KeyError: If a node below ``render`` was not evaluated.

    """
    marks = tuple(
        MarkDescriptor(
            type=mark.param("type"),
            rows=evaluation.value_of(mark.param("data")),
            attributes=tuple(
                (attribute["name"], evaluation.get(attribute["value"])) for attribute in mark.param("attributes", ())
            ),
        )
        for mark in render.param("marks", ())
    )
    return RenderPlan(
        width=evaluation.value_of(render.param("width")),
        height=evaluation.value_of(render.param("height")),
        marks=marks,
    )
