"""SVG rendering of a render plan with htpy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import htpy
from htpy import Element

from chartdag._errors import UnsupportedOperationError

if TYPE_CHECKING:
    from ._plan import MarkDescriptor, RenderPlan

logger = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

# second coordinate -> (first coordinate, length attribute)
_PAIRED_COORDINATES = {
    "x2": ("x", "width"),
    "y2": ("y", "height"),
}


def format_number(value: Any) -> str:
    """Format an attribute value, keeping integral floats free of a decimal point."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        if value == int(value):
            return str(int(value))
        return f"{value:.6g}"
    return str(value)


def item_attributes(values: dict[str, Any]) -> dict[str, str]:
    """Turn resolved attribute values into SVG attributes for one item.

    A second coordinate (``x2``/``y2``) paired with its first coordinate
    becomes a length (``width``/``height``); the first coordinate is
    moved to the smaller of the two. A pair with a missing side yields
    no length.
    """
    attrs = dict(values)
    for second, (first, length) in _PAIRED_COORDINATES.items():
        if second in attrs and first in attrs:
            a, b = attrs[first], attrs.pop(second)
            if a is None or b is None:
                continue
            attrs[first] = min(a, b)
            attrs[length] = abs(b - a)
    return {name: format_number(value) for name, value in attrs.items() if value is not None}


def _element(mark_type: str) -> Element:
    # htpy builds elements from lowercase attribute names
    if not (mark_type.isidentifier() and mark_type.islower()):
        raise UnsupportedOperationError(f"mark type {mark_type}")
    return getattr(htpy, mark_type)


def render_mark(mark: MarkDescriptor) -> list[Element]:
    """Render one element per row of a mark."""
    element = _element(mark.type)
    return [element(item_attributes(mark.attribute_values(row))) for row in mark.rows]


def render_svg(plan: RenderPlan) -> str:
    """Render a plan to an SVG document string."""
    width = format_number(plan.width)
    height = format_number(plan.height)
    logger.debug("Rendering %d marks on a %sx%s surface", len(plan.marks), width, height)
    items = [item for mark in plan.marks for item in render_mark(mark)]
    svg = htpy.svg({"xmlns": SVG_NAMESPACE, "viewBox": f"0 0 {width} {height}"})[items]
    return str(svg)
