"""Rendering adapter turning an evaluated graph into SVG."""

from ._plan import MarkDescriptor, RenderPlan, build_render_plan
from .svg import render_svg

__all__ = ["MarkDescriptor", "RenderPlan", "build_render_plan", "render_svg"]
