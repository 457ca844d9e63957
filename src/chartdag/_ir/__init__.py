"""Intermediate Representation (IR) module for chartdag.

This module provides the node graph a chart specification compiles to.

Key types:
- NodeKind: Enum for node types (OPERATOR, DATA, ..., RENDER)
- Node: A single immutable graph node with a parameter bag
- ChartGraph: All nodes of one chart plus its render root
- build_chart_graph: Function to build the graph from a specification
"""

from ._builder import build_chart_graph
from ._chart_graph import ChartGraph
from ._node import Node, NodeKind, ParamValue, freeze_param, iter_node_refs

__all__ = ["ChartGraph", "Node", "NodeKind", "ParamValue", "build_chart_graph", "freeze_param", "iter_node_refs"]
