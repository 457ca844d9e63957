"""Graph module providing ordering and impact analysis over nodes.

This module contains:
- topological_sort: Order nodes so dependencies come first
- downstream_nodes: Find everything affected by a change to one node
- upstream_nodes: Find everything a node is computed from
"""

from ._algorithms import downstream_nodes, topological_sort, upstream_nodes

__all__ = ["downstream_nodes", "topological_sort", "upstream_nodes"]
