"""Evaluation engine module for chartdag.

This module resolves graph nodes into values, memoizing each node once
per pass.

Key types:
- Concrete / RowTransform: The two shapes of a resolved node
- Evaluator: Lazy, memoizing resolver for one pass
- Evaluation: Result of a pass
- evaluate_nodes: Evaluate a topologically sorted sequence
"""

from ._engine import Evaluation, Evaluator, evaluate_nodes
from ._resolved import Concrete, Resolved, Row, RowTransform

__all__ = ["Concrete", "Evaluation", "Evaluator", "Resolved", "Row", "RowTransform", "evaluate_nodes"]
