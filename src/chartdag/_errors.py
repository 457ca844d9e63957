"""Exceptions raised while building, sorting and evaluating chart graphs."""

from typing import Any


class ChartError(Exception):
    """Base class for all chartdag errors."""


class ChartSpecError(ChartError):
    """The chart specification cannot be turned into a graph."""


class ChartEvaluationError(ChartError):
    """A node of the graph cannot be evaluated."""


class MissingDimensionError(ChartSpecError):
    """Raised when the specification lacks ``width`` or ``height``."""

    def __init__(self, dimension: str) -> None:
        self.dimension = dimension
        super().__init__(f"Chart specification needs a '{dimension}'")


class InvalidRangeError(ChartSpecError):
    """Raised when a scale range names neither ``width`` nor ``height``."""

    def __init__(self, scale_name: str, range_name: str) -> None:
        self.scale_name = scale_name
        self.range_name = range_name
        super().__init__(f"Range of scale '{scale_name}' must be 'width' or 'height', got '{range_name}'")


class UnknownReferenceError(ChartSpecError):
    """Raised when a dataset or scale name does not resolve."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"Unknown {kind} '{name}'")


class DuplicateNameError(ChartSpecError):
    """Raised when two datasets or two scales share a name."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"Duplicate {kind} name '{name}'")


class CyclicDependencyError(ChartError):
    """Raised by the topological sort when the graph contains a cycle."""

    def __init__(self, node: Any) -> None:
        self.node = node
        super().__init__(f"Cycle detected in graph at {node!r}")


class UnsupportedScaleTypeError(ChartEvaluationError):
    def __init__(self, scale_type: str) -> None:
        self.scale_type = scale_type
        super().__init__(f"Only linear and band scales are supported, got '{scale_type}'")


class UnsupportedOperationError(ChartEvaluationError):
    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Can't handle operation '{operation}'")


class MissingContextError(ChartEvaluationError):
    """Raised when a per-row value is requested without a row."""

    def __init__(self, node_id: str, field: str | None = None) -> None:
        self.node_id = node_id
        self.field = field
        detail = f" (field '{field}')" if field is not None else ""
        super().__init__(f"Node '{node_id}' needs a row context to be resolved{detail}")
