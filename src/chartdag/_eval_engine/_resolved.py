"""Resolved node values."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

Row: TypeAlias = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class Concrete:
    """A value that does not depend on the row being drawn."""

    value: Any

    def at(self, row: Row) -> Any:  # noqa: ARG002
        return self.value


@dataclass(frozen=True, slots=True)
class RowTransform:
    """A value computed per row, e.g. a field passed through a scale."""

    transform: Callable[[Row], Any]

    def at(self, row: Row) -> Any:
        return self.transform(row)


Resolved: TypeAlias = Concrete | RowTransform
