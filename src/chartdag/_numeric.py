"""Field aggregations over dataset rows."""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any


def _field_values(rows: Iterable[Mapping[str, Any]], field: str) -> Iterator[Any]:
    for row in rows:
        value = row.get(field)
        if value is not None:
            yield value


def extent(rows: Iterable[Mapping[str, Any]], field: str) -> tuple[Any, Any]:
    """Return ``(min, max)`` of a field, or ``(None, None)`` when there are no values."""
    lo = hi = None
    for value in _field_values(rows, field):
        if lo is None or value < lo:
            lo = value
        if hi is None or value > hi:
            hi = value
    return (lo, hi)


def maximum(rows: Iterable[Mapping[str, Any]], field: str) -> Any:
    """Return the largest value of a field, or None when there are no values."""
    return max(_field_values(rows, field), default=None)


def distinct_values(rows: Iterable[Mapping[str, Any]], field: str) -> list[Any]:
    """Return the distinct values of a field in order of first appearance."""
    return list(dict.fromkeys(_field_values(rows, field)))
