"""Metadata filters applied during vector search.

Every vector store evaluates filters with the functions in this module, so a
query returns the same entries no matter which backend holds them.
"""

import math
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel


class FilterOperator(str, Enum):
    """Comparison applied between a stored metadata value and a filter value."""
    EQUALS = "EQUALS"
    CONTAINS = "CONTAINS"
    GREATER_THAN = "GREATER_THAN"
    LESS_THAN = "LESS_THAN"
    NOT_EQUALS = "NOT_EQUALS"
    IN = "IN"
    NOT_IN = "NOT_IN"


class SearchFilter(BaseModel):
    """A single (field, value, operator) condition on entry metadata.

    IN and NOT_IN accept either a list of values or a comma-separated string.
    """

    field: str
    value: Union[str, int, float, bool, list[Union[str, int, float, bool]]]
    operator: FilterOperator = FilterOperator.EQUALS


def _as_number(value: Any) -> Optional[float]:
    """Return value as a finite float, or None when it is not numeric."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _as_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _values_equal(stored: Any, expected: Any) -> bool:
    stored_number = _as_number(stored)
    expected_number = _as_number(expected)
    if stored_number is not None and expected_number is not None:
        return stored_number == expected_number
    return _as_string(stored) == _as_string(expected)


def _membership_values(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [value]


def _match_scalar(stored: Any, operator: FilterOperator, value: Any) -> bool:
    if operator == FilterOperator.EQUALS:
        return _values_equal(stored, value)
    if operator == FilterOperator.CONTAINS:
        return _as_string(value) in _as_string(stored)
    if operator == FilterOperator.IN:
        return any(_values_equal(stored, candidate) for candidate in _membership_values(value))

    # GREATER_THAN / LESS_THAN: anything non-numeric excludes the entry
    stored_number = _as_number(stored)
    expected_number = _as_number(value)
    if stored_number is None or expected_number is None:
        return False
    if operator == FilterOperator.GREATER_THAN:
        return stored_number > expected_number
    return stored_number < expected_number


_NEGATIONS = {
    FilterOperator.NOT_EQUALS: FilterOperator.EQUALS,
    FilterOperator.NOT_IN: FilterOperator.IN,
}


def matches(metadata: dict[str, Any], search_filter: SearchFilter) -> bool:
    """Check whether metadata satisfies a single filter.

    A missing (or null) field fails every positive operator and satisfies
    NOT_EQUALS and NOT_IN. A list-valued field satisfies a positive operator
    when any of its elements does.
    """
    operator = search_filter.operator
    if operator in _NEGATIONS:
        positive = search_filter.model_copy(update={"operator": _NEGATIONS[operator]})
        return not matches(metadata, positive)

    stored = metadata.get(search_filter.field)
    if stored is None:
        return False

    if isinstance(stored, (list, tuple)):
        return any(_match_scalar(item, operator, search_filter.value) for item in stored)
    return _match_scalar(stored, operator, search_filter.value)


def matches_all(
    metadata: dict[str, Any],
    filters: Optional[list[SearchFilter]],
) -> bool:
    """Check whether metadata satisfies every filter (logical AND)."""
    if not filters:
        return True
    return all(matches(metadata, f) for f in filters)
