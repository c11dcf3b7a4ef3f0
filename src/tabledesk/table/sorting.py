"""Filter and ordering helpers for item rows."""

import locale
import math
from functools import cmp_to_key
from typing import Any, Iterable, List

from tabledesk.table.models import ItemRow, SortDirection, SortField


def _to_number(value: Any) -> float:
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def compare_values(a: Any, b: Any, direction: SortDirection = SortDirection.ASC) -> int:
    """
    Compare two field values.

    Two strings compare by the current collation (locale.strcoll); any
    other pair compares numerically. Values that cannot be read as numbers
    compare equal.
    """
    if isinstance(a, str) and isinstance(b, str):
        result = locale.strcoll(a, b)
    else:
        diff = _to_number(a) - _to_number(b)
        if math.isnan(diff):
            return 0
        result = (diff > 0) - (diff < 0)
    return -result if SortDirection(direction) is SortDirection.DESC else result


def sort_items(
    items: Iterable[ItemRow],
    field: SortField,
    direction: SortDirection,
) -> List[ItemRow]:
    """Return a new list of rows ordered on ``field``. The input is left untouched."""
    attr = SortField(field).value
    direction = SortDirection(direction)
    return sorted(
        items,
        key=cmp_to_key(lambda a, b: compare_values(getattr(a, attr), getattr(b, attr), direction)),
    )


def matches_query(item: ItemRow, query: str) -> bool:
    # Empty query matches everything
    if not query:
        return True
    needle = query.lower()
    return needle in item.name.lower() or needle in str(item.id)


def filter_items(items: Iterable[ItemRow], query: str) -> List[ItemRow]:
    return [item for item in items if matches_query(item, query)]
