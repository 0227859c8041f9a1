"""
Facet extraction: distinct values and value ranges over the full collection.
"""

from __future__ import annotations

from collections.abc import Hashable
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from sales_query.utils.fields import date_value, field_value, numeric_value
from sales_query.utils.logging import get_logger

log = get_logger(__name__)


def _sorted_values(values: set) -> List[Any]:
    try:
        return sorted(values)
    except TypeError:
        return sorted(values, key=str)


def unique_values(records: Sequence[Any], field: Any) -> List[Any]:
    """
    Sorted distinct values of `field`; list values are flattened.

    Missing, None and empty-string values are skipped.
    """
    if not records or not isinstance(field, str) or not field:
        return []

    values: set = set()
    skipped = 0
    for record in records:
        value = field_value(record, field)
        items = value if isinstance(value, (list, tuple, set, frozenset)) else (value,)
        for item in items:
            if item is None or item == "":
                continue
            if not isinstance(item, Hashable):
                skipped += 1
                continue
            values.add(item)

    if skipped:
        log.warning(
            "Skipped unhashable facet values", extra={"field": field, "skipped": skipped}
        )
    return _sorted_values(values)


def _compact(number: float) -> float:
    return int(number) if number.is_integer() else number


def value_range(records: Sequence[Any], field: str) -> Dict[str, float]:
    """Min/max over the numeric values of `field`; {0, 0} when there are none."""
    values = (numeric_value(record, field) for record in records or ())
    numbers = [number for number in values if number is not None]
    if not numbers:
        return {"min": 0, "max": 0}
    return {"min": _compact(min(numbers)), "max": _compact(max(numbers))}


def date_range(records: Sequence[Any], field: str = "date") -> Dict[str, Optional[date]]:
    """Earliest/latest date of `field`; {None, None} when there are none."""
    values = (date_value(record, field) for record in records or ())
    dates = [day for day in values if day is not None]
    if not dates:
        return {"min": None, "max": None}
    return {"min": min(dates), "max": max(dates)}


__all__ = ["date_range", "unique_values", "value_range"]
