"""
Filter stage: ordered conjunction of membership and range predicates.

Groups are applied in `FilterGroup` order; inside a membership group any
accepted value matches. Degenerate situations (swapped bounds, single-value
ranges, a group that empties the working set, many active groups) surface as
warnings next to the results. An unexpected failure is caught here, logged,
and the records filtered so far are returned.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Any, List, Optional, Sequence

from sales_query.domain.filters import (
    DateRangeFilter,
    FilterClause,
    FilterKind,
    FilterSpec,
    MembershipFilter,
    NumericRangeFilter,
    parse_filters,
)
from sales_query.stages.contracts import FilterOutcome, RangeBounds, RecordPredicate
from sales_query.utils.fields import as_date, as_number, date_value, field_value, numeric_value
from sales_query.utils.logging import get_logger

log = get_logger(__name__)

OVERCONSTRAINED_THRESHOLD = 5

SWAPPED_RANGE = "Min value cannot be greater than max value. Values have been swapped."
SINGLE_VALUE_RANGE = "Range represents a single value."
SWAPPED_DATES = "Start date is after end date. Dates have been swapped."
INVALID_DATES = "Invalid date range provided."
NO_DATA = "No data available to filter"


def validate_range(minimum: Any, maximum: Any) -> RangeBounds:
    """
    Normalize numeric range bounds.

    Either bound missing makes the range a no-op. A non-numeric minimum reads
    as 0 and a non-numeric maximum as +inf. Inverted bounds are swapped and
    flagged; equal bounds are flagged as a single-value range.
    """
    if minimum is None or maximum is None:
        return RangeBounds(min=None, max=None, error=None)

    low = as_number(minimum)
    high = as_number(maximum)
    low = 0.0 if low is None else low
    high = math.inf if high is None else high

    if low > high:
        return RangeBounds(min=high, max=low, error=SWAPPED_RANGE)
    if low == high:
        return RangeBounds(min=low, max=high, error=SINGLE_VALUE_RANGE)
    return RangeBounds(min=low, max=high, error=None)


def _membership_predicate(clause: MembershipFilter) -> RecordPredicate:
    accepted = list(clause.values)
    field = clause.group.field

    if clause.group.kind is FilterKind.TAGS:

        def has_any_tag(record: Any) -> bool:
            tags = field_value(record, field)
            if not isinstance(tags, (list, tuple, set, frozenset)) or not tags:
                return False
            return any(tag in tags for tag in accepted)

        return has_any_tag

    def is_member(record: Any) -> bool:
        value = field_value(record, field)
        return value is not None and value in accepted

    return is_member


def _numeric_predicate(field: str, low: float, high: float) -> RecordPredicate:
    def in_range(record: Any) -> bool:
        value = numeric_value(record, field)
        return value is not None and low <= value <= high

    return in_range


def _date_predicate(field: str, start: date, end: date) -> RecordPredicate:
    def in_range(record: Any) -> bool:
        value = date_value(record, field)
        return value is not None and start <= value <= end

    return in_range


def _plan_clause(
    clause: FilterClause, warnings: List[str]
) -> Optional[RecordPredicate]:
    """Validate a clause, record its warnings, and return the predicate to apply."""
    group = clause.group

    if isinstance(clause, MembershipFilter):
        return _membership_predicate(clause) if clause.values else None

    if isinstance(clause, NumericRangeFilter):
        bounds = validate_range(clause.minimum, clause.maximum)
        if bounds["error"]:
            warnings.append(f"{group.label}: {bounds['error']}")
        if bounds["min"] is None or bounds["max"] is None:
            return None
        return _numeric_predicate(group.field, bounds["min"], bounds["max"])

    if isinstance(clause, DateRangeFilter):
        if not clause.start or not clause.end:
            return None
        start, end = as_date(clause.start), as_date(clause.end)
        if start is None or end is None:
            warnings.append(INVALID_DATES)
            return None
        if start > end:
            warnings.append(SWAPPED_DATES)
            start, end = end, start
        elif start == end:
            warnings.append(f"{group.label}: {SINGLE_VALUE_RANGE}")
        return _date_predicate(group.field, start, end)

    raise TypeError(f"Unsupported filter clause: {clause!r}")


def apply_filters(records: Sequence[Any], filters: Any = None) -> FilterOutcome:
    """
    Apply every active filter group to `records`.

    `filters` may be a FilterSpec or a raw mapping/JSON string. Parse warnings
    come first in the returned warnings list. ``filter_count`` counts only the
    groups that actually applied a predicate.
    """
    spec: FilterSpec = parse_filters(filters)
    warnings: List[str] = list(spec.warnings)

    if not records:
        warnings.append(NO_DATA)
        return FilterOutcome(results=[], warnings=warnings, filter_count=0)

    filtered: List[Any] = list(records)
    filter_count = 0

    try:
        for clause in spec:
            predicate = _plan_clause(clause, warnings)
            if predicate is None:
                continue
            before = len(filtered)
            filtered = [record for record in filtered if predicate(record)]
            filter_count += 1
            if before > 0 and not filtered:
                warnings.append(f"{clause.group.label} filter resulted in no matching records.")
            log.debug(
                "Filter group applied",
                extra={"group": clause.group.value, "before": before, "after": len(filtered)},
            )

        if filter_count > OVERCONSTRAINED_THRESHOLD:
            warnings.append(
                f"Multiple filters applied ({filter_count}). "
                "Results may be limited. Consider adjusting filters."
            )
    except Exception as exc:  # noqa: BLE001 - stage boundary degrades to best-effort results
        log.exception("Filtering failed; returning partial results")
        warnings.append(f"Filtering error: {exc}")

    return FilterOutcome(results=filtered, warnings=warnings, filter_count=filter_count)


__all__ = [
    "OVERCONSTRAINED_THRESHOLD",
    "apply_filters",
    "validate_range",
]
