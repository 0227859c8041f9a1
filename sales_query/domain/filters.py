"""
Typed filter specification.

Callers send filters as a free-form mapping (usually JSON from a query string).
`parse_filters` turns it into a `FilterSpec`: an ordered tuple of clauses, one
per recognised `FilterGroup`, each carrying a typed payload. Unknown keys and
malformed payloads are reported as warnings on the spec instead of being
dropped silently. Range bounds are kept raw here; the filter stage validates
them when it applies the clause so that its warnings stay next to the results.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from sales_query.utils.fields import to_camel


class FilterKind(str, Enum):
    MEMBERSHIP = "membership"
    TAGS = "tags"
    NUMERIC_RANGE = "numeric_range"
    DATE_RANGE = "date_range"


class FilterGroup(str, Enum):
    """Supported filter groups, declared in the order they are applied."""

    REGIONS = "regions"
    GENDERS = "genders"
    CUSTOMER_TYPES = "customerTypes"
    ORDER_STATUSES = "orderStatuses"
    PAYMENT_METHODS = "paymentMethods"
    AGE_RANGE = "ageRange"
    PRODUCT_CATEGORIES = "productCategories"
    TAGS = "tags"
    PRICE_RANGE = "priceRange"
    QUANTITY_RANGE = "quantityRange"
    DATE_RANGE = "dateRange"

    @property
    def kind(self) -> FilterKind:
        return _GROUP_DEFS[self][0]

    @property
    def field(self) -> str:
        """Record field the group's predicate reads."""
        return _GROUP_DEFS[self][1]

    @property
    def label(self) -> str:
        return _GROUP_DEFS[self][2]

    @classmethod
    def lookup(cls, key: str) -> Optional["FilterGroup"]:
        """Resolve a raw filter key (camelCase, snake_case, or alias)."""
        if not isinstance(key, str):
            return None
        name = to_camel(key.strip())
        name = _GROUP_ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            return None


_GROUP_DEFS: Dict[FilterGroup, Tuple[FilterKind, str, str]] = {
    FilterGroup.REGIONS: (FilterKind.MEMBERSHIP, "customerRegion", "Region"),
    FilterGroup.GENDERS: (FilterKind.MEMBERSHIP, "gender", "Gender"),
    FilterGroup.CUSTOMER_TYPES: (FilterKind.MEMBERSHIP, "customerType", "Customer Type"),
    FilterGroup.ORDER_STATUSES: (FilterKind.MEMBERSHIP, "orderStatus", "Order Status"),
    FilterGroup.PAYMENT_METHODS: (FilterKind.MEMBERSHIP, "paymentMethod", "Payment Method"),
    FilterGroup.AGE_RANGE: (FilterKind.NUMERIC_RANGE, "age", "Age Range"),
    FilterGroup.PRODUCT_CATEGORIES: (
        FilterKind.MEMBERSHIP,
        "productCategory",
        "Product Category",
    ),
    FilterGroup.TAGS: (FilterKind.TAGS, "tags", "Tags"),
    FilterGroup.PRICE_RANGE: (FilterKind.NUMERIC_RANGE, "finalAmount", "Price Range"),
    FilterGroup.QUANTITY_RANGE: (FilterKind.NUMERIC_RANGE, "quantity", "Quantity Range"),
    FilterGroup.DATE_RANGE: (FilterKind.DATE_RANGE, "date", "Date Range"),
}

# The dashboard sends `categories` for the product category group.
_GROUP_ALIASES = {"categories": FilterGroup.PRODUCT_CATEGORIES.value}

_GROUP_ORDER = {group: index for index, group in enumerate(FilterGroup)}


@dataclass(frozen=True)
class MembershipFilter:
    """Record passes when its field value is any of `values` (tags: any overlap)."""

    group: FilterGroup
    values: Tuple[Any, ...]


@dataclass(frozen=True)
class NumericRangeFilter:
    group: FilterGroup
    minimum: Any = None
    maximum: Any = None


@dataclass(frozen=True)
class DateRangeFilter:
    group: FilterGroup
    start: Any = None
    end: Any = None


FilterClause = Union[MembershipFilter, NumericRangeFilter, DateRangeFilter]


@dataclass(frozen=True)
class FilterSpec:
    clauses: Tuple[FilterClause, ...] = ()
    warnings: Tuple[str, ...] = field(default=(), compare=False)

    def __bool__(self) -> bool:
        return bool(self.clauses)

    def __iter__(self):
        return iter(self.clauses)

    @classmethod
    def empty(cls) -> "FilterSpec":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Render the spec back into the wire mapping form."""
        payload: Dict[str, Any] = {}
        for clause in self.clauses:
            if isinstance(clause, MembershipFilter):
                payload[clause.group.value] = list(clause.values)
            elif isinstance(clause, NumericRangeFilter):
                payload[clause.group.value] = {"min": clause.minimum, "max": clause.maximum}
            else:
                payload[clause.group.value] = {"startDate": clause.start, "endDate": clause.end}
        return payload


def _first_present(payload: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


def _build_clause(group: FilterGroup, value: Any, warnings: List[str]) -> Optional[FilterClause]:
    if value is None:
        return None

    if group.kind in (FilterKind.MEMBERSHIP, FilterKind.TAGS):
        if not isinstance(value, (list, tuple, set, frozenset)):
            warnings.append(f"{group.label}: expected a list of values; filter ignored.")
            return None
        values = tuple(item for item in value if item is not None)
        return MembershipFilter(group=group, values=values) if values else None

    if not isinstance(value, Mapping):
        warnings.append(f"{group.label}: expected an object; filter ignored.")
        return None

    if group.kind is FilterKind.NUMERIC_RANGE:
        return NumericRangeFilter(
            group=group,
            minimum=_first_present(value, ("min", "minimum")),
            maximum=_first_present(value, ("max", "maximum")),
        )
    return DateRangeFilter(
        group=group,
        start=_first_present(value, ("startDate", "start_date", "start", "min")),
        end=_first_present(value, ("endDate", "end_date", "end", "max")),
    )


def parse_filters(raw: Any) -> FilterSpec:
    """
    Build a FilterSpec from a mapping or a JSON object string.

    Never raises: malformed payloads yield an empty spec carrying a warning.
    """
    if isinstance(raw, FilterSpec):
        return raw
    if raw is None or raw == "":
        return FilterSpec()

    warnings: List[str] = []
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except (ValueError, RecursionError):
            return FilterSpec(warnings=("Malformed filters payload ignored.",))
    if not isinstance(raw, Mapping):
        return FilterSpec(warnings=("Filters must be an object; payload ignored.",))

    by_group: Dict[FilterGroup, FilterClause] = {}
    for key, value in raw.items():
        group = FilterGroup.lookup(key)
        if group is None:
            warnings.append(f"Unknown filter '{key}' ignored.")
            continue
        clause = _build_clause(group, value, warnings)
        if clause is not None:
            by_group[group] = clause

    clauses = tuple(sorted(by_group.values(), key=lambda clause: _GROUP_ORDER[clause.group]))
    return FilterSpec(clauses=clauses, warnings=tuple(warnings))


__all__ = [
    "DateRangeFilter",
    "FilterClause",
    "FilterGroup",
    "FilterKind",
    "FilterSpec",
    "MembershipFilter",
    "NumericRangeFilter",
    "parse_filters",
]
