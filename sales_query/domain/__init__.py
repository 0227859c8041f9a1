"""
Domain package for the Sales Query engine.

Exports the transaction record, the typed filter specification, the query
model, and the response contracts. Keep this package focused on data
definitions and input coercion; the pipeline logic lives in `stages`.
"""

from sales_query.domain.filters import (
    DateRangeFilter,
    FilterGroup,
    FilterKind,
    FilterSpec,
    MembershipFilter,
    NumericRangeFilter,
    parse_filters,
)
from sales_query.domain.models import (
    DateSpan,
    FilterOptions,
    NumericRange,
    PaginationInfo,
    QueryDiagnostics,
    Record,
    SalesSummary,
    TransactionPage,
)
from sales_query.domain.query import SortKey, SortOrder, TransactionQuery

__all__ = [
    "DateRangeFilter",
    "DateSpan",
    "FilterGroup",
    "FilterKind",
    "FilterOptions",
    "FilterSpec",
    "MembershipFilter",
    "NumericRange",
    "NumericRangeFilter",
    "PaginationInfo",
    "QueryDiagnostics",
    "Record",
    "SalesSummary",
    "SortKey",
    "SortOrder",
    "TransactionPage",
    "TransactionQuery",
    "parse_filters",
]
