"""
Pipeline stages for the Sales Query engine.

Each stage is a pure function over a record collection: search, filter, sort,
paginate, plus facet extraction over the full dataset. Re-exported here so
callers can import from `sales_query.stages` directly.
"""

from sales_query.stages.contracts import (
    FilterOutcome,
    PageOutcome,
    PaginationMeta,
    RangeBounds,
    RecordPredicate,
    SearchOutcome,
    SortOutcome,
)
from sales_query.stages.facets import date_range, unique_values, value_range
from sales_query.stages.filtering import apply_filters, validate_range
from sales_query.stages.pagination import paginate
from sales_query.stages.search import DEFAULT_SEARCH_FIELDS, perform_search
from sales_query.stages.sorting import apply_sorting, collation_key

__all__ = [
    # Contracts
    "FilterOutcome",
    "PageOutcome",
    "PaginationMeta",
    "RangeBounds",
    "RecordPredicate",
    "SearchOutcome",
    "SortOutcome",
    # Stages
    "DEFAULT_SEARCH_FIELDS",
    "apply_filters",
    "apply_sorting",
    "paginate",
    "perform_search",
    # Helpers
    "collation_key",
    "date_range",
    "unique_values",
    "validate_range",
    "value_range",
]
