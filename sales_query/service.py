"""
Service layer: the caller-facing contract over the in-memory dataset.

`SalesService` holds the record collection loaded at startup and runs the
fixed pipeline for each request:

    search -> filter -> sort -> paginate

It also serves the facet options used to populate filter controls, single
record lookup, and an aggregate summary. No method raises for malformed query
input; problems come back as defaults and diagnostics.

Usage:
    from sales_query.service import SalesService

    service = SalesService.from_settings()
    page = service.get_transactions({"search": "ali", "filters": '{"genders": ["Female"]}'})
    print(page.pagination.total_items, page.diagnostics.warnings)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Optional, Sequence, Tuple

from sales_query.config import Settings, get_settings
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
from sales_query.domain.query import DEFAULT_PAGE_SIZE, TransactionQuery
from sales_query.infrastructure.loader import DatasetLoadError, build_records, load_records
from sales_query.stages import (
    DEFAULT_SEARCH_FIELDS,
    apply_filters,
    apply_sorting,
    date_range,
    paginate,
    perform_search,
    unique_values,
    value_range,
)
from sales_query.utils.fields import numeric_value
from sales_query.utils.logging import get_logger

log = get_logger(__name__)


def _as_records(records: Iterable[Any]) -> Tuple[Record, ...]:
    items = tuple(records)
    if all(isinstance(item, Record) for item in items):
        return items
    return build_records(items)


class SalesService:
    """
    Query service over an immutable transaction collection.

    Parameters
    ----------
    records : iterable
        Records (or raw mappings, validated on the way in). Stored as a tuple.
    search_fields : sequence[str] | None
        Fields matched by the free-text search. Defaults to customer name and phone.
    default_sort_by, default_sort_order, default_page_size
        Applied when a request leaves the parameter out.
    """

    def __init__(
        self,
        records: Iterable[Any] = (),
        search_fields: Optional[Sequence[str]] = None,
        default_sort_by: str = "date",
        default_sort_order: str = "desc",
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._records: Tuple[Record, ...] = _as_records(records)
        self.search_fields: Tuple[str, ...] = tuple(search_fields or DEFAULT_SEARCH_FIELDS)
        self.default_sort_by = default_sort_by
        self.default_sort_order = default_sort_order
        self.default_page_size = default_page_size

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        records: Optional[Iterable[Any]] = None,
    ) -> "SalesService":
        """
        Build a service from settings, loading `SALES_DATA_PATH` unless records are given.
        """
        settings = settings or get_settings()
        if records is None:
            if settings.data_path is None:
                raise DatasetLoadError("No dataset configured. Set SALES_DATA_PATH or pass --data.")
            records = load_records(settings.data_path)
        return cls(
            records,
            search_fields=settings.search_fields,
            default_sort_by=settings.default_sort_by,
            default_sort_order=settings.default_sort_order,
            default_page_size=settings.default_page_size,
        )

    @property
    def records(self) -> Tuple[Record, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def build_query(self, params: Any = None) -> TransactionQuery:
        """Turn raw request parameters into a query using this service's defaults."""
        if isinstance(params, TransactionQuery):
            return params
        return TransactionQuery.from_params(
            params if isinstance(params, Mapping) else None,
            default_sort_by=self.default_sort_by,
            default_sort_order=self.default_sort_order,
            default_page_size=self.default_page_size,
        )

    def get_transactions(self, params: Any = None) -> TransactionPage:
        """Run the full pipeline for one request."""
        query = self.build_query(params)

        searched = perform_search(self._records, query.search, self.search_fields)
        filtered = apply_filters(searched["results"], query.filters)
        ordered = apply_sorting(filtered["results"], query.sort_by, query.sort_order)
        page = paginate(ordered["data"], query.page, query.page_size)

        log.debug(
            "Query processed",
            extra={
                "search_applied": searched["search_applied"],
                "matched": searched["result_count"],
                "filter_count": filtered["filter_count"],
                "total_items": page["pagination"]["total_items"],
                "sort_applied": ordered["sort_applied"],
            },
        )
        return TransactionPage(
            data=page["data"],
            pagination=PaginationInfo(**page["pagination"]),
            diagnostics=QueryDiagnostics(
                search_applied=searched["search_applied"],
                sort_applied=ordered["sort_applied"],
                filter_count=filtered["filter_count"],
                warnings=filtered["warnings"],
            ),
        )

    def search(self, term: Any, page: Any = 1, page_size: Any = None) -> TransactionPage:
        """Search and paginate only; no filters, dataset order preserved."""
        searched = perform_search(self._records, term, self.search_fields)
        size = self.default_page_size if page_size is None else page_size
        result = paginate(searched["results"], page, size)
        return TransactionPage(
            data=result["data"],
            pagination=PaginationInfo(**result["pagination"]),
            diagnostics=QueryDiagnostics(search_applied=searched["search_applied"]),
        )

    def get_filter_options(self) -> FilterOptions:
        """Distinct values per filterable field plus age and date ranges."""
        records = self._records
        return FilterOptions(
            regions=unique_values(records, "customerRegion"),
            genders=unique_values(records, "gender"),
            categories=unique_values(records, "productCategory"),
            tags=unique_values(records, "tags"),
            payment_methods=unique_values(records, "paymentMethod"),
            customer_types=unique_values(records, "customerType"),
            order_statuses=unique_values(records, "orderStatus"),
            age_range=NumericRange(**value_range(records, "age")),
            date_range=DateSpan(**date_range(records, "date")),
        )

    def get_transaction_by_id(self, transaction_id: Any) -> Optional[Record]:
        """Exact match on the identifier's string form; None when absent."""
        if transaction_id is None:
            return None
        wanted = str(transaction_id).strip()
        for record in self._records:
            if record.transaction_id == wanted:
                return record
        return None

    def get_summary(self) -> SalesSummary:
        """Totals over the full dataset; missing amounts count as zero."""
        count = len(self._records)
        total_amount = 0.0
        total_quantity = 0
        total_discount = 0.0
        for record in self._records:
            final = numeric_value(record, "finalAmount") or 0.0
            gross = numeric_value(record, "totalAmount") or 0.0
            total_amount += final
            total_discount += gross - final
            total_quantity += int(numeric_value(record, "quantity") or 0)

        return SalesSummary(
            total_transactions=count,
            total_amount=total_amount,
            total_quantity=total_quantity,
            total_discount=total_discount,
            average_order_value=total_amount / count if count else 0.0,
        )


__all__ = ["SalesService"]
