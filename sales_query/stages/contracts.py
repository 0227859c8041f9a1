"""
Result contracts returned by the pipeline stages.

Each stage is a plain function returning one of these TypedDicts so the
service layer can thread diagnostics (flags, counts, warnings) alongside the
records without embedding them in the records themselves.
"""

from __future__ import annotations

from typing import Any, List, Protocol, TypedDict, runtime_checkable


class SearchOutcome(TypedDict):
    results: List[Any]
    search_applied: bool
    result_count: int


class FilterOutcome(TypedDict):
    results: List[Any]
    warnings: List[str]
    filter_count: int


class SortOutcome(TypedDict):
    data: List[Any]
    sort_applied: bool


class PaginationMeta(TypedDict):
    current_page: int
    page_size: int
    total_items: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool
    items_in_current_page: int


class PageOutcome(TypedDict):
    data: List[Any]
    pagination: PaginationMeta


class RangeBounds(TypedDict):
    """Outcome of range validation before a range filter is applied."""

    min: Any
    max: Any
    error: Any


@runtime_checkable
class RecordPredicate(Protocol):
    """A single filter predicate evaluated against one record."""

    def __call__(self, record: Any) -> bool:
        ...


__all__ = [
    "FilterOutcome",
    "PageOutcome",
    "PaginationMeta",
    "RangeBounds",
    "RecordPredicate",
    "SearchOutcome",
    "SortOutcome",
]
