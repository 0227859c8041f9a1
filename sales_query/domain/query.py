"""
Query model and the coercion rules for caller-supplied query parameters.

Raw parameters usually arrive as strings (query string, CLI options). Every
malformed value is replaced by its documented default here; nothing in this
module raises for bad input.
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sales_query.domain.filters import FilterSpec, parse_filters
from sales_query.utils.fields import as_number, to_camel

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Any) -> "SortOrder":
        """Anything other than asc/desc falls back to descending."""
        if isinstance(value, SortOrder):
            return value
        if isinstance(value, str) and value.strip().lower() == "asc":
            return cls.ASC
        return cls.DESC


class SortKey(str, Enum):
    DATE = "date"
    QUANTITY = "quantity"
    FINAL_AMOUNT = "finalAmount"
    CUSTOMER_NAME = "customerName"
    AGE = "age"

    @classmethod
    def parse(cls, value: Any) -> Optional["SortKey"]:
        """Resolve a sort key name or alias; None when unsupported."""
        if isinstance(value, SortKey):
            return value
        if not isinstance(value, str) or not value.strip():
            return None
        name = to_camel(value.strip())
        if name == "amount":
            return cls.FINAL_AMOUNT
        try:
            return cls(name)
        except ValueError:
            return None


def _coerce_int(value: Any) -> Optional[int]:
    number = as_number(value)
    return None if number is None else math.floor(number)


def coerce_page(value: Any) -> int:
    """1-based page number; invalid input becomes 1."""
    number = _coerce_int(value)
    return max(DEFAULT_PAGE, number if number is not None else DEFAULT_PAGE)


def coerce_page_size(value: Any, default: int = DEFAULT_PAGE_SIZE) -> int:
    """Page size clamped to [1, 100]; invalid input becomes the default."""
    number = _coerce_int(value)
    if number is None:
        number = default
    return max(MIN_PAGE_SIZE, min(MAX_PAGE_SIZE, number))


class TransactionQuery(BaseModel):
    """One browse request: search, filters, sort, and the requested page."""

    search: str = ""
    filters: Any = Field(default_factory=FilterSpec)
    sort_by: str = "date"
    sort_order: str = SortOrder.DESC.value
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    @field_validator("search", mode="before")
    @classmethod
    def _search(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("filters", mode="before")
    @classmethod
    def _filters(cls, value: Any) -> FilterSpec:
        return parse_filters(value)

    @field_validator("sort_by", mode="before")
    @classmethod
    def _sort_by(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("sort_order", mode="before")
    @classmethod
    def _sort_order(cls, value: Any) -> str:
        return SortOrder.parse(value).value

    @field_validator("page", mode="before")
    @classmethod
    def _page(cls, value: Any) -> int:
        return coerce_page(value)

    @field_validator("page_size", mode="before")
    @classmethod
    def _page_size(cls, value: Any) -> int:
        return coerce_page_size(value)

    @classmethod
    def from_params(
        cls,
        params: Optional[Mapping[str, Any]] = None,
        *,
        default_sort_by: str = "date",
        default_sort_order: str = SortOrder.DESC.value,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ) -> "TransactionQuery":
        """
        Build a query from raw request parameters.

        Accepts camelCase or snake_case keys and `q` as a synonym for `search`.
        Missing parameters take the supplied defaults.
        """
        params = params or {}

        def pick(*keys: str) -> Any:
            for key in keys:
                if params.get(key) is not None:
                    return params[key]
            return None

        sort_by = pick("sortBy", "sort_by")
        sort_order = pick("sortOrder", "sort_order")
        page_size = pick("pageSize", "page_size")
        return cls(
            search=pick("search", "q"),
            filters=pick("filters"),
            sort_by=sort_by if sort_by is not None else default_sort_by,
            sort_order=sort_order if sort_order is not None else default_sort_order,
            page=pick("page"),
            page_size=coerce_page_size(page_size, default=default_page_size),
        )


__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "MIN_PAGE_SIZE",
    "SortKey",
    "SortOrder",
    "TransactionQuery",
    "coerce_page",
    "coerce_page_size",
]
