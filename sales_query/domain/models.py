"""
Domain models for the Sales Query engine.

`Record` is the immutable transaction entity shared by every pipeline stage.
Construction is lenient: malformed optional values collapse to ``None`` so a
dirty row degrades to missing fields instead of failing the whole load. Only a
missing transaction identifier is rejected.

The response models (`TransactionPage`, `FilterOptions`, `SalesSummary`) define
the caller-facing contract and serialize with camelCase keys.
"""
from __future__ import annotations

import datetime as dt
import re
from typing import Any, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sales_query.utils.fields import as_date, as_number, to_camel

_TAG_SEPARATORS = re.compile(r"[,;|]")

_CAMEL_MODEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _lenient_int(value: Any) -> Optional[int]:
    number = as_number(value)
    if number is None or number != int(number):
        return None
    return int(number)


class Record(BaseModel):
    """
    One sales transaction. Attribute names are snake_case; the wire format
    (JSON/CSV input and API output) uses the camelCase aliases.
    """

    transaction_id: str = Field(..., description="Opaque unique identifier.")
    date: Optional[dt.date] = Field(None, description="Calendar date of the sale.")
    quantity: Optional[int] = Field(None, description="Units sold (non-negative).")
    price_per_unit: Optional[float] = None
    discount_percentage: Optional[float] = None
    total_amount: Optional[float] = Field(None, description="Amount before discount.")
    final_amount: Optional[float] = Field(None, description="Amount after discount.")
    payment_method: Optional[str] = None
    order_status: Optional[str] = None
    delivery_type: Optional[str] = None

    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    phone_number: Optional[str] = None
    customer_region: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[int] = None
    customer_type: Optional[str] = None

    product_id: Optional[str] = None
    product_name: Optional[str] = None
    brand: Optional[str] = None
    product_category: Optional[str] = None
    tags: Optional[Tuple[str, ...]] = None

    store_id: Optional[str] = None
    store_location: Optional[str] = None
    salesperson_id: Optional[str] = None
    employee_name: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @field_validator("transaction_id", mode="before")
    @classmethod
    def _identifier(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(int(value)) if float(value).is_integer() else str(value)
        if isinstance(value, str):
            value = value.strip()
        return value or None

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_date(cls, value: Any) -> Optional[dt.date]:
        return as_date(value)

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, value: Any) -> Optional[int]:
        number = _lenient_int(value)
        return number if number is not None and number >= 0 else None

    @field_validator("age", mode="before")
    @classmethod
    def _age(cls, value: Any) -> Optional[int]:
        number = _lenient_int(value)
        return number if number is not None and number >= 0 else None

    @field_validator(
        "price_per_unit",
        "discount_percentage",
        "total_amount",
        "final_amount",
        mode="before",
    )
    @classmethod
    def _amount(cls, value: Any) -> Optional[float]:
        return as_number(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, value: Any) -> Optional[Tuple[str, ...]]:
        if value is None:
            return None
        if isinstance(value, str):
            items = _TAG_SEPARATORS.split(value)
        elif isinstance(value, (list, tuple, set, frozenset)):
            items = list(value)
        else:
            return None
        tags = tuple(str(item).strip() for item in items if item is not None and str(item).strip())
        return tags or None

    @field_validator(
        "payment_method",
        "order_status",
        "delivery_type",
        "customer_id",
        "customer_name",
        "phone_number",
        "customer_region",
        "gender",
        "customer_type",
        "product_id",
        "product_name",
        "brand",
        "product_category",
        "store_id",
        "store_location",
        "salesperson_id",
        "employee_name",
        mode="before",
    )
    @classmethod
    def _text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, (dict, list, tuple)):
            return None
        text = str(value).strip()
        return text or None


class PaginationInfo(BaseModel):
    current_page: int
    page_size: int
    total_items: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool
    items_in_current_page: int

    model_config = _CAMEL_MODEL


class QueryDiagnostics(BaseModel):
    """Side-channel information about how a query was processed."""

    search_applied: bool = False
    sort_applied: bool = False
    filter_count: int = 0
    warnings: List[str] = Field(default_factory=list)

    model_config = _CAMEL_MODEL


class TransactionPage(BaseModel):
    data: List[Record]
    pagination: PaginationInfo
    diagnostics: QueryDiagnostics = Field(default_factory=QueryDiagnostics)

    model_config = _CAMEL_MODEL


class NumericRange(BaseModel):
    min: Union[int, float] = 0
    max: Union[int, float] = 0


class DateSpan(BaseModel):
    min: Optional[dt.date] = None
    max: Optional[dt.date] = None


class FilterOptions(BaseModel):
    """Distinct values available for each filterable field."""

    regions: List[Any] = Field(default_factory=list)
    genders: List[Any] = Field(default_factory=list)
    categories: List[Any] = Field(default_factory=list)
    tags: List[Any] = Field(default_factory=list)
    payment_methods: List[Any] = Field(default_factory=list)
    customer_types: List[Any] = Field(default_factory=list)
    order_statuses: List[Any] = Field(default_factory=list)
    age_range: NumericRange = Field(default_factory=NumericRange)
    date_range: DateSpan = Field(default_factory=DateSpan)

    model_config = _CAMEL_MODEL


class SalesSummary(BaseModel):
    total_transactions: int
    total_amount: float
    total_quantity: int
    total_discount: float
    average_order_value: float

    model_config = _CAMEL_MODEL


__all__ = [
    "DateSpan",
    "FilterOptions",
    "NumericRange",
    "PaginationInfo",
    "QueryDiagnostics",
    "Record",
    "SalesSummary",
    "TransactionPage",
]
