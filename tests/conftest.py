"""
Pytest configuration for the Sales Query engine.

Provides fixtures for:
- A small hand-written transaction dataset (raw rows and validated records)
- A service over that dataset
- Isolated settings for CLI tests
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Generator, List, Tuple

import pytest

from sales_query.config import get_settings
from sales_query.domain.models import Record
from sales_query.service import SalesService


SAMPLE_ROWS: List[Dict[str, Any]] = [
    {
        "transactionId": "1",
        "date": "2023-01-15",
        "customerName": "Alice Johnson",
        "phoneNumber": "555-0101",
        "customerRegion": "North",
        "gender": "Female",
        "age": 28,
        "customerType": "New",
        "productCategory": "Electronics",
        "tags": ["wireless", "premium"],
        "quantity": 2,
        "totalAmount": 220.0,
        "finalAmount": 200.0,
        "paymentMethod": "Credit Card",
        "orderStatus": "Completed",
    },
    {
        "transactionId": "2",
        "date": "2023-03-02",
        "customerName": "Bob Smith",
        "phoneNumber": "555-0202",
        "customerRegion": "South",
        "gender": "Male",
        "age": 45,
        "customerType": "Returning",
        "productCategory": "Clothing",
        "tags": ["casual"],
        "quantity": 5,
        "totalAmount": 150.0,
        "finalAmount": 150.0,
        "paymentMethod": "Cash",
        "orderStatus": "Completed",
    },
    {
        "transactionId": "3",
        "date": "2023-02-10",
        "customerName": "Émile Zola",
        "phoneNumber": "555-0303",
        "customerRegion": "North",
        "gender": "Male",
        "age": 62,
        "customerType": "Loyal",
        "productCategory": "Beauty",
        "tags": ["organic"],
        "quantity": 1,
        "totalAmount": 100.0,
        "finalAmount": 80.5,
        "paymentMethod": "UPI",
        "orderStatus": "Pending",
    },
    {
        "transactionId": "4",
        "date": "2023-03-02",
        "customerName": "alice cooper",
        "phoneNumber": "555-0404",
        "customerRegion": "East",
        "gender": "Female",
        "age": 33,
        "customerType": "New",
        "productCategory": "Electronics",
        "tags": [],
        "quantity": 3,
        "totalAmount": 500.0,
        "finalAmount": 450.0,
        "paymentMethod": "Credit Card",
        "orderStatus": "Cancelled",
    },
    {
        "transactionId": "5",
        "customerName": "Chen Wei",
        "customerRegion": "West",
        "gender": "Female",
        "customerType": "Returning",
        "productCategory": "Home",
        "tags": ["premium", "eco-friendly"],
        "paymentMethod": "Wallet",
        "orderStatus": "Completed",
    },
]


@pytest.fixture
def sample_rows() -> List[Dict[str, Any]]:
    return [dict(row) for row in SAMPLE_ROWS]


@pytest.fixture
def records() -> Tuple[Record, ...]:
    return tuple(Record.model_validate(row) for row in SAMPLE_ROWS)


@pytest.fixture
def service(records: Tuple[Record, ...]) -> SalesService:
    return SalesService(records)


@pytest.fixture
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Clear env-driven settings so CLI tests see defaults with quiet logging.

    The CLI reconfigures root logging; the previous handlers are restored
    afterwards so later tests do not log into a closed runner stream.
    """
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    monkeypatch.delenv("SALES_DATA_PATH", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
