"""
Sales Query - in-memory query engine for retail sales transactions.

This package loads a transaction dataset once and serves browse requests over
it through a fixed pipeline:

- Free-text search on customer name and phone number
- Multi-criteria filtering (membership, tags, numeric and date ranges)
- Stable sorting on date, quantity, amount, customer name or age
- Clamped pagination with navigation metadata

It also exposes filter facets, lookup by identifier, and an aggregate summary.
Malformed input never raises; it is replaced by defaults and reported as
warnings alongside the results.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from sales_query.config import Settings, get_settings
from sales_query.domain import (
    FilterOptions,
    FilterSpec,
    Record,
    SalesSummary,
    TransactionPage,
    TransactionQuery,
    parse_filters,
)
from sales_query.infrastructure import DatasetLoadError, load_records
from sales_query.service import SalesService
from sales_query.stages import (
    apply_filters,
    apply_sorting,
    paginate,
    perform_search,
    unique_values,
)
from sales_query.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Service
    "SalesService",
    # Domain
    "FilterOptions",
    "FilterSpec",
    "Record",
    "SalesSummary",
    "TransactionPage",
    "TransactionQuery",
    "parse_filters",
    # Dataset loading
    "DatasetLoadError",
    "load_records",
    # Pipeline stages
    "apply_filters",
    "apply_sorting",
    "paginate",
    "perform_search",
    "unique_values",
    # Logging
    "configure_logging",
    "get_logger",
]
