"""
Infrastructure package for the Sales Query engine.

Centralizes dataset I/O: reading the transaction file once at startup and
turning raw rows into immutable records. Keep this layer focused on I/O,
decoupled from the pipeline stages and the service layer.
"""

from sales_query.infrastructure.loader import (
    DatasetLoadError,
    build_records,
    load_records,
    normalize_row,
)

__all__ = [
    "DatasetLoadError",
    "build_records",
    "load_records",
    "normalize_row",
]
