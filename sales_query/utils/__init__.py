"""
Utilities package for the Sales Query engine.

Exports shared helpers for logging, profiling, and optional-value field
access. Keep this package free of pipeline logic.
"""

from sales_query.utils.fields import date_value, field_value, numeric_value, text_value
from sales_query.utils.logging import configure_logging, get_logger
from sales_query.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "date_value",
    "field_value",
    "get_logger",
    "numeric_value",
    "ProfileStats",
    "profile_block",
    "text_value",
]
