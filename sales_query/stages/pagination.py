"""
Pagination stage: slice a result set into one page and describe it.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any, List

from sales_query.domain.query import DEFAULT_PAGE_SIZE, coerce_page, coerce_page_size
from sales_query.stages.contracts import PageOutcome, PaginationMeta


def paginate(records: Any, page: Any = 1, page_size: Any = DEFAULT_PAGE_SIZE) -> PageOutcome:
    """
    Return the requested page and its metadata.

    A page past the end is clamped to the last page, so callers never get an
    empty page while earlier pages hold data. ``total_pages`` is at least 1.
    """
    if isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
        records = []

    current = coerce_page(page)
    size = coerce_page_size(page_size)

    total_items = len(records)
    total_pages = math.ceil(total_items / size)
    if total_pages > 0 and current > total_pages:
        current = total_pages

    start = (current - 1) * size
    end = min(start + size, total_items)
    data: List[Any] = list(records[start:end])

    return PageOutcome(
        data=data,
        pagination=PaginationMeta(
            current_page=current,
            page_size=size,
            total_items=total_items,
            total_pages=max(1, total_pages),
            has_next_page=end < total_items,
            has_previous_page=current > 1,
            items_in_current_page=len(data),
        ),
    )


__all__ = ["paginate"]
