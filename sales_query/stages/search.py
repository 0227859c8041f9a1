"""
Search stage: case-insensitive substring match across text fields.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from sales_query.stages.contracts import SearchOutcome
from sales_query.utils.fields import field_value

DEFAULT_SEARCH_FIELDS: tuple[str, ...] = ("customerName", "phoneNumber")


def _resolve_fields(fields: Optional[Sequence[str]]) -> tuple[str, ...]:
    if isinstance(fields, str) or not isinstance(fields, (list, tuple)):
        return DEFAULT_SEARCH_FIELDS
    valid = tuple(name for name in fields if isinstance(name, str) and name)
    return valid or DEFAULT_SEARCH_FIELDS


def _matches(record: Any, needle: str, fields: tuple[str, ...]) -> bool:
    for name in fields:
        value = field_value(record, name)
        if value is not None and needle in str(value).lower():
            return True
    return False


def perform_search(
    records: Sequence[Any],
    term: Any,
    fields: Optional[Sequence[str]] = None,
) -> SearchOutcome:
    """
    Keep records where any of `fields` contains `term` (case-insensitive).

    A blank or non-string term passes the collection through untouched with
    ``search_applied`` set to False. Missing fields never match.
    """
    if not records:
        return SearchOutcome(results=[], search_applied=False, result_count=0)

    data: List[Any] = list(records)
    if not isinstance(term, str) or not term.strip():
        return SearchOutcome(results=data, search_applied=False, result_count=len(data))

    needle = term.strip().lower()
    search_fields = _resolve_fields(fields)
    results = [record for record in data if _matches(record, needle, search_fields)]
    return SearchOutcome(results=results, search_applied=True, result_count=len(results))


__all__ = ["DEFAULT_SEARCH_FIELDS", "perform_search"]
