"""
Sort stage: stable ordering by one of the supported sort keys.

Missing values sort as the key's neutral element (0, the epoch date, or an
empty name) so incomplete records land at one end instead of failing the
comparison.
"""

from __future__ import annotations

import unicodedata
from datetime import date
from typing import Any, Callable, Dict, List, Sequence, Tuple

from sales_query.domain.query import SortKey, SortOrder
from sales_query.stages.contracts import SortOutcome
from sales_query.utils.fields import date_value, numeric_value, text_value
from sales_query.utils.logging import get_logger

log = get_logger(__name__)

EPOCH = date(1970, 1, 1)


def collation_key(text: str) -> Tuple[str, str]:
    """
    Case-insensitive, accent-aware ordering key.

    Accents are folded away for the primary comparison so "Émile" sorts with
    "emile"; the case-folded original breaks ties deterministically.
    """
    folded = text.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base, folded


def _numeric_key(field: str) -> Callable[[Any], float]:
    def key(record: Any) -> float:
        value = numeric_value(record, field)
        return 0.0 if value is None else value

    return key


def _date_key(record: Any) -> date:
    return date_value(record, "date") or EPOCH


def _name_key(record: Any) -> Tuple[str, str]:
    return collation_key(text_value(record, "customerName") or "")


_SORT_KEYS: Dict[SortKey, Callable[[Any], Any]] = {
    SortKey.DATE: _date_key,
    SortKey.QUANTITY: _numeric_key("quantity"),
    SortKey.FINAL_AMOUNT: _numeric_key("finalAmount"),
    SortKey.CUSTOMER_NAME: _name_key,
    SortKey.AGE: _numeric_key("age"),
}


def apply_sorting(
    records: Sequence[Any],
    sort_by: Any = SortKey.DATE.value,
    sort_order: Any = SortOrder.DESC.value,
) -> SortOutcome:
    """
    Return a sorted copy of `records`.

    Unsupported keys keep the incoming order with ``sort_applied`` False.
    Equal keys keep their incoming relative order in both directions.
    """
    if not records:
        return SortOutcome(data=[], sort_applied=False)

    data: List[Any] = list(records)
    order = SortOrder.parse(sort_order)
    key = SortKey.parse(sort_by)
    if key is None:
        log.debug("Unsupported sort key; keeping incoming order", extra={"sort_by": sort_by})
        return SortOutcome(data=data, sort_applied=False)

    try:
        ordered = sorted(data, key=_SORT_KEYS[key], reverse=order is SortOrder.DESC)
    except Exception:  # noqa: BLE001 - stage boundary falls back to the unsorted input
        log.exception("Sorting failed; returning unsorted data", extra={"sort_by": key.value})
        return SortOutcome(data=data, sort_applied=False)

    return SortOutcome(data=ordered, sort_applied=True)


__all__ = ["EPOCH", "apply_sorting", "collation_key"]
