"""
Optional-value field access for transaction records.

Every predicate, comparator, and aggregate reads records through this module.
A record may be a pydantic model (read by attribute name or alias) or a plain
mapping (read by key, with camelCase/snake_case spellings tried in turn).
Anything absent or malformed comes back as ``None``; callers decide what
``None`` means for them.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from decimal import Decimal
from functools import lru_cache
from typing import Any, Mapping, Optional

from pydantic import BaseModel

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


@lru_cache(maxsize=None)
def _model_attribute(model: type, name: str) -> Optional[str]:
    fields = model.model_fields  # type: ignore[attr-defined]
    for candidate in (name, to_snake(name)):
        if candidate in fields:
            return candidate
    for attr, info in fields.items():
        if info.alias == name:
            return attr
    return None


def field_value(record: Any, name: str) -> Any:
    """Return the raw value of ``name`` on ``record`` or None when absent."""
    if not isinstance(name, str) or not name:
        return None
    if isinstance(record, BaseModel):
        attr = _model_attribute(type(record), name)
        return getattr(record, attr, None) if attr else None
    if isinstance(record, Mapping):
        for key in (name, to_camel(name), to_snake(name)):
            value = record.get(key)
            if value is not None:
                return value
    return None


def as_number(value: Any) -> Optional[float]:
    """Coerce ints, floats, decimals and numeric strings; reject bools and non-finite values."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def as_date(value: Any) -> Optional[date]:
    """Coerce a date, datetime, or ISO-8601 string to a calendar date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def numeric_value(record: Any, name: str) -> Optional[float]:
    return as_number(field_value(record, name))


def date_value(record: Any, name: str) -> Optional[date]:
    return as_date(field_value(record, name))


def text_value(record: Any, name: str) -> Optional[str]:
    value = field_value(record, name)
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


__all__ = [
    "as_date",
    "as_number",
    "date_value",
    "field_value",
    "numeric_value",
    "text_value",
    "to_camel",
    "to_snake",
]
