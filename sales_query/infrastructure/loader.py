"""
Dataset loading for the Sales Query engine.

The record collection is read once at startup from a JSON or CSV file and
held as an immutable tuple of frozen `Record` objects. Column headers may use
camelCase (`customerName`), snake_case (`customer_name`), or the spaced
spreadsheet style of the retail export (`Customer Name`). Rows that cannot
become a record (no transaction identifier) are skipped and counted.
"""

from __future__ import annotations

import csv
import json
import re
from itertools import islice
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from sales_query.domain.models import Record
from sales_query.utils.logging import get_logger

log = get_logger(__name__)

SUPPORTED_SUFFIXES = (".json", ".csv")

_NON_ALNUM = re.compile(r"[^a-z0-9]")


class DatasetLoadError(RuntimeError):
    """Raised when the dataset file is missing, unreadable, or of an unknown format."""


def _normalize_header(name: str) -> str:
    return _NON_ALNUM.sub("", name.lower())


def _header_index() -> Dict[str, str]:
    index: Dict[str, str] = {}
    for attr, info in Record.model_fields.items():
        index[_normalize_header(attr)] = attr
        if info.alias:
            index[_normalize_header(info.alias)] = attr
    # Column names used by the retail spreadsheet export.
    index.update(
        {
            "transactionid": "transaction_id",
            "id": "transaction_id",
            "priceperunit": "price_per_unit",
            "discount": "discount_percentage",
            "region": "customer_region",
            "category": "product_category",
            "name": "customer_name",
            "phone": "phone_number",
        }
    )
    return index


_HEADERS = _header_index()


def normalize_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Map raw column names onto Record attribute names; unknown columns are dropped."""
    normalized: Dict[str, Any] = {}
    for key, value in row.items():
        if not isinstance(key, str):
            continue
        attr = _HEADERS.get(_normalize_header(key))
        if attr is not None and attr not in normalized:
            normalized[attr] = value
    return normalized


def build_records(rows: Iterable[Any]) -> Tuple[Record, ...]:
    """
    Validate raw rows into records, skipping rows that cannot be used.

    Rows that are already `Record` instances are kept as they are. Output
    order follows input order.
    """
    records: List[Record] = []
    skipped = 0
    for position, row in enumerate(rows, start=1):
        if isinstance(row, Record):
            records.append(row)
            continue
        if not isinstance(row, Mapping):
            skipped += 1
            continue
        try:
            records.append(Record.model_validate(normalize_row(row)))
        except ValidationError as exc:
            skipped += 1
            log.debug("Skipping unusable row", extra={"row": position, "errors": exc.error_count()})
    if skipped:
        log.warning(
            "Skipped %d row(s) without a usable transaction id", skipped, extra={"skipped": skipped}
        )
    return tuple(records)


def _read_json(path: Path) -> Iterator[Mapping[str, Any]]:
    with path.open("r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except (ValueError, RecursionError) as exc:
            raise DatasetLoadError(f"Invalid JSON in dataset {path}: {exc}") from exc
    if isinstance(payload, Mapping):
        payload = payload.get("data")
    if not isinstance(payload, list):
        raise DatasetLoadError(f"Dataset {path} must hold a list of records or a 'data' list.")
    yield from payload


def _read_csv(path: Path) -> Iterator[Mapping[str, Any]]:
    with path.open("r", newline="", encoding="utf-8-sig") as f:
        for row in csv.DictReader(f):
            yield {key: (value if value != "" else None) for key, value in row.items()}


def load_records(path: Path | str, limit: Optional[int] = None) -> Tuple[Record, ...]:
    """
    Load the dataset at `path` into an immutable tuple of records.

    Parameters
    ----------
    path : Path | str
        A `.json` or `.csv` file.
    limit : int | None
        Optional cap on the number of raw rows read (useful for quick runs).

    Raises
    ------
    DatasetLoadError
        If the file does not exist, cannot be parsed, or has an unsupported suffix.
    """
    path = Path(path)
    if not path.is_file():
        raise DatasetLoadError(f"Dataset file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise DatasetLoadError(
            f"Unsupported dataset format '{suffix}'. Expected one of: {', '.join(SUPPORTED_SUFFIXES)}"
        )

    reader = _read_json if suffix == ".json" else _read_csv
    try:
        rows: Iterable[Mapping[str, Any]] = reader(path)
        if limit is not None:
            rows = islice(rows, max(0, limit))
        records = build_records(rows)
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise DatasetLoadError(f"Could not read dataset {path}: {exc}") from exc

    log.info("Dataset loaded", extra={"path": str(path), "records": len(records)})
    return records


__all__ = ["DatasetLoadError", "build_records", "load_records", "normalize_row"]
