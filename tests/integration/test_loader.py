"""
Integration tests for dataset loading.

These tests write real CSV/JSON files (hand-written and generated) and verify
that:
1. Every supported header style maps onto the record fields
2. Unusable rows are skipped without failing the load
3. Missing or unsupported files raise DatasetLoadError
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from sales_query.infrastructure.loader import DatasetLoadError, load_records, normalize_row
from scripts.generate_data import _generate_rows_csv, _generate_rows_json

DEFAULT_ROWS = 40
DEFAULT_SEED = 123
DEFAULT_BATCH_SIZE = 16
DEFAULT_LIMIT = 7


class TestHeaderNormalization:
    """Column names in any supported style resolve to record attributes."""

    def test_spreadsheet_camel_and_snake_headers(self):
        row = {
            "Customer Name": "Alice",
            "phoneNumber": "555",
            "customer_region": "North",
            "Price per Unit": "10",
            "Loyalty Points": "7",
        }

        assert normalize_row(row) == {
            "customer_name": "Alice",
            "phone_number": "555",
            "customer_region": "North",
            "price_per_unit": "10",
        }


class TestCsvLoading:
    """Load CSV files written with spaced spreadsheet headers."""

    def test_generated_csv_loads_every_row(self, tmp_path: Path):
        path = tmp_path / "sales.csv"
        _generate_rows_csv(path, rows=DEFAULT_ROWS, batch_size=DEFAULT_BATCH_SIZE, seed=DEFAULT_SEED)

        records = load_records(path)

        assert len(records) == DEFAULT_ROWS
        first = records[0]
        assert first.transaction_id == "1"
        assert isinstance(first.date, date)
        assert first.customer_name
        assert first.quantity >= 1
        assert first.final_amount <= first.total_amount

    def test_csv_tags_and_blank_cells(self, tmp_path: Path):
        path = tmp_path / "sales.csv"
        path.write_text(
            "Transaction ID,Customer Name,Age,Tags\n"
            "1,Alice,30,\"premium,wireless\"\n"
            "2,Bob,,\n"
            ",Nobody,40,casual\n",
            encoding="utf-8",
        )

        records = load_records(path)

        assert [r.transaction_id for r in records] == ["1", "2"]
        assert records[0].tags == ("premium", "wireless")
        assert records[1].age is None
        assert records[1].tags is None

    def test_limit_caps_rows_read(self, tmp_path: Path):
        path = tmp_path / "sales.csv"
        _generate_rows_csv(path, rows=DEFAULT_ROWS, batch_size=DEFAULT_BATCH_SIZE, seed=DEFAULT_SEED)

        assert len(load_records(path, limit=DEFAULT_LIMIT)) == DEFAULT_LIMIT


class TestJsonLoading:
    """Load JSON datasets (plain list or wrapped in a `data` key)."""

    def test_generated_json_matches_csv(self, tmp_path: Path):
        csv_path = tmp_path / "sales.csv"
        json_path = tmp_path / "sales.json"
        _generate_rows_csv(csv_path, rows=DEFAULT_ROWS, batch_size=DEFAULT_BATCH_SIZE, seed=DEFAULT_SEED)
        _generate_rows_json(json_path, rows=DEFAULT_ROWS, seed=DEFAULT_SEED)

        assert load_records(json_path) == load_records(csv_path)

    def test_data_wrapper_and_skipped_rows(self, tmp_path: Path):
        path = tmp_path / "sales.json"
        path.write_text(
            json.dumps({"data": [{"transactionId": 1, "gender": "Male"}, {"gender": "Female"}, "junk"]}),
            encoding="utf-8",
        )

        records = load_records(path)

        assert len(records) == 1
        assert records[0].transaction_id == "1"


class TestLoadErrors:
    """Startup failures surface as DatasetLoadError."""

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(DatasetLoadError, match="not found"):
            load_records(tmp_path / "absent.csv")

    def test_unsupported_suffix(self, tmp_path: Path):
        path = tmp_path / "sales.xlsx"
        path.write_bytes(b"")

        with pytest.raises(DatasetLoadError, match="Unsupported dataset format"):
            load_records(path)

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "sales.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(DatasetLoadError, match="Invalid JSON"):
            load_records(path)

    def test_deeply_nested_json(self, tmp_path: Path):
        path = tmp_path / "sales.json"
        path.write_text("[" * 100_000 + "]" * 100_000, encoding="utf-8")

        with pytest.raises(DatasetLoadError, match="Invalid JSON"):
            load_records(path)

    def test_json_without_record_list(self, tmp_path: Path):
        path = tmp_path / "sales.json"
        path.write_text(json.dumps({"rows": []}), encoding="utf-8")

        with pytest.raises(DatasetLoadError):
            load_records(path)
