import csv
import json
from pathlib import Path
from time import sleep

from sales_query import config
from sales_query.utils import profiler
from scripts import generate_data

GENERATED_ROWS = 5


def test_settings_defaults():
    settings = config.Settings(_env_file=None)
    assert settings.default_page_size == 10
    assert settings.default_sort_by == "date"
    assert settings.default_sort_order == "desc"
    assert settings.search_fields == ["customerName", "phoneNumber"]
    assert settings.benchmark_runs > 0


def test_settings_read_environment(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("SALES_DATA_PATH", str(tmp_path / "sales.csv"))
    monkeypatch.setenv("DEFAULT_PAGE_SIZE", "25")
    monkeypatch.setenv("SEARCH_FIELDS", '["customerName"]')

    settings = config.Settings(_env_file=None)

    assert settings.data_path == tmp_path / "sales.csv"
    assert settings.default_page_size == 25
    assert settings.search_fields == ["customerName"]


def test_profile_block_measures_time():
    with profiler.profile_block("sleep") as stats:
        sleep(0.05)
    assert stats.duration_seconds >= 0.05
    assert stats.duration_ms >= 50
    assert stats.rss_bytes > 0
    assert stats.peak_traced_bytes is not None


def test_profile_block_without_tracemalloc():
    with profiler.profile_block("quick", enable_tracemalloc=False) as stats:
        sum(range(1000))
    assert stats.peak_traced_bytes is None


def test_generate_data_writes_csv(tmp_path: Path):
    csv_path = tmp_path / "sales.csv"
    generate_data._generate_rows_csv(csv_path, rows=GENERATED_ROWS, batch_size=2, seed=123)
    assert csv_path.exists()
    with csv_path.open("r", newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    # header + 5 rows = 6 lines
    assert len(rows) == GENERATED_ROWS + 1
    header = rows[0]
    assert header[:4] == ["Transaction ID", "Date", "Customer ID", "Customer Name"]
    assert len(header) == len(generate_data.CSV_COLUMNS)


def test_generate_data_is_deterministic(tmp_path: Path):
    first = tmp_path / "a.json"
    second = tmp_path / "b.json"
    generate_data._generate_rows_json(first, rows=GENERATED_ROWS, seed=7)
    generate_data._generate_rows_json(second, rows=GENERATED_ROWS, seed=7)

    payload = json.loads(first.read_text(encoding="utf-8"))
    assert payload == json.loads(second.read_text(encoding="utf-8"))
    assert [row["transactionId"] for row in payload] == ["1", "2", "3", "4", "5"]
    for row in payload:
        assert row["finalAmount"] <= row["totalAmount"]
