from __future__ import annotations

from rich.console import Console

from sales_query import reporter


def _console() -> Console:
    return Console(record=True, width=200, color_system=None)


def test_transactions_table_shows_rows_footer_and_warnings(service) -> None:
    page = service.get_transactions({"filters": {"priceRange": {"min": 500, "max": 100}}})
    console = _console()

    reporter.print_transactions(page, console=console)

    text = console.export_text()
    assert "Bob Smith" in text
    assert "Page 1/1" in text
    assert "Values have been swapped" in text


def test_empty_page_message(service) -> None:
    page = service.get_transactions({"search": "nobody"})
    console = _console()

    reporter.print_transactions(page, console=console)

    assert "No transactions match the query." in console.export_text()


def test_record_options_and_summary(service) -> None:
    console = _console()

    reporter.print_record(service.get_transaction_by_id("1"), console=console)
    reporter.print_filter_options(service.get_filter_options(), console=console)
    reporter.print_summary(service.get_summary(), console=console)

    text = console.export_text()
    assert "customerName" in text
    assert "wireless" in text
    assert "880.50" in text
