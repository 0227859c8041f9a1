from __future__ import annotations

from typing import Any, Dict, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from sales_query.domain.models import FilterOptions, Record, SalesSummary, TransactionPage

TRANSACTION_COLUMNS = (
    ("ID", "transaction_id", "cyan"),
    ("Date", "date", "white"),
    ("Customer", "customer_name", "bold"),
    ("Phone", "phone_number", "dim"),
    ("Region", "customer_region", "magenta"),
    ("Category", "product_category", "blue"),
    ("Qty", "quantity", "yellow"),
    ("Final Amount", "final_amount", "green"),
    ("Status", "order_status", "white"),
)


def _format_value(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        return f"{value:,.2f}"
    if isinstance(value, tuple):
        return ", ".join(value)
    return str(value)


def _console(console: Optional[Console]) -> Console:
    return console or Console()


def print_transactions(page: TransactionPage, console: Optional[Console] = None) -> None:
    """
    Render one page of transactions with its pagination footer and any warnings.
    """
    console = _console(console)
    meta = page.pagination

    if not page.data:
        console.print("[yellow]No transactions match the query.[/yellow]")
    else:
        table = Table(
            title="Transactions",
            box=box.ROUNDED,
            caption=(
                f"Page {meta.current_page}/{meta.total_pages} │ "
                f"{meta.items_in_current_page} of {meta.total_items:,} items"
            ),
        )
        for header, _, style in TRANSACTION_COLUMNS:
            justify = "right" if header in ("Qty", "Final Amount") else "left"
            table.add_column(header, style=style, justify=justify, no_wrap=header == "ID")
        for record in page.data:
            table.add_row(*(_format_value(getattr(record, attr)) for _, attr, _ in TRANSACTION_COLUMNS))
        console.print(table)

    for warning in page.diagnostics.warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]")


def print_record(record: Record, console: Optional[Console] = None) -> None:
    """Render every populated field of a single record."""
    console = _console(console)
    table = Table(title=f"Transaction {record.transaction_id}", box=box.ROUNDED, show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")
    for alias, value in record.model_dump(by_alias=True).items():
        if value is not None:
            table.add_row(alias, _format_value(value))
    console.print(table)


def print_filter_options(options: FilterOptions, console: Optional[Console] = None) -> None:
    console = _console(console)
    table = Table(title="Filter Options", box=box.ROUNDED)
    table.add_column("Filter", style="cyan", no_wrap=True)
    table.add_column("Values")

    payload: Dict[str, Any] = options.model_dump(by_alias=True)
    for key, value in payload.items():
        if isinstance(value, dict):
            rendered = f"{_format_value(value.get('min'))} – {_format_value(value.get('max'))}"
        else:
            rendered = ", ".join(str(item) for item in value) or "-"
        table.add_row(key, rendered)
    console.print(table)


def print_summary(summary: SalesSummary, console: Optional[Console] = None) -> None:
    console = _console(console)
    table = Table(title="Sales Summary", box=box.ROUNDED, show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="bold green")
    table.add_row("Transactions", f"{summary.total_transactions:,}")
    table.add_row("Total amount", f"{summary.total_amount:,.2f}")
    table.add_row("Total quantity", f"{summary.total_quantity:,}")
    table.add_row("Total discount", f"{summary.total_discount:,.2f}")
    table.add_row("Average order value", f"{summary.average_order_value:,.2f}")
    console.print(table)


def print_benchmark(report: Dict[str, Any], console: Optional[Console] = None) -> None:
    """
    Render an aggregated benchmark report as a rich table.
    """
    console = _console(console)
    duration = report["duration_ms"]

    table = Table(
        title=f"Query Benchmark\n[dim]Dataset: {report.get('dataset_size', 0):,} records[/dim]",
        box=box.ROUNDED,
    )
    table.add_column("Runs", justify="right", style="blue")
    table.add_column("Matched", justify="right", style="magenta")
    table.add_column("Duration (ms)\n[dim](Median ± StdDev)[/dim]", justify="right", style="green")
    table.add_column("Min / Max (ms)", justify="right", style="green")
    table.add_column("Queries/s\n[dim](Median)[/dim]", justify="right", style="bold green")
    table.add_column("RSS (MB)", justify="right", style="yellow")

    rss = report.get("rss_bytes")
    rss_str = f"{rss / (1024 * 1024):.2f}" if rss else "N/A"
    table.add_row(
        str(report.get("runs", 0)),
        f"{report.get('matched_items', 0):,}",
        f"{duration['median']:.3f} ± {duration['stddev']:.3f}",
        f"{duration['min']:.3f} / {duration['max']:.3f}",
        f"{report.get('queries_per_sec', 0.0):,.1f}",
        rss_str,
    )
    console.print(table)


__all__ = [
    "print_benchmark",
    "print_filter_options",
    "print_record",
    "print_summary",
    "print_transactions",
]
