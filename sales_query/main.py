from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from pydantic import BaseModel

from sales_query import reporter
from sales_query.benchmark import run_benchmark
from sales_query.config import Settings, get_settings
from sales_query.infrastructure.loader import DatasetLoadError
from sales_query.service import SalesService
from sales_query.utils.logging import configure_logging

app = typer.Typer(help="Sales Query CLI: search, filter, sort and page retail transactions.")

DATA_OPTION = typer.Option(
    None,
    "--data",
    "-d",
    help="Dataset file (.csv or .json). Defaults to SALES_DATA_PATH.",
)
JSON_OPTION = typer.Option(False, "--json", help="Print the camelCase JSON payload.")


def _settings(data: Optional[Path]) -> Settings:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    if data is not None:
        settings = settings.model_copy(update={"data_path": data})
    return settings


def _load_service(data: Optional[Path]) -> SalesService:
    try:
        return SalesService.from_settings(_settings(data))
    except DatasetLoadError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _echo_json(payload: Any) -> None:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(by_alias=True, mode="json")
    typer.echo(json.dumps(payload, indent=2, default=str))


@app.command()
def info(data: Optional[Path] = DATA_OPTION) -> None:
    """
    Show effective configuration values and the dataset size.
    """
    settings = _settings(data)
    typer.echo(
        f"env={settings.app_env} | data={settings.data_path or '-'} | "
        f"sort={settings.default_sort_by}:{settings.default_sort_order} "
        f"page_size={settings.default_page_size} "
        f"search_fields={','.join(settings.search_fields)}"
    )
    if settings.data_path is not None:
        service = _load_service(data)
        typer.echo(f"records={len(service)}")


@app.command()
def transactions(
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Free-text search term."),
    filters: Optional[str] = typer.Option(
        None,
        "--filters",
        "-f",
        help='Filters as JSON, e.g. \'{"regions": ["North"], "ageRange": {"min": 18, "max": 35}}\'.',
    ),
    sort_by: Optional[str] = typer.Option(None, "--sort-by", help="date, quantity, amount, customerName or age."),
    sort_order: Optional[str] = typer.Option(None, "--sort-order", help="asc or desc."),
    page: int = typer.Option(1, "--page", "-p"),
    page_size: Optional[int] = typer.Option(None, "--page-size", "-n"),
    data: Optional[Path] = DATA_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """
    Run search, filter, sort and pagination over the dataset.
    """
    service = _load_service(data)
    params: Dict[str, Any] = {
        "search": search,
        "filters": filters,
        "sortBy": sort_by,
        "sortOrder": sort_order,
        "page": page,
        "pageSize": page_size,
    }
    result = service.get_transactions(params)
    if as_json:
        _echo_json(result)
    else:
        reporter.print_transactions(result)


@app.command()
def search(
    term: str = typer.Argument(..., help="Matched against customer name and phone number."),
    page: int = typer.Option(1, "--page", "-p"),
    page_size: Optional[int] = typer.Option(None, "--page-size", "-n"),
    data: Optional[Path] = DATA_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """
    Search without filters or sorting.
    """
    service = _load_service(data)
    result = service.search(term, page=page, page_size=page_size)
    if as_json:
        _echo_json(result)
    else:
        reporter.print_transactions(result)


@app.command()
def show(
    transaction_id: str = typer.Argument(..., help="Transaction identifier."),
    data: Optional[Path] = DATA_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """
    Show a single transaction.
    """
    service = _load_service(data)
    record = service.get_transaction_by_id(transaction_id)
    if record is None:
        typer.echo(f"Transaction '{transaction_id}' not found.", err=True)
        raise typer.Exit(code=1)
    if as_json:
        _echo_json(record)
    else:
        reporter.print_record(record)


@app.command()
def options(data: Optional[Path] = DATA_OPTION, as_json: bool = JSON_OPTION) -> None:
    """
    List the values available for each filter.
    """
    service = _load_service(data)
    result = service.get_filter_options()
    if as_json:
        _echo_json(result)
    else:
        reporter.print_filter_options(result)


@app.command()
def summary(data: Optional[Path] = DATA_OPTION, as_json: bool = JSON_OPTION) -> None:
    """
    Aggregate totals over the whole dataset.
    """
    service = _load_service(data)
    result = service.get_summary()
    if as_json:
        _echo_json(result)
    else:
        reporter.print_summary(result)


@app.command()
def bench(
    search: Optional[str] = typer.Option(None, "--search", "-q"),
    filters: Optional[str] = typer.Option(None, "--filters", "-f"),
    sort_by: Optional[str] = typer.Option(None, "--sort-by"),
    sort_order: Optional[str] = typer.Option(None, "--sort-order"),
    runs: Optional[int] = typer.Option(
        None, "--runs", "-r", help="Number of measured runs (default from settings)."
    ),
    trace_memory: bool = typer.Option(False, "--trace-memory", help="Track peak Python allocations."),
    data: Optional[Path] = DATA_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """
    Run one query repeatedly and report timing statistics.
    """
    settings = _settings(data)
    service = _load_service(data)
    params = {"search": search, "filters": filters, "sortBy": sort_by, "sortOrder": sort_order}
    report = run_benchmark(
        service,
        params,
        runs=runs or settings.benchmark_runs,
        trace_memory=trace_memory,
    )
    if as_json:
        _echo_json(report)
    else:
        reporter.print_benchmark(report)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
