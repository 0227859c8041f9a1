"""
Query benchmark: run one request repeatedly against a service and aggregate timings.

Usage (example from CLI):
    from sales_query.benchmark import run_benchmark

    report = run_benchmark(service, {"search": "ali", "sortBy": "amount"}, runs=50)
    print(report["duration_ms"]["median"])
"""

from __future__ import annotations

import statistics
from typing import Any, Dict, List, Mapping, Optional

from sales_query.service import SalesService
from sales_query.utils.logging import get_logger
from sales_query.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)


def _round_float(value: float, decimals: int = 3) -> float:
    return round(value, decimals)


def _summarize(values: List[float], decimals: int = 3) -> Dict[str, float]:
    return {
        "median": _round_float(statistics.median(values), decimals),
        "mean": _round_float(statistics.mean(values), decimals),
        "stddev": _round_float(statistics.stdev(values), decimals) if len(values) > 1 else 0.0,
        "min": _round_float(min(values), decimals),
        "max": _round_float(max(values), decimals),
    }


def aggregate_runs(samples: List[ProfileStats]) -> Dict[str, Any]:
    """
    Aggregate per-run profiler stats into median/mean/stddev/min/max.
    """
    durations = [sample.duration_ms for sample in samples]
    aggregated: Dict[str, Any] = {
        "runs": len(samples),
        "duration_ms": _summarize(durations),
    }
    median_ms = aggregated["duration_ms"]["median"]
    aggregated["queries_per_sec"] = _round_float(1000.0 / median_ms, 1) if median_ms else 0.0

    rss = [sample.rss_bytes for sample in samples if sample.rss_bytes]
    if rss:
        aggregated["rss_bytes"] = max(rss)
    traced = [sample.peak_traced_bytes for sample in samples if sample.peak_traced_bytes]
    if traced:
        aggregated["peak_traced_bytes"] = max(traced)
    return aggregated


def run_benchmark(
    service: SalesService,
    params: Optional[Mapping[str, Any]] = None,
    runs: int = 20,
    warmup: bool = True,
    trace_memory: bool = False,
) -> Dict[str, Any]:
    """
    Execute the pipeline `runs` times for the same request.

    Parameters
    ----------
    service : SalesService
        Service holding the dataset.
    params : mapping | None
        Raw request parameters, as accepted by `SalesService.get_transactions`.
    runs : int
        Number of measured runs (at least 1).
    warmup : bool
        Run the query once before measuring.
    trace_memory : bool
        Track peak Python allocations per run (slower).
    """
    runs = max(1, runs)
    query = service.build_query(params)

    if warmup:
        service.get_transactions(query)

    samples: List[ProfileStats] = []
    total_items = 0
    for run_num in range(1, runs + 1):
        with profile_block(f"run-{run_num}", enable_tracemalloc=trace_memory) as stats:
            page = service.get_transactions(query)
        total_items = page.pagination.total_items
        samples.append(stats)
        log.debug(
            "Benchmark run complete",
            extra={"run": run_num, "duration_ms": _round_float(stats.duration_ms)},
        )

    report = aggregate_runs(samples)
    report["dataset_size"] = len(service)
    report["matched_items"] = total_items
    report["query"] = query.model_dump(mode="json", exclude={"filters"}, by_alias=True)
    report["query"]["filters"] = query.filters.to_dict()
    log.info(
        "Benchmark complete",
        extra={"runs": runs, "median_ms": report["duration_ms"]["median"]},
    )
    return report


__all__ = ["aggregate_runs", "run_benchmark"]
