"""
Profiling utilities for timing pipeline runs.

Measures wall-clock time (perf_counter), process RSS (psutil), and peak Python
allocations (tracemalloc) around a block of code.

Usage:
    from sales_query.utils.profiler import profile_block

    with profile_block("transactions") as stats:
        service.get_transactions(params)

    print(stats.duration_seconds, stats.peak_traced_bytes)
"""

from __future__ import annotations

import contextlib
import time
import tracemalloc
from dataclasses import dataclass, field
from typing import Any, Generator, Optional

import psutil


@dataclass
class ProfileStats:
    """
    Container for profiling measurements.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)
    rss_bytes: Optional[int] = field(default=None)
    peak_traced_bytes: Optional[int] = field(default=None)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        return self.duration_seconds * 1000.0


@contextlib.contextmanager
def profile_block(
    label: str, enable_tracemalloc: bool = True
) -> Generator[ProfileStats, None, None]:
    """
    Profile a block of code.

    Parameters
    ----------
    label : str
        Human-friendly label for the profiled block.
    enable_tracemalloc : bool
        Track peak Python allocations inside the block. Adds overhead, so the
        benchmark disables it for timing-only runs.
    """
    stats = ProfileStats(label=label)
    process = psutil.Process()

    started_tracing = False
    if enable_tracemalloc and not tracemalloc.is_tracing():
        tracemalloc.start()
        started_tracing = True
    if enable_tracemalloc:
        tracemalloc.reset_peak()

    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts
        stats.rss_bytes = process.memory_info().rss

        if enable_tracemalloc and tracemalloc.is_tracing():
            _, peak = tracemalloc.get_traced_memory()
            stats.peak_traced_bytes = peak
            if started_tracing:
                tracemalloc.stop()


__all__ = ["ProfileStats", "profile_block"]
