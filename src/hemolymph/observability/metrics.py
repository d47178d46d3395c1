"""Prometheus metrics for query execution."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


QUERY_COUNT = Counter(
    "hemolymph_queries_total",
    "Total queries executed",
    ["status"],
)

QUERY_ERRORS = Counter(
    "hemolymph_query_errors_total",
    "Queries rejected by the tokenizer or parser",
    ["error_type"],
)

QUERY_LATENCY = Histogram(
    "hemolymph_query_latency_seconds",
    "End-to-end query latency (parse, filter, rank)",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25),
)

QUERY_RESULTS = Histogram(
    "hemolymph_query_results",
    "Number of cards returned per query",
    buckets=(0, 1, 5, 10, 25, 50, 100, 250, 500),
)

STORE_CARD_COUNT = Gauge(
    "hemolymph_store_cards",
    "Cards currently held by the card store",
)


@contextmanager
def track_latency(histogram: Histogram, **labels: str) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    target = histogram.labels(**labels) if labels else histogram
    start = time.perf_counter()
    try:
        yield
    finally:
        target.observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Get content type for the metrics exposition."""
    return CONTENT_TYPE_LATEST
