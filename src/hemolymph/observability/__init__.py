"""Observability module for structured logging, query correlation and metrics."""

from hemolymph.observability.context import bind_query, get_query_context, query_context, set_query_context
from hemolymph.observability.logging import JsonFormatter, configure_logging
from hemolymph.observability.metrics import (
    QUERY_COUNT,
    QUERY_ERRORS,
    QUERY_LATENCY,
    QUERY_RESULTS,
    STORE_CARD_COUNT,
    get_metrics,
    get_metrics_content_type,
    track_latency,
)


__all__ = [
    "QUERY_COUNT",
    "QUERY_ERRORS",
    "QUERY_LATENCY",
    "QUERY_RESULTS",
    "STORE_CARD_COUNT",
    "JsonFormatter",
    "bind_query",
    "configure_logging",
    "get_metrics",
    "get_metrics_content_type",
    "get_query_context",
    "query_context",
    "set_query_context",
    "track_latency",
]
