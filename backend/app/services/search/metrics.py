# backend/app/services/search/metrics.py
"""
Prometheus metrics for location search.

Provides observability for:
- Search latency
- Result counts and zero-result searches
- Geocoding outcomes (ok, not_found, timeout, error)
"""
from __future__ import annotations

from prometheus_client import Counter, Histogram

from app.monitoring.prometheus_metrics import REGISTRY

SEARCH_LATENCY = Histogram(
    "directory_search_latency_ms",
    "Search latency in milliseconds",
    ["sort_mode"],
    registry=REGISTRY,
    buckets=[5, 10, 25, 50, 100, 200, 500, 1000, 2000],
)

SEARCH_RESULT_COUNT = Histogram(
    "directory_search_result_count",
    "Total matching locations per search",
    registry=REGISTRY,
    buckets=[0, 1, 5, 10, 20, 50, 100, 500],
)

SEARCH_ZERO_RESULTS = Counter(
    "directory_search_zero_results_total",
    "Count of searches returning zero results",
    ["has_filters"],
    registry=REGISTRY,
)

SEARCH_REQUESTS = Counter(
    "directory_search_requests_total",
    "Total search requests",
    ["sort_mode"],
    registry=REGISTRY,
)

GEOCODE_OUTCOMES = Counter(
    "directory_search_geocode_total",
    "Geocoding lookups by outcome",
    ["outcome"],
    registry=REGISTRY,
)


def record_search_metrics(
    total_latency_ms: float,
    sort_mode: str,
    total_results: int,
    has_filters: bool,
) -> None:
    """Record all metrics for a search request."""
    SEARCH_LATENCY.labels(sort_mode=sort_mode).observe(total_latency_ms)
    SEARCH_RESULT_COUNT.observe(total_results)
    SEARCH_REQUESTS.labels(sort_mode=sort_mode).inc()
    if total_results == 0:
        SEARCH_ZERO_RESULTS.labels(has_filters="true" if has_filters else "false").inc()


def record_geocode_outcome(outcome: str) -> None:
    GEOCODE_OUTCOMES.labels(outcome=outcome).inc()


__all__ = [
    "SEARCH_LATENCY",
    "SEARCH_RESULT_COUNT",
    "SEARCH_ZERO_RESULTS",
    "SEARCH_REQUESTS",
    "GEOCODE_OUTCOMES",
    "record_search_metrics",
    "record_geocode_outcome",
]
