"""
Prometheus metrics for the chat API.

Request counters and latency histograms are recorded by the middleware;
search tiers and generation outcomes by the services that produce them.
"""

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

REQUEST_COUNT = Counter(
    "amoura_requests_total",
    "Total HTTP requests",
    ["endpoint", "method", "status"],
)

REQUEST_DURATION = Histogram(
    "amoura_request_duration_ms",
    "Request latency in milliseconds",
    ["endpoint"],
    buckets=(5, 10, 25, 50, 100, 250, 500, 1000, 2500, 5000, 10000, 30000, 60000),
)

SEARCH_TIERS = Counter(
    "amoura_search_tier_total",
    "Search tier that produced the products",
    ["tier"],  # direct, smart, keyword, random
)

SEARCH_DURATION = Histogram(
    "amoura_search_duration_seconds",
    "Time spent in the catalog search tiers",
)

GENERATION_OUTCOMES = Counter(
    "amoura_generation_outcomes_total",
    "Generation results",
    ["outcome"],  # success, exhausted, permanent, configuration
)

GENERATION_DURATION = Histogram(
    "amoura_generation_duration_seconds",
    "Time spent calling the generation endpoint, backoff included",
    buckets=(0.5, 1, 2.5, 5, 10, 20, 40, 60, 120),
)


def record_request(endpoint: str, method: str, status: int) -> None:
    """Increment the request counter."""
    REQUEST_COUNT.labels(endpoint=endpoint, method=method, status=str(status)).inc()


def observe_duration(endpoint: str, duration_ms: float) -> None:
    """Record request duration."""
    REQUEST_DURATION.labels(endpoint=endpoint).observe(duration_ms)


def record_search_tier(tier: str) -> None:
    SEARCH_TIERS.labels(tier=tier).inc()


def observe_search_duration(seconds: float) -> None:
    SEARCH_DURATION.observe(seconds)


def record_generation_outcome(outcome: str) -> None:
    GENERATION_OUTCOMES.labels(outcome=outcome).inc()


def observe_generation_duration(seconds: float) -> None:
    GENERATION_DURATION.observe(seconds)


def metrics_response() -> tuple[bytes, str]:
    """Return (body, content_type) for the /metrics endpoint."""
    return generate_latest(), CONTENT_TYPE_LATEST
