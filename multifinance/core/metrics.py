"""Prometheus metrics for the Multifinance service.

Metrics are organized into two categories:

Business Metrics (for Product/Finance):
- multifinance_transaction_total: Record attempts by outcome
- multifinance_financed_amount_total: Sum of otr + admin_fee recorded

Technical Metrics (for Engineering/SRE):
- multifinance_record_latency_seconds: Record call latency
- multifinance_limit_conflict_retry_total: Re-runs after a stale limit write
- multifinance_contract_number_collision_total: Contract number collisions
- multifinance_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Product/Finance dashboards)
# =============================================================================

transaction_total = Counter(
    "multifinance_transaction_total",
    "Total number of transaction record attempts",
    ["outcome"],  # recorded, or a TransactionErrorKind value
)

financed_amount_total = Counter(
    "multifinance_financed_amount_total",
    "Total amount (otr + admin_fee) deducted from credit limits",
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

record_latency = Histogram(
    "multifinance_record_latency_seconds",
    "Transaction record latency in seconds",
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

limit_conflict_retries = Counter(
    "multifinance_limit_conflict_retry_total",
    "Total number of record attempts re-run after a concurrent limit update",
)

contract_number_collisions = Counter(
    "multifinance_contract_number_collision_total",
    "Total number of generated contract numbers that already existed",
)

http_requests_total = Counter(
    "multifinance_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "multifinance_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_transaction_recorded(total_amount: int) -> None:
    """Record a successfully recorded transaction."""
    transaction_total.labels(outcome="recorded").inc()
    financed_amount_total.inc(total_amount)


def record_transaction_failure(kind: str) -> None:
    """Record a failed record attempt by error kind."""
    transaction_total.labels(outcome=kind.lower()).inc()


@contextmanager
def track_record_latency() -> Generator[None, None, None]:
    """Context manager to track record latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        record_latency.observe(duration)


def record_limit_conflict_retry() -> None:
    """Record a re-run caused by a concurrent limit update."""
    limit_conflict_retries.inc()


def record_contract_number_collision() -> None:
    """Record a contract number collision."""
    contract_number_collisions.inc()


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
