"""Prometheus metrics for the Aura lending service.

Metrics are organized into two categories:

Business Metrics (for Product/Finance):
- aura_score_calculated_total: Score calculations by rating
- aura_score_value: Distribution of calculated scores
- aura_obligation_originated_total: Originations by product
- aura_origination_rejected_total: Rejections by product and reason
- aura_originated_amount_dollars: Amount extended by product
- aura_payment_recorded_total: Payments by product
- aura_obligation_terminated_total: Obligations completed or paid off

Technical Metrics (for Engineering/SRE):
- aura_payment_conflict_retry_total: Optimistic-lock retries on payments
- aura_cdp_fetch_latency_seconds: CDP analytics API latency
- aura_cdp_fetch_failures_total: CDP analytics API failures
- aura_notification_latency_seconds: Notification webhook latency
- aura_notification_retry_total / _success_total / _failures_total
- aura_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Product/Finance dashboards)
# =============================================================================

score_calculated_total = Counter(
    "aura_score_calculated_total",
    "Total number of Aura Score calculations",
    ["rating"],
)

score_value = Histogram(
    "aura_score_value",
    "Distribution of calculated Aura Scores",
    buckets=[350, 400, 450, 500, 550, 620, 680, 750, 800, 850],
)

obligation_originated_total = Counter(
    "aura_obligation_originated_total",
    "Total number of obligations originated",
    ["product"],
)

origination_rejected_total = Counter(
    "aura_origination_rejected_total",
    "Total number of rejected origination requests",
    ["product", "reason"],
)

originated_amount = Histogram(
    "aura_originated_amount_dollars",
    "Amount extended per originated obligation in dollars",
    ["product"],
    buckets=[1_000, 5_000, 10_000, 50_000, 100_000, 250_000, 500_000, 1_000_000],
)

payment_recorded_total = Counter(
    "aura_payment_recorded_total",
    "Total number of payments recorded",
    ["product"],
)

obligation_terminated_total = Counter(
    "aura_obligation_terminated_total",
    "Total number of obligations reaching a terminal status",
    ["product", "status"],
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

payment_conflict_retries = Counter(
    "aura_payment_conflict_retry_total",
    "Payments re-applied after a concurrent modification",
)

cdp_fetch_latency = Histogram(
    "aura_cdp_fetch_latency_seconds",
    "CDP analytics API fetch latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

cdp_fetch_failures = Counter(
    "aura_cdp_fetch_failures_total",
    "Total number of CDP analytics API failures",
    ["error_type"],  # timeout, error, not_found
)

cdp_fetch_total = Counter(
    "aura_cdp_fetch_total",
    "Total number of CDP analytics API requests",
    ["status"],  # success, failure
)

notification_latency = Histogram(
    "aura_notification_latency_seconds",
    "Notification webhook delivery latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

notification_retries = Counter(
    "aura_notification_retry_total",
    "Total number of notification retries",
)

notification_failures = Counter(
    "aura_notification_failures_total",
    "Total number of notification delivery failures (after all retries)",
    ["event_type"],
)

notification_success = Counter(
    "aura_notification_success_total",
    "Total number of successful notification deliveries",
    ["event_type"],
)

http_requests_total = Counter(
    "aura_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "aura_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_score_calculated(rating: str, score: int) -> None:
    """Record a score calculation."""
    score_calculated_total.labels(rating=rating).inc()
    score_value.observe(score)


def record_origination(product: str, amount_cents: int) -> None:
    """Record a successful origination."""
    obligation_originated_total.labels(product=product).inc()
    originated_amount.labels(product=product).observe(amount_cents / 100)


def record_origination_rejected(product: str, reason: str) -> None:
    """Record a rejected origination (reason is the error code)."""
    origination_rejected_total.labels(product=product, reason=reason).inc()


def record_payment(product: str) -> None:
    """Record a payment applied to an obligation."""
    payment_recorded_total.labels(product=product).inc()


def record_obligation_terminated(product: str, status: str) -> None:
    """Record an obligation moving to a terminal status."""
    obligation_terminated_total.labels(product=product, status=status).inc()


def record_payment_conflict_retry() -> None:
    """Record an optimistic-lock retry in the payment ledger."""
    payment_conflict_retries.inc()


@contextmanager
def track_cdp_fetch_latency() -> Generator[None, None, None]:
    """Context manager to track CDP analytics API fetch latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        cdp_fetch_latency.observe(duration)


@contextmanager
def track_notification_latency() -> Generator[None, None, None]:
    """Context manager to track notification latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        notification_latency.observe(duration)


def record_cdp_fetch_success() -> None:
    """Record a successful CDP analytics fetch."""
    cdp_fetch_total.labels(status="success").inc()


def record_cdp_fetch_failure(error_type: str) -> None:
    """Record a CDP analytics fetch failure."""
    cdp_fetch_total.labels(status="failure").inc()
    cdp_fetch_failures.labels(error_type=error_type).inc()


def record_notification_retry() -> None:
    """Record a notification retry attempt."""
    notification_retries.inc()


def record_notification_success(event_type: str) -> None:
    """Record a successful notification delivery."""
    notification_success.labels(event_type=event_type).inc()


def record_notification_failure(event_type: str) -> None:
    """Record a failed notification delivery (after all retries)."""
    notification_failures.labels(event_type=event_type).inc()


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
