"""Prometheus metrics for the Loan Manager services.

Business Metrics:
- loans_application_transitions_total: Status transitions by target status
- loans_payments_total: Payments by method and outcome
- loans_refunds_total: Refunds by outcome

Technical Metrics:
- loans_notifications_total: Notification sends by channel and outcome
- loans_notification_jobs_total: Queued notification jobs by kind and outcome
- loans_provider_latency_seconds: Vendor API latency by provider
- loans_provider_failures_total: Vendor API failures by provider
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

application_transitions = Counter(
    "loans_application_transitions_total",
    "Loan application status transitions",
    ["status"],  # Approved, Rejected
)

payments_total = Counter(
    "loans_payments_total",
    "Payments processed through the payment service",
    ["method", "outcome"],
)

refunds_total = Counter(
    "loans_refunds_total",
    "Refunds processed through the payment service",
    ["outcome"],
)


# =============================================================================
# Technical Metrics
# =============================================================================

notifications_total = Counter(
    "loans_notifications_total",
    "Notifications sent synchronously or by a worker",
    ["channel", "outcome"],  # email/sms, sent/failed
)

notification_jobs_total = Counter(
    "loans_notification_jobs_total",
    "Queued notification jobs by lifecycle outcome",
    ["kind", "outcome"],  # queued, completed, retrying, failed
)

provider_latency = Histogram(
    "loans_provider_latency_seconds",
    "Vendor API call latency in seconds",
    ["provider"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

provider_failures = Counter(
    "loans_provider_failures_total",
    "Vendor API failures",
    ["provider", "error_type"],  # timeout, error, not_configured
)


# =============================================================================
# Helper Functions
# =============================================================================

@contextmanager
def track_provider_latency(provider: str) -> Generator[None, None, None]:
    """Context manager to track a vendor API call."""
    start = time.perf_counter()
    try:
        yield
    finally:
        provider_latency.labels(provider=provider).observe(time.perf_counter() - start)


def record_provider_failure(provider: str, error_type: str) -> None:
    provider_failures.labels(provider=provider, error_type=error_type).inc()


def record_notification(channel: str, sent: bool) -> None:
    """Record a notification delivery attempt."""
    notifications_total.labels(
        channel=channel,
        outcome="sent" if sent else "failed",
    ).inc()


def record_notification_job(kind: str, outcome: str) -> None:
    notification_jobs_total.labels(kind=kind, outcome=outcome).inc()


def record_payment(method: str, succeeded: bool) -> None:
    """Record a processed payment."""
    payments_total.labels(
        method=method,
        outcome="succeeded" if succeeded else "failed",
    ).inc()


def record_refund(succeeded: bool) -> None:
    refunds_total.labels(outcome="succeeded" if succeeded else "failed").inc()


def record_application_transition(status: str) -> None:
    application_transitions.labels(status=status).inc()


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
