"""Prometheus metric definitions for outbound Stripe calls."""

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest


stripe_requests_total = Counter(
    "stripe_requests_total",
    "Total Stripe API requests",
    ["method", "endpoint", "outcome"],
)
stripe_request_duration_seconds = Histogram(
    "stripe_request_duration_seconds",
    "Stripe API request duration seconds",
    ["method", "endpoint"],
)
stripe_request_errors_total = Counter(
    "stripe_request_errors_total",
    "Failed Stripe API requests by error source and code",
    ["source", "code"],
)


def metrics_payload() -> tuple[bytes, str]:
    """Return all registered metrics in text format plus their content type."""

    return generate_latest(), CONTENT_TYPE_LATEST
