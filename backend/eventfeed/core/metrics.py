"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Upstream (Eventbrite) metrics
upstream_requests = Counter(
    'eventfeed_upstream_requests_total',
    'Requests sent to the Eventbrite API',
    ['operation', 'outcome']  # outcome: ok, http_error, unreachable, bad_payload
)

upstream_latency = Histogram(
    'eventfeed_upstream_latency_seconds',
    'Eventbrite API request latency',
    ['operation'],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Aggregation metrics
events_served = Counter(
    'eventfeed_events_served_total',
    'Projected events returned by /events'
)

aggregation_failures = Counter(
    'eventfeed_aggregation_failures_total',
    'Failed event aggregations',
    ['kind']
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_upstream_request(operation: str, outcome: str, duration: float):
    """Record one Eventbrite call. Outcome: ok, http_error, unreachable, bad_payload"""
    upstream_requests.labels(operation=operation, outcome=outcome).inc()
    upstream_latency.labels(operation=operation).observe(duration)


def record_aggregation(event_count: int):
    events_served.inc(event_count)


def record_aggregation_failure(kind: str):
    aggregation_failures.labels(kind=kind).inc()
