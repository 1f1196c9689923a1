"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking metrics
booking_attempts = Counter(
    'booking_attempts_total',
    'Total slot booking attempts',
    ['status']  # success or the rejection code
)

booking_latency = Histogram(
    'booking_latency_seconds',
    'Slot booking latency, lock wait included',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

fees_settled = Counter(
    'fees_settled_total',
    'Booking fees moved from participants to admins'
)

# Registry metrics
registrations = Counter(
    'registrations_total',
    'Actor registration attempts',
    ['role', 'result']  # result: success or the rejection code
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set, hit/miss
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_attempt(status: str):
    """Record booking attempt. Status: success or an error code."""
    booking_attempts.labels(status=status).inc()


def record_fee_settled():
    fees_settled.inc()


def record_registration(role: str, result: str):
    registrations.labels(role=role, result=result).inc()


def record_cache_operation(operation: str, hit: bool):
    """Record cache operation."""
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()
