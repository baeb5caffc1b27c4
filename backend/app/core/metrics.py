"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Storage metrics
storage_operations = Counter(
    'storage_operations_total',
    'Total storage operations',
    ['operation', 'kind']  # kind: read, write
)

storage_latency = Histogram(
    'storage_operation_latency_seconds',
    'Storage operation latency',
    ['kind'],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

domain_errors = Counter(
    'storage_domain_errors_total',
    'Domain errors raised by storage',
    ['code']  # CONFLICT, REFERENTIAL_BLOCK, NOT_FOUND
)

# Marketplace activity
registrations = Counter(
    'event_registrations_total',
    'Event registration state changes',
    ['status']  # registered, reactivated, cancelled, attended
)

ticket_code_retries = Counter(
    'ticket_code_retries_total',
    'Ticket code regenerations after a uniqueness collision'
)

reviews_created = Counter(
    'reviews_created_total',
    'Reviews created',
    ['target_type']
)

auth_attempts = Counter(
    'auth_attempts_total',
    'Authentication attempts',
    ['outcome']  # success, failure
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set, hit/miss
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


def record_storage_operation(operation: str, kind: str, seconds: float):
    """Record a storage call. Kind: read, write"""
    storage_operations.labels(operation=operation, kind=kind).inc()
    storage_latency.labels(kind=kind).observe(seconds)


def record_domain_error(code: str):
    domain_errors.labels(code=code).inc()


def record_registration(status: str):
    """Status: registered, reactivated, cancelled, attended"""
    registrations.labels(status=status).inc()


def record_ticket_code_retry():
    ticket_code_retries.inc()


def record_review(target_type: str):
    reviews_created.labels(target_type=target_type).inc()


def record_auth_attempt(success: bool):
    auth_attempts.labels(outcome="success" if success else "failure").inc()


def record_cache_operation(operation: str, hit: bool):
    """Record cache operation."""
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()
