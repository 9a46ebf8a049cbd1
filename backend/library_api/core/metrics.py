"""Prometheus Metrics.

This module defines and exports Prometheus metrics for monitoring the API:
- HTTP requests and responses
- Rejected shaping requests (bad sort or field lists)
- Representations served by content negotiation
- Resources returned per page
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
)

# ========================================
# API Metrics
# ========================================

http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)
)

http_requests_in_progress = Gauge(
    'http_requests_in_progress',
    'Number of HTTP requests currently being processed',
    ['method', 'endpoint']
)

# ========================================
# Shaping Metrics
# ========================================

shaping_rejections_total = Counter(
    'shaping_rejections_total',
    'Requests rejected by sort or field validation',
    ['resource', 'reason']
)

responses_by_representation_total = Counter(
    'responses_by_representation_total',
    'Responses emitted per negotiated representation',
    ['resource', 'representation']
)

page_items_returned = Histogram(
    'page_items_returned',
    'Number of shaped items returned in one collection response',
    ['resource'],
    buckets=(0, 1, 5, 10, 20, 50, 100)
)

# ========================================
# Application Info
# ========================================

app_info = Info(
    'app',
    'Application information'
)


def set_app_info(version: str, environment: str):
    """Set application information for Prometheus.

    Call this during app startup.
    """
    app_info.info({
        'version': version,
        'environment': environment,
        'service': 'library-api'
    })


# ========================================
# Utility Functions
# ========================================

def get_metrics():
    """Get current Prometheus metrics in text format.

    Use this for the /metrics endpoint.
    """
    return generate_latest()


def get_content_type():
    """Get the content type for Prometheus metrics."""
    return CONTENT_TYPE_LATEST
