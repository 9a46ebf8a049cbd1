"""Prometheus Middleware.

Records request count, latency and in-flight requests per endpoint. Paths
are normalized so author ids and id lists do not explode label cardinality.
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ..core.constants import HttpStatusCodes
from ..core.metrics import (
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)
from ..utils import normalize_path


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Capture HTTP metrics for every request, including failed ones."""

    async def dispatch(self, request: Request, call_next):
        labels = {
            'method': request.method,
            'endpoint': normalize_path(request.url.path),
        }
        in_progress = http_requests_in_progress.labels(**labels)
        in_progress.inc()

        status_code = HttpStatusCodes.INTERNAL_SERVER_ERROR
        started = time.perf_counter()
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            http_request_duration_seconds.labels(**labels).observe(time.perf_counter() - started)
            http_requests_total.labels(status_code=status_code, **labels).inc()
            in_progress.dec()
