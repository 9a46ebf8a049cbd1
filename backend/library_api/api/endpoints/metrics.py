"""Prometheus Metrics Endpoint.

Exposes application metrics in Prometheus format.
"""

from fastapi import APIRouter, Response

from ...core.constants import Metrics
from ...core.metrics import get_content_type, get_metrics

router = APIRouter()


@router.get(Metrics.ENDPOINT_PATH, include_in_schema=False)
async def prometheus_metrics():
    """Expose Prometheus metrics.

    Besides the HTTP metrics this includes the shaping metrics: rejected
    `orderBy` / `fields` values and responses per negotiated representation.
    """
    return Response(
        content=get_metrics(),
        media_type=get_content_type()
    )
