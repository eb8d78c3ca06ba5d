"""
Prometheus metrics endpoint for monitoring infrastructure.

This is a PUBLIC endpoint (no authentication required) following
standard Prometheus practices.
"""

from fastapi import APIRouter, Response

from ...core.constants import METRICS_PATH
from ...monitoring.prometheus_metrics import PrometheusMetrics

router = APIRouter(tags=["monitoring"])


@router.get(METRICS_PATH, include_in_schema=False)
def prometheus_metrics_endpoint() -> Response:
    """Expose HTTP and search metrics in the Prometheus text format."""
    return Response(
        content=PrometheusMetrics.get_metrics(),
        media_type=PrometheusMetrics.get_content_type(),
    )
