"""
Prometheus metrics middleware for HTTP request tracking.

Records duration and status of every request except scrapes of the
metrics endpoint itself.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.constants import METRICS_PATH
from ..monitoring.prometheus_metrics import PrometheusMetrics


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect Prometheus metrics for HTTP requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == METRICS_PATH:
            return await call_next(request)

        method = request.method
        # Normalize endpoint label to reduce cardinality (strip numeric IDs)
        path = "/".join(
            ":id" if segment.isdigit() else segment for segment in request.url.path.split("/")
        )

        start_time = time.time()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            PrometheusMetrics.record_http_request(
                method=method,
                endpoint=path,
                duration=time.time() - start_time,
                status_code=status_code,
            )
