# backend/app/routes/v1/health.py
"""
Health check endpoint for monitoring and load balancer probes.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Response

from app.core.config import settings
from app.core.constants import API_VERSION, BRAND_NAME
from app.schemas.search import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(response: Response) -> HealthResponse:
    """Liveness probe; never touches the database or the geocoder."""
    response.headers["Cache-Control"] = "no-store"
    return HealthResponse(
        status="ok",
        service=f"{BRAND_NAME.lower().replace(' ', '-')}-api",
        version=API_VERSION,
        environment=settings.environment,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )
