# backend/app/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware

from .core.config import settings
from .core.constants import API_DESCRIPTION, API_TITLE, API_VERSION, BRAND_NAME, SEARCH_PATH
from .errors import register_error_handlers
from .middleware.prometheus_middleware import PrometheusMiddleware
from .routes.v1 import health as health_v1, metrics as metrics_v1, search as search_v1

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown without deprecated events."""
    logger.info("%s API starting up...", BRAND_NAME)
    logger.info(
        "Environment: %s (geocoding provider=%s)",
        settings.environment,
        settings.geocoding_provider,
    )
    yield
    logger.info("%s API shutting down...", BRAND_NAME)


def create_app() -> FastAPI:
    """Build the FastAPI application with routes, middleware, and error handlers."""
    application = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=app_lifespan,
    )
    # Register unified error envelope handlers
    register_error_handlers(application)

    application.add_middleware(PrometheusMiddleware)
    application.add_middleware(GZipMiddleware, minimum_size=500)

    application.include_router(search_v1.router, prefix=SEARCH_PATH)
    application.include_router(health_v1.router)
    application.include_router(metrics_v1.router)
    return application


app = create_app()

# Export for uvicorn
fastapi_app = app

__all__ = ["app", "fastapi_app", "create_app"]
