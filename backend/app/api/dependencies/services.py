# backend/app/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
with their required dependencies properly injected.
"""

from functools import lru_cache
import logging

from fastapi import Depends

from ...repositories.location_repository import LocationRepository
from ...services.geocoding.base import GeocodingProvider
from ...services.geocoding.factory import create_geocoding_provider
from ...services.search.config import SearchConfig
from ...services.search.location_search_service import LocationSearchService
from .repositories import get_location_repo

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_search_config() -> SearchConfig:
    """Get singleton search configuration built from settings."""
    config = SearchConfig.from_settings()
    logger.info("Search configuration: %s", config.to_dict())
    return config


@lru_cache(maxsize=1)
def get_geocoding_provider() -> GeocodingProvider:
    """Get singleton geocoding provider selected by settings."""
    return create_geocoding_provider()


def get_search_service(
    repository: LocationRepository = Depends(get_location_repo),
    geocoder: GeocodingProvider = Depends(get_geocoding_provider),
    config: SearchConfig = Depends(get_search_config),
) -> LocationSearchService:
    """Get a search service reading from the request's database session."""
    return LocationSearchService(corpus=repository, geocoder=geocoder, config=config)
