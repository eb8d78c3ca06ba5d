"""Selects the geocoding provider used to resolve free-text search locations."""

import logging
from typing import Callable, Dict, Optional

from ...core.config import settings
from .base import GeocodingProvider
from .google_provider import GoogleMapsProvider
from .mapbox_provider import MapboxProvider
from .mock_provider import MockGeocodingProvider

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "google"

PROVIDERS: Dict[str, Callable[[], GeocodingProvider]] = {
    "google": GoogleMapsProvider,
    "mapbox": MapboxProvider,
    "mock": MockGeocodingProvider,
}


def create_geocoding_provider(provider_override: Optional[str] = None) -> GeocodingProvider:
    """Build the provider named by the override or GEOCODING_PROVIDER; unknown names use Google."""
    name = (provider_override or settings.geocoding_provider or DEFAULT_PROVIDER).strip().lower()
    builder = PROVIDERS.get(name)
    if builder is None:
        logger.warning("Unknown geocoding provider %r; falling back to %s", name, DEFAULT_PROVIDER)
        builder = PROVIDERS[DEFAULT_PROVIDER]
    return builder()
