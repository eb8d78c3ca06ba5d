"""Google Maps geocoding provider."""

import logging
from typing import Any, Optional

import httpx

from ...core.config import settings
from ...core.exceptions import GeocodingError
from .base import GeocodedAddress, GeocodingProvider

logger = logging.getLogger(__name__)

ACCEPTED_STATUSES = {"OK", "ZERO_RESULTS"}


class GoogleMapsProvider(GeocodingProvider):
    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.api_key = api_key if api_key is not None else settings.google_maps_api_key
        self.timeout = timeout if timeout is not None else settings.geocode_timeout_s
        self.base_url = "https://maps.googleapis.com/maps/api"

    async def geocode(self, address: str) -> Optional[GeocodedAddress]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(
                    f"{self.base_url}/geocode/json",
                    params={"address": address, "key": self.api_key},
                )
        except httpx.HTTPError as exc:
            raise GeocodingError(f"Google geocoding request failed: {exc}") from exc
        if resp.status_code != 200:
            return None
        data = resp.json()
        status = data.get("status", "OK")
        if status not in ACCEPTED_STATUSES:
            # REQUEST_DENIED, OVER_QUERY_LIMIT, INVALID_REQUEST, ...
            raise GeocodingError(f"Google geocoding returned status {status}")
        if not data.get("results"):
            return None
        return self._parse_result(data["results"][0])

    def _parse_result(self, result: dict[str, Any]) -> GeocodedAddress:
        loc = (result.get("geometry") or {}).get("location") or {}
        return GeocodedAddress(
            latitude=loc.get("lat", 0.0),
            longitude=loc.get("lng", 0.0),
            formatted_address=result.get("formatted_address", ""),
            provider_id=self._format_provider_id(result.get("place_id", "")),
        )

    @staticmethod
    def _format_provider_id(place_id: str) -> str:
        if not place_id:
            return ""
        return place_id if place_id.startswith("google:") else f"google:{place_id}"
