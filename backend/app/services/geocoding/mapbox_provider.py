"""Mapbox geocoding provider."""

from typing import Any, Optional
from urllib.parse import quote

import httpx

from ...core.config import settings
from ...core.exceptions import GeocodingError
from .base import GeocodedAddress, GeocodingProvider


class MapboxProvider(GeocodingProvider):
    def __init__(self, access_token: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.access_token = (
            access_token if access_token is not None else settings.mapbox_access_token
        )
        self.timeout = timeout if timeout is not None else settings.geocode_timeout_s
        self.base_url = "https://api.mapbox.com"

    async def geocode(self, address: str) -> Optional[GeocodedAddress]:
        encoded = quote(address, safe="")
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(
                    f"{self.base_url}/geocoding/v5/mapbox.places/{encoded}.json",
                    params={
                        "access_token": self.access_token,
                        "types": "address,poi,place,postcode",
                        "country": "us",
                        "limit": 1,
                    },
                )
        except httpx.HTTPError as exc:
            raise GeocodingError(f"Mapbox geocoding request failed: {exc}") from exc
        if resp.status_code != 200:
            return None
        features = resp.json().get("features") or []
        if not features:
            return None
        return self._parse_feature(features[0])

    def _parse_feature(self, feature: dict[str, Any]) -> GeocodedAddress:
        center = feature.get("center") or [None, None]
        lng, lat = (center[0], center[1]) if len(center) >= 2 else (None, None)
        place_id = feature.get("id", "") or ""
        return GeocodedAddress(
            latitude=float(lat) if isinstance(lat, (int, float)) else 0.0,
            longitude=float(lng) if isinstance(lng, (int, float)) else 0.0,
            formatted_address=feature.get("place_name") or "",
            provider_id=place_id if place_id.startswith("mapbox:") else f"mapbox:{place_id}",
        )
