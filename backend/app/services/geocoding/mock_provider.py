"""Mock geocoding provider for local development and tests (no network calls)."""

from typing import Dict, Mapping, Optional, Tuple

from .base import GeocodedAddress, GeocodingProvider

# San Mateo County places used by local seed data
DEFAULT_GAZETTEER: Dict[str, Tuple[float, float]] = {
    "94010": (37.5778, -122.3480),
    "94403": (37.5399, -122.2983),
    "burlingame": (37.5841, -122.3661),
    "burlingame, ca": (37.5841, -122.3661),
    "1236 broadway, burlingame, ca 94010": (37.5857, -122.3700),
    "la honda, ca": (37.3194, -122.2744),
    "pescadero, ca": (37.2552, -122.3830),
    "san gregorio, ca": (37.3272, -122.3869),
    "san mateo, ca": (37.5630, -122.3255),
}


def _key(address: str) -> str:
    return " ".join((address or "").lower().split())


class MockGeocodingProvider(GeocodingProvider):
    def __init__(self, gazetteer: Optional[Mapping[str, Tuple[float, float]]] = None) -> None:
        source = DEFAULT_GAZETTEER if gazetteer is None else gazetteer
        self.gazetteer = {_key(k): v for k, v in source.items()}

    async def geocode(self, address: str) -> Optional[GeocodedAddress]:
        coords = self.gazetteer.get(_key(address))
        if coords is None:
            return None
        return GeocodedAddress(
            latitude=coords[0],
            longitude=coords[1],
            formatted_address=address,
            provider_id=f"mock:{_key(address)}",
        )
