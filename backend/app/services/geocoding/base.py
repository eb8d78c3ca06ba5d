"""Provider-agnostic geocoding interfaces."""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class GeocodedAddress(BaseModel):
    """Best match for a free-text location; only the point feeds the search."""

    latitude: float
    longitude: float
    formatted_address: str
    provider_id: str

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)

    @property
    def has_coordinates(self) -> bool:
        # Providers report (0.0, 0.0) when a result lacks geometry
        return not (self.latitude == 0.0 and self.longitude == 0.0)


class GeocodingProvider(ABC):
    @abstractmethod
    async def geocode(self, address: str) -> Optional[GeocodedAddress]:
        pass
