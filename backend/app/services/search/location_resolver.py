"""
Anchor point resolution for geographic search.

An explicit lat_lng pair is used as-is. Free-text locations go through the
configured geocoding provider under a bounded timeout. Any failure (no
match, provider error, timeout, or a result without coordinates) yields an
unresolved anchor; the search then returns no candidates instead of failing.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
import logging
import re
from typing import Optional

from app.services.geocoding.base import GeocodingProvider
from app.services.search.query_parser import SearchQuery
from app.services.search.records import Coordinates

logger = logging.getLogger(__name__)

US_ZIP_PATTERN = re.compile(r"^\d{5}(?:-\d{4})?$")


class AnchorSource(Enum):
    NONE = "none"
    LAT_LNG = "lat_lng"
    GEOCODER = "geocoder"


class GeocodeOutcome(Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    ERROR = "error"


@dataclass(frozen=True)
class ResolvedAnchor:
    """Result of anchor resolution."""

    coordinates: Optional[Coordinates] = None
    source: AnchorSource = AnchorSource.NONE
    outcome: Optional[GeocodeOutcome] = None
    location_text: Optional[str] = None

    @property
    def requested(self) -> bool:
        """Whether the query asked for a geographic filter at all."""
        return self.source != AnchorSource.NONE or self.location_text is not None

    @property
    def resolved(self) -> bool:
        return self.coordinates is not None

    @property
    def zip_like(self) -> bool:
        return bool(self.location_text and US_ZIP_PATTERN.match(self.location_text))

    @classmethod
    def from_lat_lng(cls, coordinates: Coordinates) -> "ResolvedAnchor":
        return cls(coordinates=coordinates, source=AnchorSource.LAT_LNG)

    @classmethod
    def unresolved(cls, location_text: str, outcome: GeocodeOutcome) -> "ResolvedAnchor":
        return cls(location_text=location_text, outcome=outcome)


class LocationResolver:
    """Resolves the search anchor from lat_lng or a geocoded location string."""

    def __init__(self, provider: Optional[GeocodingProvider], timeout_s: float = 3.0) -> None:
        self.provider = provider
        self.timeout_s = timeout_s

    async def resolve(self, query: SearchQuery) -> ResolvedAnchor:
        if query.lat_lng is not None:
            return ResolvedAnchor.from_lat_lng(query.lat_lng)
        if query.location_text is None:
            return ResolvedAnchor()
        return await self.geocode(query.location_text)

    async def geocode(self, location_text: str) -> ResolvedAnchor:
        if self.provider is None:
            logger.warning("No geocoding provider configured; cannot resolve %r", location_text)
            return ResolvedAnchor.unresolved(location_text, GeocodeOutcome.ERROR)

        try:
            result = await asyncio.wait_for(
                self.provider.geocode(location_text), timeout=self.timeout_s
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Geocoding %r timed out after %.1fs; location filter matches nothing",
                location_text,
                self.timeout_s,
            )
            return ResolvedAnchor.unresolved(location_text, GeocodeOutcome.TIMEOUT)
        except Exception as exc:
            logger.warning(
                "Geocoding %r failed (%s); location filter matches nothing",
                location_text,
                exc,
            )
            return ResolvedAnchor.unresolved(location_text, GeocodeOutcome.ERROR)

        if result is None or not result.has_coordinates:
            anchor = ResolvedAnchor.unresolved(location_text, GeocodeOutcome.NOT_FOUND)
            if anchor.zip_like:
                logger.info("ZIP code %r has no geocoder match", location_text)
            else:
                logger.info("Location %r has no geocoder match", location_text)
            return anchor

        logger.debug(
            "Geocoded %r to %s (%s) via %s",
            location_text,
            result.coordinates,
            result.formatted_address,
            result.provider_id,
        )
        return ResolvedAnchor(
            coordinates=result.coordinates,
            source=AnchorSource.GEOCODER,
            outcome=GeocodeOutcome.OK,
            location_text=location_text,
        )
