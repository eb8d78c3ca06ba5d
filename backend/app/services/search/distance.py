# backend/app/services/search/distance.py
"""
Great-circle distance from the search anchor to each candidate.

Distances are in statute miles. With a radius, candidates beyond it (or
without coordinates) are dropped; without one, every candidate is kept and
those lacking coordinates carry distance=None.
"""
from __future__ import annotations

from dataclasses import replace
import logging
import math
from typing import List, Mapping, Optional, Sequence

from app.services.search.candidate_combiner import MatchCandidate
from app.services.search.records import Coordinates, LocationRecord

logger = logging.getLogger(__name__)

EARTH_RADIUS_MILES = 3958.8


def haversine_miles(origin: Coordinates, target: Coordinates) -> float:
    lat1, lng1 = map(math.radians, origin)
    lat2, lng2 = map(math.radians, target)
    dlat = lat2 - lat1
    dlng = lng2 - lng1
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_MILES * math.asin(min(1.0, math.sqrt(max(0.0, a))))


class DistanceCalculator:
    def apply(
        self,
        candidates: Sequence[MatchCandidate],
        locations: Mapping[int, LocationRecord],
        anchor: Coordinates,
        radius: Optional[float] = None,
    ) -> List[MatchCandidate]:
        """Annotate candidates with their distance to anchor, dropping any outside radius."""
        kept: List[MatchCandidate] = []
        for candidate in candidates:
            coords = locations[candidate.location_id].coordinates
            distance = haversine_miles(anchor, coords) if coords is not None else None
            if radius is not None and (distance is None or distance > radius):
                continue
            kept.append(replace(candidate, distance=distance))
        if radius is not None:
            logger.debug(
                "Radius %.2f mi kept %d of %d candidates", radius, len(kept), len(candidates)
            )
        return kept
