# backend/app/services/search/location_search_service.py
"""
Location search service that orchestrates the full search pipeline.

Pipeline stages:
1. Parameter parsing - validate and normalize raw request parameters
2. Anchor resolution - explicit lat_lng or geocoded location text
3. Candidate matching - one matcher per filter, intersected and deduplicated
4. Distance filtering - great-circle distance and optional radius cut-off
5. Ranking - relevance score or ascending distance
6. Pagination - page slice plus total count over all candidates

Each call works on its own snapshot of the corpus; the service keeps no
mutable state between searches and may serve concurrent requests.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
import logging
import math
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence

from app.services.geocoding.base import GeocodingProvider
from app.services.search.candidate_combiner import CandidateCombiner, MatchCandidate
from app.services.search.config import SearchConfig
from app.services.search.distance import DistanceCalculator
from app.services.search.location_resolver import LocationResolver, ResolvedAnchor
from app.services.search.matchers import CandidateMatcher, default_matchers
from app.services.search.metrics import record_geocode_outcome, record_search_metrics
from app.services.search.pagination import paginate
from app.services.search.query_parser import (
    QueryParser,
    SearchQuery,
    SearchTermsPolicy,
    SortMode,
)
from app.services.search.ranking_service import RankingService
from app.services.search.records import LocationCorpus, LocationRecord

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """One page of ranked locations plus the total over every match."""

    locations: List[LocationRecord]
    total_count: int
    page: int
    per_page: int
    sort_mode: SortMode
    query: SearchQuery
    anchor: ResolvedAnchor = field(default_factory=ResolvedAnchor)
    distances: Dict[int, Optional[float]] = field(default_factory=dict)
    filters_applied: List[str] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_count / self.per_page))


class LocationSearchService:
    """
    Search engine over a location corpus.

    Collaborators are injected: the corpus provider, the geocoding provider,
    and SearchConfig. Matchers default to keyword, category, org_name,
    domain, email, and language; pass a custom list to add filters.
    """

    def __init__(
        self,
        corpus: LocationCorpus,
        geocoder: Optional[GeocodingProvider] = None,
        config: Optional[SearchConfig] = None,
        matchers: Optional[Sequence[CandidateMatcher]] = None,
        policy: Optional[SearchTermsPolicy] = None,
    ) -> None:
        self.corpus = corpus
        self.config = config or SearchConfig()
        self.parser = QueryParser(self.config, policy=policy)
        self.location_resolver = LocationResolver(geocoder, timeout_s=self.config.geocode_timeout_s)
        if matchers is None:
            matchers = default_matchers(self.config.excluded_email_domains)
        self.combiner = CandidateCombiner(matchers)
        self.distance_calculator = DistanceCalculator()
        self.ranking_service = RankingService()

    async def search(self, params: Mapping[str, Any]) -> SearchResult:
        """
        Validate raw parameters and run the search.

        Raises:
            SearchValidationError: For malformed radius, lat_lng, or pagination values
        """
        query = self.parser.parse(params)
        return await self.search_query(query)

    async def search_query(self, query: SearchQuery) -> SearchResult:
        start = time.perf_counter()

        anchor = await self.location_resolver.resolve(query)
        if anchor.outcome is not None:
            record_geocode_outcome(anchor.outcome.value)

        result = await asyncio.to_thread(self._search_sync, query, anchor)

        latency_ms = (time.perf_counter() - start) * 1000
        record_search_metrics(
            total_latency_ms=latency_ms,
            sort_mode=result.sort_mode.value,
            total_results=result.total_count,
            has_filters=bool(query.active_filters) or anchor.requested,
        )
        logger.info(
            "Search filters=%s anchor=%s sort=%s total=%d page=%d/%d (%.1fms)",
            ",".join(result.filters_applied) or "none",
            anchor.source.value if anchor.resolved else (anchor.outcome or anchor.source).value,
            result.sort_mode.value,
            result.total_count,
            result.page,
            result.total_pages,
            latency_ms,
        )
        return result

    def _search_sync(
        self,
        query: SearchQuery,
        anchor: ResolvedAnchor,
    ) -> SearchResult:
        locations: Dict[int, LocationRecord] = {}
        for record in self.corpus.fetch_all():
            locations.setdefault(record.id, record)
        unique_corpus = list(locations.values())

        sort_mode = self.ranking_service.resolve_sort_mode(query.sort, anchor.resolved)

        candidates: List[MatchCandidate]
        filters_applied: List[str] = []
        if anchor.requested and not anchor.resolved:
            # Unresolvable location: the geographic filter matches nothing.
            candidates = []
            filters_applied = ["location"]
        else:
            combined = self.combiner.combine(query, unique_corpus)
            candidates = combined.candidates
            filters_applied = list(combined.filters_applied)
            if anchor.coordinates is not None:
                radius = query.radius
                if radius is None:
                    radius = self.config.default_radius_miles
                candidates = self.distance_calculator.apply(
                    candidates, locations, anchor.coordinates, radius
                )
                filters_applied.append("location")

        ranked = self.ranking_service.rank_candidates(candidates, sort_mode)
        page = paginate(ranked.candidates, query.page, query.per_page)

        return SearchResult(
            locations=[locations[c.location_id] for c in page.items],
            total_count=page.total,
            page=page.page,
            per_page=page.per_page,
            sort_mode=sort_mode,
            query=query,
            anchor=anchor,
            distances={c.location_id: c.distance for c in page.items},
            filters_applied=filters_applied,
        )
