# backend/app/services/search/__init__.py
"""
Location search services.

This module provides parameter parsing, per-filter matching, distance
filtering, ranking, and pagination for location directory searches.
"""

from app.services.search.candidate_combiner import (
    CandidateCombiner,
    CombineResult,
    MatchCandidate,
)
from app.services.search.config import SearchConfig
from app.services.search.distance import DistanceCalculator, haversine_miles
from app.services.search.location_resolver import (
    AnchorSource,
    GeocodeOutcome,
    LocationResolver,
    ResolvedAnchor,
)
from app.services.search.location_search_service import LocationSearchService, SearchResult
from app.services.search.matchers import (
    CandidateMatcher,
    CategoryMatcher,
    DomainMatcher,
    EmailMatcher,
    KeywordMatcher,
    LanguageMatcher,
    MatchOutcome,
    OrgNameMatcher,
    default_matchers,
)
from app.services.search.pagination import Page, paginate
from app.services.search.query_parser import (
    QueryParser,
    SearchQuery,
    SearchTermsPolicy,
    SortMode,
)
from app.services.search.ranking_service import RankingResult, RankingService
from app.services.search.records import (
    InMemoryLocationCorpus,
    LocationCorpus,
    LocationRecord,
    OrganizationRecord,
    ServiceRecord,
)

__all__ = [
    # Engine
    "LocationSearchService",
    "SearchResult",
    "SearchConfig",
    # Parsing
    "QueryParser",
    "SearchQuery",
    "SearchTermsPolicy",
    "SortMode",
    # Anchor resolution
    "LocationResolver",
    "ResolvedAnchor",
    "AnchorSource",
    "GeocodeOutcome",
    # Matching
    "CandidateMatcher",
    "MatchOutcome",
    "KeywordMatcher",
    "CategoryMatcher",
    "OrgNameMatcher",
    "DomainMatcher",
    "EmailMatcher",
    "LanguageMatcher",
    "default_matchers",
    "CandidateCombiner",
    "CombineResult",
    "MatchCandidate",
    # Distance, ranking, pagination
    "DistanceCalculator",
    "haversine_miles",
    "RankingService",
    "RankingResult",
    "Page",
    "paginate",
    # Records
    "LocationRecord",
    "OrganizationRecord",
    "ServiceRecord",
    "LocationCorpus",
    "InMemoryLocationCorpus",
]
