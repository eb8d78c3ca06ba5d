# backend/app/services/search/candidate_combiner.py
"""
Combines per-filter matches into one deduplicated candidate set.

Filters present in the query are intersected (AND across filter types).
Absent filters impose no constraint; with no active filter every location
in the corpus is a candidate. Each surviving candidate remembers which
filters matched it and whether any match came through a category name.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Dict, FrozenSet, List, Optional, Sequence

from app.services.search.matchers import CandidateMatcher, MatchOutcome
from app.services.search.query_parser import SearchQuery
from app.services.search.records import LocationRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchCandidate:
    """A location provisionally matching the query. Never persisted."""

    location_id: int
    matched_filters: FrozenSet[str] = frozenset()
    category_hit: bool = False
    score: float = 0.0
    distance: Optional[float] = None


@dataclass
class CombineResult:
    candidates: List[MatchCandidate]
    filters_applied: List[str] = field(default_factory=list)
    filter_stats: Dict[str, int] = field(default_factory=dict)


class CandidateCombiner:
    """Intersects matcher outcomes and deduplicates by location id."""

    def __init__(self, matchers: Sequence[CandidateMatcher]) -> None:
        self.matchers = list(matchers)

    def combine(self, query: SearchQuery, corpus: Sequence[LocationRecord]) -> CombineResult:
        filter_stats: Dict[str, int] = {"initial_candidates": len(corpus)}
        outcomes: List[MatchOutcome] = []
        for matcher in self.matchers:
            if not matcher.is_active(query):
                continue
            outcome = matcher.evaluate(query, corpus)
            outcomes.append(outcome)
            filter_stats[f"matched_{outcome.filter_name}"] = len(outcome.ids)

        # Corpus order is creation order; keep it and drop duplicate ids.
        ordered_ids = list(dict.fromkeys(location.id for location in corpus))
        if outcomes:
            surviving = frozenset.intersection(*(o.ids for o in outcomes))
            ordered_ids = [location_id for location_id in ordered_ids if location_id in surviving]

        candidates = [
            MatchCandidate(
                location_id=location_id,
                matched_filters=frozenset(o.filter_name for o in outcomes),
                category_hit=any(location_id in o.boosted_ids for o in outcomes),
            )
            for location_id in ordered_ids
        ]
        filter_stats["after_combine"] = len(candidates)
        return CombineResult(
            candidates=candidates,
            filters_applied=[o.filter_name for o in outcomes],
            filter_stats=filter_stats,
        )
