# backend/app/services/search/ranking_service.py
"""
Ranking service for location search results.

Ranking Formula (relevance mode):
    score = WEIGHT_FILTER × filters_matched + (CATEGORY_BOOST if category hit)

Design notes:
- A category hit is a keyword or category filter match that came through
  the category name of a linked service; it ranks above plain text matches.
- Distance mode orders by ascending miles; candidates without coordinates
  sort last.
- Every ordering breaks ties by location id, so results are deterministic.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import List, Optional, Sequence

from app.services.search.candidate_combiner import MatchCandidate
from app.services.search.query_parser import SortMode

logger = logging.getLogger(__name__)

# Ranking weights
WEIGHT_FILTER = 1.0

# Boosts
CATEGORY_BOOST = 0.5


@dataclass
class RankingResult:
    """Result of the ranking phase."""

    candidates: List[MatchCandidate]
    sort_mode: SortMode
    ranking_signals_used: List[str] = field(default_factory=list)


class RankingService:
    """Orders candidates by relevance score or by distance."""

    def resolve_sort_mode(self, requested: Optional[SortMode], has_anchor: bool) -> SortMode:
        """Distance when an anchor exists (unless relevance is requested), else relevance."""
        if requested == SortMode.RELEVANCE:
            return SortMode.RELEVANCE
        if has_anchor:
            return SortMode.DISTANCE
        if requested == SortMode.DISTANCE:
            logger.debug("Distance sort requested without an anchor point; using relevance")
        return SortMode.RELEVANCE

    def score(self, candidate: MatchCandidate) -> float:
        score = WEIGHT_FILTER * len(candidate.matched_filters)
        if candidate.category_hit:
            score += CATEGORY_BOOST
        return score

    def rank_candidates(
        self,
        candidates: Sequence[MatchCandidate],
        sort_mode: SortMode,
    ) -> RankingResult:
        """
        Score and order candidates.

        Args:
            candidates: Combined (and distance-filtered) candidates
            sort_mode: Resolved sort mode

        Returns:
            RankingResult with candidates in final order
        """
        scored = [replace(c, score=self.score(c)) for c in candidates]

        if sort_mode == SortMode.DISTANCE:
            scored.sort(
                key=lambda c: (
                    c.distance is None,
                    c.distance if c.distance is not None else 0.0,
                    c.location_id,
                )
            )
            signals = ["distance"]
        else:
            scored.sort(key=lambda c: (-c.score, c.location_id))
            signals = ["filters_matched", "category_boost"]

        return RankingResult(candidates=scored, sort_mode=sort_mode, ranking_signals_used=signals)
