# backend/app/services/search/matchers.py
"""
Per-filter candidate matchers.

Each matcher answers one question for one filter type: which locations in
the corpus satisfy this part of the query? Matchers are independent of one
another; CandidateCombiner intersects their results.

Matching rules:
- keyword:  every word (in any singular/plural form) must appear as a
            case-insensitive substring of the location name, description,
            organization name, or a linked service's name, keywords, or
            category names. Words may match different fields.
- category: exact, case-sensitive category name on a linked service.
- org_name: every term is a case-insensitive substring of the organization name.
- domain:   exact host derived from the location's URLs or emails; public
            webmail domains never match.
- email:    full address equal to one of the location's emails or its admin email.
- language: case-insensitive tag on the location or one of its services.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
from typing import AbstractSet, FrozenSet, List, Optional, Sequence, Set, Tuple

from app.services.search.domain_parser import (
    derive_domains,
    host_from_email,
    normalize_domain_query,
)
from app.services.search.query_parser import SearchQuery
from app.services.search.records import LocationRecord
from app.services.search.text_normalizer import variants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchOutcome:
    """Result of one matcher over the corpus."""

    filter_name: str
    ids: FrozenSet[int]
    # Matches that hit a category name through a linked service
    boosted_ids: FrozenSet[int] = frozenset()


class CandidateMatcher(ABC):
    """Base class for filter matchers."""

    name: str = ""

    @abstractmethod
    def is_active(self, query: SearchQuery) -> bool:
        """Whether the query carries this matcher's filter."""

    @abstractmethod
    def match_location(self, query: SearchQuery, location: LocationRecord) -> bool:
        """Whether a single location satisfies the filter."""

    def is_boosted(self, query: SearchQuery, location: LocationRecord) -> bool:
        return False

    def matches(self, query: SearchQuery, corpus: Sequence[LocationRecord]) -> Set[int]:
        return set(self.evaluate(query, corpus).ids)

    def evaluate(self, query: SearchQuery, corpus: Sequence[LocationRecord]) -> MatchOutcome:
        ids: Set[int] = set()
        boosted: Set[int] = set()
        for location in corpus:
            if not self.match_location(query, location):
                continue
            ids.add(location.id)
            if self.is_boosted(query, location):
                boosted.add(location.id)
        logger.debug("%s matcher: %d of %d locations", self.name, len(ids), len(corpus))
        return MatchOutcome(
            filter_name=self.name, ids=frozenset(ids), boosted_ids=frozenset(boosted)
        )


def _keyword_fields(location: LocationRecord) -> Tuple[List[str], List[str]]:
    """Lowercased searchable text: (text fields, category names)."""
    text = [location.name, location.description or "", location.organization.name]
    categories: List[str] = []
    for service in location.services:
        text.append(service.name)
        text.extend(service.keywords)
        categories.extend(service.categories)
    return [t.lower() for t in text if t], [c.lower() for c in categories if c]


def _contains_any(forms: AbstractSet[str], fields: Sequence[str]) -> bool:
    return any(form in field for field in fields for form in forms)


class KeywordMatcher(CandidateMatcher):
    name = "keyword"

    def is_active(self, query: SearchQuery) -> bool:
        return bool(query.keyword_terms)

    def match_location(self, query: SearchQuery, location: LocationRecord) -> bool:
        text, categories = _keyword_fields(location)
        fields = text + categories
        return all(_contains_any(variants(term), fields) for term in query.keyword_terms)

    def is_boosted(self, query: SearchQuery, location: LocationRecord) -> bool:
        _, categories = _keyword_fields(location)
        return any(_contains_any(variants(term), categories) for term in query.keyword_terms)


class CategoryMatcher(CandidateMatcher):
    name = "category"

    def is_active(self, query: SearchQuery) -> bool:
        return bool(query.category)

    def match_location(self, query: SearchQuery, location: LocationRecord) -> bool:
        return query.category in location.categories

    def is_boosted(self, query: SearchQuery, location: LocationRecord) -> bool:
        return True


class OrgNameMatcher(CandidateMatcher):
    name = "org_name"

    def is_active(self, query: SearchQuery) -> bool:
        return bool(query.org_name_terms)

    def match_location(self, query: SearchQuery, location: LocationRecord) -> bool:
        org_name = location.organization.name.lower()
        return all(term in org_name for term in query.org_name_terms)


class DomainMatcher(CandidateMatcher):
    name = "domain"

    def __init__(self, excluded_domains: AbstractSet[str] = frozenset()) -> None:
        self.excluded_domains = frozenset(d.lower() for d in excluded_domains)

    def is_active(self, query: SearchQuery) -> bool:
        return bool(query.domain)

    def _target(self, query: SearchQuery) -> Optional[str]:
        domain = normalize_domain_query(query.domain or "")
        if domain is None or domain in self.excluded_domains:
            return None
        return domain

    def match_location(self, query: SearchQuery, location: LocationRecord) -> bool:
        target = self._target(query)
        if target is None:
            return False
        return target in derive_domains(location.urls, location.emails, self.excluded_domains)


class EmailMatcher(CandidateMatcher):
    name = "email"

    def is_active(self, query: SearchQuery) -> bool:
        return bool(query.email)

    def match_location(self, query: SearchQuery, location: LocationRecord) -> bool:
        email = (query.email or "").strip().lower()
        # A bare domain is not an address
        if host_from_email(email) is None:
            return False
        addresses = [e.strip().lower() for e in location.emails]
        if location.admin_email:
            addresses.append(location.admin_email.strip().lower())
        return email in addresses


class LanguageMatcher(CandidateMatcher):
    name = "language"

    def is_active(self, query: SearchQuery) -> bool:
        return bool(query.language)

    def match_location(self, query: SearchQuery, location: LocationRecord) -> bool:
        wanted = (query.language or "").casefold()
        tags = list(location.languages)
        for service in location.services:
            tags.extend(service.languages)
        return any(tag.casefold() == wanted for tag in tags)


def default_matchers(excluded_domains: AbstractSet[str] = frozenset()) -> List[CandidateMatcher]:
    return [
        KeywordMatcher(),
        CategoryMatcher(),
        OrgNameMatcher(),
        DomainMatcher(excluded_domains),
        EmailMatcher(),
        LanguageMatcher(),
    ]
