# backend/app/services/search/query_parser.py
"""
Search parameter parsing and validation.

Turns the flat, string-keyed parameter set of a search request into an
immutable SearchQuery. Malformed radius, lat_lng, page, or per_page values
raise SearchValidationError with the client-facing description; every
other combination of filters (including none at all) is accepted.

Page bounds are clamped rather than rejected: page and per_page below 1
become 1 and per_page above the configured maximum becomes the maximum.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import math
import re
from typing import Any, Mapping, Optional, Tuple

from app.core.exceptions import SearchValidationError
from app.services.search.config import SearchConfig
from app.services.search.text_normalizer import split_terms

logger = logging.getLogger(__name__)

MIN_RADIUS = 0.1
MAX_RADIUS = 50.0

RADIUS_MESSAGE = "Radius must be a Float between 0.1 and 50."
LAT_LNG_MESSAGE = "lat_lng must be a comma-delimited lat,long pair of floats."
PAGE_MESSAGE = "page must be an Integer."
PER_PAGE_MESSAGE = "per_page must be an Integer."
MISSING_TERMS_MESSAGE = "Either keyword, location, or language is missing."

ORG_NAME_SEPARATOR = re.compile(r"[+\s]+")
# Plain decimal literals only; float() would also take "1_0" or "1e3".
DECIMAL_PATTERN = re.compile(r"^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)$")
INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")


class SortMode(str, Enum):
    DISTANCE = "distance"
    RELEVANCE = "relevance"


@dataclass(frozen=True)
class SearchQuery:
    """Validated search request."""

    keyword: Optional[str] = None
    location_text: Optional[str] = None
    lat_lng: Optional[Tuple[float, float]] = None
    radius: Optional[float] = None
    category: Optional[str] = None
    org_name: Optional[str] = None
    language: Optional[str] = None
    domain: Optional[str] = None
    email: Optional[str] = None
    sort: Optional[SortMode] = None
    page: int = 1
    per_page: int = 30

    # Derived
    keyword_terms: Tuple[str, ...] = field(default=(), compare=False)
    org_name_terms: Tuple[str, ...] = field(default=(), compare=False)

    @property
    def has_geo_filter(self) -> bool:
        return self.lat_lng is not None or self.location_text is not None

    @property
    def active_filters(self) -> Tuple[str, ...]:
        names = (
            "keyword",
            "category",
            "org_name",
            "domain",
            "email",
            "language",
        )
        return tuple(name for name in names if getattr(self, name))


class SearchTermsPolicy:
    """
    Optional rule requiring at least one of keyword, location, or language.

    Disabled unless explicitly enabled; lat_lng counts as a location.
    """

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled

    def check(self, query: SearchQuery) -> None:
        if not self.enabled:
            return
        if query.keyword or query.has_geo_filter or query.language:
            return
        raise SearchValidationError(MISSING_TERMS_MESSAGE, code="missing_search_terms")


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _finite_float(text: str) -> Optional[float]:
    if not DECIMAL_PATTERN.match(text):
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


class QueryParser:
    """Validates raw search parameters into a SearchQuery."""

    def __init__(self, config: SearchConfig, policy: Optional[SearchTermsPolicy] = None) -> None:
        self.config = config
        self.policy = policy or SearchTermsPolicy(enabled=config.require_search_terms)

    def parse(self, params: Mapping[str, Any]) -> SearchQuery:
        keyword = _clean(params.get("keyword"))
        org_name = _clean(params.get("org_name"))
        lat_lng = self._parse_lat_lng(_clean(params.get("lat_lng")))
        location_text = _clean(params.get("location"))
        if lat_lng is not None and location_text is not None:
            logger.debug("Both lat_lng and location given; ignoring location %r", location_text)
            location_text = None

        email = _clean(params.get("email"))
        domain = _clean(params.get("domain"))

        query = SearchQuery(
            keyword=keyword,
            location_text=location_text,
            lat_lng=lat_lng,
            radius=self._parse_radius(_clean(params.get("radius"))),
            category=_clean(params.get("category")),
            org_name=org_name,
            language=_clean(params.get("language")),
            domain=domain.lower() if domain else None,
            email=email.lower() if email else None,
            sort=self._parse_sort(_clean(params.get("sort"))),
            page=self._parse_page(_clean(params.get("page"))),
            per_page=self._parse_per_page(_clean(params.get("per_page"))),
            keyword_terms=split_terms(keyword) if keyword else (),
            org_name_terms=(
                tuple(t for t in ORG_NAME_SEPARATOR.split(org_name.lower()) if t)
                if org_name
                else ()
            ),
        )
        self.policy.check(query)
        return query

    @staticmethod
    def _parse_radius(raw: Optional[str]) -> Optional[float]:
        if raw is None:
            return None
        radius = _finite_float(raw)
        if radius is None or not MIN_RADIUS <= radius <= MAX_RADIUS:
            raise SearchValidationError(RADIUS_MESSAGE, code="invalid_radius", field="radius")
        return radius

    @staticmethod
    def _parse_lat_lng(raw: Optional[str]) -> Optional[Tuple[float, float]]:
        if raw is None:
            return None
        parts = raw.split(",")
        if len(parts) != 2:
            raise SearchValidationError(LAT_LNG_MESSAGE, code="invalid_lat_lng", field="lat_lng")
        lat = _finite_float(parts[0].strip())
        lng = _finite_float(parts[1].strip())
        if lat is None or lng is None:
            raise SearchValidationError(LAT_LNG_MESSAGE, code="invalid_lat_lng", field="lat_lng")
        return (lat, lng)

    @staticmethod
    def _parse_sort(raw: Optional[str]) -> Optional[SortMode]:
        if raw is None:
            return None
        try:
            return SortMode(raw.lower())
        except ValueError:
            logger.debug("Ignoring unsupported sort %r", raw)
            return None

    @staticmethod
    def _parse_int(raw: str, message: str, field_name: str) -> int:
        if not INTEGER_PATTERN.match(raw):
            raise SearchValidationError(message, code="invalid_pagination", field=field_name)
        return int(raw)

    def _parse_page(self, raw: Optional[str]) -> int:
        if raw is None:
            return 1
        return max(1, self._parse_int(raw, PAGE_MESSAGE, "page"))

    def _parse_per_page(self, raw: Optional[str]) -> int:
        if raw is None:
            return self.config.default_per_page
        per_page = self._parse_int(raw, PER_PAGE_MESSAGE, "per_page")
        return min(max(1, per_page), self.config.max_per_page)
