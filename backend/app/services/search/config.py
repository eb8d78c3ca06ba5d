# backend/app/services/search/config.py
"""
Configuration for the location search engine.

The engine receives a SearchConfig through its constructor instead of
reading module globals, so tests and embedders can run several engines
with different page sizes, webmail exclusions, or geocode timeouts.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Optional

from app.core.config import DEFAULT_EXCLUDED_EMAIL_DOMAINS, Settings, settings


@dataclass(frozen=True)
class SearchConfig:
    """Configuration for location search."""

    default_per_page: int = 30
    max_per_page: int = 100

    # Geographic search
    geocode_timeout_s: float = 3.0
    default_radius_miles: Optional[float] = None

    # Validation
    require_search_terms: bool = False

    # Domain matching
    excluded_email_domains: FrozenSet[str] = field(
        default_factory=lambda: frozenset(DEFAULT_EXCLUDED_EMAIL_DOMAINS)
    )

    @classmethod
    def from_settings(cls, source: Optional[Settings] = None) -> "SearchConfig":
        """Build configuration from application settings."""
        s = source or settings
        return cls(
            default_per_page=s.search_default_per_page,
            max_per_page=s.search_max_per_page,
            geocode_timeout_s=s.geocode_timeout_s,
            default_radius_miles=s.search_default_radius_miles,
            require_search_terms=s.search_require_terms,
            excluded_email_domains=_normalize_domains(s.search_excluded_email_domains),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging and diagnostics."""
        return {
            "default_per_page": self.default_per_page,
            "max_per_page": self.max_per_page,
            "geocode_timeout_s": self.geocode_timeout_s,
            "default_radius_miles": self.default_radius_miles,
            "require_search_terms": self.require_search_terms,
            "excluded_email_domains": sorted(self.excluded_email_domains),
        }


def _normalize_domains(domains: Iterable[str]) -> FrozenSet[str]:
    return frozenset(d.strip().lower() for d in domains if d and d.strip())
