# backend/app/services/search/records.py
"""
Read-only records searched by the location search engine.

The storage layer converts its rows into these immutable values so the
engine never touches ORM state. A corpus provider hands the engine a
consistent snapshot of records for the duration of one search.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Tuple

Coordinates = Tuple[float, float]  # (lat, lng)


@dataclass(frozen=True)
class OrganizationRecord:
    id: int
    name: str


@dataclass(frozen=True)
class AddressRecord:
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None


@dataclass(frozen=True)
class ServiceRecord:
    """A service offered at exactly one location."""

    id: int
    name: str
    keywords: Tuple[str, ...] = ()
    categories: Tuple[str, ...] = ()
    languages: Tuple[str, ...] = ()


@dataclass(frozen=True)
class LocationRecord:
    """A searchable location with its organization and services."""

    id: int
    name: str
    organization: OrganizationRecord
    description: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[AddressRecord] = None
    admin_email: Optional[str] = None
    urls: Tuple[str, ...] = ()
    emails: Tuple[str, ...] = ()
    phones: Tuple[str, ...] = ()
    languages: Tuple[str, ...] = ()
    services: Tuple[ServiceRecord, ...] = ()

    @property
    def coordinates(self) -> Optional[Coordinates]:
        if self.latitude is None or self.longitude is None:
            return None
        return (self.latitude, self.longitude)

    @property
    def categories(self) -> Tuple[str, ...]:
        """Category names across all linked services, first occurrence order."""
        names = [name for service in self.services for name in service.categories]
        return tuple(dict.fromkeys(names))


class LocationCorpus(Protocol):
    """Read-only source of location records."""

    def fetch_all(self) -> Sequence[LocationRecord]:
        ...


class InMemoryLocationCorpus:
    """Corpus backed by a fixed sequence of records."""

    def __init__(self, records: Sequence[LocationRecord]) -> None:
        self._records = tuple(records)

    def fetch_all(self) -> Sequence[LocationRecord]:
        return self._records
