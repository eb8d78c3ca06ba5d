# backend/app/schemas/search.py
"""
Pydantic schemas for the location search API.

The search endpoint returns a bare JSON array of locations; pagination
metadata travels in response headers (X-Total-Count, Link). Missing values
are always emitted as null or empty lists so clients see a stable shape.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from app.services.search.records import LocationRecord, ServiceRecord


class OrganizationSummary(BaseModel):
    """Organization embedded in a location result."""

    id: int = Field(..., description="Organization ID")
    name: str = Field(..., description="Organization name")


class AddressOut(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None


class ServiceSummary(BaseModel):
    """A service offered at the location."""

    id: int
    name: str
    keywords: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: ServiceRecord) -> "ServiceSummary":
        return cls(
            id=record.id,
            name=record.name,
            keywords=list(record.keywords),
            categories=list(record.categories),
            languages=list(record.languages),
        )


class LocationResult(BaseModel):
    """Single location in a search response."""

    id: int = Field(..., description="Location ID")
    name: str = Field(..., description="Location name")
    description: Optional[str] = Field(None, description="Location description")
    latitude: Optional[float] = Field(None, description="Latitude as stored")
    longitude: Optional[float] = Field(None, description="Longitude as stored")
    distance: Optional[float] = Field(
        None, ge=0, description="Miles from the search anchor (geographic searches only)"
    )
    address: Optional[AddressOut] = Field(None, description="Postal address")
    phones: List[str] = Field(default_factory=list)
    urls: List[str] = Field(default_factory=list)
    emails: List[str] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    organization: OrganizationSummary
    services: List[ServiceSummary] = Field(default_factory=list)

    @classmethod
    def from_record(
        cls, record: LocationRecord, distance: Optional[float] = None
    ) -> "LocationResult":
        address = None
        if record.address is not None:
            address = AddressOut(
                street=record.address.street,
                city=record.address.city,
                state=record.address.state,
                postal_code=record.address.postal_code,
            )
        return cls(
            id=record.id,
            name=record.name,
            description=record.description,
            latitude=record.latitude,
            longitude=record.longitude,
            distance=round(distance, 2) if distance is not None else None,
            address=address,
            phones=list(record.phones),
            urls=list(record.urls),
            emails=list(record.emails),
            languages=list(record.languages),
            organization=OrganizationSummary(
                id=record.organization.id, name=record.organization.name
            ),
            services=[ServiceSummary.from_record(s) for s in record.services],
        )


class HealthResponse(BaseModel):
    """Liveness probe payload."""

    status: str = Field(..., description="Always \"ok\" when the process serves requests")
    service: str
    version: str
    environment: str
    timestamp: str = Field(..., description="UTC time of the probe, ISO 8601")
