# backend/app/schemas/__init__.py
"""
Pydantic schemas for the location directory search API.
"""

from .search import (
    AddressOut,
    HealthResponse,
    LocationResult,
    OrganizationSummary,
    ServiceSummary,
)

__all__ = [
    "AddressOut",
    "HealthResponse",
    "LocationResult",
    "OrganizationSummary",
    "ServiceSummary",
]
