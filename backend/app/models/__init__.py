"""
Database models for the location directory.

This module exports the SQLAlchemy models backing the search corpus:
- Organizations and their locations
- Services offered at each location
- Categories linked to services
"""

from .location import Category, Location, Organization, Service, service_categories

__all__ = [
    "Category",
    "Location",
    "Organization",
    "Service",
    "service_categories",
]
