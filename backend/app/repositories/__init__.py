"""
Repository layer for the location directory.

Repositories isolate SQLAlchemy access from the search services.
"""

from .location_repository import LocationRepository

__all__ = ["LocationRepository"]
