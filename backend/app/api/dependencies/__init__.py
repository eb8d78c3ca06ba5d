# backend/app/api/dependencies/__init__.py
"""
Central export point for all dependencies.

This module re-exports all dependencies from submodules
for convenient access throughout the application.
"""

from .database import get_db
from .repositories import get_location_repo
from .services import get_geocoding_provider, get_search_config, get_search_service

__all__ = [
    # Database
    "get_db",
    # Repositories
    "get_location_repo",
    # Services
    "get_search_config",
    "get_geocoding_provider",
    "get_search_service",
]
