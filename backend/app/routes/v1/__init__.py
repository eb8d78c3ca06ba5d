# backend/app/routes/v1/__init__.py
"""
API Routes

Search, health, and metrics endpoints.
"""

from . import health, metrics, search

__all__ = ["health", "metrics", "search"]
