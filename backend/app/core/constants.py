"""Application-wide constants for the location directory API."""

from __future__ import annotations

BRAND_NAME = "Service Directory"

# API Documentation
API_TITLE = f"{BRAND_NAME} API"
API_DESCRIPTION = (
    f"Search API for the {BRAND_NAME} - find locations offering human services "
    "by keyword, category, organization, contact domain, language, and distance"
)
API_VERSION = "1.0.0"

# Route prefixes
SEARCH_PATH = "/api/search"
METRICS_PATH = "/metrics"

# Response headers carrying pagination metadata
TOTAL_COUNT_HEADER = "X-Total-Count"
CURRENT_PAGE_HEADER = "X-Current-Page"
PER_PAGE_HEADER = "X-Per-Page"
