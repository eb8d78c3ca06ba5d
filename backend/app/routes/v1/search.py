# backend/app/routes/v1/search.py
"""
Search routes

Location search endpoint mounted at /api/search.

Endpoints:
    GET /    → Filtered, ranked, paginated location search

Every filter is an optional query parameter: keyword, location, lat_lng,
radius, category, org_name, language, domain, email, sort, page, per_page.
The body is a JSON array of locations; pagination metadata is returned
in the X-Total-Count, X-Current-Page, X-Per-Page, and Link headers.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response

from ...api.dependencies.services import get_search_service
from ...core.constants import CURRENT_PAGE_HEADER, PER_PAGE_HEADER, TOTAL_COUNT_HEADER
from ...schemas.search import LocationResult
from ...services.search.location_search_service import LocationSearchService, SearchResult

logger = logging.getLogger(__name__)

# No prefix here, will be added when mounting in main.py
router = APIRouter(tags=["search"])


def _link_header(request: Request, result: SearchResult) -> str:
    """Build an RFC 8288 Link header with first/prev/next/last page URLs."""
    last_page = result.total_pages
    targets = [("first", 1)]
    if result.page > 1:
        targets.append(("prev", min(result.page - 1, last_page)))
    if result.page < last_page:
        targets.append(("next", result.page + 1))
    targets.append(("last", last_page))
    return ", ".join(
        f'<{request.url.include_query_params(page=page)}>; rel="{rel}"' for rel, page in targets
    )


def _apply_pagination_headers(response: Response, request: Request, result: SearchResult) -> None:
    response.headers[TOTAL_COUNT_HEADER] = str(result.total_count)
    response.headers[CURRENT_PAGE_HEADER] = str(result.page)
    response.headers[PER_PAGE_HEADER] = str(result.per_page)
    response.headers["Link"] = _link_header(request, result)


@router.get("", response_model=List[LocationResult])
async def search_locations(
    request: Request,
    response: Response,
    service: LocationSearchService = Depends(get_search_service),
) -> List[LocationResult]:
    """
    Search locations.

    Filters combine with AND semantics; a search without filters returns
    every location. Malformed radius, lat_lng, page, or per_page values
    return 400 with a description of the problem. A location that cannot
    be geocoded simply yields no results.
    """
    # Raw parameters go to the engine so its validation messages reach the client.
    params = dict(request.query_params)
    result = await service.search(params)

    _apply_pagination_headers(response, request, result)
    return [
        LocationResult.from_record(location, distance=result.distances.get(location.id))
        for location in result.locations
    ]
