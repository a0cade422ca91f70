from typing import Optional
import logging
from fastapi import APIRouter, Depends, Query, HTTPException

from travila.api.dependencies import get_search_service
from travila.api.v1.models import (
    ErrorResponse,
    FiltersResponse,
    SearchRequest,
    SearchResponse,
    SuggestionsResponse,
)
from travila.core.settings import Settings, get_settings
from travila.services.query_planner import QueryTooShortError, SearchUnavailableError
from travila.services.search import SearchService


logger = logging.getLogger(__name__)
router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Search query too short"},
    500: {"model": ErrorResponse, "description": "Content store unavailable"},
}


def _failure_detail(message: str, exc: Exception, settings: Settings) -> dict:
    """Error envelope body; the exception text is only exposed in debug mode."""
    return {
        "message": message,
        "error": str(exc) if settings.DEBUG else "Internal server error",
    }


@router.post("", response_model=SearchResponse, responses=ERROR_RESPONSES)
async def search_content(
    request: Optional[SearchRequest] = None,
    search_service: SearchService = Depends(get_search_service),
    settings: Settings = Depends(get_settings),
):
    """Universal search across tours, hotels, cars, activities and tickets."""
    # A bare POST is treated like an empty query
    request = request or SearchRequest()
    try:
        result_set = await search_service.search(
            text=request.q,
            types=request.types,
            limit=request.limit or settings.SEARCH_DEFAULT_LIMIT,
        )
        return {"success": True, "data": result_set.to_payload()}
    except QueryTooShortError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SearchUnavailableError as e:
        logger.error(f"Search unavailable for query '{request.q}': {e}")
        raise HTTPException(
            status_code=500, detail=_failure_detail("Search failed", e, settings)
        )
    except ValueError as e:
        logger.warning(f"Validation error in search request for '{request.q}': {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error searching for '{request.q}': {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail=_failure_detail("Search failed", e, settings)
        )


@router.get(
    "/suggestions",
    response_model=SuggestionsResponse,
    responses={500: ERROR_RESPONSES[500]},
)
async def get_suggestions(
    q: Optional[str] = Query(None, description="Partial search text"),
    limit: Optional[int] = Query(None, ge=1, le=20, description="Maximum suggestions"),
    search_service: SearchService = Depends(get_search_service),
    settings: Settings = Depends(get_settings),
):
    """Autocomplete suggestions over tours, hotels and cars."""
    try:
        suggestions = await search_service.suggestions(
            q, limit=limit or settings.SUGGESTION_DEFAULT_LIMIT
        )
        return {"success": True, "data": {"suggestions": suggestions}}
    except Exception as e:
        logger.error(f"Get suggestions error for '{q}': {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=_failure_detail("Failed to get suggestions", e, settings),
        )


@router.get(
    "/filters", response_model=FiltersResponse, responses={500: ERROR_RESPONSES[500]}
)
async def get_filters(
    search_service: SearchService = Depends(get_search_service),
    settings: Settings = Depends(get_settings),
):
    """Filter catalog: distinct values per collection plus fixed enumerations."""
    try:
        filters = await search_service.filter_catalog()
        return {"success": True, "data": {"filters": filters}}
    except Exception as e:
        logger.error(f"Get filters error: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail=_failure_detail("Failed to get filters", e, settings)
        )
