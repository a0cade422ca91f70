from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from travila.models.content import CONTENT_TYPE_ORDER
from travila.models.search import Suggestion


# Request Models
class SearchRequest(BaseModel):
    q: Optional[str] = Field(None, description="Free-text search query")
    types: List[str] = Field(
        default_factory=lambda: [t.value for t in CONTENT_TYPE_ORDER],
        description="Content types to search (tours, hotels, cars, activities, tickets)",
    )
    limit: Optional[int] = Field(
        None, ge=1, le=50, description="Maximum results per type (default from settings)"
    )

    class Config:
        json_schema_extra = {
            "example": {"q": "beach", "types": ["hotels", "tours"], "limit": 5}
        }


# Response Models
class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = None


class SearchData(BaseModel):
    query: str
    results: Dict[str, List[Dict[str, Any]]]
    totalResults: int
    searchTypes: List[str]


class SearchResponse(BaseModel):
    success: bool = True
    data: SearchData


class SuggestionsData(BaseModel):
    suggestions: List[Suggestion]


class SuggestionsResponse(BaseModel):
    success: bool = True
    data: SuggestionsData


class FiltersData(BaseModel):
    filters: Dict[str, List[Any]]


class FiltersResponse(BaseModel):
    success: bool = True
    data: FiltersData
