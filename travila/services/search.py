from typing import Any, Dict, List, Optional, Sequence
import logging

from travila.models.content import (
    CONTENT_TYPE_ORDER,
    ContentType,
    Currency,
    Difficulty,
    FuelType,
    Transmission,
)
from travila.models.search import SearchQuery, SearchResultSet, Suggestion
from travila.repositories.base import BaseContentRepository
from travila.services.aggregator import ResultAggregator
from travila.services.query_planner import (
    SUGGESTION_TYPES,
    QueryPlanner,
    QueryTooShortError,
    normalize_types,
)

logger = logging.getLogger(__name__)

QUERY_TOO_SHORT_MESSAGE = "Search query must be at least {min_length} characters long"

# (response key, content type, field path) for the distinct-value filters
DISTINCT_FILTERS = [
    ("tourCategories", ContentType.TOURS, "category"),
    ("hotelCities", ContentType.HOTELS, "location.city"),
    ("carBrands", ContentType.CARS, "brand"),
    ("activityCategories", ContentType.ACTIVITIES, "category"),
    ("ticketTypes", ContentType.TICKETS, "type"),
]


class SearchService:
    """Service for searching the content collections.

    Validates the query, fans it out through the query planner and hands
    the per-type lists to the aggregator.
    """

    def __init__(
        self,
        repository: BaseContentRepository,
        planner: Optional[QueryPlanner] = None,
        aggregator: Optional[ResultAggregator] = None,
        min_query_length: int = 2,
    ):
        self.repository = repository
        self.planner = planner or QueryPlanner(repository)
        self.aggregator = aggregator or ResultAggregator()
        self.min_query_length = min_query_length

    def _is_too_short(self, text: Optional[str]) -> bool:
        return not text or len(text.strip()) < self.min_query_length

    async def search(
        self,
        text: Optional[str],
        types: Optional[Sequence[str]] = None,
        limit: int = 10,
    ) -> SearchResultSet:
        """
        Search across the requested content types.

        Args:
            text: Free-text query; trimmed before matching
            types: Requested type tags (default: all five); unknown tags are ignored
            limit: Maximum number of results per type

        Raises:
            QueryTooShortError: text is missing or too short; no reads are made
            SearchUnavailableError: every requested collection failed
        """
        if self._is_too_short(text):
            logger.info(f"Rejected search query {text!r}: too short")
            raise QueryTooShortError(
                QUERY_TOO_SHORT_MESSAGE.format(min_length=self.min_query_length)
            )

        requested = (
            list(types) if types is not None
            else [content_type.value for content_type in CONTENT_TYPE_ORDER]
        )
        query = SearchQuery(text=text, types=normalize_types(requested), limit=limit)

        results = await self.planner.execute(query.term, query.types, query.limit)
        result_set = self.aggregator.aggregate(text, results, search_types=requested)
        logger.info(
            f"Search '{query.term}' over {[t.value for t in query.types]} "
            f"returned {result_set.total_results} result(s)"
        )
        return result_set

    async def suggestions(self, text: Optional[str], limit: int = 5) -> List[Suggestion]:
        """Return autocomplete suggestions; short or empty text yields an empty list."""
        if self._is_too_short(text):
            return []

        results = await self.planner.execute(
            text.strip(), SUGGESTION_TYPES, limit, suggestion=True
        )
        return self.aggregator.suggest(results, limit)

    async def filter_catalog(self) -> Dict[str, List[Any]]:
        """Distinct values per collection plus the fixed enumerations."""
        filters: Dict[str, List[Any]] = {}
        for key, content_type, path in DISTINCT_FILTERS:
            values = await self.repository.distinct(content_type, path)
            filters[key] = sorted(values, key=str)

        filters["currencies"] = [c.value for c in Currency]
        filters["difficulties"] = [d.value for d in Difficulty]
        filters["transmissions"] = [t.value for t in Transmission]
        filters["fuelTypes"] = [f.value for f in FuelType]
        return filters
