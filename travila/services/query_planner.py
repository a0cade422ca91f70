from typing import Dict, Iterable, List, Optional, Tuple
import logging

from travila.models.content import CONTENT_TYPE_ORDER, ContentType, SearchableItem
from travila.repositories.base import BaseContentRepository, ContentStoreError
from travila.repositories.criteria import (
    AllOf,
    Criterion,
    Equals,
    SortKey,
    any_contains,
)

logger = logging.getLogger(__name__)


class SearchError(Exception):
    """Base class for search errors."""
    pass


class QueryTooShortError(SearchError, ValueError):
    """Search text is missing or shorter than the minimum length."""
    pass


class SearchUnavailableError(SearchError):
    """Every requested collection failed to answer."""
    pass


class TypePlan:
    """How one content type is searched: fields, availability flag and ranking."""

    def __init__(
        self,
        search_fields: Tuple[str, ...],
        sort: Tuple[SortKey, ...],
        availability_field: str = "availability",
        suggestion_fields: Optional[Tuple[str, ...]] = None,
    ):
        self.search_fields = search_fields
        self.sort = sort
        self.availability_field = availability_field
        self.suggestion_fields = suggestion_fields

    def criterion(self, term: str, suggestion: bool = False) -> Criterion:
        fields = self.suggestion_fields if suggestion else self.search_fields
        return AllOf((Equals(self.availability_field, True), any_contains(fields, term)))


BY_RATING = (SortKey("rating.score", descending=True),)

TYPE_PLANS: Dict[ContentType, TypePlan] = {
    ContentType.TOURS: TypePlan(
        search_fields=("title", "location", "category", "description"),
        suggestion_fields=("title", "location", "category"),
        sort=BY_RATING,
    ),
    ContentType.HOTELS: TypePlan(
        search_fields=("name", "location.city", "location.country", "amenities"),
        suggestion_fields=("name", "location.city", "location.country"),
        sort=BY_RATING,
    ),
    ContentType.CARS: TypePlan(
        search_fields=("brand", "model", "location.city", "features"),
        suggestion_fields=("brand", "model", "location.city"),
        sort=BY_RATING + (SortKey("year", descending=True),),
    ),
    ContentType.ACTIVITIES: TypePlan(
        search_fields=(
            "title",
            "category",
            "location.city",
            "location.country",
            "description",
        ),
        sort=BY_RATING,
    ),
    ContentType.TICKETS: TypePlan(
        search_fields=(
            "departure.location",
            "arrival.location",
            "provider.name",
            "type",
        ),
        availability_field="isAvailable",
        # Tickets carry no rating; soonest departure first
        sort=(SortKey("departure.dateTime"),),
    ),
}

# Suggestions only cover the three primary content types, in this order
SUGGESTION_TYPES: List[ContentType] = [
    ContentType.TOURS,
    ContentType.HOTELS,
    ContentType.CARS,
]


def normalize_types(tags: Iterable[str]) -> List[ContentType]:
    """Map request tags to known content types, dropping unknown and repeated tags."""
    types: List[ContentType] = []
    for tag in tags:
        content_type = ContentType.parse(tag)
        if content_type is None:
            logger.debug(f"Ignoring unknown search type '{tag}'")
            continue
        if content_type not in types:
            types.append(content_type)
    return types


class QueryPlanner:
    """Builds one filter per requested content type and runs it against the store."""

    def __init__(
        self,
        repository: BaseContentRepository,
        plans: Optional[Dict[ContentType, TypePlan]] = None,
    ):
        self.repository = repository
        self.plans = plans or TYPE_PLANS

    def plan(
        self, term: str, types: Iterable[ContentType], suggestion: bool = False
    ) -> Dict[ContentType, Criterion]:
        criteria: Dict[ContentType, Criterion] = {}
        for content_type in types:
            plan = self.plans.get(content_type)
            if plan is None:
                continue
            if suggestion and plan.suggestion_fields is None:
                continue
            criteria[content_type] = plan.criterion(term, suggestion=suggestion)
        return criteria

    async def execute(
        self,
        term: str,
        types: Iterable[ContentType],
        limit: int,
        suggestion: bool = False,
    ) -> Dict[ContentType, List[SearchableItem]]:
        """Run the planned queries, degrading failed types to empty lists.

        Raises:
            SearchUnavailableError: every planned query failed.
        """
        criteria = self.plan(term, types, suggestion=suggestion)
        results: Dict[ContentType, List[SearchableItem]] = {}
        failures: List[ContentType] = []

        # Store order is fixed so the result keys come back in display order
        for content_type in CONTENT_TYPE_ORDER:
            if content_type not in criteria:
                continue
            try:
                results[content_type] = await self.repository.find(
                    content_type,
                    criteria[content_type],
                    sort=self.plans[content_type].sort,
                    limit=limit,
                )
            except ContentStoreError as e:
                logger.error(
                    f"Search read failed for {content_type.value} (term='{term}'): {e}",
                    exc_info=True,
                )
                failures.append(content_type)
                results[content_type] = []

        if criteria and len(failures) == len(criteria):
            raise SearchUnavailableError(
                "All content collections failed: "
                + ", ".join(content_type.value for content_type in failures)
            )
        return results
