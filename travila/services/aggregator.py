from typing import Dict, List, Sequence

from travila.models.content import ContentType, SearchableItem
from travila.models.search import ResultCard, SearchResultSet, Suggestion
from travila.services.query_planner import SUGGESTION_TYPES


class ResultAggregator:
    """Merges per-type result lists into result sets, suggestions and cards."""

    def aggregate(
        self,
        query: str,
        results_by_type: Dict[ContentType, List[SearchableItem]],
        search_types: Sequence[str] = (),
    ) -> SearchResultSet:
        return SearchResultSet(
            query=query,
            results={
                content_type: list(items)
                for content_type, items in results_by_type.items()
            },
            search_types=list(search_types),
        )

    def suggest(
        self,
        results_by_type: Dict[ContentType, List[SearchableItem]],
        limit: int,
    ) -> List[Suggestion]:
        """Project the first hits of tours, hotels and cars into suggestions.

        Each type contributes at most ``limit`` entries; the concatenated list
        is then cut to ``limit`` overall, so earlier types take precedence.
        """
        suggestions: List[Suggestion] = []
        for content_type in SUGGESTION_TYPES:
            for item in results_by_type.get(content_type, [])[:limit]:
                suggestions.append(
                    Suggestion(
                        type=content_type.singular,
                        text=item.display_title(),
                        subtitle=item.suggestion_subtitle(),
                    )
                )
        return suggestions[:limit]

    def cards(self, result_set: SearchResultSet) -> Dict[ContentType, List[ResultCard]]:
        return {
            content_type: [ResultCard.from_item(item) for item in items]
            for content_type, items in result_set.groups()
        }
