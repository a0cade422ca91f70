from typing import Dict, Iterator, List, Optional, Tuple
from pydantic import BaseModel, Field

from travila.models.content import (
    CONTENT_TYPE_ORDER,
    ContentType,
    MODEL_BY_TYPE,
    SearchableItem,
    format_price,
)


class SearchQuery(BaseModel):
    text: str
    types: List[ContentType] = Field(default_factory=lambda: list(CONTENT_TYPE_ORDER))
    limit: int = Field(10, ge=1, le=50)

    @property
    def term(self) -> str:
        return self.text.strip()


class SearchResultSet(BaseModel):
    """Per-type result lists keyed by type tag, in the planner's rank order."""

    query: str
    results: Dict[ContentType, List[SearchableItem]] = Field(default_factory=dict)
    search_types: List[str] = Field(default_factory=list)

    @property
    def total_results(self) -> int:
        return sum(len(items) for items in self.results.values())

    @property
    def is_empty(self) -> bool:
        return self.total_results == 0

    def groups(self) -> Iterator[Tuple[ContentType, List[SearchableItem]]]:
        """Yield non-empty groups in fixed type order."""
        for content_type in CONTENT_TYPE_ORDER:
            items = self.results.get(content_type)
            if items:
                yield content_type, items

    def to_payload(self) -> dict:
        return {
            "query": self.query,
            "results": {
                content_type.value: [
                    item.model_dump(by_alias=True, mode="json") for item in items
                ]
                for content_type, items in self.results.items()
            },
            "totalResults": self.total_results,
            "searchTypes": self.search_types,
        }


class Suggestion(BaseModel):
    type: str
    text: str
    subtitle: str


class ResultCard(BaseModel):
    """Uniform card projection of any content variant."""

    id: str
    type: ContentType
    title: str
    location: str
    price: str
    rating: Optional[float] = None

    @classmethod
    def from_item(cls, item: SearchableItem) -> "ResultCard":
        return cls(
            id=item.id,
            type=item.content_type,
            title=item.display_title(),
            location=item.location_label(),
            price=format_price(
                item.price_amount(), item.price_currency(), item.price_unit()
            ),
            rating=item.rating_score(),
        )

    @classmethod
    def from_payload(cls, content_type: ContentType, payload: dict) -> "ResultCard":
        """Build a card from an API payload item (camelCase document)."""
        item = MODEL_BY_TYPE[content_type].model_validate(payload)
        return cls.from_item(item)
