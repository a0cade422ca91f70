from typing import Any, Dict, Iterable, List, Optional, Sequence
import json
import logging

from pydantic import ValidationError

from travila.models.content import MODEL_BY_TYPE, ContentType, SearchableItem
from travila.repositories.base import BaseContentRepository, ContentStoreError
from travila.repositories.criteria import (
    Criterion,
    SortKey,
    resolve_path,
    sort_documents,
)

logger = logging.getLogger(__name__)


class InMemoryContentRepository(BaseContentRepository):
    """Content store backed by validated documents held in memory.

    Documents are kept in their wire form (camelCase, ``_id``) next to the
    parsed model so criteria and sort keys resolve the same paths a
    document database would.
    """

    def __init__(self, items: Optional[Iterable[SearchableItem]] = None):
        self._collections: Dict[ContentType, List[SearchableItem]] = {
            content_type: [] for content_type in ContentType
        }
        for item in items or []:
            self.add(item)

    @classmethod
    def from_documents(
        cls, documents: Dict[str, List[Dict[str, Any]]]
    ) -> "InMemoryContentRepository":
        """Build a repository from ``{"tours": [...], "hotels": [...]}`` documents."""
        repository = cls()
        for tag, raw_items in documents.items():
            content_type = ContentType.parse(tag)
            if content_type is None:
                logger.warning(f"Skipping unknown collection '{tag}' in seed data")
                continue
            model = MODEL_BY_TYPE[content_type]
            for raw in raw_items:
                try:
                    repository.add(model.model_validate(raw))
                except ValidationError as e:
                    logger.warning(
                        f"Skipping invalid {content_type.singular} document "
                        f"{raw.get('_id', '<no id>')}: {e.error_count()} error(s)"
                    )
        return repository

    @classmethod
    def from_json_file(cls, path: str) -> "InMemoryContentRepository":
        logger.info(f"Loading content seed data from '{path}'")
        with open(path, encoding="utf-8") as handle:
            documents = json.load(handle)
        repository = cls.from_documents(documents)
        logger.info(
            "Loaded content: "
            + ", ".join(
                f"{content_type.value}={repository.count(content_type)}"
                for content_type in ContentType
            )
        )
        return repository

    def add(self, item: SearchableItem) -> None:
        self._collections[item.content_type].append(item)

    def count(self, content_type: ContentType) -> int:
        return len(self._collections[content_type])

    def _collection(self, content_type: ContentType) -> List[SearchableItem]:
        try:
            return self._collections[content_type]
        except KeyError:
            raise ContentStoreError(content_type, "unknown collection")

    async def find(
        self,
        content_type: ContentType,
        criterion: Optional[Criterion] = None,
        sort: Sequence[SortKey] = (),
        limit: Optional[int] = None,
    ) -> List[SearchableItem]:
        by_id = {}
        documents = []
        for item in self._collection(content_type):
            document = item.model_dump(by_alias=True)
            if criterion is None or criterion.matches(document):
                by_id[id(document)] = item
                documents.append(document)

        try:
            ordered = sort_documents(documents, sort)
        except TypeError as e:
            raise ContentStoreError(content_type, f"cannot sort results: {e}") from e
        if limit is not None:
            ordered = ordered[:limit]
        return [by_id[id(document)] for document in ordered]

    async def distinct(self, content_type: ContentType, path: str) -> List[Any]:
        values: List[Any] = []
        for item in self._collection(content_type):
            value = resolve_path(item.model_dump(by_alias=True), path)
            candidates = value if isinstance(value, list) else [value]
            for candidate in candidates:
                if isinstance(candidate, (str, int, float)) and candidate not in values:
                    values.append(candidate)
        return values
