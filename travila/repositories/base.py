from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from travila.models.content import ContentType, SearchableItem
from travila.repositories.criteria import Criterion, SortKey


class ContentStoreError(Exception):
    """Raised when a read against one content collection fails."""

    def __init__(self, content_type: ContentType, message: str):
        self.content_type = content_type
        super().__init__(f"{content_type.value}: {message}")


class BaseContentRepository(ABC):
    """Read-only access to the typed content collections."""

    @abstractmethod
    async def find(
        self,
        content_type: ContentType,
        criterion: Optional[Criterion] = None,
        sort: Sequence[SortKey] = (),
        limit: Optional[int] = None,
    ) -> List[SearchableItem]:
        """Return items of one collection matching the criterion, sorted and capped."""
        pass

    @abstractmethod
    async def distinct(self, content_type: ContentType, path: str) -> List[Any]:
        """Return the distinct values stored at a field path of one collection."""
        pass
