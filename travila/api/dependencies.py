from functools import lru_cache
from fastapi import Depends

from travila.core.settings import Settings, get_settings
from travila.repositories.base import BaseContentRepository
from travila.repositories.memory import InMemoryContentRepository
from travila.services.search import SearchService


@lru_cache()
def get_content_repository() -> BaseContentRepository:
    """Get the content repository loaded from the configured seed file."""
    return InMemoryContentRepository.from_json_file(get_settings().seed_path)


def get_search_service(
    repository: BaseContentRepository = Depends(get_content_repository),
    settings: Settings = Depends(get_settings),
) -> SearchService:
    """Get SearchService instance."""
    return SearchService(
        repository=repository,
        min_query_length=settings.MIN_QUERY_LENGTH,
    )
