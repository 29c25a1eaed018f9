"""
History listing served through the read-through cache.
"""

from merge_api.models.page_result import PageResult
from merge_api.utils.validators import validate_pagination

from .cache_key import make_cache_key
from .history_service import HistoryService
from .read_through_cache import CacheResult, ReadThroughCache

HISTORY_ENDPOINT = 'historial'


class CachedHistoryService:
    """
    Serves history pages from the cache, computing them on a miss.
    """

    def __init__(self, history_service: HistoryService, read_through_cache: ReadThroughCache):
        self.history_service = history_service
        self.read_through_cache = read_through_cache

    def get_page(self, page: int, limit: int) -> CacheResult[PageResult]:
        """
        Get a history page, from the cache when a fresh entry exists.

        Args:
            page: 1-based page number
            limit: Page size

        Returns:
            CacheResult wrapping the PageResult

        Raises:
            ValidationError: If page or limit is invalid
            BulkSourceUnavailableError: On a miss when merged records cannot be read
        """
        validate_pagination(page, limit)

        cache_key = make_cache_key(HISTORY_ENDPOINT, {'page': page, 'limit': limit})
        return self.read_through_cache.read_through(
            cache_key,
            lambda: self.history_service.list_page(page, limit).to_dict(),
            decode=PageResult.from_dict
        )
