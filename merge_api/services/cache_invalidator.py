"""
Bulk invalidation of the history cache.

Cached pages depend on the whole merged records table, so any write to that
table discards every cache entry rather than trying to work out which
pages changed.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed

from merge_api.data_access.cache_repository import CacheRepository
from merge_api.data_access.exceptions import CacheStoreUnavailableError
from merge_api.utils.structured_logger import LoggingContext, get_structured_logger

logger = get_structured_logger('CacheInvalidator')


class CacheInvalidator:
    """
    Deletes every entry of the cache table.

    Never raises: a failed scan leaves the cache as is, a failed delete
    leaves that one entry until its TTL runs out.
    """

    def __init__(self, cache_repository: CacheRepository, max_workers: int = 10):
        """
        Initialize cache invalidator.

        Args:
            cache_repository: Store for cache entries
            max_workers: Maximum concurrent delete calls
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")

        self.cache_repository = cache_repository
        self.max_workers = max_workers

    def invalidate_all(self) -> int:
        """
        Delete every cache entry and wait for all deletes to finish.

        Entries written after the scan completes are not removed.

        Returns:
            Number of entries deleted
        """
        with LoggingContext(logger, 'invalidate_all'):
            try:
                cache_keys = self.cache_repository.scan_all_keys()
            except CacheStoreUnavailableError as e:
                logger.error(
                    'Cache scan failed, cache not invalidated',
                    operation='invalidate_all',
                    error=e
                )
                return 0

            if not cache_keys:
                logger.info('Cache already empty', operation='invalidate_all')
                return 0

            deleted = 0
            failed = 0

            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(cache_keys))) as executor:
                futures = {
                    executor.submit(self.cache_repository.delete, cache_key): cache_key
                    for cache_key in cache_keys
                }

                for future in as_completed(futures):
                    cache_key = futures[future]
                    try:
                        future.result()
                        deleted += 1
                    except Exception as e:
                        failed += 1
                        logger.warning(
                            f'Failed to delete cache entry: {cache_key}',
                            operation='invalidate_all',
                            cache_key=cache_key,
                            error=str(e)
                        )

            logger.info(
                f'Cleared {deleted} cache entries',
                operation='invalidate_all',
                deleted=deleted,
                failed=failed
            )
            return deleted
