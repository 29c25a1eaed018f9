"""
Read-through cache backed by the DynamoDB cache table.

Lookups that miss (or find an expired entry) call the supplied compute
function and store its result with a fixed TTL. The cache is an
optimization only: every failure talking to the cache table degrades to
recomputation and is never raised to the caller, and so does a cached
payload that cannot be decoded.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from merge_api.data_access.cache_repository import CacheRepository
from merge_api.data_access.exceptions import CacheStoreUnavailableError
from merge_api.models.cache_entry import CacheEntry
from merge_api.utils.structured_logger import get_structured_logger

logger = get_structured_logger('ReadThroughCache')

T = TypeVar('T')


@dataclass
class CacheResult(Generic[T]):
    """
    Value returned by a read-through lookup.

    Attributes:
        value: Cached or freshly computed value
        from_cache: True when the value came from an unexpired entry
    """

    value: T
    from_cache: bool


class ReadThroughCache:
    """
    Compute-then-cache lookup for a single key.

    There is no per-key locking: concurrent misses on the same key each
    compute and the last put wins.
    """

    def __init__(
        self,
        cache_repository: CacheRepository,
        ttl_seconds: int = 1800,
        clock: Optional[Callable[[], float]] = None
    ):
        """
        Initialize read-through cache.

        Args:
            cache_repository: Store for cache entries
            ttl_seconds: Lifetime of entries written on a miss
            clock: Returns seconds since epoch (default: time.time)
        """
        if ttl_seconds < 1:
            raise ValueError(f"ttl_seconds must be at least 1, got {ttl_seconds}")

        self.cache_repository = cache_repository
        self.ttl_seconds = ttl_seconds
        self.clock = clock or time.time

    def read_through(
        self,
        cache_key: str,
        compute: Callable[[], Any],
        decode: Optional[Callable[[Any], T]] = None
    ) -> CacheResult[T]:
        """
        Return the cached value for cache_key, computing it on a miss.

        Args:
            cache_key: Key of the entry
            compute: Produces the payload on a miss; must return a
                JSON-serializable value. Its exceptions propagate.
            decode: Optional conversion applied to the payload. A cached
                payload it rejects with ValueError, KeyError or TypeError
                is evicted and treated as a miss.

        Returns:
            CacheResult with the value and whether it was a cache hit
        """
        entry = self._lookup(cache_key)

        if entry is not None:
            now = self.clock()
            if entry.is_expired(now):
                logger.log_cache_event('expired', cache_key, expires_at=entry.expires_at)
                self._evict(cache_key)
            else:
                try:
                    value = decode(entry.payload) if decode else entry.payload
                except (ValueError, KeyError, TypeError) as e:
                    logger.warning(
                        f'Cached payload unreadable, treating as miss: {cache_key}',
                        operation='cache_decode',
                        cache_key=cache_key,
                        error=str(e)
                    )
                    self._evict(cache_key)
                else:
                    logger.log_cache_event('hit', cache_key, expires_at=entry.expires_at)
                    return CacheResult(value=value, from_cache=True)
        else:
            logger.log_cache_event('miss', cache_key)

        payload = compute()
        self._store(cache_key, payload)
        return CacheResult(value=decode(payload) if decode else payload, from_cache=False)

    def _lookup(self, cache_key: str) -> Optional[CacheEntry]:
        try:
            return self.cache_repository.get(cache_key)
        except CacheStoreUnavailableError as e:
            logger.warning(
                f'Cache read failed, treating as miss: {cache_key}',
                operation='cache_get',
                cache_key=cache_key,
                error=str(e)
            )
            return None

    def _evict(self, cache_key: str) -> None:
        try:
            self.cache_repository.delete(cache_key)
        except CacheStoreUnavailableError as e:
            logger.warning(
                f'Failed to delete expired cache entry: {cache_key}',
                operation='cache_delete',
                cache_key=cache_key,
                error=str(e)
            )

    def _store(self, cache_key: str, value: Any) -> None:
        expires_at = int(self.clock()) + self.ttl_seconds
        try:
            self.cache_repository.put(
                CacheEntry(key=cache_key, payload=value, expires_at=expires_at)
            )
            logger.log_cache_event('stored', cache_key, expires_at=expires_at)
        except CacheStoreUnavailableError as e:
            logger.warning(
                f'Cache write failed, returning computed value: {cache_key}',
                operation='cache_put',
                cache_key=cache_key,
                error=str(e)
            )
