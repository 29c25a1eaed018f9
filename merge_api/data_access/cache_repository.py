"""
Repository for the history cache table.

Rows have the shape {cacheKey, data, ttl}. Rows whose ttl is in the past
stay in the table until a reader or an invalidation removes them.
"""
import logging
from typing import List, Optional

from merge_api.models.cache_entry import CacheEntry

from .dynamodb_client import DynamoDBClient
from .exceptions import CacheStoreUnavailableError, DynamoDBError

logger = logging.getLogger(__name__)


class CacheRepository:
    """
    Repository for cache entries in DynamoDB.

    All failures are raised as CacheStoreUnavailableError; deciding whether
    to degrade is left to the caller.
    """

    def __init__(self, table_name: str, dynamodb_client: Optional[DynamoDBClient] = None):
        """
        Initialize cache repository.

        Args:
            table_name: Name of the cache table
            dynamodb_client: Optional DynamoDB client instance
        """
        self.table_name = table_name
        self.client = dynamodb_client or DynamoDBClient()

    def get(self, cache_key: str) -> Optional[CacheEntry]:
        """
        Get cache entry by key.

        Args:
            cache_key: Cache key

        Returns:
            CacheEntry, or None if the key is absent or the row is malformed

        Raises:
            CacheStoreUnavailableError: If the table cannot be read
        """
        try:
            item = self.client.get_item(
                table_name=self.table_name,
                key={'cacheKey': cache_key}
            )
        except DynamoDBError as e:
            raise CacheStoreUnavailableError(str(e), operation='get', cache_key=cache_key)

        if not item:
            return None

        try:
            return CacheEntry.from_item(item)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring malformed cache row {cache_key}: {e}")
            return None

    def put(self, entry: CacheEntry) -> None:
        """
        Store cache entry, overwriting any entry with the same key.

        Args:
            entry: Cache entry to store

        Raises:
            CacheStoreUnavailableError: If the table cannot be written
        """
        try:
            self.client.put_item(
                table_name=self.table_name,
                item=entry.to_item()
            )
        except DynamoDBError as e:
            raise CacheStoreUnavailableError(str(e), operation='put', cache_key=entry.key)

        logger.debug(f"Stored cache entry {entry.key} (expires at {entry.expires_at})")

    def delete(self, cache_key: str) -> None:
        """
        Delete cache entry.

        Args:
            cache_key: Cache key

        Raises:
            CacheStoreUnavailableError: If the table cannot be written
        """
        try:
            self.client.delete_item(
                table_name=self.table_name,
                key={'cacheKey': cache_key}
            )
        except DynamoDBError as e:
            raise CacheStoreUnavailableError(str(e), operation='delete', cache_key=cache_key)

        logger.debug(f"Deleted cache entry {cache_key}")

    def scan_all_keys(self) -> List[str]:
        """
        Enumerate the key of every row in the table.

        Only the key attribute is projected, so invalidation does not pay
        for reading cached payloads.

        Returns:
            List of cache keys, unordered

        Raises:
            CacheStoreUnavailableError: If the table cannot be scanned
        """
        try:
            items = self.client.scan(
                table_name=self.table_name,
                projection_expression='cacheKey'
            )
        except DynamoDBError as e:
            raise CacheStoreUnavailableError(str(e), operation='scan')

        keys = [item['cacheKey'] for item in items if 'cacheKey' in item]
        logger.info(f"Scanned {len(keys)} cache entries")
        return keys
