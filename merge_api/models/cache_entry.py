"""
Cache entry data model for the history cache table.

This module defines the dataclass stored in the cache table. Each entry
maps one cache key to an opaque JSON payload with an absolute expiry
timestamp.
"""

from dataclasses import dataclass
from typing import Any, Dict

from merge_api.utils.decimal_utils import replace_decimals, replace_floats


@dataclass
class CacheEntry:
    """
    Entry in the cache table.

    Attributes:
        key: Cache key (primary key of the table)
        payload: JSON-serializable cached value
        expires_at: Unix timestamp in seconds; the entry is valid while
            now < expires_at
    """

    key: str
    payload: Any
    expires_at: int

    def __post_init__(self):
        """Validate field constraints."""
        if not self.key:
            raise ValueError("key cannot be empty")

    def is_expired(self, now: float) -> bool:
        """
        Check if entry has expired.

        Args:
            now: Current Unix timestamp in seconds

        Returns:
            True if now is at or past expires_at
        """
        return now >= self.expires_at

    def to_item(self) -> Dict[str, Any]:
        """Render the entry as a cache table item."""
        return {
            'cacheKey': self.key,
            'data': replace_floats(self.payload),
            'ttl': int(self.expires_at),
        }

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'CacheEntry':
        """
        Build an entry from a cache table item.

        Args:
            item: Item as returned by the DynamoDB resource

        Returns:
            CacheEntry with Decimal numbers converted back

        Raises:
            KeyError: If a required attribute is missing
        """
        return cls(
            key=item['cacheKey'],
            payload=replace_decimals(item['data']),
            expires_at=int(item['ttl']),
        )
