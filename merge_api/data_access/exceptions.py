"""
Custom exceptions for data access layer.
"""


class DynamoDBError(Exception):
    """Base exception for DynamoDB operations."""
    pass


class CacheStoreUnavailableError(DynamoDBError):
    """
    Exception raised when the cache table cannot be read or written.

    Callers on the read path treat this as a cache miss; it is never
    surfaced as a failure of the overall request.
    """

    def __init__(self, message: str, operation: str, cache_key: str = None):
        """
        Initialize cache store error.

        Args:
            message: Error message
            operation: Store operation that failed (get, put, delete, scan)
            cache_key: Cache key involved, if any
        """
        super().__init__(message)
        self.operation = operation
        self.cache_key = cache_key


class BulkSourceUnavailableError(DynamoDBError):
    """Exception raised when the merged records table cannot be scanned."""
    pass
