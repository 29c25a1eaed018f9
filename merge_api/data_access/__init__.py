"""
Data access layer for DynamoDB operations.
"""
from .dynamodb_client import DynamoDBClient
from .cache_repository import CacheRepository
from .characters_repository import CharactersRepository
from .age_ranges_repository import AgeRangesRepository
from .merged_records_repository import MergedRecordsRepository
from .exceptions import (
    DynamoDBError,
    CacheStoreUnavailableError,
    BulkSourceUnavailableError,
)

__all__ = [
    'DynamoDBClient',
    'CacheRepository',
    'CharactersRepository',
    'AgeRangesRepository',
    'MergedRecordsRepository',
    'DynamoDBError',
    'CacheStoreUnavailableError',
    'BulkSourceUnavailableError',
]
