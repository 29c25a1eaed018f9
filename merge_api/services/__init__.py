"""
Business services for the merge API.
"""

from .cache_key import make_cache_key
from .read_through_cache import CacheResult, ReadThroughCache
from .cache_invalidator import CacheInvalidator
from .history_service import HistoryService
from .cached_history_service import CachedHistoryService, HISTORY_ENDPOINT
from .merge_service import (
    MergeService,
    MergeOutcome,
    MergeError,
    CharacterNotFoundError,
    AgeRangesNotConfiguredError,
    AgeRangeNotFoundError,
)
from .character_service import CharacterService, StoreOutcome

__all__ = [
    'make_cache_key',
    'CacheResult',
    'ReadThroughCache',
    'CacheInvalidator',
    'HistoryService',
    'CachedHistoryService',
    'HISTORY_ENDPOINT',
    'MergeService',
    'MergeOutcome',
    'MergeError',
    'CharacterNotFoundError',
    'AgeRangesNotConfiguredError',
    'AgeRangeNotFoundError',
    'CharacterService',
    'StoreOutcome',
]
