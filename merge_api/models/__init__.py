"""
Data models for the merge API.
"""

from .cache_entry import CacheEntry
from .page_result import PageResult
from .records import AgeRange, Character, MergedRecord

__all__ = [
    'CacheEntry',
    'PageResult',
    'AgeRange',
    'Character',
    'MergedRecord',
]
