"""
Unit tests for bulk cache invalidation.
"""
import threading
from unittest.mock import Mock

import pytest

from merge_api.data_access.exceptions import CacheStoreUnavailableError
from merge_api.models.cache_entry import CacheEntry
from merge_api.services.cache_invalidator import CacheInvalidator


def _fill(repository, count):
    for i in range(count):
        key = f'cache_historial_limit=10&page={i + 1}'
        repository.entries[key] = CacheEntry(key=key, payload={}, expires_at=10)


class TestCacheInvalidator:
    """Test suite for CacheInvalidator.invalidate_all."""

    def test_deletes_every_entry(self, cache_repository):
        _fill(cache_repository, 25)

        deleted = CacheInvalidator(cache_repository, max_workers=4).invalidate_all()

        assert deleted == 25
        assert cache_repository.entries == {}

    def test_empty_cache(self, cache_repository):
        assert CacheInvalidator(cache_repository).invalidate_all() == 0

    def test_deletes_run_concurrently(self):
        keys = [f'k{i}' for i in range(3)]
        barrier = threading.Barrier(3, timeout=5)
        repository = Mock()
        repository.scan_all_keys.return_value = keys
        repository.delete.side_effect = lambda key: barrier.wait()

        deleted = CacheInvalidator(repository, max_workers=3).invalidate_all()

        assert deleted == 3

    def test_scan_failure_returns_zero(self):
        repository = Mock()
        repository.scan_all_keys.side_effect = CacheStoreUnavailableError('boom', operation='scan')

        assert CacheInvalidator(repository).invalidate_all() == 0
        repository.delete.assert_not_called()

    def test_single_delete_failure_does_not_stop_others(self):
        repository = Mock()
        repository.scan_all_keys.return_value = ['a', 'b', 'c']

        def delete(key):
            if key == 'b':
                raise CacheStoreUnavailableError('boom', operation='delete', cache_key=key)

        repository.delete.side_effect = delete

        deleted = CacheInvalidator(repository).invalidate_all()

        assert deleted == 2
        assert repository.delete.call_count == 3

    def test_invalid_max_workers(self, cache_repository):
        with pytest.raises(ValueError, match="max_workers must be at least 1"):
            CacheInvalidator(cache_repository, max_workers=0)
