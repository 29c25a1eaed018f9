"""
Unit tests for data models.
"""
from decimal import Decimal

import pytest

from merge_api.models import AgeRange, CacheEntry, Character, MergedRecord, PageResult


class TestCacheEntry:
    """Test suite for CacheEntry."""

    def test_empty_key_rejected(self):
        with pytest.raises(ValueError, match="key cannot be empty"):
            CacheEntry(key='', payload={}, expires_at=10)

    def test_not_expired_before_deadline(self):
        entry = CacheEntry(key='k', payload={}, expires_at=100)
        assert entry.is_expired(99.9) is False

    def test_expired_at_deadline(self):
        entry = CacheEntry(key='k', payload={}, expires_at=100)
        assert entry.is_expired(100) is True
        assert entry.is_expired(101) is True

    def test_to_item_converts_floats(self):
        entry = CacheEntry(key='k', payload={'age': 1.5, 'items': [2.25]}, expires_at=100)

        item = entry.to_item()

        assert item == {
            'cacheKey': 'k',
            'data': {'age': Decimal('1.5'), 'items': [Decimal('2.25')]},
            'ttl': 100,
        }

    def test_from_item_restores_plain_numbers(self):
        item = {
            'cacheKey': 'k',
            'data': {'page': Decimal('1'), 'age': Decimal('1.5')},
            'ttl': Decimal('100'),
        }

        entry = CacheEntry.from_item(item)

        assert entry.payload == {'page': 1, 'age': 1.5}
        assert isinstance(entry.payload['page'], int)
        assert entry.expires_at == 100

    def test_from_item_missing_attribute(self):
        with pytest.raises(KeyError):
            CacheEntry.from_item({'cacheKey': 'k', 'ttl': 1})


class TestPageResult:
    """Test suite for PageResult."""

    def test_build_computes_total_pages(self):
        assert PageResult.build(items=[], page=1, limit=10, total=25).total_pages == 3
        assert PageResult.build(items=[], page=1, limit=10, total=30).total_pages == 3
        assert PageResult.build(items=[], page=1, limit=10, total=0).total_pages == 0

    def test_to_dict_uses_api_field_names(self):
        page = PageResult.build(items=[{'id': 'a'}], page=2, limit=1, total=3)

        assert page.to_dict() == {
            'items': [{'id': 'a'}],
            'page': 2,
            'total': 3,
            'totalPages': 3,
        }

    def test_from_dict_inverts_to_dict(self):
        page = PageResult.build(items=[{'id': 'a'}], page=1, limit=5, total=1)
        assert PageResult.from_dict(page.to_dict()) == page

    @pytest.mark.parametrize('data,message', [
        ({'datosFusionados': [], 'total': 0, 'totalPages': 0}, 'missing fields: items, page'),
        ({'page': 1, 'total': 0, 'totalPages': 0}, 'missing fields: items'),
        ({'items': [1], 'page': 1, 'total': 1, 'totalPages': 1}, 'list of objects'),
        ({'items': [], 'page': None, 'total': 0, 'totalPages': 0}, 'non-integer'),
        ('page', 'must be an object'),
    ])
    def test_from_dict_rejects_foreign_payloads(self, data, message):
        with pytest.raises(ValueError, match=message):
            PageResult.from_dict(data)


class TestRecords:
    """Test suite for table record models."""

    def test_age_range_bounds_inclusive(self):
        age_range = AgeRange(id='r', range_name='Adolescente', min_age=13, max_age=17)

        assert age_range.contains(13)
        assert age_range.contains(17)
        assert not age_range.contains(12)
        assert not age_range.contains(18)

    def test_age_range_from_item(self):
        age_range = AgeRange.from_item({
            'id': 'r', 'rangeName': 'Adulto', 'minAge': Decimal('18'), 'maxAge': Decimal('64')
        })
        assert age_range == AgeRange(id='r', range_name='Adulto', min_age=18, max_age=64)

    def test_character_item_round_trip(self):
        character = Character(
            id='c1', name='Luke', age=19.5, attribute='Jedi',
            created_at='2024-01-01T00:00:00Z', updated_at='2024-01-02T00:00:00Z'
        )

        item = character.to_item()

        assert item['age'] == Decimal('19.5')
        assert item['createdAt'] == '2024-01-01T00:00:00Z'
        assert Character.from_item(item) == character

    def test_merged_record_to_dict(self):
        record = MergedRecord(
            id='m1', name='Leia', age=Decimal('19'), attribute='Senator',
            range_name='Adulto', merged_at='2024-01-01T00:00:00Z'
        )
        record = MergedRecord.from_item(record.to_item())

        assert record.to_dict() == {
            'id': 'm1',
            'name': 'Leia',
            'age': 19,
            'attribute': 'Senator',
            'rangeName': 'Adulto',
            'mergedAt': '2024-01-01T00:00:00Z',
        }
