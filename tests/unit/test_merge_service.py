"""
Unit tests for the merge and store services.
"""
from unittest.mock import Mock

import pytest

from merge_api.data_access.exceptions import DynamoDBError
from merge_api.models.records import AgeRange, Character, MergedRecord
from merge_api.services.character_service import CharacterService
from merge_api.services.merge_service import (
    AgeRangeNotFoundError,
    AgeRangesNotConfiguredError,
    CharacterNotFoundError,
    MergeService,
    find_age_range,
)
from merge_api.utils.validators import ValidationError

NOW = '2024-05-01T12:00:00Z'

AGE_RANGES = [
    AgeRange(id='r1', range_name='Bebé', min_age=0, max_age=1),
    AgeRange(id='r2', range_name='Niño/a', min_age=2, max_age=12),
    AgeRange(id='r3', range_name='Adulto', min_age=18, max_age=64),
]


def _character(name='Luke', age=30):
    return Character(
        id='char-1', name=name, age=age, attribute='Jedi',
        created_at='2024-01-01T00:00:00Z', updated_at='2024-01-01T00:00:00Z'
    )


@pytest.fixture
def repositories():
    characters = Mock()
    characters.get_character.return_value = _character()
    age_ranges = Mock()
    age_ranges.list_age_ranges.return_value = AGE_RANGES
    merged = Mock()
    merged.find_by_name.return_value = None
    invalidator = Mock()
    invalidator.invalidate_all.return_value = 3
    return characters, age_ranges, merged, invalidator


@pytest.fixture
def merge_service(repositories):
    characters, age_ranges, merged, invalidator = repositories
    return MergeService(
        characters, age_ranges, merged, invalidator,
        id_factory=lambda: 'new-id',
        now_factory=lambda: NOW
    )


class TestFindAgeRange:

    def test_first_match(self):
        assert find_age_range(1, AGE_RANGES).range_name == 'Bebé'
        assert find_age_range(64, AGE_RANGES).range_name == 'Adulto'

    def test_gap_between_ranges(self):
        assert find_age_range(15, AGE_RANGES) is None


class TestMergeService:
    """Test suite for MergeService.merge."""

    def test_creates_record_and_invalidates(self, merge_service, repositories):
        _, _, merged, invalidator = repositories

        outcome = merge_service.merge('Luke')

        assert outcome.created is True
        assert outcome.invalidated_entries == 3
        assert outcome.record == MergedRecord(
            id='new-id', name='Luke', age=30, attribute='Jedi',
            range_name='Adulto', merged_at=NOW
        )
        merged.save.assert_called_once_with(outcome.record)
        invalidator.invalidate_all.assert_called_once()

    def test_invalidation_runs_after_write(self, merge_service, repositories):
        _, _, merged, invalidator = repositories
        calls = []
        merged.save.side_effect = lambda record: calls.append('save')
        invalidator.invalidate_all.side_effect = lambda: calls.append('invalidate') or 0

        merge_service.merge('Luke')

        assert calls == ['save', 'invalidate']

    def test_existing_record_reuses_id(self, merge_service, repositories):
        _, _, merged, _ = repositories
        merged.find_by_name.return_value = MergedRecord(
            id='old-id', name='Luke', age=29, attribute='Jedi',
            range_name='Adulto', merged_at='2023-01-01T00:00:00Z'
        )

        outcome = merge_service.merge('Luke')

        assert outcome.created is False
        assert outcome.record.id == 'old-id'
        assert outcome.record.age == 30

    def test_name_is_trimmed(self, merge_service, repositories):
        characters = repositories[0]
        merge_service.merge('  Luke ')
        characters.get_character.assert_called_once_with('Luke')

    def test_invalid_name(self, merge_service, repositories):
        with pytest.raises(ValidationError):
            merge_service.merge('   ')
        repositories[3].invalidate_all.assert_not_called()

    def test_character_not_found(self, merge_service, repositories):
        characters, _, merged, invalidator = repositories
        characters.get_character.return_value = None

        with pytest.raises(CharacterNotFoundError) as exc_info:
            merge_service.merge('Nobody')

        assert exc_info.value.status_code == 404
        merged.save.assert_not_called()
        invalidator.invalidate_all.assert_not_called()

    def test_no_age_ranges(self, merge_service, repositories):
        repositories[1].list_age_ranges.return_value = []

        with pytest.raises(AgeRangesNotConfiguredError) as exc_info:
            merge_service.merge('Luke')

        assert exc_info.value.error_code == 'AGE_RANGES_NOT_FOUND'
        assert exc_info.value.status_code == 500

    def test_no_matching_range(self, merge_service, repositories):
        repositories[0].get_character.return_value = _character(age=15)

        with pytest.raises(AgeRangeNotFoundError) as exc_info:
            merge_service.merge('Luke')

        assert exc_info.value.error_code == 'AGE_RANGE_NOT_FOUND'
        repositories[3].invalidate_all.assert_not_called()

    def test_write_failure_skips_invalidation(self, merge_service, repositories):
        _, _, merged, invalidator = repositories
        merged.save.side_effect = DynamoDBError('write failed')

        with pytest.raises(DynamoDBError):
            merge_service.merge('Luke')

        invalidator.invalidate_all.assert_not_called()


class TestCharacterService:
    """Test suite for CharacterService.store."""

    @pytest.fixture
    def characters(self):
        repository = Mock()
        repository.get_character.return_value = None
        return repository

    @pytest.fixture
    def service(self, characters):
        return CharacterService(characters, id_factory=lambda: 'new-id', now_factory=lambda: NOW)

    def test_creates_new_character(self, service, characters):
        outcome = service.store({'nombre': ' Luke ', 'edad': 19, 'atributo': 'Jedi'})

        assert outcome.created is True
        assert outcome.character == Character(
            id='new-id', name='Luke', age=19, attribute='Jedi', created_at=NOW, updated_at=NOW
        )
        characters.save_character.assert_called_once_with(outcome.character)

    def test_update_keeps_id_and_created_at(self, service, characters):
        characters.get_character.return_value = _character()

        outcome = service.store({'nombre': 'Luke', 'edad': 31, 'atributo': 'Master'})

        assert outcome.created is False
        assert outcome.character.id == 'char-1'
        assert outcome.character.created_at == '2024-01-01T00:00:00Z'
        assert outcome.character.updated_at == NOW
        assert outcome.character.age == 31

    def test_invalid_payload_not_stored(self, service, characters):
        with pytest.raises(ValidationError):
            service.store({'nombre': 'Luke', 'edad': 0, 'atributo': 'Jedi'})
        characters.save_character.assert_not_called()
