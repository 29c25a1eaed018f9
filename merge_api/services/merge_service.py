"""
Merge of a stored character with its age range.

Every successful merge writes the merged records table and then clears
the history cache before returning.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from merge_api.data_access.age_ranges_repository import AgeRangesRepository
from merge_api.data_access.characters_repository import CharactersRepository
from merge_api.data_access.merged_records_repository import MergedRecordsRepository
from merge_api.models.records import AgeRange, MergedRecord
from merge_api.utils.structured_logger import get_structured_logger
from merge_api.utils.validators import validate_name

from .cache_invalidator import CacheInvalidator

logger = get_structured_logger('MergeService')


class MergeError(Exception):
    """Base exception for merge failures that map to an API error."""

    error_code = 'MERGE_ERROR'
    status_code = 500


class CharacterNotFoundError(MergeError):
    """Raised when no character exists with the requested name."""

    error_code = 'CHARACTER_NOT_FOUND'
    status_code = 404


class AgeRangesNotConfiguredError(MergeError):
    """Raised when the age range table is empty."""

    error_code = 'AGE_RANGES_NOT_FOUND'


class AgeRangeNotFoundError(MergeError):
    """Raised when no age range contains the character's age."""

    error_code = 'AGE_RANGE_NOT_FOUND'


@dataclass
class MergeOutcome:
    """
    Result of a merge.

    Attributes:
        record: The stored merged record
        created: True when no merged record existed for the name
        invalidated_entries: Cache entries removed after the write
    """

    record: MergedRecord
    created: bool
    invalidated_entries: int


def find_age_range(age: float, age_ranges: List[AgeRange]) -> Optional[AgeRange]:
    """Return the first range containing age, or None."""
    for age_range in age_ranges:
        if age_range.contains(age):
            return age_range
    return None


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


class MergeService:
    """
    Combines characters with their age range and invalidates the history cache.
    """

    def __init__(
        self,
        characters_repository: CharactersRepository,
        age_ranges_repository: AgeRangesRepository,
        merged_records_repository: MergedRecordsRepository,
        cache_invalidator: CacheInvalidator,
        id_factory: Callable[[], str] = None,
        now_factory: Callable[[], str] = None
    ):
        """
        Initialize merge service.

        Args:
            characters_repository: Source of characters
            age_ranges_repository: Source of age ranges
            merged_records_repository: Destination of merged records
            cache_invalidator: Cleared after every successful write
            id_factory: Generates ids for new records (default: uuid4)
            now_factory: Returns the merge timestamp (default: UTC ISO-8601)
        """
        self.characters_repository = characters_repository
        self.age_ranges_repository = age_ranges_repository
        self.merged_records_repository = merged_records_repository
        self.cache_invalidator = cache_invalidator
        self.id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self.now_factory = now_factory or _utc_now_iso

    def merge(self, name: str) -> MergeOutcome:
        """
        Merge the named character with its age range.

        Args:
            name: Character name (trimmed before lookup)

        Returns:
            MergeOutcome with the stored record

        Raises:
            ValidationError: If the name is invalid
            CharacterNotFoundError: If the character does not exist
            AgeRangesNotConfiguredError: If there are no age ranges
            AgeRangeNotFoundError: If no range matches the age
            DynamoDBError: On record store failures
        """
        name = validate_name(name)

        character = self.characters_repository.get_character(name)
        if character is None:
            raise CharacterNotFoundError(f'No character named "{name}"')

        age_ranges = self.age_ranges_repository.list_age_ranges()
        if not age_ranges:
            raise AgeRangesNotConfiguredError('No age ranges configured')

        age_range = find_age_range(character.age, age_ranges)
        if age_range is None:
            raise AgeRangeNotFoundError(f'No age range found for age {character.age}')

        existing = self.merged_records_repository.find_by_name(character.name)

        record = MergedRecord(
            id=existing.id if existing else self.id_factory(),
            name=character.name,
            age=character.age,
            attribute=character.attribute,
            range_name=age_range.range_name,
            merged_at=self.now_factory(),
        )
        self.merged_records_repository.save(record)

        logger.info(
            'Merged record saved, clearing history cache',
            operation='merge',
            name=record.name,
            range_name=record.range_name,
            created=existing is None
        )
        invalidated = self.cache_invalidator.invalidate_all()

        return MergeOutcome(
            record=record,
            created=existing is None,
            invalidated_entries=invalidated
        )
