"""
Create or update stored characters.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from merge_api.data_access.characters_repository import CharactersRepository
from merge_api.models.records import Character
from merge_api.utils.validators import validate_character_payload


@dataclass
class StoreOutcome:
    character: Character
    created: bool


class CharacterService:
    """
    Stores characters keyed by name.

    Characters are inputs to the merge, not part of the history listing,
    so storing one leaves the history cache untouched.
    """

    def __init__(
        self,
        characters_repository: CharactersRepository,
        id_factory: Callable[[], str] = None,
        now_factory: Callable[[], str] = None
    ):
        self.characters_repository = characters_repository
        self.id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self.now_factory = now_factory or (
            lambda: datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        )

    def store(self, payload: Any) -> StoreOutcome:
        """
        Validate and store a character, updating it if the name exists.

        Args:
            payload: Parsed request body with nombre, edad and atributo

        Returns:
            StoreOutcome with the stored character

        Raises:
            ValidationError: If the payload is invalid
            DynamoDBError: On record store failures
        """
        name, age, attribute = validate_character_payload(payload)
        now = self.now_factory()

        existing = self.characters_repository.get_character(name)

        character = Character(
            id=existing.id if existing else self.id_factory(),
            name=name,
            age=age,
            attribute=attribute,
            created_at=existing.created_at if existing and existing.created_at else now,
            updated_at=now,
        )
        self.characters_repository.save_character(character)

        return StoreOutcome(character=character, created=existing is None)
