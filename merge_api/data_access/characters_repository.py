"""
Repository for Characters table operations.
"""
import logging
from typing import Optional

from merge_api.models.records import Character

from .dynamodb_client import DynamoDBClient

logger = logging.getLogger(__name__)


class CharactersRepository:
    """
    Repository for managing character records in DynamoDB.
    """

    def __init__(self, table_name: str, dynamodb_client: Optional[DynamoDBClient] = None):
        """
        Initialize Characters repository.

        Args:
            table_name: Name of the Characters table
            dynamodb_client: Optional DynamoDB client instance
        """
        self.table_name = table_name
        self.client = dynamodb_client or DynamoDBClient()

    def get_character(self, name: str) -> Optional[Character]:
        """
        Get character by name.

        Args:
            name: Character name

        Returns:
            Character or None if not found
        """
        item = self.client.get_item(
            table_name=self.table_name,
            key={'name': name}
        )
        return Character.from_item(item) if item else None

    def save_character(self, character: Character) -> Character:
        """
        Create or replace a character record.

        Args:
            character: Character to store

        Returns:
            The stored character
        """
        self.client.put_item(
            table_name=self.table_name,
            item=character.to_item()
        )
        logger.info(f"Saved character {character.name} ({character.id})")
        return character
