"""
Repository for MergedRecords table operations.
"""
import logging
from typing import List, Optional

from merge_api.models.records import MergedRecord

from .dynamodb_client import DynamoDBClient
from .exceptions import BulkSourceUnavailableError, DynamoDBError

logger = logging.getLogger(__name__)

NAME_INDEX = 'NameIndex'


class MergedRecordsRepository:
    """
    Repository for merged records in DynamoDB.

    The table is keyed by id with a GSI on name, so a character has at
    most one merged record that is replaced on every merge.
    """

    def __init__(self, table_name: str, dynamodb_client: Optional[DynamoDBClient] = None):
        """
        Initialize MergedRecords repository.

        Args:
            table_name: Name of the MergedRecords table
            dynamodb_client: Optional DynamoDB client instance
        """
        self.table_name = table_name
        self.client = dynamodb_client or DynamoDBClient()

    def find_by_name(self, name: str) -> Optional[MergedRecord]:
        """
        Find the merged record for a character name.

        Args:
            name: Character name

        Returns:
            First matching record or None
        """
        items = self.client.query(
            table_name=self.table_name,
            index_name=NAME_INDEX,
            key_condition_expression='#name = :name',
            expression_attribute_names={'#name': 'name'},
            expression_attribute_values={':name': name}
        )
        return MergedRecord.from_item(items[0]) if items else None

    def save(self, record: MergedRecord) -> MergedRecord:
        """
        Create or replace a merged record.

        Args:
            record: Record to store

        Returns:
            The stored record
        """
        self.client.put_item(
            table_name=self.table_name,
            item=record.to_item()
        )
        logger.info(f"Saved merged record {record.id} for {record.name}")
        return record

    def scan_all(self) -> List[MergedRecord]:
        """
        Scan every merged record.

        Order is whatever DynamoDB returns and is not stable across calls.

        Returns:
            List of merged records

        Raises:
            BulkSourceUnavailableError: If the table cannot be scanned
        """
        try:
            items = self.client.scan(table_name=self.table_name)
        except DynamoDBError as e:
            raise BulkSourceUnavailableError(f"Failed to scan merged records: {e}")

        logger.info(f"Scanned {len(items)} merged records")
        return [MergedRecord.from_item(item) for item in items]
