"""
Repository for the AgeRanges lookup table.
"""
import logging
from typing import List, Optional

from merge_api.models.records import AgeRange

from .dynamodb_client import DynamoDBClient

logger = logging.getLogger(__name__)


class AgeRangesRepository:
    """
    Repository for the age range lookup table.
    """

    def __init__(self, table_name: str, dynamodb_client: Optional[DynamoDBClient] = None):
        self.table_name = table_name
        self.client = dynamodb_client or DynamoDBClient()

    def list_age_ranges(self) -> List[AgeRange]:
        """
        Scan every age range.

        Returns:
            List of age ranges, in scan order
        """
        items = self.client.scan(table_name=self.table_name)
        return [AgeRange.from_item(item) for item in items]

    def save_age_range(self, age_range: AgeRange) -> None:
        """
        Create or replace an age range.

        Args:
            age_range: Range to store
        """
        self.client.put_item(
            table_name=self.table_name,
            item=age_range.to_item()
        )
        logger.info(
            f"Saved age range {age_range.range_name} "
            f"({age_range.min_age}-{age_range.max_age})"
        )
