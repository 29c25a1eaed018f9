"""
DynamoDB client with error handling.
"""
import logging
from typing import Dict, List, Optional, Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import DynamoDBError

logger = logging.getLogger(__name__)


class DynamoDBClient:
    """
    DynamoDB client wrapping the boto3 table resource.

    Every boto3/botocore failure is re-raised as DynamoDBError so callers
    only need to handle one exception family.
    """

    def __init__(self, region: str = 'us-east-1', dynamodb_resource=None):
        """
        Initialize DynamoDB client.

        Args:
            region: AWS region for DynamoDB
            dynamodb_resource: Optional boto3 DynamoDB resource for testing
        """
        self.dynamodb = dynamodb_resource or boto3.resource('dynamodb', region_name=region)

    def get_table(self, table_name: str):
        """
        Get DynamoDB table resource.

        Args:
            table_name: Name of the table

        Returns:
            DynamoDB table resource
        """
        return self.dynamodb.Table(table_name)

    def get_item(
        self,
        table_name: str,
        key: Dict[str, Any],
        consistent_read: bool = False
    ) -> Optional[Dict[str, Any]]:
        """
        Get item from DynamoDB table.

        Args:
            table_name: Name of the table
            key: Primary key of the item
            consistent_read: Whether to use consistent read

        Returns:
            Item dict or None if not found

        Raises:
            DynamoDBError: On DynamoDB errors
        """
        try:
            table = self.get_table(table_name)
            response = table.get_item(
                Key=key,
                ConsistentRead=consistent_read
            )
            return response.get('Item')
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error getting item from {table_name}: {e}")
            raise DynamoDBError(f"Failed to get item: {e}")

    def put_item(self, table_name: str, item: Dict[str, Any]) -> None:
        """
        Put item into DynamoDB table, overwriting any item with the same key.

        Args:
            table_name: Name of the table
            item: Item to put

        Raises:
            DynamoDBError: On DynamoDB errors
        """
        try:
            table = self.get_table(table_name)
            table.put_item(Item=item)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error putting item to {table_name}: {e}")
            raise DynamoDBError(f"Failed to put item: {e}")

    def delete_item(self, table_name: str, key: Dict[str, Any]) -> None:
        """
        Delete item from DynamoDB table.

        Deleting a key that does not exist is not an error. Goes through
        the resource's low-level client, which is safe to share between
        threads (the Table resource is not).

        Args:
            table_name: Name of the table
            key: Primary key of the item

        Raises:
            DynamoDBError: On DynamoDB errors
        """
        try:
            self.dynamodb.meta.client.delete_item(TableName=table_name, Key=key)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error deleting item from {table_name}: {e}")
            raise DynamoDBError(f"Failed to delete item: {e}")

    def query(
        self,
        table_name: str,
        key_condition_expression: str,
        expression_attribute_values: Dict[str, Any],
        index_name: Optional[str] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Query DynamoDB table.

        Args:
            table_name: Name of the table
            key_condition_expression: Key condition expression
            expression_attribute_values: Expression attribute values
            index_name: Optional GSI name
            expression_attribute_names: Optional expression attribute names
            limit: Optional limit on number of items

        Returns:
            List of items

        Raises:
            DynamoDBError: On DynamoDB errors
        """
        try:
            table = self.get_table(table_name)
            kwargs = {
                'KeyConditionExpression': key_condition_expression,
                'ExpressionAttributeValues': expression_attribute_values,
            }

            if index_name:
                kwargs['IndexName'] = index_name
            if expression_attribute_names:
                kwargs['ExpressionAttributeNames'] = expression_attribute_names
            if limit:
                kwargs['Limit'] = limit

            response = table.query(**kwargs)
            return response.get('Items', [])
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error querying {table_name}: {e}")
            raise DynamoDBError(f"Failed to query table: {e}")

    def scan(
        self,
        table_name: str,
        projection_expression: Optional[str] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None
    ) -> List[Dict[str, Any]]:
        """
        Scan the whole table, following LastEvaluatedKey across pages.

        Args:
            table_name: Name of the table
            projection_expression: Optional attributes to return
            expression_attribute_names: Optional expression attribute names

        Returns:
            List of all items, in the order DynamoDB returned them

        Raises:
            DynamoDBError: On DynamoDB errors
        """
        try:
            table = self.get_table(table_name)
            kwargs = {}

            if projection_expression:
                kwargs['ProjectionExpression'] = projection_expression
            if expression_attribute_names:
                kwargs['ExpressionAttributeNames'] = expression_attribute_names

            items = []
            while True:
                response = table.scan(**kwargs)
                items.extend(response.get('Items', []))

                last_key = response.get('LastEvaluatedKey')
                if not last_key:
                    break
                kwargs['ExclusiveStartKey'] = last_key

            return items
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error scanning {table_name}: {e}")
            raise DynamoDBError(f"Failed to scan table: {e}")
