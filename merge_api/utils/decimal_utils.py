"""
Conversion helpers for DynamoDB number types.

The boto3 resource layer returns every number as Decimal and refuses to
store floats. These helpers translate in both directions so payloads read
back from a table compare equal to the values that were written.
"""
from decimal import Decimal
from typing import Any


def replace_decimals(value: Any) -> Any:
    """
    Recursively convert Decimal values to int (when integral) or float.

    Args:
        value: Value read from DynamoDB (dict, list, scalar)

    Returns:
        Same structure with plain Python numbers
    """
    if isinstance(value, list):
        return [replace_decimals(v) for v in value]
    if isinstance(value, dict):
        return {k: replace_decimals(v) for k, v in value.items()}
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    return value


def replace_floats(value: Any) -> Any:
    """
    Recursively convert float values to Decimal for writing to DynamoDB.

    Args:
        value: JSON-serializable value

    Returns:
        Same structure with floats replaced by Decimal
    """
    if isinstance(value, list):
        return [replace_floats(v) for v in value]
    if isinstance(value, dict):
        return {k: replace_floats(v) for k, v in value.items()}
    if isinstance(value, float):
        return Decimal(str(value))
    return value
