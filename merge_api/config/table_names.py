"""
DynamoDB table name constants.

This module provides centralized table name constants to ensure consistency
across all modules and Lambda functions.
"""
import os
from typing import Optional

# Record tables
CHARACTERS_TABLE_NAME = 'Characters'
AGE_RANGES_TABLE_NAME = 'AgeRanges'
MERGED_RECORDS_TABLE_NAME = 'MergedRecords'

# History cache table
CACHE_TABLE_NAME = 'HistoryCache'

# Table name mapping for environment variable overrides
TABLE_NAME_ENV_VARS = {
    'CHARACTERS_TABLE_NAME': CHARACTERS_TABLE_NAME,
    'AGE_RANGES_TABLE_NAME': AGE_RANGES_TABLE_NAME,
    'MERGED_RECORDS_TABLE_NAME': MERGED_RECORDS_TABLE_NAME,
    'CACHE_TABLE_NAME': CACHE_TABLE_NAME,
}


def get_table_name(table_key: str, default: Optional[str] = None) -> str:
    """
    Get table name from environment variable or use default constant.

    Args:
        table_key: Environment variable key (e.g., 'CACHE_TABLE_NAME')
        default: Default table name if environment variable not set

    Returns:
        Table name from environment or default

    Example:
        >>> import os
        >>> os.environ['CACHE_TABLE_NAME'] = 'HistoryCache-dev'
        >>> get_table_name('CACHE_TABLE_NAME')
        'HistoryCache-dev'
    """
    if default is None:
        default = TABLE_NAME_ENV_VARS.get(table_key, '')

    return os.getenv(table_key) or default
