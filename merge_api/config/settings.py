"""
Configuration settings for the merge API Lambdas.

Loads configuration from environment variables with sensible defaults.
"""

import os
from typing import Optional

from .table_names import get_table_name


class Settings:
    """
    Configuration settings shared by every handler.

    All settings are loaded from environment variables with defaults.
    """

    def __init__(self):
        """Initialize settings from environment variables."""
        # AWS Configuration
        self.aws_region: str = os.getenv('AWS_REGION', 'us-east-1')

        # Tables
        self.characters_table: str = get_table_name('CHARACTERS_TABLE_NAME')
        self.age_ranges_table: str = get_table_name('AGE_RANGES_TABLE_NAME')
        self.merged_records_table: str = get_table_name('MERGED_RECORDS_TABLE_NAME')
        self.cache_table: str = get_table_name('CACHE_TABLE_NAME')

        # Cache Configuration
        self.cache_ttl_seconds: int = int(os.getenv('CACHE_TTL_SECONDS', '1800'))
        self.cache_invalidation_max_workers: int = int(
            os.getenv('CACHE_INVALIDATION_MAX_WORKERS', '10')
        )

        # History pagination defaults
        self.history_default_page: int = int(os.getenv('HISTORY_DEFAULT_PAGE', '1'))
        self.history_default_limit: int = int(os.getenv('HISTORY_DEFAULT_LIMIT', '10'))

        # Metrics
        self.enable_metrics: bool = self._parse_bool(os.getenv('ENABLE_METRICS', 'true'))
        self.metrics_namespace: str = os.getenv('METRICS_NAMESPACE', 'CharacterMergeApi')

        # Authorizer
        self.jwt_secret: Optional[str] = os.getenv('JWT_SECRET') or None

        # Logging Configuration
        self.log_level: str = os.getenv('LOG_LEVEL', 'INFO')

        self._validate()

    def _parse_bool(self, value: str) -> bool:
        """
        Parse boolean value from string.

        Args:
            value: String value to parse

        Returns:
            Boolean value
        """
        return value.lower() in ('true', '1', 'yes', 'on')

    def _validate(self):
        """Validate configuration values."""
        if self.cache_ttl_seconds < 1:
            raise ValueError(
                f"Invalid CACHE_TTL_SECONDS: {self.cache_ttl_seconds}. Must be at least 1"
            )

        if self.cache_invalidation_max_workers < 1:
            raise ValueError(
                f"Invalid CACHE_INVALIDATION_MAX_WORKERS: "
                f"{self.cache_invalidation_max_workers}. Must be at least 1"
            )

        if self.history_default_page < 1 or self.history_default_limit < 1:
            raise ValueError(
                "HISTORY_DEFAULT_PAGE and HISTORY_DEFAULT_LIMIT must be positive"
            )

        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.log_level.upper() not in valid_log_levels:
            raise ValueError(
                f"Invalid LOG_LEVEL: {self.log_level}. "
                f"Must be one of {valid_log_levels}"
            )
