"""
CloudWatch metrics utility for emitting custom metrics.

Provides methods for emitting:
- Cache hit/miss counts for the history listing
- Invalidation counts after merges
"""
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

import boto3

logger = logging.getLogger(__name__)


class MetricsPublisher:
    """
    CloudWatch metrics publisher for the merge API.

    Emission failures are logged and swallowed; metrics never fail a request.
    """

    def __init__(
        self,
        namespace: str = 'CharacterMergeApi',
        enabled: bool = True,
        cloudwatch_client=None,
        region: str = 'us-east-1'
    ):
        """
        Initialize metrics publisher.

        Args:
            namespace: CloudWatch metrics namespace
            enabled: When False every emit is a no-op
            cloudwatch_client: Optional CloudWatch client for testing
            region: AWS region for the CloudWatch client
        """
        self.namespace = namespace
        self.enabled = enabled
        self._cloudwatch = cloudwatch_client
        self._region = region

    @property
    def cloudwatch(self):
        if self._cloudwatch is None:
            self._cloudwatch = boto3.client('cloudwatch', region_name=self._region)
        return self._cloudwatch

    def put_count_metric(
        self,
        metric_name: str,
        value: int = 1,
        dimensions: Optional[List[Dict[str, str]]] = None
    ):
        """
        Emit count metric.

        Args:
            metric_name: Metric name (e.g., 'HistoryCacheHit')
            value: Count value (default: 1)
            dimensions: Metric dimensions
        """
        self._put_metric(
            metric_name=metric_name,
            value=value,
            unit='Count',
            dimensions=dimensions or []
        )

    def _put_metric(
        self,
        metric_name: str,
        value: float,
        unit: str,
        dimensions: List[Dict[str, str]]
    ):
        """
        Put metric to CloudWatch.

        Args:
            metric_name: Metric name
            value: Metric value
            unit: Metric unit
            dimensions: Metric dimensions
        """
        if not self.enabled:
            return

        try:
            metric_data = {
                'MetricName': metric_name,
                'Value': value,
                'Unit': unit,
                'Timestamp': datetime.now(timezone.utc)
            }

            if dimensions:
                metric_data['Dimensions'] = dimensions

            self.cloudwatch.put_metric_data(
                Namespace=self.namespace,
                MetricData=[metric_data]
            )
        except Exception as e:
            logger.warning(f"Failed to emit metric {metric_name}: {e}")

    def emit_cache_result(self, endpoint: str, from_cache: bool):
        """
        Emit cache hit or miss count for an endpoint.

        Args:
            endpoint: Cached endpoint name
            from_cache: True on a cache hit
        """
        self.put_count_metric(
            metric_name='HistoryCacheHit' if from_cache else 'HistoryCacheMiss',
            dimensions=[{'Name': 'Endpoint', 'Value': endpoint}]
        )

    def emit_cache_invalidation(self, deleted_entries: int):
        """
        Emit number of cache entries removed by a bulk invalidation.

        Args:
            deleted_entries: Number of deleted entries
        """
        self.put_count_metric(
            metric_name='CacheEntriesInvalidated',
            value=deleted_entries
        )
