"""
Structured JSON logging for Lambda functions.

This module provides a structured logger that outputs JSON-formatted
logs with request IDs, context, and standardized fields for
CloudWatch Logs Insights queries.
"""

import json
import logging
import os
import time
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal types and stringifies anything else."""
    def default(self, obj):
        if isinstance(obj, Decimal):
            if obj == obj.to_integral_value():
                return int(obj)
            return float(obj)
        return str(obj)


class StructuredLogger:
    """
    Structured JSON logger for Lambda functions.

    Outputs logs in JSON format with:
    - Timestamp (ISO 8601)
    - Log level
    - Request ID and endpoint
    - Component and operation
    - Message and additional context
    """

    def __init__(
        self,
        component: str,
        request_id: Optional[str] = None,
        endpoint: Optional[str] = None
    ):
        """
        Initialize structured logger.

        Args:
            component: Component name (e.g., 'HistoryHandler', 'CacheInvalidator')
            request_id: Request identifier from Lambda context
            endpoint: API endpoint being served (e.g., 'historial')
        """
        self.component = component
        self.request_id = request_id
        self.endpoint = endpoint
        self.logger = logging.getLogger(component)

        log_level = os.getenv('LOG_LEVEL', 'INFO')
        self.logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    def with_request(self, request_id: Optional[str]) -> 'StructuredLogger':
        """Return a copy of this logger bound to a request ID."""
        return StructuredLogger(
            component=self.component,
            request_id=request_id,
            endpoint=self.endpoint
        )

    def _format_log(
        self,
        level: str,
        message: str,
        operation: Optional[str] = None,
        **kwargs
    ) -> str:
        """
        Format log entry as JSON.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR)
            message: Log message
            operation: Operation being performed
            **kwargs: Additional context fields

        Returns:
            JSON-formatted log string
        """
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': level,
            'component': self.component,
            'message': message
        }

        if self.request_id:
            log_entry['requestId'] = self.request_id
        if self.endpoint:
            log_entry['endpoint'] = self.endpoint

        if operation:
            log_entry['operation'] = operation

        if kwargs:
            log_entry['context'] = kwargs

        return json.dumps(log_entry, cls=DecimalEncoder)

    def debug(
        self,
        message: str,
        operation: Optional[str] = None,
        **kwargs
    ) -> None:
        """
        Log debug message.

        Args:
            message: Log message
            operation: Operation being performed
            **kwargs: Additional context
        """
        self.logger.debug(self._format_log('DEBUG', message, operation, **kwargs))

    def info(
        self,
        message: str,
        operation: Optional[str] = None,
        **kwargs
    ) -> None:
        """
        Log info message.

        Args:
            message: Log message
            operation: Operation being performed
            **kwargs: Additional context
        """
        self.logger.info(self._format_log('INFO', message, operation, **kwargs))

    def warning(
        self,
        message: str,
        operation: Optional[str] = None,
        **kwargs
    ) -> None:
        """
        Log warning message.

        Args:
            message: Log message
            operation: Operation being performed
            **kwargs: Additional context
        """
        self.logger.warning(self._format_log('WARNING', message, operation, **kwargs))

    def error(
        self,
        message: str,
        operation: Optional[str] = None,
        error: Optional[Exception] = None,
        **kwargs
    ) -> None:
        """
        Log error message.

        Args:
            message: Log message
            operation: Operation being performed
            error: Exception object if available
            **kwargs: Additional context
        """
        if error:
            kwargs['error_type'] = type(error).__name__
            kwargs['error_message'] = str(error)

        self.logger.error(self._format_log('ERROR', message, operation, **kwargs))

    def log_cache_event(self, event_type: str, cache_key: str, **kwargs) -> None:
        """
        Log cache hit/miss/expiry at INFO level.

        Args:
            event_type: 'hit', 'miss', 'expired', 'stored', 'degraded'
            cache_key: Cache key involved
            **kwargs: Additional context
        """
        self.info(
            f'Cache {event_type} for key: {cache_key}',
            operation='cache_event',
            event_type=event_type,
            cache_key=cache_key,
            **kwargs
        )

    def log_performance(self, operation: str, duration_ms: float, **kwargs) -> None:
        """
        Log performance metric at DEBUG level.

        Args:
            operation: Operation name
            duration_ms: Duration in milliseconds
            **kwargs: Additional context
        """
        self.debug(
            f'Performance: {operation}',
            operation='performance',
            operation_name=operation,
            duration_ms=duration_ms,
            **kwargs
        )


class LoggingContext:
    """
    Context manager for logging operation duration.

    Automatically logs operation start, end, and duration.
    """

    def __init__(self, logger: StructuredLogger, operation: str, **kwargs):
        """
        Initialize logging context.

        Args:
            logger: StructuredLogger instance
            operation: Operation name
            **kwargs: Additional context
        """
        self.logger = logger
        self.operation = operation
        self.context = kwargs
        self.start_time: Optional[float] = None

    def __enter__(self):
        """Log operation start."""
        self.start_time = time.time()
        self.logger.debug(
            f'Starting operation: {self.operation}',
            operation=self.operation,
            **self.context
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Log operation end and duration."""
        if self.start_time is not None:
            duration_ms = (time.time() - self.start_time) * 1000

            if exc_type is not None:
                self.logger.error(
                    f'Operation failed: {self.operation}',
                    operation=self.operation,
                    error=exc_val,
                    duration_ms=duration_ms,
                    **self.context
                )
            else:
                self.logger.log_performance(self.operation, duration_ms, **self.context)


def get_structured_logger(
    component: str,
    request_id: Optional[str] = None,
    endpoint: Optional[str] = None
) -> StructuredLogger:
    """
    Factory function for creating StructuredLogger instances.

    Args:
        component: Name of the component (e.g., 'MergeHandler')
        request_id: Optional request ID from Lambda context
        endpoint: Optional API endpoint name

    Returns:
        Configured StructuredLogger instance

    Example:
        >>> logger = get_structured_logger('HistoryHandler', endpoint='historial')
        >>> logger.info('Listing history page')
    """
    return StructuredLogger(
        component=component,
        request_id=request_id,
        endpoint=endpoint
    )


def configure_lambda_logging():
    """
    Configure logging for Lambda environment.

    Sets up root logger to output to stdout with appropriate format.
    Should be called at module level in Lambda handlers.
    """
    log_level = os.getenv('LOG_LEVEL', 'INFO').upper()

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(message)s',  # Just the message, we format as JSON
        force=True
    )

    # Disable boto3 debug logging unless explicitly enabled
    if log_level != 'DEBUG':
        logging.getLogger('boto3').setLevel(logging.WARNING)
        logging.getLogger('botocore').setLevel(logging.WARNING)
        logging.getLogger('urllib3').setLevel(logging.WARNING)
