"""
Utility functions and services.
"""

from .response_builder import (
    success_response,
    error_response,
    method_not_allowed_response,
)
from .structured_logger import (
    StructuredLogger,
    LoggingContext,
    get_structured_logger,
    configure_lambda_logging,
)
from .validators import ValidationError

__all__ = [
    'success_response',
    'error_response',
    'method_not_allowed_response',
    'StructuredLogger',
    'LoggingContext',
    'get_structured_logger',
    'configure_lambda_logging',
    'ValidationError',
]
