"""
Utility for building standardized API Gateway responses.
"""
import json
from typing import Any, Dict, List, Optional

from .structured_logger import DecimalEncoder

DEFAULT_HEADERS = {
    'Content-Type': 'application/json',
    'Access-Control-Allow-Origin': '*',
}


def _build_response(
    status_code: int,
    body: Dict[str, Any],
    headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    response_headers = dict(DEFAULT_HEADERS)
    if headers:
        response_headers.update(headers)

    return {
        'statusCode': status_code,
        'headers': response_headers,
        'body': json.dumps(body, cls=DecimalEncoder)
    }


def success_response(
    message: str,
    data: Any = None,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
    **extra: Any
) -> Dict[str, Any]:
    """
    Build success response.

    Args:
        message: Human-readable message
        data: Response payload
        status_code: HTTP status code
        headers: Extra headers merged over the defaults
        **extra: Additional top-level body fields (e.g. fromCache)

    Returns:
        API Gateway response dict
    """
    body: Dict[str, Any] = {
        'success': True,
        'message': message,
    }

    if data is not None:
        body['data'] = data
    body.update(extra)

    return _build_response(status_code, body, headers)


def error_response(
    status_code: int,
    error_code: str,
    message: str,
    details: Optional[List[str]] = None,
    headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Build error response.

    Args:
        status_code: HTTP status code
        error_code: Application error code
        message: Human-readable error message
        details: Optional list of individual error messages
        headers: Extra headers merged over the defaults

    Returns:
        API Gateway response dict
    """
    body: Dict[str, Any] = {
        'success': False,
        'message': message,
        'error': error_code,
    }

    if details:
        body['details'] = details

    return _build_response(status_code, body, headers)


def method_not_allowed_response(
    allowed_method: str,
    headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Build 405 response for a handler that accepts a single method.

    Args:
        allowed_method: The only accepted HTTP method
        headers: Extra headers merged over the defaults

    Returns:
        API Gateway response dict with 405 status
    """
    return error_response(
        status_code=405,
        error_code='METHOD_NOT_ALLOWED',
        message=f'Method not allowed. Only {allowed_method} is accepted.',
        headers=headers
    )
