"""
Token authorizer for the REST API using PyJWT.
Validates HS256 bearer tokens signed with the shared JWT secret.
"""
import logging
import os
from typing import Any, Dict

import jwt

logger = logging.getLogger()
logger.setLevel(os.environ.get('LOG_LEVEL', 'INFO'))

TOKEN_PREFIX = 'Bearer '
JWT_ALGORITHM = 'HS256'


class AuthorizationError(Exception):
    """Raised when a request cannot be authorized."""


def extract_token(authorization: str) -> str:
    """
    Extract the JWT from an Authorization header value.

    Raises:
        AuthorizationError: If the header is missing or not in Bearer format
    """
    if not authorization:
        raise AuthorizationError('Authorization header is required')
    if not authorization.startswith(TOKEN_PREFIX):
        raise AuthorizationError('Invalid authorization header format')
    return authorization[len(TOKEN_PREFIX):]


def validate_token(token: str, secret: str) -> Dict[str, Any]:
    """
    Verify signature and expiry of an HS256 token.

    Returns decoded token claims if valid
    Raises AuthorizationError if invalid
    """
    if not secret:
        raise AuthorizationError('JWT secret is not configured')

    try:
        return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthorizationError('Token expired')
    except jwt.InvalidSignatureError:
        raise AuthorizationError('Invalid signature')
    except jwt.InvalidTokenError as e:
        raise AuthorizationError(f'Invalid token: {type(e).__name__}')


def api_resource(method_arn: str) -> str:
    """
    Widen a method ARN to every method of the API.

    arn:aws:execute-api:region:account:api-id/stage/GET/historial
    becomes arn:aws:execute-api:region:account:api-id/*
    """
    return method_arn.split('/')[0] + '/*'


def generate_policy(principal_id: str, effect: str, method_arn: str) -> Dict[str, Any]:
    """Generate IAM policy for API Gateway"""
    return {
        'principalId': principal_id,
        'policyDocument': {
            'Version': '2012-10-17',
            'Statement': [
                {
                    'Action': 'execute-api:Invoke',
                    'Effect': effect,
                    'Resource': api_resource(method_arn)
                }
            ]
        }
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda token authorizer for the REST API.

    - Valid token: Allow every method of the API for the token subject
    - Anything else: Deny for principal 'unauthorized'
    """
    method_arn = event.get('methodArn', '')

    try:
        token = extract_token(event.get('authorizationToken') or '')
        decoded = validate_token(token, os.environ.get('JWT_SECRET', ''))
    except AuthorizationError as e:
        logger.warning(f'Authorization failed: {e}')
        return generate_policy('unauthorized', 'Deny', method_arn)

    principal_id = decoded.get('sub') or 'user'
    logger.info(f'Token validated successfully for principal: {principal_id}')
    return generate_policy(principal_id, 'Allow', method_arn)
