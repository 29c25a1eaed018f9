#!/usr/bin/env python3
"""
Script to generate and verify HS256 tokens for local testing of the API.

The secret is read from --secret or the JWT_SECRET environment variable and
must match the secret configured on the authorizer.

Usage:
    python generate_jwt.py generate                         # 24h token
    python generate_jwt.py custom --expires 1h --user admin --role admin
    python generate_jwt.py verify <token>
"""

import argparse
import json
import os
import re
import secrets
import sys
import time
from typing import Any, Dict, Optional

import jwt

DEFAULT_EXPIRY = '24h'
JWT_ALGORITHM = 'HS256'

_DURATION_UNITS = {'s': 1, 'm': 60, 'h': 3600, 'd': 86400}


def parse_duration(value: str) -> int:
    """
    Parse a duration such as '30m', '24h' or '7d' into seconds.

    Raises:
        ValueError: If the value is not a number followed by s, m, h or d
    """
    match = re.fullmatch(r'(\d+)([smhd])', value.strip())
    if not match:
        raise ValueError(f"Invalid duration: {value!r} (expected e.g. 30m, 24h, 7d)")
    return int(match.group(1)) * _DURATION_UNITS[match.group(2)]


def generate_token(
    secret: str,
    claims: Optional[Dict[str, Any]] = None,
    expires_in: str = DEFAULT_EXPIRY,
    now: Optional[int] = None
) -> str:
    """
    Sign a token with a random userId unless one is given.

    Args:
        secret: HS256 signing secret
        claims: Extra claims merged over the defaults
        expires_in: Lifetime, e.g. '24h'
        now: Issue time in seconds since epoch (default: current time)

    Returns:
        Encoded token
    """
    issued_at = int(time.time()) if now is None else now
    payload = {
        'userId': secrets.token_hex(8),
        'iat': issued_at,
    }
    payload.update(claims or {})
    payload['exp'] = issued_at + parse_duration(expires_in)
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def verify_token(token: str, secret: str) -> Dict[str, Any]:
    """
    Verify signature and expiry.

    Raises:
        jwt.InvalidTokenError: If the token is invalid or expired
    """
    return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])


def show_token_info(token: str, secret: str) -> bool:
    """Print the token claims and whether it verifies; return validity."""
    try:
        claims = jwt.decode(token, options={'verify_signature': False})
    except jwt.DecodeError:
        print("✗ Malformed token")
        return False

    print("Payload:")
    print(json.dumps(claims, indent=2))

    try:
        verify_token(token, secret)
    except jwt.InvalidTokenError as e:
        print(f"\n✗ Token invalid: {e}")
        return False

    print("\n✓ Token valid")
    if 'exp' in claims:
        remaining = claims['exp'] - int(time.time())
        print(f"  Expires in: {remaining // 3600}h {(remaining % 3600) // 60}m")
    return True


def main():
    parser = argparse.ArgumentParser(
        description='Generate and verify JWTs for the merge API'
    )
    parser.add_argument(
        '--secret',
        default=os.environ.get('JWT_SECRET'),
        help='Signing secret (default: JWT_SECRET environment variable)'
    )

    subparsers = parser.add_subparsers(dest='command')
    subparsers.add_parser('generate', help=f'Generate a token valid for {DEFAULT_EXPIRY}')

    custom = subparsers.add_parser('custom', help='Generate a token with custom claims')
    custom.add_argument('--expires', default=DEFAULT_EXPIRY, help='Lifetime, e.g. 1h, 7d')
    custom.add_argument('--user', help='userId claim')
    custom.add_argument('--role', help='role claim')
    custom.add_argument('--name', help='name claim')

    verify = subparsers.add_parser('verify', help='Verify an existing token')
    verify.add_argument('token', help='Token to verify')

    args = parser.parse_args()

    if not args.secret:
        print("Error: provide --secret or set JWT_SECRET")
        sys.exit(1)

    command = args.command or 'generate'

    if command == 'verify':
        if not show_token_info(args.token, args.secret):
            sys.exit(1)
        return

    claims: Dict[str, Any] = {}
    expires_in = DEFAULT_EXPIRY
    if command == 'custom':
        expires_in = args.expires
        for claim, value in (('userId', args.user), ('role', args.role), ('name', args.name)):
            if value:
                claims[claim] = value

    try:
        token = generate_token(args.secret, claims, expires_in)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(token)
    show_token_info(token, args.secret)


if __name__ == '__main__':
    main()
