"""
Unit tests for the token authorizer.
"""
import logging
import time

import jwt
import pytest

SECRET = 'test-secret-for-the-merge-api-authorizer'
METHOD_ARN = 'arn:aws:execute-api:us-east-1:123456789012:abcdef123/dev/GET/historial'
API_RESOURCE = 'arn:aws:execute-api:us-east-1:123456789012:abcdef123/*'


@pytest.fixture
def handler(load_lambda, monkeypatch):
    monkeypatch.setenv('JWT_SECRET', SECRET)
    return load_lambda('authorizer')


def _event(token):
    return {'type': 'TOKEN', 'methodArn': METHOD_ARN, 'authorizationToken': token}


def _token(claims=None, secret=SECRET):
    payload = {'sub': 'user-123', 'exp': int(time.time()) + 3600}
    payload.update(claims or {})
    return jwt.encode(payload, secret, algorithm='HS256')


def _statement(policy):
    return policy['policyDocument']['Statement'][0]


class TestExtractToken:

    def test_bearer(self, handler):
        assert handler.extract_token('Bearer abc') == 'abc'

    @pytest.mark.parametrize('header', ['', 'abc', 'Basic abc', 'bearer abc'])
    def test_rejected(self, handler, header):
        with pytest.raises(handler.AuthorizationError):
            handler.extract_token(header)


class TestLambdaHandler:
    """Tests for lambda_handler."""

    def test_valid_token_allowed(self, handler):
        policy = handler.lambda_handler(_event(f'Bearer {_token()}'), None)

        assert policy['principalId'] == 'user-123'
        assert _statement(policy) == {
            'Action': 'execute-api:Invoke',
            'Effect': 'Allow',
            'Resource': API_RESOURCE,
        }

    def test_token_without_sub(self, handler):
        token = jwt.encode({'userId': 'abc'}, SECRET, algorithm='HS256')

        policy = handler.lambda_handler(_event(f'Bearer {token}'), None)

        assert policy['principalId'] == 'user'
        assert _statement(policy)['Effect'] == 'Allow'

    @pytest.mark.parametrize('authorization', [
        '',
        'not-a-bearer-token',
        'Bearer not.a.jwt',
    ])
    def test_malformed_denied(self, handler, authorization):
        policy = handler.lambda_handler(_event(authorization), None)

        assert policy['principalId'] == 'unauthorized'
        assert _statement(policy)['Effect'] == 'Deny'
        assert _statement(policy)['Resource'] == API_RESOURCE

    def test_wrong_secret_denied(self, handler):
        token = _token(secret='another-secret-that-does-not-match-it')
        policy = handler.lambda_handler(_event(f'Bearer {token}'), None)
        assert _statement(policy)['Effect'] == 'Deny'

    def test_expired_denied(self, handler):
        token = _token({'exp': int(time.time()) - 10})
        policy = handler.lambda_handler(_event(f'Bearer {token}'), None)
        assert _statement(policy)['Effect'] == 'Deny'

    def test_missing_secret_denied(self, handler, monkeypatch):
        monkeypatch.delenv('JWT_SECRET')
        policy = handler.lambda_handler(_event(f'Bearer {_token()}'), None)
        assert _statement(policy)['Effect'] == 'Deny'

    def test_missing_authorization_token_key(self, handler):
        policy = handler.lambda_handler({'methodArn': METHOD_ARN}, None)
        assert _statement(policy)['Effect'] == 'Deny'

    def test_token_and_secret_not_logged(self, handler, caplog):
        token = _token(secret='another-secret-that-does-not-match-it')

        with caplog.at_level(logging.INFO):
            handler.lambda_handler(_event(f'Bearer {token}'), None)
            handler.lambda_handler(_event(f'Bearer {_token()}'), None)

        assert token not in caplog.text
        assert SECRET not in caplog.text
