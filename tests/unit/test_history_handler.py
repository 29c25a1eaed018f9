"""
Unit tests for the History Handler Lambda.
"""
import json
from unittest.mock import Mock, patch

import pytest

from merge_api.data_access.exceptions import BulkSourceUnavailableError
from merge_api.models.page_result import PageResult
from merge_api.services.read_through_cache import CacheResult
from merge_api.utils.validators import ValidationError


@pytest.fixture
def handler(load_lambda):
    return load_lambda('history_handler')


@pytest.fixture
def history_service():
    service = Mock()
    service.get_page.return_value = CacheResult(
        value=PageResult.build(items=[{'id': 'a'}], page=1, limit=10, total=1),
        from_cache=False
    )
    return service


@pytest.fixture
def metrics_publisher():
    return Mock()


def _event(method='GET', query=None):
    return {'httpMethod': method, 'queryStringParameters': query}


class TestHistoryHandler:
    """Test suite for history_handler.handle_request."""

    def test_miss_response(self, handler, history_service, metrics_publisher):
        response = handler.handle_request(_event(), history_service, metrics_publisher)

        assert response['statusCode'] == 200
        assert response['headers']['X-Cache'] == 'MISS'
        body = json.loads(response['body'])
        assert body == {
            'success': True,
            'message': 'History retrieved successfully',
            'data': {'items': [{'id': 'a'}], 'page': 1, 'total': 1, 'totalPages': 1},
            'fromCache': False,
        }
        history_service.get_page.assert_called_once_with(1, 10)
        metrics_publisher.emit_cache_result.assert_called_once_with('historial', False)

    def test_hit_response(self, handler, history_service, metrics_publisher):
        history_service.get_page.return_value.from_cache = True

        response = handler.handle_request(_event(), history_service, metrics_publisher)

        assert response['headers']['X-Cache'] == 'HIT'
        assert json.loads(response['body'])['fromCache'] is True

    def test_query_parameters_parsed(self, handler, history_service, metrics_publisher):
        handler.handle_request(_event(query={'page': '3', 'limit': '5'}), history_service, metrics_publisher)
        history_service.get_page.assert_called_once_with(3, 5)

    def test_configured_defaults(self, handler, history_service, metrics_publisher):
        handler.handle_request(
            _event(), history_service, metrics_publisher, default_page=2, default_limit=20
        )
        history_service.get_page.assert_called_once_with(2, 20)

    @pytest.mark.parametrize('query', [
        {'page': 'abc'}, {'page': '0'}, {'limit': '-1'}, {'limit': '2.5'}, {'page': '1_0'}, {'limit': '+5'},
    ])
    def test_invalid_pagination(self, handler, history_service, metrics_publisher, query):
        response = handler.handle_request(_event(query=query), history_service, metrics_publisher)

        assert response['statusCode'] == 400
        assert response['headers']['X-Cache'] == 'N/A'
        body = json.loads(response['body'])
        assert body['success'] is False
        assert body['error'] == 'VALIDATION_ERROR'
        history_service.get_page.assert_not_called()
        metrics_publisher.emit_cache_result.assert_not_called()

    def test_service_validation_error(self, handler, history_service, metrics_publisher):
        history_service.get_page.side_effect = ValidationError('"page" must be a positive integer', field='page')

        response = handler.handle_request(_event(), history_service, metrics_publisher)

        assert response['statusCode'] == 400

    def test_wrong_method(self, handler, history_service, metrics_publisher):
        response = handler.handle_request(_event(method='POST'), history_service, metrics_publisher)

        assert response['statusCode'] == 405
        assert response['headers']['X-Cache'] == 'N/A'
        assert json.loads(response['body'])['error'] == 'METHOD_NOT_ALLOWED'

    def test_source_unavailable(self, handler, history_service, metrics_publisher):
        history_service.get_page.side_effect = BulkSourceUnavailableError('down')

        response = handler.handle_request(_event(), history_service, metrics_publisher)

        assert response['statusCode'] == 500
        assert response['headers']['X-Cache'] == 'N/A'
        assert json.loads(response['body'])['error'] == 'INTERNAL_SERVER_ERROR'

    def test_lambda_handler_unexpected_error(self, handler):
        with patch.object(handler, 'get_history_service', side_effect=RuntimeError('boom')):
            response = handler.lambda_handler(_event(), Mock(aws_request_id='req-1'))

        assert response['statusCode'] == 500
        assert response['headers']['X-Cache'] == 'N/A'

    def test_lambda_handler_wires_components(self, handler, history_service, metrics_publisher):
        with patch.object(handler, 'get_history_service', return_value=history_service), \
             patch.object(handler, 'get_metrics_publisher', return_value=metrics_publisher):
            response = handler.lambda_handler(_event(), Mock(aws_request_id='req-1'))

        assert response['statusCode'] == 200
        history_service.get_page.assert_called_once_with(1, 10)
