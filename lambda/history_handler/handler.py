"""
History Handler for GET requests listing merged records page by page.

Pages are served through the read-through cache; the X-Cache header
reports HIT or MISS, and N/A when the request never reached the cache.
"""
from typing import Any, Dict, Optional

from merge_api.config.settings import Settings
from merge_api.data_access import (
    BulkSourceUnavailableError,
    CacheRepository,
    DynamoDBClient,
    MergedRecordsRepository,
)
from merge_api.services.cached_history_service import HISTORY_ENDPOINT, CachedHistoryService
from merge_api.services.history_service import HistoryService
from merge_api.services.read_through_cache import ReadThroughCache
from merge_api.utils.metrics import MetricsPublisher
from merge_api.utils.response_builder import (
    error_response,
    method_not_allowed_response,
    success_response,
)
from merge_api.utils.structured_logger import (
    LoggingContext,
    configure_lambda_logging,
    get_structured_logger,
)
from merge_api.utils.validators import ValidationError, parse_positive_int

configure_lambda_logging()
logger = get_structured_logger('HistoryHandler', endpoint=HISTORY_ENDPOINT)

NO_CACHE_HEADERS = {'X-Cache': 'N/A'}

_settings: Optional[Settings] = None
_history_service: Optional[CachedHistoryService] = None
_metrics_publisher: Optional[MetricsPublisher] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def get_history_service() -> CachedHistoryService:
    global _history_service
    if _history_service is None:
        settings = get_settings()
        client = DynamoDBClient(region=settings.aws_region)
        _history_service = CachedHistoryService(
            HistoryService(MergedRecordsRepository(settings.merged_records_table, client)),
            ReadThroughCache(
                CacheRepository(settings.cache_table, client),
                ttl_seconds=settings.cache_ttl_seconds
            )
        )
    return _history_service


def get_metrics_publisher() -> MetricsPublisher:
    global _metrics_publisher
    if _metrics_publisher is None:
        settings = get_settings()
        _metrics_publisher = MetricsPublisher(
            namespace=settings.metrics_namespace,
            enabled=settings.enable_metrics,
            region=settings.aws_region
        )
    return _metrics_publisher


def handle_request(
    event: Dict[str, Any],
    history_service: CachedHistoryService,
    metrics_publisher: MetricsPublisher,
    default_page: int = 1,
    default_limit: int = 10,
    request_id: Optional[str] = None
) -> Dict[str, Any]:
    """
    Handle a history request.

    Args:
        event: API Gateway proxy event with optional ?page= and ?limit=
        history_service: Cached listing service
        metrics_publisher: Publisher for hit/miss counts
        default_page: Page used when ?page is absent
        default_limit: Page size used when ?limit is absent
        request_id: Lambda request ID for log correlation

    Returns:
        API Gateway response with the X-Cache header
    """
    log = logger.with_request(request_id)

    method = event.get('httpMethod')
    if method != 'GET':
        log.warning(f'Rejected {method} request', operation='history')
        return method_not_allowed_response('GET', headers=NO_CACHE_HEADERS)

    query_params = event.get('queryStringParameters') or {}

    try:
        page = parse_positive_int(query_params.get('page'), 'page', default_page)
        limit = parse_positive_int(query_params.get('limit'), 'limit', default_limit)

        with LoggingContext(log, 'get_history_page', page=page, limit=limit):
            result = history_service.get_page(page, limit)
    except ValidationError as e:
        return error_response(
            status_code=400,
            error_code='VALIDATION_ERROR',
            message=e.message,
            details=e.details,
            headers=NO_CACHE_HEADERS
        )
    except BulkSourceUnavailableError as e:
        log.error('Merged records unavailable', operation='history', error=e)
        return error_response(
            status_code=500,
            error_code='INTERNAL_SERVER_ERROR',
            message='Internal server error',
            headers=NO_CACHE_HEADERS
        )

    metrics_publisher.emit_cache_result(HISTORY_ENDPOINT, result.from_cache)

    return success_response(
        message='History retrieved successfully',
        data=result.value.to_dict(),
        headers={'X-Cache': 'HIT' if result.from_cache else 'MISS'},
        fromCache=result.from_cache
    )


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda entry point for the history endpoint.
    """
    request_id = getattr(context, 'aws_request_id', None)
    try:
        settings = get_settings()
        return handle_request(
            event,
            get_history_service(),
            get_metrics_publisher(),
            default_page=settings.history_default_page,
            default_limit=settings.history_default_limit,
            request_id=request_id
        )
    except Exception as e:
        logger.with_request(request_id).error(
            'Unexpected error in history handler',
            operation='lambda_handler',
            error=e
        )
        return error_response(
            status_code=500,
            error_code='INTERNAL_SERVER_ERROR',
            message='Internal server error',
            headers=NO_CACHE_HEADERS
        )
