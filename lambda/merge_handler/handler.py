"""
Merge Handler for GET requests combining a character with its age range.

A successful merge clears the whole history cache before responding.
"""
from typing import Any, Dict, Optional

from merge_api.config.settings import Settings
from merge_api.data_access import (
    AgeRangesRepository,
    CacheRepository,
    CharactersRepository,
    DynamoDBClient,
    DynamoDBError,
    MergedRecordsRepository,
)
from merge_api.services.cache_invalidator import CacheInvalidator
from merge_api.services.merge_service import MergeError, MergeService
from merge_api.utils.metrics import MetricsPublisher
from merge_api.utils.response_builder import (
    error_response,
    method_not_allowed_response,
    success_response,
)
from merge_api.utils.structured_logger import configure_lambda_logging, get_structured_logger
from merge_api.utils.validators import ValidationError

configure_lambda_logging()
logger = get_structured_logger('MergeHandler', endpoint='fusionados')

_merge_service: Optional[MergeService] = None
_metrics_publisher: Optional[MetricsPublisher] = None


def get_merge_service() -> MergeService:
    global _merge_service
    if _merge_service is None:
        settings = Settings()
        client = DynamoDBClient(region=settings.aws_region)
        _merge_service = MergeService(
            characters_repository=CharactersRepository(settings.characters_table, client),
            age_ranges_repository=AgeRangesRepository(settings.age_ranges_table, client),
            merged_records_repository=MergedRecordsRepository(settings.merged_records_table, client),
            cache_invalidator=CacheInvalidator(
                CacheRepository(settings.cache_table, client),
                max_workers=settings.cache_invalidation_max_workers
            ),
        )
    return _merge_service


def get_metrics_publisher() -> MetricsPublisher:
    global _metrics_publisher
    if _metrics_publisher is None:
        settings = Settings()
        _metrics_publisher = MetricsPublisher(
            namespace=settings.metrics_namespace,
            enabled=settings.enable_metrics,
            region=settings.aws_region
        )
    return _metrics_publisher


def handle_request(
    event: Dict[str, Any],
    merge_service: MergeService,
    metrics_publisher: MetricsPublisher,
    request_id: Optional[str] = None
) -> Dict[str, Any]:
    """
    Handle a merge request.

    Args:
        event: API Gateway proxy event with ?nombre=
        merge_service: Service performing the merge and invalidation
        metrics_publisher: Publisher for the invalidation count
        request_id: Lambda request ID for log correlation

    Returns:
        API Gateway response; 201 when the merged record was created,
        200 when an existing one was updated
    """
    log = logger.with_request(request_id)

    method = event.get('httpMethod')
    if method != 'GET':
        log.warning(f'Rejected {method} request', operation='merge')
        return method_not_allowed_response('GET')

    query_params = event.get('queryStringParameters') or {}

    try:
        outcome = merge_service.merge(query_params.get('nombre'))
    except ValidationError as e:
        return error_response(
            status_code=400,
            error_code='VALIDATION_ERROR',
            message=e.message,
            details=e.details
        )
    except MergeError as e:
        log.warning(str(e), operation='merge', error_code=e.error_code)
        return error_response(
            status_code=e.status_code,
            error_code=e.error_code,
            message=str(e)
        )
    except DynamoDBError as e:
        log.error('Failed to merge character', operation='merge', error=e)
        return error_response(
            status_code=500,
            error_code='INTERNAL_SERVER_ERROR',
            message='Internal server error'
        )

    metrics_publisher.emit_cache_invalidation(outcome.invalidated_entries)

    if outcome.created:
        return success_response(
            message='Merged record created successfully',
            data=outcome.record.to_dict(),
            status_code=201
        )

    return success_response(
        message='Merged record updated successfully',
        data=outcome.record.to_dict()
    )


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda entry point for the merge endpoint.
    """
    request_id = getattr(context, 'aws_request_id', None)
    try:
        return handle_request(event, get_merge_service(), get_metrics_publisher(), request_id)
    except Exception as e:
        logger.with_request(request_id).error(
            'Unexpected error in merge handler',
            operation='lambda_handler',
            error=e
        )
        return error_response(
            status_code=500,
            error_code='INTERNAL_SERVER_ERROR',
            message='Internal server error'
        )
