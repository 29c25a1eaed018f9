"""
Store Handler for POST requests creating or updating a character.
"""
import json
from typing import Any, Dict, Optional

from merge_api.config.settings import Settings
from merge_api.data_access import CharactersRepository, DynamoDBClient, DynamoDBError
from merge_api.services.character_service import CharacterService
from merge_api.utils.response_builder import (
    error_response,
    method_not_allowed_response,
    success_response,
)
from merge_api.utils.structured_logger import configure_lambda_logging, get_structured_logger
from merge_api.utils.validators import ValidationError

configure_lambda_logging()
logger = get_structured_logger('StoreHandler', endpoint='almacenar')

# Built on first invocation and reused across warm invocations
_character_service: Optional[CharacterService] = None


def get_character_service() -> CharacterService:
    global _character_service
    if _character_service is None:
        settings = Settings()
        client = DynamoDBClient(region=settings.aws_region)
        _character_service = CharacterService(
            CharactersRepository(settings.characters_table, client)
        )
    return _character_service


def handle_request(
    event: Dict[str, Any],
    character_service: CharacterService,
    request_id: Optional[str] = None
) -> Dict[str, Any]:
    """
    Handle a store request.

    Args:
        event: API Gateway proxy event
        character_service: Service that persists the character
        request_id: Lambda request ID for log correlation

    Returns:
        API Gateway response
    """
    log = logger.with_request(request_id)

    method = event.get('httpMethod')
    if method != 'POST':
        log.warning(f'Rejected {method} request', operation='store')
        return method_not_allowed_response('POST')

    try:
        payload = json.loads(event.get('body') or '')
    except (TypeError, ValueError):
        return error_response(
            status_code=400,
            error_code='INVALID_JSON',
            message='Request body must be valid JSON'
        )

    try:
        outcome = character_service.store(payload)
    except ValidationError as e:
        log.info('Store request failed validation', operation='store', errors=e.details)
        return error_response(
            status_code=400,
            error_code='VALIDATION_ERROR',
            message=e.message,
            details=e.details
        )
    except DynamoDBError as e:
        log.error('Failed to store character', operation='store', error=e)
        return error_response(
            status_code=500,
            error_code='INTERNAL_SERVER_ERROR',
            message='Internal server error'
        )

    action = 'created' if outcome.created else 'updated'
    log.info(
        f'Character {action}',
        operation='store',
        name=outcome.character.name
    )

    return success_response(
        message=f'Character {action} successfully',
        data=outcome.character.to_dict()
    )


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda entry point for the store endpoint.
    """
    request_id = getattr(context, 'aws_request_id', None)
    try:
        return handle_request(event, get_character_service(), request_id)
    except Exception as e:
        logger.with_request(request_id).error(
            'Unexpected error in store handler',
            operation='lambda_handler',
            error=e
        )
        return error_response(
            status_code=500,
            error_code='INTERNAL_SERVER_ERROR',
            message='Internal server error'
        )
