"""
Input validation utilities for request parameters and bodies.
"""
import re
from numbers import Number
from typing import Any, List, Optional, Tuple

MAX_TEXT_LENGTH = 50
DIGITS_PATTERN = re.compile(r"[0-9]+")


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[List[str]] = None
    ):
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Individual messages when several fields failed
        """
        super().__init__(message)
        self.field = field
        self.message = message
        self.details = details or [message]


def parse_positive_int(value: Any, field_name: str, default: int) -> int:
    """
    Parse a query string value as a positive integer.

    Args:
        value: Raw value (None or empty uses the default)
        field_name: Name of the field for error messages
        default: Value used when the parameter is missing

    Returns:
        Parsed integer >= 1

    Raises:
        ValidationError: If the value is not an integer or is not positive
    """
    if value is None or value == '':
        return default

    if isinstance(value, bool):
        raise ValidationError(f'"{field_name}" must be a positive integer', field=field_name)

    text = str(value).strip()
    if not DIGITS_PATTERN.fullmatch(text):
        raise ValidationError(f'"{field_name}" must be a positive integer', field=field_name)

    parsed = int(text)

    if parsed <= 0:
        raise ValidationError(f'"{field_name}" must be a positive integer', field=field_name)

    return parsed


def validate_pagination(page: Any, limit: Any) -> None:
    """
    Validate already-parsed pagination values.

    Args:
        page: 1-based page number
        limit: Page size

    Raises:
        ValidationError: If either value is not an integer >= 1
    """
    for field_name, value in (('page', page), ('limit', limit)):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValidationError(
                f'"{field_name}" must be a positive integer',
                field=field_name
            )


def _validate_text(value: Any, field_name: str, errors: List[str]) -> Optional[str]:
    if not value or not isinstance(value, str):
        errors.append(f'"{field_name}" is required and must be a string')
        return None
    if len(value) > MAX_TEXT_LENGTH:
        errors.append(f'"{field_name}" cannot exceed {MAX_TEXT_LENGTH} characters')
        return None
    if not value.strip():
        errors.append(f'"{field_name}" cannot be empty')
        return None
    return value.strip()


def validate_name(name: Any) -> str:
    """
    Validate a character name.

    Args:
        name: Raw name value

    Returns:
        Trimmed name

    Raises:
        ValidationError: If the name is missing, blank or too long
    """
    errors: List[str] = []
    trimmed = _validate_text(name, 'nombre', errors)
    if errors:
        raise ValidationError(errors[0], field='nombre', details=errors)
    return trimmed


def validate_character_payload(data: Any) -> Tuple[str, Any, str]:
    """
    Validate the body of a store request.

    Collects every field error instead of stopping at the first one.

    Args:
        data: Parsed JSON body

    Returns:
        Tuple of (name, age, attribute) with text fields trimmed

    Raises:
        ValidationError: If any field is invalid; details lists each failure
    """
    if not isinstance(data, dict):
        raise ValidationError('Body must be a JSON object')

    errors: List[str] = []

    name = _validate_text(data.get('nombre'), 'nombre', errors)

    age = data.get('edad')
    if age is None:
        errors.append('"edad" is required')
    elif isinstance(age, bool) or not isinstance(age, Number):
        errors.append('"edad" must be a number')
    elif age <= 0:
        errors.append('"edad" must be greater than 0')

    attribute = _validate_text(data.get('atributo'), 'atributo', errors)

    if errors:
        raise ValidationError('Invalid input data', details=errors)

    return name, age, attribute
