# exceptions.py
from rest_framework.views import exception_handler, set_rollback
from rest_framework.response import Response
from rest_framework import status
from rest_framework.exceptions import APIException, AuthenticationFailed
from django.core.exceptions import ValidationError
from django.db import IntegrityError
import logging
from django.conf import settings

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = '23505'
FOREIGN_KEY_VIOLATION = '23503'


# =============== ERROR KINDS ===============
class InvalidCredentials(AuthenticationFailed):
    default_detail = 'Invalid email or password'
    default_code = 'invalid_credentials'


class AccountInactive(AuthenticationFailed):
    default_detail = 'Account is not active'
    default_code = 'account_inactive'


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists'
    default_code = 'conflict'


class EmptyOrder(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Order must contain at least one item'
    default_code = 'empty_order'


class MissingLocationFilter(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'location_id is required'
    default_code = 'missing_location'


class DuplicateIngredient(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'The same ingredient appears more than once'
    default_code = 'duplicate_ingredient'


class StorageFailure(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal server error'
    default_code = 'storage_failure'


def integrity_error_code(exc):
    """Return the SQLSTATE of an IntegrityError, inferring it for SQLite"""
    cause = exc.__cause__
    code = getattr(cause, 'pgcode', None) or getattr(cause, 'sqlstate', None)
    if code:
        return code

    message = str(exc).upper()
    if 'UNIQUE CONSTRAINT' in message:
        return UNIQUE_VIOLATION
    if 'FOREIGN KEY' in message:
        return FOREIGN_KEY_VIOLATION
    return None


def _first_message(data):
    """Pull a readable message out of DRF's nested error data"""
    if isinstance(data, dict):
        if 'detail' in data:
            return _first_message(data['detail'])
        for field, value in data.items():
            message = _first_message(value)
            if field == 'non_field_errors':
                return message
            return f"{field}: {message}"
    if isinstance(data, (list, tuple)) and data:
        return _first_message(data[0])
    return str(data)


def custom_exception_handler(exc, context):
    """
    Custom exception handler for the Thrive API.

    Every failure is returned as {"success": false, "error": ..., "details": ...}.
    """
    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        payload = {
            'success': False,
            'error': _first_message(response.data),
        }
        # Field-level validation errors keep their structure
        if response.status_code == 400 and isinstance(response.data, dict) and 'detail' not in response.data:
            payload['details'] = response.data
        response.data = payload
        return response

    # Handle Django ValidationError
    if isinstance(exc, ValidationError):
        logger.warning(f"Validation Error: {exc}")
        set_rollback()
        return Response({
            'success': False,
            'error': exc.messages[0] if exc.messages else 'Validation error',
            'details': {'non_field_errors': exc.messages},
        }, status=status.HTTP_400_BAD_REQUEST)

    # Handle Django IntegrityError
    if isinstance(exc, IntegrityError):
        code = integrity_error_code(exc)
        logger.warning(f"Integrity Error ({code}): {exc}")
        set_rollback()
        if code == UNIQUE_VIOLATION:
            body, status_code = {'success': False, 'error': Conflict.default_detail}, status.HTTP_409_CONFLICT
        elif code == FOREIGN_KEY_VIOLATION:
            body, status_code = {'success': False, 'error': 'Referenced resource does not exist'}, status.HTTP_400_BAD_REQUEST
        else:
            body, status_code = {'success': False, 'error': 'This operation violates database constraints'}, status.HTTP_400_BAD_REQUEST
        if settings.DEBUG:
            body['details'] = {'error': str(exc)}
        return Response(body, status=status_code)

    # Handle unexpected errors
    logger.error(f"Unexpected Error: {exc}", exc_info=exc)
    set_rollback()
    body = {'success': False, 'error': StorageFailure.default_detail}
    if settings.DEBUG:
        body['details'] = {'error': str(exc)}
    return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
