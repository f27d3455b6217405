"""
Global exception handler for consistent API error responses.
Follows DRF convention and returns uniform structure.
"""
import logging
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
from django.conf import settings
from django.core.exceptions import PermissionDenied, ValidationError as DjangoValidationError
from django.db import DatabaseError

from core.exceptions import CampusError, StoreError

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns:
    { "detail": str, "code": str }
    """
    request = context.get('request') if context else None
    path = request.path if request else 'unknown'

    if isinstance(exc, DatabaseError):
        logger.error('Store failure on %s: %s', path, exc)
        exc = StoreError(_store_message(exc))

    if isinstance(exc, CampusError):
        if exc.status_code >= 500:
            logger.warning('%s on %s: %s', type(exc).__name__, path, exc.message)
        return Response(
            {'detail': exc.message, 'code': exc.code},
            status=exc.status_code,
        )

    response = exception_handler(exc, context)
    if response is not None:
        data = response.data if isinstance(response.data, dict) else {'detail': str(response.data)}
        if 'detail' not in data and response.data:
            data = {'detail': _get_detail(exc), 'errors': response.data}
        data.setdefault('code', _get_code(exc))
        response.data = data
        return response

    if isinstance(exc, PermissionDenied):
        return Response(
            {'detail': str(exc) or 'Permission denied', 'code': 'permission_denied'},
            status=status.HTTP_403_FORBIDDEN
        )
    if isinstance(exc, DjangoValidationError):
        return Response(
            {'detail': '; '.join(exc.messages), 'code': 'validation_error'},
            status=status.HTTP_400_BAD_REQUEST
        )

    logger.exception('Unhandled exception on %s: %s', path, exc)
    error_detail = 'An internal error occurred.'
    if settings.DEBUG:
        error_detail = f'An internal error occurred: {str(exc)}'
    # Never expose stack traces to frontend
    return Response(
        {'detail': error_detail, 'code': 'internal_error'},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def _store_message(exc):
    if settings.DEBUG:
        return f'Data store error: {str(exc)[:200]}'
    return StoreError.default_message


def _get_detail(exc):
    if hasattr(exc, 'detail'):
        d = exc.detail
        if isinstance(d, list):
            return str(d[0]) if d else 'Error'
        if isinstance(d, dict):
            first = next(iter(d.values()), 'Error')
            if isinstance(first, list):
                first = first[0] if first else 'Error'
            return str(first)
        return str(d)
    return str(exc)


def _get_code(exc):
    codes = {
        'AuthenticationFailed': 'invalid_credentials',
        'NotAuthenticated': 'not_authenticated',
        'InvalidToken': 'invalid_token',
        'NotFound': 'not_found',
        'PermissionDenied': 'permission_denied',
        'ValidationError': 'validation_error',
        'MethodNotAllowed': 'method_not_allowed',
    }
    return codes.get(type(exc).__name__, 'error')
