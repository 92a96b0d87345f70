"""
Error types and the unified API exception handler.

Every failure leaves the API as ``{"error": <message>, "code": <CODE>}``.
Services raise :class:`ApiError` with a machine readable code; DRF's own
exceptions are mapped onto the same shape and anything unexpected
becomes a 500 after being logged.
"""
from __future__ import annotations

import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler, set_rollback

logger = logging.getLogger(__name__)


class ApiError(exceptions.APIException):
    """An expected, client-facing failure carrying its own error code."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request'
    default_code = 'BAD_REQUEST'

    def __init__(self, code: str, message: str, status_code: int | None = None):
        super().__init__(detail=message, code=code)
        self.code = code
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationFailed(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class EntityNotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str):
        super().__init__('NOT_FOUND', message)


_DRF_CODES = {
    exceptions.NotAuthenticated: 'AUTHENTICATION_REQUIRED',
    exceptions.AuthenticationFailed: 'AUTHENTICATION_REQUIRED',
    exceptions.NotFound: 'NOT_FOUND',
    exceptions.ParseError: 'INVALID_JSON',
    exceptions.MethodNotAllowed: 'METHOD_NOT_ALLOWED',
    exceptions.PermissionDenied: 'FORBIDDEN',
    exceptions.Throttled: 'THROTTLED',
    exceptions.ValidationError: 'VALIDATION_ERROR',
}


def _drf_code(exc: exceptions.APIException) -> str:
    for klass, code in _DRF_CODES.items():
        if isinstance(exc, klass):
            return code
    return 'API_ERROR'


def api_exception_handler(exc, context):
    if isinstance(exc, ApiError):
        set_rollback()
        return Response({'error': exc.message, 'code': exc.code}, status=exc.status_code)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        logger.exception('Unhandled error in %s', getattr(view, '__name__', None) or type(view).__name__)
        set_rollback()
        return Response(
            {'error': f'Internal server error: {exc}', 'code': 'SERVER_ERROR'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        message = 'Authentication required'
    elif isinstance(resp.data, dict):
        message = resp.data.get('detail') or resp.data
    else:
        message = str(resp.data)
    resp.data = {'error': message, 'code': _drf_code(exc)}
    return resp
