# shared/common/exceptions.py
"""
DRF exception handler producing the platform error envelope
"""

import logging
import traceback
from typing import Optional

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def error_envelope(code: str, message: str, details=None, request_id: str = None) -> dict:
    """Build the response body shared by every error path"""
    error = {
        'code': code,
        'message': message,
        'request_id': request_id,
    }
    if details:
        error['details'] = details
    return {'success': False, 'error': error}


def custom_exception_handler(exc, context) -> Optional[Response]:
    """
    Custom exception handler for DRF.
    Provides consistent error response format across all services.
    """
    request = context.get('request')
    request_id = getattr(request, 'request_id', None) if request else None

    response = exception_handler(exc, context)

    if response is not None:
        return format_error_response(exc, response, request_id)

    if isinstance(exc, DjangoValidationError):
        errors = exc.message_dict if hasattr(exc, 'error_dict') else {'detail': exc.messages}
        return Response(
            error_envelope('VALIDATION_ERROR', 'Validation error', errors, request_id),
            status=status.HTTP_400_BAD_REQUEST
        )

    if isinstance(exc, Http404):
        return Response(
            error_envelope('NOT_FOUND', str(exc) or 'Resource not found', request_id=request_id),
            status=status.HTTP_404_NOT_FOUND
        )

    view = context.get('view')
    logger.exception(
        f"Unhandled exception: {exc}",
        extra={
            'request_id': request_id,
            'exception_type': type(exc).__name__,
            'view': type(view).__name__ if view else None,
            'path': getattr(request, 'path', None),
        }
    )

    if settings.DEBUG:
        body = error_envelope('INTERNAL_ERROR', str(exc), request_id=request_id)
        body['error']['type'] = type(exc).__name__
        body['error']['traceback'] = traceback.format_exc().split('\n')
        return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(
        error_envelope(
            'INTERNAL_ERROR',
            'An unexpected error occurred. Please try again later.',
            request_id=request_id
        ),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def format_error_response(exc, response: Response, request_id: str = None) -> Response:
    """Wrap a DRF-generated error response in the platform envelope"""
    details = None
    if isinstance(response.data, dict) and 'detail' not in response.data:
        # Field-level validation errors
        details = response.data

    code = getattr(exc, 'default_code', 'error')
    response.data = error_envelope(
        str(code).upper(),
        get_error_message(exc, response),
        details,
        request_id
    )
    return response


def get_error_message(exc, response: Response) -> str:
    """Extract error message from exception or response"""
    detail = getattr(exc, 'detail', None)
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list) and detail:
        return str(detail[0])
    if isinstance(detail, dict):
        return 'Validation error'
    return response.status_text or 'Error'
