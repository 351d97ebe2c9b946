"""
Custom exceptions and error handlers.

Every error leaves the API as {"error": {"code", "message", "retryable"}}.
"""

from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
from django.http import JsonResponse, Http404
import logging

logger = logging.getLogger(__name__)


class AppError(Exception):
    """
    Custom application error class

    Raised by services; rendered by custom_exception_handler.
    """
    default_status = 500
    default_code = 'INTERNAL_ERROR'

    def __init__(
        self,
        message: str,
        status_code: int = None,
        code: str = None,
        retryable: bool = False,
        details: dict = None
    ):
        self.message = message
        self.status_code = status_code or self.default_status
        self.code = code or self.default_code
        self.retryable = retryable
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppError):
    default_status = 400
    default_code = 'VALIDATION_ERROR'


class AuthenticationError(AppError):
    default_status = 401
    default_code = 'UNAUTHORIZED'


class PermissionDeniedError(AppError):
    default_status = 403
    default_code = 'FORBIDDEN'


class NotFoundError(AppError):
    default_status = 404
    default_code = 'NOT_FOUND'


class ConflictError(AppError):
    default_status = 409
    default_code = 'CONFLICT'


def error_response(code: str, message, http_status: int, retryable: bool = False, details: dict = None) -> Response:
    """Build the standard error envelope as a DRF response"""
    body = {
        'code': code,
        'message': message,
        'retryable': retryable,
    }
    if details:
        body['details'] = details
    return Response({'error': body}, status=http_status)


def validation_error_response(errors) -> Response:
    """400 response for a failed serializer"""
    return error_response('VALIDATION_ERROR', _flatten_errors(errors), status.HTTP_400_BAD_REQUEST,
                          details={'fields': errors})


def _flatten_errors(errors) -> str:
    """Pick the first readable message out of serializer.errors"""
    if isinstance(errors, dict):
        for field, value in errors.items():
            message = _flatten_errors(value)
            if field == 'non_field_errors':
                return message
            return f'{field}: {message}'
    if isinstance(errors, list) and errors:
        return _flatten_errors(errors[0])
    return str(errors)


def custom_exception_handler(exc, context):
    """
    Custom exception handler for DRF

    Args:
        exc: The exception instance
        context: The context in which the exception occurred

    Returns:
        Response object with error details
    """
    # Handle AppError instances
    if isinstance(exc, AppError):
        return error_response(exc.code, exc.message, exc.status_code, exc.retryable, exc.details)

    if isinstance(exc, Http404):
        return error_response('NOT_FOUND', str(exc) or 'Not found', status.HTTP_404_NOT_FOUND)

    # Call REST framework's default exception handler
    response = exception_handler(exc, context)

    # Handle DRF exceptions
    if response is not None:
        error_code = 'VALIDATION_ERROR'
        retryable = False

        # Determine error code based on status
        if response.status_code == 401:
            error_code = 'UNAUTHORIZED'
        elif response.status_code == 403:
            error_code = 'FORBIDDEN'
        elif response.status_code == 404:
            error_code = 'NOT_FOUND'
        elif response.status_code == 405:
            error_code = 'METHOD_NOT_ALLOWED'
        elif response.status_code == 415:
            error_code = 'UNSUPPORTED_MEDIA_TYPE'
        elif response.status_code == 429:
            error_code = 'RATE_LIMIT_EXCEEDED'
            retryable = True
        elif response.status_code >= 500:
            error_code = 'INTERNAL_ERROR'
            retryable = True

        # Format error response
        error_message = response.data
        if isinstance(error_message, dict):
            if 'detail' in error_message:
                error_message = str(error_message['detail'])
            else:
                error_message = _flatten_errors(error_message)
        elif isinstance(error_message, list):
            error_message = _flatten_errors(error_message)

        error = error_response(error_code, error_message, response.status_code, retryable)
        for header in ('WWW-Authenticate', 'Retry-After'):
            if header in response:
                error[header] = response[header]
        return error

    # Handle unexpected exceptions
    logger.error(f'Unexpected error: {exc}', exc_info=True)
    return error_response('INTERNAL_ERROR', '服务器内部错误', status.HTTP_500_INTERNAL_SERVER_ERROR)


class ErrorHandlerMiddleware:
    """
    Middleware to catch and format errors raised outside DRF views
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        return response

    def process_exception(self, request, exception):
        """Handle exceptions that occur during request processing"""
        if isinstance(exception, AppError):
            return JsonResponse({
                'error': {
                    'code': exception.code,
                    'message': exception.message,
                    'details': exception.details,
                    'retryable': exception.retryable,
                }
            }, status=exception.status_code)

        if isinstance(exception, Http404):
            return None

        # Log unexpected errors
        logger.error(f'Unexpected error: {exception}', exc_info=True)
        return JsonResponse({
            'error': {
                'code': 'INTERNAL_ERROR',
                'message': '服务器内部错误',
                'retryable': False,
            }
        }, status=500)
