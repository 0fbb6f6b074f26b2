# exceptions.py
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import exceptions, status
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from django.db.models import ProtectedError
import logging
from django.conf import settings

logger = logging.getLogger(__name__)


# =============== DOMAIN ERRORS ===============

class ValidationError(exceptions.ValidationError):
    """Malformed or out-of-range input; carries field-level messages"""


class NotFoundError(exceptions.NotFound):
    """Referenced entity does not exist (or is not visible to the actor)"""


class ConflictError(exceptions.APIException):
    """Current state prevents the operation; nothing was changed"""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'The operation conflicts with the current state.'
    default_code = 'conflict'


class AuthorizationError(exceptions.PermissionDenied):
    """Actor lacks the role required for the operation"""
    default_detail = 'You do not have permission to perform this action.'


def custom_exception_handler(exc, context):
    """
    Custom exception handler for the coffee shop API
    """
    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        custom_response_data = {
            'error': True,
            'message': 'An error occurred',
            'details': response.data,
            'status_code': response.status_code
        }

        if response.status_code == 400:
            custom_response_data['message'] = 'Validation error'
        elif response.status_code == 401:
            custom_response_data['message'] = 'Authentication required'
        elif response.status_code == 403:
            custom_response_data['message'] = 'Permission denied'
        elif response.status_code == 404:
            custom_response_data['message'] = 'Resource not found'
        elif response.status_code == 409:
            custom_response_data['message'] = 'Conflict'

        if response.status_code in (403, 409):
            logger.warning(f"{exc.__class__.__name__}: {exc}")

        response.data = custom_response_data

    # Handle Django ValidationError
    elif isinstance(exc, DjangoValidationError):
        logger.error(f"Validation Error: {exc}")
        response = Response({
            'error': True,
            'message': 'Validation error',
            'details': {'non_field_errors': exc.messages},
            'status_code': 400
        }, status=status.HTTP_400_BAD_REQUEST)

    # Deleting a row that is still referenced
    elif isinstance(exc, ProtectedError):
        logger.warning(f"Protected Error: {exc}")
        response = Response({
            'error': True,
            'message': 'Conflict',
            'details': {'error': 'This record is still referenced by other records'},
            'status_code': 409
        }, status=status.HTTP_409_CONFLICT)

    # Handle Django IntegrityError
    elif isinstance(exc, IntegrityError):
        logger.error(f"Integrity Error: {exc}")
        response = Response({
            'error': True,
            'message': 'Database integrity error',
            'details': {'error': 'This operation violates database constraints'},
            'status_code': 400
        }, status=status.HTTP_400_BAD_REQUEST)

    # Handle unexpected errors
    else:
        logger.exception(f"Unexpected Error: {exc}")
        response = Response({
            'error': True,
            'message': 'An unexpected error occurred',
            'details': {'error': str(exc)} if settings.DEBUG else {},
            'status_code': 500
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return response
