import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def envelope_exception_handler(exc, context):
    """
    Wraps every API error in `{success: false, message, errors?}`.

    DRF exceptions keep their status code. Anything else is logged and reported
    as a bare 500 so no internals leak to the client.
    """
    response = exception_handler(exc, context)
    view = context.get('view')
    view_name = view.__class__.__name__ if view is not None else 'unknown'

    if response is None:
        logger.error(f"Unhandled error in {view_name}: {type(exc).__name__}", exc_info=exc)
        return Response(
            {'success': False, 'message': 'Server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, ValidationError):
        errors = response.data
        if isinstance(errors, list):
            errors = {'non_field_errors': errors}
        response.data = {
            'success': False,
            'message': 'Validation failed',
            'errors': errors,
        }
        return response

    detail = response.data.get('detail') if isinstance(response.data, dict) else response.data
    response.data = {
        'success': False,
        'message': str(detail) if detail is not None else 'Request failed',
    }
    return response
