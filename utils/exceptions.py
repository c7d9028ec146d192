from rest_framework import exceptions


class ValidationError(exceptions.ValidationError):
    """Malformed or missing fields, invalid enum values. Carries field-level detail."""


class ForbiddenError(exceptions.PermissionDenied):
    default_detail = 'You do not have permission to perform this action.'


class NotFoundError(exceptions.NotFound):
    default_detail = 'Not found.'
