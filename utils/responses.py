from rest_framework import status
from rest_framework.response import Response


def success_response(data=None, message=None, status_code=status.HTTP_200_OK, **extra):
    """Build the `{success: true, data?, message?}` envelope used by every endpoint."""
    body = {'success': True}
    if data is not None:
        body['data'] = data
    if message is not None:
        body['message'] = message
    body.update(extra)
    return Response(body, status=status_code)
