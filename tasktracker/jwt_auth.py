"""
JWT authentication that accepts a bearer header or the HttpOnly access cookie.
"""

from rest_framework_simplejwt.authentication import JWTAuthentication
from django.http import HttpRequest
from typing import Tuple, Optional

ACCESS_COOKIE = 'access_token'
REFRESH_COOKIE = 'refresh_token'


class CookieJWTAuthentication(JWTAuthentication):
    """
    Resolves the request user from a simplejwt access token.

    The `Authorization: Bearer <token>` header wins when present. Browser clients
    that logged in through /api/auth/login carry the same token in the
    `access_token` cookie instead, so that is checked second.
    """

    def authenticate(self, request: HttpRequest) -> Optional[Tuple]:
        header_result = super().authenticate(request)
        if header_result is not None:
            return header_result

        access_token = request.COOKIES.get(ACCESS_COOKIE)
        if not access_token:
            return None

        # Raises AuthenticationFailed for expired or tampered tokens and for
        # deactivated (soft-deleted) users.
        validated_token = self.get_validated_token(access_token)
        return self.get_user(validated_token), validated_token

    def authenticate_header(self, request: HttpRequest) -> str:
        return 'Bearer'
