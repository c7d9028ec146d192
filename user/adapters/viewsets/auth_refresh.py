from drf_spectacular.utils import extend_schema
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.exceptions import TokenError

from tasktracker.jwt_auth import REFRESH_COOKIE
from utils.responses import success_response
from .auth_viewset import set_auth_cookies
from ..serializers.user_serializers import RefreshSerializer


class CookieTokenRefreshView(APIView):
    """
    Exchange a refresh token for a new access token.

    The refresh token is read from the request body first and the
    `refresh_token` cookie second.
    """
    permission_classes = [AllowAny]
    # No authenticators: an expired access cookie must not block the refresh itself.
    authentication_classes = []

    def get_authenticate_header(self, request):
        return 'Bearer'

    @extend_schema(request=RefreshSerializer)
    def post(self, request):
        serializer = RefreshSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        refresh_value = serializer.validated_data.get("refresh") or request.COOKIES.get(REFRESH_COOKIE)
        if not refresh_value:
            raise AuthenticationFailed("Refresh token missing")

        try:
            refresh = RefreshToken(refresh_value)
            new_access = str(refresh.access_token)
        except TokenError:
            raise AuthenticationFailed("Invalid refresh token")

        response = success_response({"access": new_access}, message="Token refreshed")
        return set_auth_cookies(response, new_access, None)
