import logging

from django.conf import settings
from django.contrib.auth import authenticate
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework_simplejwt.tokens import RefreshToken

from tasktracker.jwt_auth import ACCESS_COOKIE, REFRESH_COOKIE, CookieJWTAuthentication
from utils.responses import success_response
from user.selectors import create_user, find_by_email, role_of
from ..serializers.user_serializers import LoginSerializer, RegisterSerializer, UserSerializer

logger = logging.getLogger(__name__)


def issue_tokens(user):
    refresh = RefreshToken.for_user(user)
    refresh['role'] = role_of(user)
    return str(refresh.access_token), str(refresh)


def set_auth_cookies(response, access_token, refresh_token):
    jwt_settings = settings.SIMPLE_JWT
    response.set_cookie(
        key=ACCESS_COOKIE,
        value=access_token,
        max_age=int(jwt_settings['ACCESS_TOKEN_LIFETIME'].total_seconds()),
        secure=settings.AUTH_COOKIE_SECURE,
        httponly=True,
        samesite=settings.AUTH_COOKIE_SAMESITE,
        path='/',
    )
    if refresh_token is not None:
        response.set_cookie(
            key=REFRESH_COOKIE,
            value=refresh_token,
            max_age=int(jwt_settings['REFRESH_TOKEN_LIFETIME'].total_seconds()),
            secure=settings.AUTH_COOKIE_SECURE,
            httponly=True,
            samesite=settings.AUTH_COOKIE_SAMESITE,
            path='/',
        )
    return response


class AuthViewSet(viewsets.ViewSet):
    permission_classes = [AllowAny]
    # Login and registration ignore stale credentials; `me` re-enables auth in urls.py.
    authentication_classes = []
    serializer_class = LoginSerializer

    def get_authenticate_header(self, request):
        return 'Bearer'

    @extend_schema(request=LoginSerializer, responses={200: UserSerializer})
    @action(detail=False, methods=["post"])
    def login(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]
        password = serializer.validated_data["password"]

        # Soft-deleted and deactivated accounts never resolve here
        find_user = find_by_email(email)
        if not find_user:
            logger.warning(f"Login failed for unknown or inactive email {email}")
            raise AuthenticationFailed("Invalid email or password")

        user = authenticate(request, username=find_user.username, password=password)
        if not user:
            logger.warning(f"Login failed for user {find_user.id}: bad password")
            raise AuthenticationFailed("Invalid email or password")

        access_token, refresh_token = issue_tokens(user)
        logger.info(f"User {user.id} logged in")

        response = success_response({
            "user": UserSerializer(user).data,
            "access": access_token,
            "refresh": refresh_token,
        })
        return set_auth_cookies(response, access_token, refresh_token)

    @extend_schema(request=RegisterSerializer, responses={201: UserSerializer})
    @action(detail=False, methods=["post"])
    def register(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = create_user(**serializer.validated_data)

        access_token, refresh_token = issue_tokens(user)
        response = success_response(
            {
                "user": UserSerializer(user).data,
                "access": access_token,
                "refresh": refresh_token,
            },
            status_code=status.HTTP_201_CREATED,
        )
        return set_auth_cookies(response, access_token, refresh_token)

    @action(detail=False, methods=["post"])
    def logout(self, request):
        response = success_response(message="Successfully logged out")
        response.delete_cookie(ACCESS_COOKIE, path='/', samesite=settings.AUTH_COOKIE_SAMESITE)
        response.delete_cookie(REFRESH_COOKIE, path='/', samesite=settings.AUTH_COOKIE_SAMESITE)
        return response

    @extend_schema(responses={200: UserSerializer})
    @action(detail=False, methods=["get"], permission_classes=[IsAuthenticated], authentication_classes=[CookieJWTAuthentication])
    def me(self, request):
        return success_response(UserSerializer(request.user).data)
