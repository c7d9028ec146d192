from django.urls import path, include
from rest_framework.permissions import IsAuthenticated
from rest_framework.routers import DefaultRouter
from tasktracker.jwt_auth import CookieJWTAuthentication
from .adapters.viewsets import auth_viewset
from .adapters.viewsets.auth_refresh import CookieTokenRefreshView
from .adapters.viewsets.users_viewset import UsersViewSet

router = DefaultRouter()
router.register(r'users', UsersViewSet, basename='user')

urlpatterns = [
    # email/password login, issues bearer tokens and auth cookies
    path('auth/login/', auth_viewset.AuthViewSet.as_view({'post': 'login'}), name='login'),
    # self-service registration, always role=user
    path('auth/register/', auth_viewset.AuthViewSet.as_view({'post': 'register'}), name='register'),
    path('auth/logout/', auth_viewset.AuthViewSet.as_view({'post': 'logout'}), name='logout'),
    path('auth/me/', auth_viewset.AuthViewSet.as_view(
        {'get': 'me'},
        permission_classes=[IsAuthenticated],
        authentication_classes=[CookieJWTAuthentication],
    ), name='me'),
    path('auth/refresh/', CookieTokenRefreshView.as_view(), name='token_refresh'),

    # admin-only user management
    path('', include(router.urls)),
]
