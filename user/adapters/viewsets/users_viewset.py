import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated

from user.permission import IsAdminRole
from user.selectors import active_users, create_user, get_active_user, soft_delete_user
from utils.exceptions import NotFoundError, ValidationError
from utils.responses import success_response
from ..serializers.user_serializers import UserCreateSerializer, UserSerializer

logger = logging.getLogger(__name__)


class UsersViewSet(viewsets.ViewSet):
    """Admin-only user management. Deleting a user is a soft delete."""
    permission_classes = [IsAuthenticated, IsAdminRole]
    serializer_class = UserSerializer

    @extend_schema(responses={200: UserSerializer(many=True)})
    def list(self, request):
        users = active_users().select_related('profile').order_by('id')
        return success_response(UserSerializer(users, many=True).data)

    @extend_schema(request=UserCreateSerializer, responses={201: UserSerializer})
    def create(self, request):
        serializer = UserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = create_user(**serializer.validated_data)
        return success_response(UserSerializer(user).data, status_code=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        user = get_active_user(pk) if str(pk).isdigit() else None
        if user is None:
            raise NotFoundError("User not found")

        if user.pk == request.user.pk:
            raise ValidationError({"id": ["You cannot delete yourself"]})

        soft_delete_user(user)
        logger.info(f"User {user.id} deleted by admin {request.user.id}")
        return success_response(message="User deleted successfully")
