from rest_framework.permissions import BasePermission

from .models import Role
from .selectors import role_of


class IsAdminRole(BasePermission):
    """
    Grants access only to authenticated users whose role is admin.
    """
    message = 'Admin access required'

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        if not user or user.is_anonymous:
            return False
        return role_of(user) == Role.ADMIN
