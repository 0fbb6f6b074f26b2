from rest_framework import permissions

from .exceptions import AuthorizationError
from .models import Role


def is_admin(user):
    """True iff the user is authenticated and holds the admin role"""
    if user is None or not getattr(user, 'is_authenticated', False):
        return False
    role = getattr(user, 'role', None)
    return role is not None and role.name == Role.ADMIN


def require_admin(actor, action='perform this action'):
    """
    Capability check run at the start of every admin-gated operation.
    """
    if not is_admin(actor):
        raise AuthorizationError(f'Only administrators can {action}.')


class IsAdminRole(permissions.BasePermission):
    """
    Permission to only allow users with the admin role
    """
    message = 'Only administrators can perform this action.'

    def has_permission(self, request, view):
        return is_admin(request.user)


class IsAdminRoleOrReadOnly(permissions.BasePermission):
    """
    Any authenticated user may read; only admins may write
    """
    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return is_admin(request.user)
