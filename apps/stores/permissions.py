from rest_framework import permissions


class IsAdminRole(permissions.BasePermission):
    """
    Permission: User must have the admin role.
    """

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_admin)
