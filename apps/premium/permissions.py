from rest_framework import permissions


class IsSolvixAdmin(permissions.BasePermission):
    """
    Permission: User must be a Solvix administrator (active staff).
    """

    message = 'Administrator access required.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_admin)
