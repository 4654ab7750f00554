from rest_framework import permissions


class IsStaff(permissions.BasePermission):
    """
    Permission: Only group admins (staff users).
    """

    message = 'Only admins can perform this action.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_staff)


class PasswordChangeRequired(permissions.BasePermission):
    """
    Permission: Members still on their initial password are locked out
    until they change it.
    """

    message = 'Password change required.'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.is_staff or not user.must_change_password
