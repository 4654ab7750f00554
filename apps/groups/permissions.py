from rest_framework import permissions


class IsGroupAdminOrReadOnly(permissions.BasePermission):
    """
    Permission: Any authenticated user may read, only staff may write.
    """

    message = 'Only the group admin can change group settings.'

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True
        return bool(request.user and request.user.is_staff)
