"""Permission classes for payment requests."""
from rest_framework.permissions import BasePermission


class IsOwnerOrAdmin(BasePermission):
    """
    Members may only see their own payment requests.

    Admins see all of them.
    """

    message = 'You do not have permission to view this payment request.'

    def has_object_permission(self, request, view, obj):
        return request.user.is_staff or obj.user_id == request.user.id
