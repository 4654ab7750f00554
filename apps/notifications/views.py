from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import NotificationSerializer, UnreadCountSerializer, MarkAllReadSerializer
from .services import (
    get_user_notifications,
    get_unread_count,
    mark_as_read,
    mark_all_as_read,
    NotificationNotFoundError,
)


class NotificationViewSet(viewsets.ReadOnlyModelViewSet):
    """
    The current user's notifications, newest first.

    list: All notifications
    retrieve: One notification
    """

    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return get_user_notifications(user=self.request.user)

    @extend_schema(request=None, responses={200: NotificationSerializer})
    @action(detail=True, methods=['post'])
    def mark_read(self, request, pk=None):
        """
        Mark one notification as read.

        POST /api/notifications/{id}/mark_read/
        """
        try:
            notification = mark_as_read(notification_id=pk, user=request.user)
        except NotificationNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(NotificationSerializer(notification).data)

    @extend_schema(request=None, responses={200: MarkAllReadSerializer})
    @action(detail=False, methods=['post'])
    def mark_all_read(self, request):
        """POST /api/notifications/mark_all_read/"""
        count = mark_all_as_read(user=request.user)
        return Response({'marked': count})

    @extend_schema(responses={200: UnreadCountSerializer})
    @action(detail=False, methods=['get'])
    def unread_count(self, request):
        """GET /api/notifications/unread_count/"""
        return Response({'unread_count': get_unread_count(user=request.user)})
