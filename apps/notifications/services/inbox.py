"""Reading and acknowledging notifications."""

from django.db import transaction
from django.db.models import QuerySet
from uuid import UUID

from apps.notifications.models import Notification
from apps.notifications.streams import notification_feed
from .exceptions import NotificationNotFoundError


def get_user_notifications(*, user) -> QuerySet:
    """All notifications for user, newest first."""
    return Notification.objects.filter(recipient=user).order_by('-created_at')


def get_unread_count(*, user) -> int:
    return Notification.objects.filter(recipient=user, read=False).count()


@transaction.atomic
def mark_as_read(*, notification_id: UUID, user) -> Notification:
    """
    Mark one of the user's notifications as read.

    Raises:
        NotificationNotFoundError: If it does not exist or is not the user's
    """
    try:
        notification = (
            Notification.objects
            .select_for_update()
            .get(id=notification_id, recipient=user)
        )
    except Notification.DoesNotExist:
        raise NotificationNotFoundError(f"Notification {notification_id} not found")

    if not notification.read:
        notification.read = True
        notification.save(update_fields=['read'])
        notification_feed.publish_on_commit(user.pk)

    return notification


@transaction.atomic
def mark_all_as_read(*, user) -> int:
    """Mark every unread notification as read. Returns how many changed."""
    count = Notification.objects.filter(recipient=user, read=False).update(read=True)
    if count:
        notification_feed.publish_on_commit(user.pk)
    return count
