"""Services for notification business logic."""

from .exceptions import (
    NotificationsServiceError,
    NotificationNotFoundError,
    UnknownNotificationTypeError,
)
from .notifier import NotificationService
from .mailer import PaymentEmailSender
from .inbox import (
    get_user_notifications,
    get_unread_count,
    mark_as_read,
    mark_all_as_read,
)
from .formatting import format_amount

__all__ = [
    # Exceptions
    'NotificationsServiceError',
    'NotificationNotFoundError',
    'UnknownNotificationTypeError',
    # Delivery
    'NotificationService',
    'PaymentEmailSender',
    # Inbox
    'get_user_notifications',
    'get_unread_count',
    'mark_as_read',
    'mark_all_as_read',
    # Helpers
    'format_amount',
]
