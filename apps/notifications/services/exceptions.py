"""Domain-specific exceptions for notification services."""


class NotificationsServiceError(Exception):
    """Base exception for notification services."""
    pass


class NotificationNotFoundError(NotificationsServiceError):
    """Raised when a notification does not exist or belongs to someone else."""
    pass


class UnknownNotificationTypeError(NotificationsServiceError):
    """Raised when notify() is called with an unsupported kind."""
    pass
