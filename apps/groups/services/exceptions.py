"""
Domain-specific exceptions for groups app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class GroupsServiceError(Exception):
    """Base exception for all groups service errors."""
    pass


class GroupNotFoundError(GroupsServiceError):
    """Raised when a group does not exist."""
    pass


class GroupAlreadyExistsError(GroupsServiceError):
    """Raised when creating a group while one is already active."""
    pass


class InvalidFineRuleError(GroupsServiceError):
    """Raised when a fine rule cannot be stored."""
    pass


class PaymentSettingsError(GroupsServiceError):
    """Raised when payment settings are inconsistent."""
    pass
