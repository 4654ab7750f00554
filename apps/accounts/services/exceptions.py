"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class MemberCreationError(AccountsServiceError):
    """Raised when a member cannot be created."""
    pass


class UsernameTakenError(MemberCreationError):
    """Raised when the username already exists (case-insensitive)."""
    pass


class InvalidPasswordError(AccountsServiceError):
    """Raised when a password does not meet the minimum requirements."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    pass


class PasswordConfirmationError(AccountsServiceError):
    """Raised when password confirmation fails."""
    pass
