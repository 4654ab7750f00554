"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    MemberCreationError,
    UsernameTakenError,
    InvalidPasswordError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
    PasswordConfirmationError,
)
from .member_management import (
    MIN_PASSWORD_LENGTH,
    validate_member_password,
    get_member_by_id,
    create_member,
    update_member,
    delete_member,
)
from .user_authentication import authenticate_member
from .password_management import change_password

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'MemberCreationError',
    'UsernameTakenError',
    'InvalidPasswordError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'UserNotFoundError',
    'PasswordConfirmationError',
    # Members
    'MIN_PASSWORD_LENGTH',
    'validate_member_password',
    'get_member_by_id',
    'create_member',
    'update_member',
    'delete_member',
    # Authentication
    'authenticate_member',
    'change_password',
]
