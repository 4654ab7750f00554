"""Password change service."""

from django.db import transaction
from django.contrib.auth import get_user_model

from .exceptions import PasswordConfirmationError
from .member_management import validate_member_password

User = get_user_model()


@transaction.atomic
def change_password(*, user: User, new_password: str, confirm_password: str) -> User:
    """
    Set a new password and clear the first-login flag.

    Raises:
        InvalidPasswordError: If the password is too short
        PasswordConfirmationError: If the passwords do not match
    """
    validate_member_password(new_password)

    if new_password != confirm_password:
        raise PasswordConfirmationError("Passwords do not match")

    user = User.objects.select_for_update().get(id=user.id)
    user.set_password(new_password)
    user.must_change_password = False
    user.save(update_fields=['password', 'must_change_password'])

    return user
