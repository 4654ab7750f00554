"""Member login."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

logger = logging.getLogger(__name__)

User = get_user_model()

INVALID_CREDENTIALS = "Invalid username or password"


@transaction.atomic
def authenticate_member(*, username: str, password: str) -> User:
    """
    Log a member in by username.

    Usernames are unique ignoring case, so 'Asha', 'asha' and ' ASHA '
    all reach the same account. A member who still has to change their
    initial password can log in; the flag is reported to the client and
    enforced by the PasswordChangeRequired permission.

    Raises:
        InvalidCredentialsError: Unknown username or wrong password
        InactiveAccountError: Correct password on a deactivated account
    """
    lookup = (username or '').strip()

    member = (
        User.objects
        .select_for_update()
        .filter(username__iexact=lookup)
        .first()
    )
    if member is None or not member.check_password(password):
        logger.warning("Failed login for %r", lookup)
        raise InvalidCredentialsError(INVALID_CREDENTIALS)

    if not member.is_active:
        raise InactiveAccountError("Account is deactivated")

    member.last_login = timezone.now()
    member.save(update_fields=['last_login'])

    logger.info("%s logged in", member.username)
    return member
