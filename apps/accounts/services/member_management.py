"""Member management service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model
from uuid import UUID
from typing import Optional

from apps.groups.models import Group
from apps.contributions.services import create_initial_record
from .exceptions import (
    MemberCreationError,
    UsernameTakenError,
    InvalidPasswordError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

User = get_user_model()

MIN_PASSWORD_LENGTH = 6


def validate_member_password(password: str) -> None:
    """Raise InvalidPasswordError when the password is too short."""
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidPasswordError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )


def _username_taken(username: str, exclude_id=None) -> bool:
    qs = User.objects.filter(username__iexact=username)
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    return qs.exists()


def get_member_by_id(*, member_id: UUID) -> User:
    """
    Get member by ID.

    Raises:
        UserNotFoundError: If member does not exist
    """
    try:
        return User.objects.select_related('group').get(id=member_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"Member with id {member_id} not found")


@transaction.atomic
def create_member(
    *,
    group: Group,
    name: str,
    username: str,
    password: str,
    email: str = ''
) -> User:
    """
    Create a group member and their first ledger record.

    The member must change the password on first login. The pending
    contribution for the current month is written in the same transaction.

    Args:
        group: Group the member belongs to
        name: Display name
        username: Login name (unique, case-insensitive)
        password: Initial password (will be hashed)
        email: Optional email for payment notifications

    Returns:
        Created User instance

    Raises:
        MemberCreationError: If required fields are missing
        UsernameTakenError: If the username already exists
        InvalidPasswordError: If the password is too short
    """
    name = (name or '').strip()
    username = (username or '').strip()

    if not name or not username:
        raise MemberCreationError("Name and username are required")

    validate_member_password(password)

    if _username_taken(username):
        raise UsernameTakenError("Username already exists")

    try:
        with transaction.atomic():
            member = User.objects.create_user(
                username=username,
                password=password,
                name=name,
                email=email or '',
                group=group,
                must_change_password=True,
            )
    except IntegrityError:
        raise UsernameTakenError("Username already exists")

    create_initial_record(member=member, group=group)

    logger.info("Member %s created in group %s", member.username, group.id)

    return member


@transaction.atomic
def update_member(
    *,
    member_id: UUID,
    name: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    email: Optional[str] = None
) -> User:
    """
    Update member details.

    A blank password leaves the current one unchanged.

    Raises:
        UserNotFoundError: If member does not exist
        UsernameTakenError: If the new username belongs to someone else
        InvalidPasswordError: If the new password is too short
    """
    try:
        member = User.objects.select_for_update().get(id=member_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"Member with id {member_id} not found")

    update_fields = []

    if name is not None and name.strip():
        member.name = name.strip()
        update_fields.append('name')

    if username is not None and username.strip():
        username = username.strip()
        if _username_taken(username, exclude_id=member.id):
            raise UsernameTakenError("Username already exists")
        member.username = username
        update_fields.append('username')

    if email is not None:
        member.email = email
        update_fields.append('email')

    if password:
        validate_member_password(password)
        member.set_password(password)
        update_fields.append('password')

    if update_fields:
        member.save(update_fields=update_fields)

    return member


@transaction.atomic
def delete_member(*, member_id: UUID) -> None:
    """
    Delete a member.

    Ledger records and payment requests are removed with the member.

    Raises:
        UserNotFoundError: If member does not exist
    """
    try:
        member = User.objects.select_for_update().get(id=member_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"Member with id {member_id} not found")

    logger.info("Member %s deleted", member.username)
    member.delete()
