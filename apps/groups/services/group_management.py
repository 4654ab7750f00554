"""
Group management service.

Handles group CRUD operations with proper transaction safety.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from django.db import transaction

from apps.groups.models import Group, FineRule

from .exceptions import (
    GroupNotFoundError,
    GroupAlreadyExistsError,
    InvalidFineRuleError,
)

logger = logging.getLogger(__name__)


def get_active_group() -> Optional[Group]:
    """Return the single active group (earliest created), or None."""
    return (
        Group.objects
        .prefetch_related('fine_rules')
        .order_by('created_at')
        .first()
    )


def get_group_by_id(*, group_id: UUID) -> Group:
    """
    Get a group by ID with its fine rules.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    try:
        return (
            Group.objects
            .prefetch_related('fine_rules')
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")


def _replace_fine_rules(group: Group, fine_rules: Iterable[dict]) -> None:
    # Incomplete rules are dropped, matching the admin form
    group.fine_rules.all().delete()

    position = 0
    for rule in fine_rules:
        if not (rule.get('from_date') and rule.get('to_date') and rule.get('amount') is not None):
            continue

        amount = Decimal(rule['amount'])
        if amount < 0:
            raise InvalidFineRuleError("Fine amount cannot be negative")

        FineRule.objects.create(
            group=group,
            from_date=rule['from_date'],
            to_date=rule['to_date'],
            amount=amount,
            position=position,
        )
        position += 1


@transaction.atomic
def create_group(
    *,
    name: str,
    base_amount: Decimal,
    previous_contribution: Decimal = Decimal('0.00'),
    fine_rules: Iterable[dict] = ()
) -> Group:
    """
    Create the contribution group with its fine rules.

    Args:
        name: Group name
        base_amount: Monthly contribution before fines
        previous_contribution: Amount collected before tracking started
        fine_rules: Dicts with from_date, to_date and amount

    Returns:
        Created Group instance

    Raises:
        GroupAlreadyExistsError: If a group already exists
        InvalidFineRuleError: If a fine amount is negative
    """
    if Group.objects.select_for_update().exists():
        raise GroupAlreadyExistsError("A contribution group already exists")

    group = Group.objects.create(
        name=name,
        base_amount=base_amount,
        previous_contribution=previous_contribution or Decimal('0.00'),
    )
    _replace_fine_rules(group, fine_rules)

    logger.info("Created group %s (base amount %s)", group.id, group.base_amount)
    return group


@transaction.atomic
def update_group(
    *,
    group_id: UUID,
    name: Optional[str] = None,
    base_amount: Optional[Decimal] = None,
    previous_contribution: Optional[Decimal] = None,
    fine_rules: Optional[Iterable[dict]] = None
) -> Group:
    """
    Update group details. Fine rules are replaced when provided.

    Raises:
        GroupNotFoundError: If group doesn't exist
        InvalidFineRuleError: If a fine amount is negative
    """
    try:
        group = (
            Group.objects
            .select_for_update()
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    update_fields = ['updated_at']

    if name is not None:
        group.name = name
        update_fields.append('name')

    if base_amount is not None:
        group.base_amount = base_amount
        update_fields.append('base_amount')

    if previous_contribution is not None:
        group.previous_contribution = previous_contribution
        update_fields.append('previous_contribution')

    group.save(update_fields=update_fields)

    if fine_rules is not None:
        _replace_fine_rules(group, fine_rules)

    return get_group_by_id(group_id=group.id)


@transaction.atomic
def delete_group(*, group_id: UUID) -> None:
    """
    Delete the group.

    Cascading deletes remove its fine rules and members. Contribution
    records of deleted members go with them.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    try:
        group = (
            Group.objects
            .select_for_update()
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    logger.info("Deleting group %s", group.id)
    group.delete()
