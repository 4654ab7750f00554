"""
Contribution ledger service.

One record per (member, month). Records are created pending when a member
joins and become paid when a payment request for that month is accepted.
Nothing moves a record away from paid.
"""

import logging
import re
from datetime import date
from typing import Optional

from django.db import transaction, IntegrityError
from django.utils import timezone
from uuid import UUID

from apps.contributions.models import Contribution, ContributionStatus
from apps.contributions.feeds import contribution_feed
from .exceptions import ContributionNotFoundError, InvalidMonthError

logger = logging.getLogger(__name__)

MONTH_RE = re.compile(r'^\d{4}-(0[1-9]|1[0-2])$')


def current_month(today: Optional[date] = None) -> str:
    """Return the month key ('YYYY-MM') for today or the given date."""
    today = today or timezone.localdate()
    return f'{today.year:04d}-{today.month:02d}'


def validate_month(month: str) -> str:
    if not month or not MONTH_RE.match(month):
        raise InvalidMonthError(f"Invalid month: {month!r}. Expected YYYY-MM")
    return month


def get_contribution_by_id(*, contribution_id: UUID) -> Contribution:
    """
    Raises:
        ContributionNotFoundError: If the record does not exist
    """
    try:
        return Contribution.objects.select_related('user', 'user__group').get(id=contribution_id)
    except Contribution.DoesNotExist:
        raise ContributionNotFoundError(f"Contribution with id {contribution_id} not found")


def get_contribution(*, member, month: str) -> Optional[Contribution]:
    """The member's record for month, or None."""
    return Contribution.objects.filter(user=member, month=month).first()


@transaction.atomic
def create_initial_record(*, member, group, month: Optional[str] = None) -> Contribution:
    """
    Create the pending record for a newly added member.

    The amount is the group's base amount, without fines. An existing record
    for the same month is returned unchanged.
    """
    month = validate_month(month or current_month())

    contribution, created = Contribution.objects.get_or_create(
        user=member,
        month=month,
        defaults={
            'amount': group.base_amount,
            'status': ContributionStatus.PENDING,
        }
    )

    if created:
        logger.info(
            "Opened %s contribution for %s at %s", month, member.username, contribution.amount
        )
        contribution_feed.publish_on_commit(member.pk)

    return contribution


@transaction.atomic
def reconcile_payment_acceptance(*, payment_request) -> Contribution:
    """
    Mark the ledger paid for an accepted payment request.

    Absent record: created as paid with the request's amount.
    Pending record: becomes paid, keeps its amount, gets paid date and payment id.
    Paid record: stays paid and keeps its amount. A different accepted request
    takes over the paid date and payment id; the same request changes nothing.

    The record is locked while it is updated. A racing insert of the same
    (member, month) is resolved by re-reading the row that won.
    """
    member = payment_request.user
    month = payment_request.month

    contribution = (
        Contribution.objects
        .select_for_update()
        .filter(user=member, month=month)
        .first()
    )

    if contribution is None:
        try:
            with transaction.atomic():
                contribution = Contribution.objects.create(
                    user=member,
                    month=month,
                    amount=payment_request.amount,
                    status=ContributionStatus.PAID,
                    paid_date=timezone.now(),
                    payment_id=payment_request.payment_id,
                )
        except IntegrityError:
            contribution = (
                Contribution.objects
                .select_for_update()
                .get(user=member, month=month)
            )
        else:
            logger.info(
                "Recorded %s contribution for %s as paid (%s)",
                month, member.username, payment_request.payment_id
            )
            contribution_feed.publish_on_commit(member.pk)
            return contribution

    if contribution.status == ContributionStatus.PAID:
        if contribution.payment_id == payment_request.payment_id:
            return contribution
        logger.info(
            "%s contribution for %s already paid by %s, now recorded as %s",
            month, member.username, contribution.payment_id, payment_request.payment_id
        )

    contribution.status = ContributionStatus.PAID
    contribution.paid_date = timezone.now()
    contribution.payment_id = payment_request.payment_id
    contribution.save(update_fields=['status', 'paid_date', 'payment_id', 'updated_at'])

    logger.info(
        "Marked %s contribution for %s paid (%s)",
        month, member.username, payment_request.payment_id
    )
    contribution_feed.publish_on_commit(member.pk)

    return contribution
