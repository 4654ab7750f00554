"""Payment request lookups, status and deletion."""

import logging
from datetime import date
from typing import Optional

from django.db import transaction
from django.utils import timezone
from uuid import UUID

from apps.contributions.services import current_month, validate_month, get_contribution
from apps.groups.services import amount_due_today, get_active_group, get_payment_settings
from apps.payments.models import PaymentRequest, PaymentRequestStatus
from .exceptions import PaymentRequestNotFoundError, InsufficientPermissionsError

logger = logging.getLogger(__name__)


def get_payment_request_by_id(*, request_id: UUID) -> PaymentRequest:
    """
    Raises:
        PaymentRequestNotFoundError: If the request does not exist
    """
    try:
        return PaymentRequest.objects.select_related('user', 'decided_by').get(id=request_id)
    except PaymentRequest.DoesNotExist:
        raise PaymentRequestNotFoundError(f"Payment request {request_id} not found")


def get_latest_payment_request(*, member, month: str) -> Optional[PaymentRequest]:
    """The member's most recent request for month, or None."""
    return (
        PaymentRequest.objects
        .filter(user=member, month=month)
        .order_by('-created_at')
        .first()
    )


def get_payment_status(*, member, month: Optional[str] = None, today: Optional[date] = None) -> dict:
    """
    What the member can do about a month's payment.

    state is one of:
        - paid: the ledger says paid, or the latest request was accepted
        - pending: a request is waiting for an admin
        - rejected: the latest request was rejected; the member may pay again
        - none: nothing submitted yet
    """
    today = today or timezone.localdate()
    month = validate_month(month or current_month(today))

    contribution = get_contribution(member=member, month=month)
    latest = get_latest_payment_request(member=member, month=month)

    if contribution is not None and contribution.is_paid:
        state = 'paid'
    elif latest is not None and latest.status == PaymentRequestStatus.ACCEPTED:
        state = 'paid'
    elif latest is not None:
        state = latest.status
    else:
        state = 'none'

    if contribution is not None and contribution.payment_id:
        payment_id = contribution.payment_id
    else:
        payment_id = latest.payment_id if latest is not None else ''

    if contribution is not None:
        amount = contribution.amount
    else:
        amount = amount_due_today(member.group or get_active_group(), today)

    payment_settings = get_payment_settings()

    return {
        'month': month,
        'state': state,
        'can_pay': state in ('none', 'rejected'),
        'can_download_receipt': state == 'paid',
        'payment_id': payment_id,
        'amount': amount,
        'upi_id': payment_settings.upi_id,
        'manual_payments': payment_settings.accepts_manual_payments,
        'latest_request': latest,
    }


@transaction.atomic
def delete_payment_request(*, request_id: UUID, deleted_by) -> None:
    """
    Delete a payment request (admin only).

    The ledger is left as it is, including for accepted requests.

    Raises:
        InsufficientPermissionsError: If deleted_by is not an admin
        PaymentRequestNotFoundError: If the request does not exist
    """
    if not deleted_by.is_staff:
        raise InsufficientPermissionsError("Only admins can delete payment requests")

    try:
        payment_request = PaymentRequest.objects.select_for_update().get(id=request_id)
    except PaymentRequest.DoesNotExist:
        raise PaymentRequestNotFoundError(f"Payment request {request_id} not found")

    logger.info("Payment %s deleted by %s", payment_request.payment_id, deleted_by.username)
    payment_request.delete()
