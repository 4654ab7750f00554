"""
Admin decision on a payment request.

pending -> accepted | rejected. Both outcomes are final.

The status change and the ledger update commit together or not at all.
Notifications go out only after the commit and cannot undo it.
"""

import logging
from typing import Optional

from django.db import transaction
from django.utils import timezone
from uuid import UUID

from apps.contributions.services import reconcile_payment_acceptance
from apps.notifications.services import NotificationService, PaymentEmailSender
from apps.payments.models import PaymentRequest, PaymentRequestStatus
from .exceptions import (
    PaymentRequestNotFoundError,
    InvalidStateTransitionError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)

DECISIONS = (PaymentRequestStatus.ACCEPTED, PaymentRequestStatus.REJECTED)


def _notify_decision(notifier, payment_request, admin, reason):
    try:
        if payment_request.status == PaymentRequestStatus.ACCEPTED:
            notifier.send_payment_approved(payment_request=payment_request, admin=admin)
        else:
            notifier.send_payment_rejected(payment_request=payment_request, admin=admin, reason=reason)
    except Exception:
        logger.exception("Failed to notify %s about payment %s", payment_request.user_id, payment_request.payment_id)


def decide_payment_request(
    *,
    request_id: UUID,
    outcome: str,
    decided_by,
    reason: str = '',
    notifier: Optional[NotificationService] = None
) -> PaymentRequest:
    """
    Accept or reject a pending payment request.

    Accepting marks the member's contribution for that month as paid.
    The request row is locked for the duration of the decision.

    Args:
        request_id: PaymentRequest ID
        outcome: 'accepted' or 'rejected'
        decided_by: Admin making the decision
        reason: Optional rejection reason
        notifier: NotificationService for the member notification and email

    Returns:
        The decided PaymentRequest

    Raises:
        InsufficientPermissionsError: If decided_by is not an admin
        PaymentRequestNotFoundError: If the request does not exist
        InvalidStateTransitionError: If the request is not pending or the
            outcome is unknown
    """
    if not decided_by.is_staff:
        raise InsufficientPermissionsError("Only admins can decide payment requests")

    if outcome not in DECISIONS:
        raise InvalidStateTransitionError(f"Unknown outcome: {outcome}")

    with transaction.atomic():
        try:
            payment_request = (
                PaymentRequest.objects
                .select_for_update()
                .get(id=request_id)
            )
        except PaymentRequest.DoesNotExist:
            raise PaymentRequestNotFoundError(f"Payment request {request_id} not found")

        if payment_request.status != PaymentRequestStatus.PENDING:
            raise InvalidStateTransitionError(
                f"Payment request {payment_request.payment_id} is already {payment_request.status}"
            )

        payment_request.status = outcome
        payment_request.decided_at = timezone.now()
        payment_request.decided_by = decided_by
        if outcome == PaymentRequestStatus.REJECTED:
            payment_request.rejection_reason = reason or ''
        payment_request.save(update_fields=[
            'status', 'decided_at', 'decided_by', 'rejection_reason'
        ])

        if outcome == PaymentRequestStatus.ACCEPTED:
            reconcile_payment_acceptance(payment_request=payment_request)

        notifier = notifier or NotificationService(email_sender=PaymentEmailSender())
        transaction.on_commit(
            lambda: _notify_decision(notifier, payment_request, decided_by, reason)
        )

    logger.info(
        "Payment %s %s by %s", payment_request.payment_id, outcome, decided_by.username
    )

    return payment_request


def accept_payment_request(*, request_id: UUID, decided_by, notifier=None) -> PaymentRequest:
    return decide_payment_request(
        request_id=request_id,
        outcome=PaymentRequestStatus.ACCEPTED,
        decided_by=decided_by,
        notifier=notifier,
    )


def reject_payment_request(*, request_id: UUID, decided_by, reason='', notifier=None) -> PaymentRequest:
    return decide_payment_request(
        request_id=request_id,
        outcome=PaymentRequestStatus.REJECTED,
        decided_by=decided_by,
        reason=reason,
        notifier=notifier,
    )
