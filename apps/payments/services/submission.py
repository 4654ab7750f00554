"""Payment request submission."""

import logging
import secrets
from datetime import date
from decimal import Decimal
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import transaction, IntegrityError
from django.utils import timezone

from apps.contributions.services import current_month, validate_month, get_contribution
from apps.groups.services import amount_due_today, get_active_group, get_payment_settings
from apps.notifications.services import NotificationService
from apps.payments.models import PaymentRequest, PaymentRequestStatus
from .exceptions import (
    ScreenshotRequiredError,
    ContributionAlreadyPaidError,
    PaymentIdGenerationError,
    InvalidAmountError,
)

logger = logging.getLogger(__name__)

User = get_user_model()

PAYMENT_ID_MAX_RETRIES = 5


def generate_payment_id(today: Optional[date] = None) -> str:
    """PI + ddmmyyyy + random 4-digit number, e.g. PI150520244821."""
    today = today or timezone.localdate()
    return f"PI{today:%d%m%Y}{secrets.randbelow(9000) + 1000}"


def _notify_admins(notifier, payment_request):
    """Runs after commit. Failures are logged, the request stays submitted."""
    try:
        admins = User.objects.filter(is_staff=True, is_active=True)
        for admin in admins:
            notifier.send_payment_submitted(admin=admin, payment_request=payment_request)
    except Exception:
        logger.exception("Failed to notify admins about payment %s", payment_request.payment_id)


@transaction.atomic
def submit_payment_request(
    *,
    member,
    screenshot: str,
    month: Optional[str] = None,
    amount: Optional[Decimal] = None,
    upi_id: Optional[str] = None,
    notifier: Optional[NotificationService] = None,
    today: Optional[date] = None
) -> PaymentRequest:
    """
    Record a member's payment for admin review.

    Defaults: month is the current month; amount is that month's ledger
    amount, or today's amount due when there is no record; upi_id is the
    configured UPI ID. Admins are notified once the request is committed.

    Args:
        member: Paying member
        screenshot: Proof of payment as a data: URL
        month: YYYY-MM
        amount: Amount paid
        upi_id: UPI ID paid to
        notifier: NotificationService used for the admin notifications
        today: Date used for defaults and the payment ID

    Returns:
        The pending PaymentRequest

    Raises:
        ScreenshotRequiredError: If screenshot is empty (nothing is saved)
        ContributionAlreadyPaidError: If the month is already paid
        InvalidAmountError: If amount is not positive
        PaymentIdGenerationError: If no unique payment ID could be generated
    """
    if not screenshot:
        raise ScreenshotRequiredError("screenshot required")

    today = today or timezone.localdate()
    month = validate_month(month or current_month(today))

    contribution = get_contribution(member=member, month=month)
    if contribution is not None and contribution.is_paid:
        raise ContributionAlreadyPaidError(f"Contribution for {month} is already paid")

    if amount is None:
        if contribution is not None:
            amount = contribution.amount
        else:
            amount = amount_due_today(member.group or get_active_group(), today)

    if amount <= 0:
        raise InvalidAmountError("Amount must be greater than zero")

    if upi_id is None:
        upi_id = get_payment_settings().upi_id

    for attempt in range(PAYMENT_ID_MAX_RETRIES):
        try:
            with transaction.atomic():
                payment_request = PaymentRequest.objects.create(
                    user=member,
                    month=month,
                    amount=amount,
                    upi_id=upi_id,
                    screenshot=screenshot,
                    status=PaymentRequestStatus.PENDING,
                    payment_id=generate_payment_id(today),
                )
            break
        except IntegrityError:
            logger.warning("Payment ID collision for %s, retrying", member.username)
    else:
        raise PaymentIdGenerationError("Could not generate a unique payment ID")

    logger.info(
        "Payment %s submitted by %s for %s: %s",
        payment_request.payment_id, member.username, month, amount
    )

    notifier = notifier or NotificationService()
    transaction.on_commit(lambda: _notify_admins(notifier, payment_request))

    return payment_request
