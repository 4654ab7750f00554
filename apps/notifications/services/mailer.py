"""Payment decision emails."""

import logging

from django.conf import settings
from django.core.mail import send_mail
from django.utils import timezone

from .formatting import format_amount

logger = logging.getLogger(__name__)


class PaymentEmailSender:
    """Sends approval and rejection emails through Django's mail backend."""

    def __init__(self, from_email=None):
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL

    def send_approval(self, *, payment_request, admin_username) -> bool:
        member = payment_request.user
        if not member.email:
            return False

        subject = f"Payment approved: {payment_request.month}"
        body = (
            f"Hi {member.get_display_name()},\n\n"
            f"Your payment of ₹{format_amount(payment_request.amount)} for "
            f"{payment_request.month} was approved by {admin_username} on "
            f"{timezone.localdate():%d/%m/%Y}.\n\n"
            f"Payment ID: {payment_request.payment_id}\n"
        )
        send_mail(subject, body, self.from_email, [member.email], fail_silently=False)
        logger.info("Approval email sent for payment %s", payment_request.payment_id)
        return True

    def send_rejection(self, *, payment_request, admin_username, reason='') -> bool:
        member = payment_request.user
        if not member.email:
            return False

        subject = f"Payment rejected: {payment_request.month}"
        body = (
            f"Hi {member.get_display_name()},\n\n"
            f"Your payment of ₹{format_amount(payment_request.amount)} for "
            f"{payment_request.month} was rejected by {admin_username} on "
            f"{timezone.localdate():%d/%m/%Y}.\n\n"
            f"Reason: {reason or 'No reason provided'}\n"
            f"Payment ID: {payment_request.payment_id}\n"
        )
        send_mail(subject, body, self.from_email, [member.email], fail_silently=False)
        logger.info("Rejection email sent for payment %s", payment_request.payment_id)
        return True
