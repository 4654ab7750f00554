"""
In-app notifications for the payment workflow.

NotificationService is constructed by the caller and passed where it is
needed. Delivery is best-effort: a failure is logged and never propagates
to the operation that triggered it.
"""

import logging

from django.db import transaction

from apps.notifications.models import Notification, NotificationType
from apps.notifications.streams import notification_feed
from .exceptions import UnknownNotificationTypeError
from .formatting import format_amount

logger = logging.getLogger(__name__)


def _render_submitted(payload):
    return (
        'New Payment Request 📝',
        f"{payload['username']} has submitted a payment of "
        f"₹{format_amount(payload['amount'])} for {payload['month']}."
    )


def _render_approved(payload):
    return (
        'Payment Approved! 🎉',
        f"Your payment of ₹{format_amount(payload['amount'])} for {payload['month']} "
        f"has been approved by {payload['admin_username']}."
    )


def _render_rejected(payload):
    message = (
        f"Your payment of ₹{format_amount(payload['amount'])} for {payload['month']} "
        f"was rejected by {payload['admin_username']}."
    )
    if payload.get('reason'):
        message += f" Reason: {payload['reason']}"
    return 'Payment Rejected ❌', message


def _render_general(payload):
    return payload.get('title', 'Notification'), payload.get('message', '')


RENDERERS = {
    NotificationType.PAYMENT_SUBMITTED: _render_submitted,
    NotificationType.PAYMENT_APPROVED: _render_approved,
    NotificationType.PAYMENT_REJECTED: _render_rejected,
    NotificationType.GENERAL: _render_general,
}


class NotificationService:
    """
    Creates notifications and, optionally, sends payment emails.

    Args:
        email_sender: Object with send_approval()/send_rejection(), usually
            a PaymentEmailSender. No emails are sent when omitted.
    """

    def __init__(self, email_sender=None):
        self.email_sender = email_sender

    def notify(self, kind, recipient, payload):
        """
        Create a notification of the given kind for recipient.

        Returns the Notification, or None if delivery failed.
        """
        try:
            renderer = RENDERERS.get(kind)
            if renderer is None:
                raise UnknownNotificationTypeError(f"Unknown notification type: {kind}")

            title, message = renderer(payload)
            data = {
                key: str(value) for key, value in payload.items()
                if key not in ('title', 'message')
            }

            with transaction.atomic():
                notification = Notification.objects.create(
                    recipient=recipient,
                    username=payload.get('recipient_username', recipient.username),
                    type=kind,
                    title=title,
                    message=message,
                    data=data,
                )
        except Exception:
            logger.exception("Failed to deliver %s notification to %s", kind, recipient.pk)
            return None

        notification_feed.publish_on_commit(recipient.pk)
        return notification

    def send_payment_submitted(self, *, admin, payment_request):
        """Tell an admin that a member submitted a payment."""
        return self.notify(NotificationType.PAYMENT_SUBMITTED, admin, {
            'recipient_username': 'admin',
            'username': payment_request.user.username,
            'payment_id': payment_request.payment_id,
            'month': payment_request.month,
            'amount': payment_request.amount,
        })

    def send_payment_approved(self, *, payment_request, admin):
        """Tell the member their payment was accepted, then email them."""
        notification = self.notify(NotificationType.PAYMENT_APPROVED, payment_request.user, {
            'payment_id': payment_request.payment_id,
            'month': payment_request.month,
            'amount': payment_request.amount,
            'admin_username': admin.username,
        })
        if self.email_sender is not None:
            self._send_email(
                self.email_sender.send_approval,
                payment_request=payment_request,
                admin_username=admin.username,
            )
        return notification

    def send_payment_rejected(self, *, payment_request, admin, reason=''):
        """Tell the member their payment was rejected, then email them."""
        notification = self.notify(NotificationType.PAYMENT_REJECTED, payment_request.user, {
            'payment_id': payment_request.payment_id,
            'month': payment_request.month,
            'amount': payment_request.amount,
            'admin_username': admin.username,
            'reason': reason,
        })
        if self.email_sender is not None:
            self._send_email(
                self.email_sender.send_rejection,
                payment_request=payment_request,
                admin_username=admin.username,
                reason=reason,
            )
        return notification

    def _send_email(self, send, **kwargs):
        try:
            return send(**kwargs)
        except Exception:
            logger.exception(
                "Failed to email %s about payment %s",
                kwargs['payment_request'].user.username,
                kwargs['payment_request'].payment_id,
            )
            return False
