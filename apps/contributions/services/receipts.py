"""Receipt data for paid contributions."""

from datetime import datetime
from decimal import Decimal

from apps.contributions.models import ContributionStatus
from .exceptions import ReceiptNotAvailableError


def format_month(month: str) -> str:
    """'2024-05' -> 'May 2024'. Unparseable values are returned as given."""
    try:
        return datetime.strptime(month, '%Y-%m').strftime('%B %Y')
    except ValueError:
        return month


def build_receipt(*, contribution) -> dict:
    """
    Build receipt data for a paid contribution.

    The total is split into the group's base amount and the fine on top.

    Raises:
        ReceiptNotAvailableError: If the contribution is not paid
    """
    if contribution.status != ContributionStatus.PAID:
        raise ReceiptNotAvailableError("Receipt is only available for paid contributions")

    member = contribution.user
    total = contribution.amount
    group = member.group
    base_amount = min(total, group.base_amount) if group is not None else total
    fine_amount = max(total - base_amount, Decimal('0.00'))

    return {
        'contribution_id': contribution.id,
        'username': member.username,
        'name': member.get_display_name(),
        'month': contribution.month,
        'month_display': format_month(contribution.month),
        'status': contribution.status,
        'paid_date': contribution.paid_date,
        'payment_id': contribution.payment_id,
        'base_amount': base_amount,
        'fine_amount': fine_amount,
        'total': total,
    }
