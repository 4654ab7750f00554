"""Member statement and group dashboard."""

from datetime import date
from decimal import Decimal
from typing import Optional

from django.db.models import Sum, Count, Q
from django.utils import timezone

from apps.contributions.models import Contribution, ContributionStatus
from apps.groups.services import amount_due_today, get_active_group
from .ledger import current_month


def get_member_statement(*, member, today: Optional[date] = None) -> dict:
    """
    Everything a member sees on their contributions page.

    Returns:
        dict with:
            - month: current month key
            - this_month: the current month's record or None
            - previous_pending: unpaid records before this month, oldest first
            - upcoming: unpaid records after this month
            - history: all records except this month, newest first
            - amount_due: today's fine-inclusive amount for the member's group
            - total_due: sum of pending amounts up to this month; today's
              amount when nothing pending is recorded and this month is unpaid
    """
    today = today or timezone.localdate()
    month = current_month(today)

    contributions = list(Contribution.objects.filter(user=member).order_by('month'))
    this_month = next((c for c in contributions if c.month == month), None)

    previous_pending = [
        c for c in contributions
        if c.status == ContributionStatus.PENDING and c.month < month
    ]
    upcoming = [
        c for c in contributions
        if c.status == ContributionStatus.PENDING and c.month > month
    ]
    history = [c for c in reversed(contributions) if c.month != month]

    amount_due = amount_due_today(member.group, today)

    pending = list(previous_pending)
    if this_month is not None and this_month.status == ContributionStatus.PENDING:
        pending.append(this_month)
    total_due = sum((c.amount for c in pending), Decimal('0.00'))

    this_month_paid = this_month is not None and this_month.is_paid
    if not total_due and not this_month_paid:
        total_due = amount_due

    return {
        'month': month,
        'this_month': this_month,
        'previous_pending': previous_pending,
        'upcoming': upcoming,
        'history': history,
        'amount_due': amount_due,
        'total_due': total_due,
    }


def get_group_dashboard(*, group=None, today: Optional[date] = None) -> dict:
    """
    Totals for the group dashboard.

    Totals are sums of the stored amounts of paid records. The grand total
    adds the group's previous contribution.
    """
    today = today or timezone.localdate()
    month = current_month(today)
    group = group or get_active_group()

    if group is None:
        return {
            'group': None,
            'month': month,
            'amount_due': amount_due_today(None, today),
            'previous_contribution': Decimal('0.00'),
            'total_paid': Decimal('0.00'),
            'grand_total': Decimal('0.00'),
            'monthly_totals': [],
            'member_totals': [],
            'current_month': [],
        }

    paid = Contribution.objects.filter(user__group=group, status=ContributionStatus.PAID)

    total_paid = paid.aggregate(total=Sum('amount'))['total'] or Decimal('0.00')

    monthly_totals = [
        {'month': row['month'], 'total': row['total'], 'count': row['count']}
        for row in (
            paid.values('month')
            .annotate(total=Sum('amount'), count=Count('id'))
            .order_by('month')
        )
    ]

    members = (
        group.members
        .annotate(total_paid=Sum(
            'contributions__amount',
            filter=Q(contributions__status=ContributionStatus.PAID)
        ))
        .order_by('name', 'username')
    )

    paid_this_month = set(
        paid.filter(month=month).values_list('user_id', flat=True)
    )

    member_totals = []
    current = []
    for member in members:
        member_totals.append({
            'member_id': member.id,
            'username': member.username,
            'name': member.name,
            'total_paid': member.total_paid or Decimal('0.00'),
        })
        current.append({
            'member_id': member.id,
            'username': member.username,
            'name': member.name,
            'paid': member.id in paid_this_month,
        })

    return {
        'group': group,
        'month': month,
        'amount_due': amount_due_today(group, today),
        'previous_contribution': group.previous_contribution,
        'total_paid': total_paid,
        'grand_total': total_paid + group.previous_contribution,
        'monthly_totals': monthly_totals,
        'member_totals': member_totals,
        'current_month': current,
    }
