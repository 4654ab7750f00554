"""
Fine rule evaluation.

Computes the amount a member owes today: the group's base amount plus every
fine rule that has already kicked in this year. Rules are year-agnostic, so
only the (month, day) of each ``from_date`` is compared against today's
(month, day). All qualifying rules stack; ``to_date`` does not limit a rule.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from django.utils import timezone

from apps.groups.models import Group, FineRule


# Used when no group has been configured yet
TIERED_DEFAULTS = (
    (5, Decimal('1000.00')),
    (10, Decimal('1100.00')),
)
TIERED_FALLBACK = Decimal('1600.00')


def default_tiered_amount(today: date) -> Decimal:
    """1000 on days 1-5, 1100 on days 6-10, 1600 afterwards."""
    for last_day, amount in TIERED_DEFAULTS:
        if today.day <= last_day:
            return amount
    return TIERED_FALLBACK


def _month_day(value: date) -> tuple:
    return (value.month, value.day)


def rule_applies(rule: FineRule, today: date) -> bool:
    """A rule applies once today's (month, day) reaches its from_date's (month, day)."""
    if rule.from_date is None or rule.amount is None:
        return False
    return _month_day(rule.from_date) <= _month_day(today)


def qualifying_rules(fine_rules: Iterable[FineRule], today: date) -> list:
    return [rule for rule in fine_rules if rule_applies(rule, today)]


def calculate_amount(base_amount: Decimal, fine_rules: Iterable[FineRule], today: date) -> Decimal:
    """
    Base amount plus the sum of all qualifying fines.

    Args:
        base_amount: The group's base contribution
        fine_rules: Any iterable of FineRule-like objects
        today: The date to evaluate for

    Returns:
        Decimal amount due, never below ``base_amount``
    """
    total = Decimal(base_amount)
    for rule in qualifying_rules(fine_rules, today):
        total += Decimal(rule.amount)
    return total


def amount_due_today(group: Optional[Group], today: Optional[date] = None) -> Decimal:
    """
    Contribution amount due on ``today`` (defaults to the local date).

    Falls back to the tiered default when no group exists.
    """
    today = today or timezone.localdate()
    if group is None:
        return default_tiered_amount(today)
    return calculate_amount(group.base_amount, group.get_fine_rules(), today)


def fine_breakdown(group: Optional[Group], today: Optional[date] = None) -> dict:
    """Split today's amount into base and fines."""
    today = today or timezone.localdate()

    if group is None:
        total = default_tiered_amount(today)
        return {
            'base_amount': total,
            'fine_amount': Decimal('0.00'),
            'total': total,
            'applied_rules': [],
        }

    applied = qualifying_rules(group.get_fine_rules(), today)
    fine_amount = sum((Decimal(rule.amount) for rule in applied), Decimal('0.00'))

    return {
        'base_amount': group.base_amount,
        'fine_amount': fine_amount,
        'total': group.base_amount + fine_amount,
        'applied_rules': applied,
    }
