"""
Fine rule evaluation tests.

Most cases use unsaved FineRule objects: the calculation needs no database.
"""

import pytest
from datetime import date, timedelta
from decimal import Decimal

from apps.groups.models import FineRule
from apps.groups.services import (
    amount_due_today,
    calculate_amount,
    default_tiered_amount,
    fine_breakdown,
)
from apps.groups.services.fines import rule_applies


BASE = Decimal('1000.00')


def rule(from_date, amount, to_date=None):
    return FineRule(from_date=from_date, to_date=to_date, amount=amount)


class TestCalculateAmount:
    """Tests for the pure amount calculation."""

    def test_no_rules_returns_base(self):
        assert calculate_amount(BASE, [], date(2024, 5, 15)) == BASE

    def test_rule_started_ten_days_ago_adds_fine(self):
        """Base 1000 plus a 200 fine that started 10 days ago is 1200."""
        today = date(2024, 5, 15)
        rules = [rule(today - timedelta(days=10), Decimal('200.00'))]

        assert calculate_amount(BASE, rules, today) == Decimal('1200.00')

    def test_all_past_rules_stack(self):
        today = date(2024, 5, 15)
        rules = [
            rule(date(2024, 5, 1), Decimal('100.00')),
            rule(date(2024, 5, 10), Decimal('200.00')),
        ]

        assert calculate_amount(BASE, rules, today) == BASE + Decimal('300.00')

    def test_rule_applies_on_its_start_day(self):
        today = date(2024, 5, 15)
        assert calculate_amount(BASE, [rule(today, Decimal('50.00'))], today) == Decimal('1050.00')

    def test_future_rule_not_applied(self):
        today = date(2024, 5, 15)
        rules = [rule(date(2024, 5, 16), Decimal('500.00'))]

        assert calculate_amount(BASE, rules, today) == BASE

    def test_year_is_ignored(self):
        """A rule saved with an old year still applies by month and day."""
        today = date(2024, 5, 15)
        rules = [rule(date(2019, 5, 1), Decimal('100.00'))]

        assert calculate_amount(BASE, rules, today) == Decimal('1100.00')

    def test_to_date_does_not_limit_rule(self):
        today = date(2024, 5, 25)
        rules = [rule(date(2024, 5, 6), Decimal('100.00'), to_date=date(2024, 5, 10))]

        assert calculate_amount(BASE, rules, today) == Decimal('1100.00')

    def test_late_year_rule_not_applied_in_early_month(self):
        today = date(2024, 1, 3)
        rules = [rule(date(2023, 12, 20), Decimal('300.00'))]

        assert calculate_amount(BASE, rules, today) == BASE

    def test_incomplete_rules_skipped(self):
        today = date(2024, 5, 15)
        rules = [
            rule(None, Decimal('100.00')),
            rule(date(2024, 5, 1), None),
        ]

        assert calculate_amount(BASE, rules, today) == BASE

    def test_order_does_not_matter(self):
        today = date(2024, 8, 20)
        rules = [
            rule(date(2024, 1, 5), Decimal('10.00')),
            rule(date(2024, 8, 1), Decimal('25.50')),
            rule(date(2024, 9, 1), Decimal('99.00')),
            rule(date(2024, 3, 3), Decimal('40.00')),
        ]

        forward = calculate_amount(BASE, rules, today)
        backward = calculate_amount(BASE, list(reversed(rules)), today)

        assert forward == backward == Decimal('1075.50')

    def test_never_below_base(self):
        rules = [rule(date(2024, m, 1), Decimal('0.00')) for m in range(1, 13)]
        for month in range(1, 13):
            assert calculate_amount(BASE, rules, date(2024, month, 28)) >= BASE

    def test_amount_grows_through_the_year(self):
        rules = [
            rule(date(2024, 2, 1), Decimal('100.00')),
            rule(date(2024, 6, 1), Decimal('100.00')),
            rule(date(2024, 10, 1), Decimal('100.00')),
        ]
        earlier = calculate_amount(BASE, rules, date(2024, 3, 1))
        later = calculate_amount(BASE, rules, date(2024, 11, 1))

        assert later >= earlier


class TestLeapDay:
    """Rules starting on 29 February."""

    def test_applies_from_first_of_march_in_non_leap_year(self):
        leap_rule = rule(date(2024, 2, 29), Decimal('100.00'))

        assert rule_applies(leap_rule, date(2023, 3, 1))
        assert not rule_applies(leap_rule, date(2023, 2, 28))

    def test_applies_on_the_day_in_leap_year(self):
        leap_rule = rule(date(2024, 2, 29), Decimal('100.00'))

        assert rule_applies(leap_rule, date(2028, 2, 29))


class TestTieredDefault:
    """Tests for the amount used when no group exists."""

    @pytest.mark.parametrize('day,expected', [
        (1, Decimal('1000.00')),
        (5, Decimal('1000.00')),
        (6, Decimal('1100.00')),
        (10, Decimal('1100.00')),
        (11, Decimal('1600.00')),
        (31, Decimal('1600.00')),
    ])
    def test_tiers(self, day, expected):
        assert default_tiered_amount(date(2024, 1, day)) == expected

    def test_amount_due_without_group(self):
        assert amount_due_today(None, date(2024, 5, 7)) == Decimal('1100.00')


@pytest.mark.django_db
class TestAmountDueToday:
    """Tests using saved groups and fine rules."""

    def test_before_any_fine(self, group_with_fines):
        assert amount_due_today(group_with_fines, date(2024, 5, 3)) == Decimal('1000.00')

    def test_after_first_fine(self, group_with_fines):
        assert amount_due_today(group_with_fines, date(2024, 5, 8)) == Decimal('1100.00')

    def test_after_both_fines(self, group_with_fines):
        assert amount_due_today(group_with_fines, date(2025, 5, 20)) == Decimal('1600.00')

    def test_breakdown(self, group_with_fines):
        breakdown = fine_breakdown(group_with_fines, date(2024, 5, 20))

        assert breakdown['base_amount'] == Decimal('1000.00')
        assert breakdown['fine_amount'] == Decimal('600.00')
        assert breakdown['total'] == Decimal('1600.00')
        assert len(breakdown['applied_rules']) == 2

    def test_breakdown_without_group(self):
        breakdown = fine_breakdown(None, date(2024, 5, 20))

        assert breakdown['total'] == Decimal('1600.00')
        assert breakdown['fine_amount'] == Decimal('0.00')
        assert breakdown['applied_rules'] == []
