"""
Service layer tests for the groups app.

Tests cover:
- Group creation, update and deletion
- Fine rule replacement
- Payment settings validation
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from apps.accounts.models import User
from apps.groups.models import Group, FineRule, PaymentSettings
from apps.groups.services import (
    create_group,
    update_group,
    delete_group,
    get_group_by_id,
    get_active_group,
    get_payment_settings,
    update_payment_settings,
)
from apps.groups.services.exceptions import (
    GroupNotFoundError,
    GroupAlreadyExistsError,
    InvalidFineRuleError,
    PaymentSettingsError,
)


# =============================================================================
# Group Management Service Tests
# =============================================================================

@pytest.mark.django_db
class TestGroupManagement:
    """Tests for group_management.py service functions."""

    def test_create_group_with_fine_rules(self):
        group = create_group(
            name='Family Fund',
            base_amount=Decimal('1000.00'),
            fine_rules=[
                {'from_date': date(2024, 1, 6), 'to_date': date(2024, 1, 10), 'amount': Decimal('100.00')},
                {'from_date': date(2024, 1, 11), 'to_date': date(2024, 1, 31), 'amount': Decimal('500.00')},
            ]
        )

        assert group.name == 'Family Fund'
        assert group.previous_contribution == Decimal('0.00')
        rules = group.get_fine_rules()
        assert [r.amount for r in rules] == [Decimal('100.00'), Decimal('500.00')]
        assert [r.position for r in rules] == [0, 1]

    def test_create_group_drops_incomplete_rules(self):
        group = create_group(
            name='Family Fund',
            base_amount=Decimal('1000.00'),
            fine_rules=[
                {'from_date': date(2024, 1, 6), 'to_date': None, 'amount': Decimal('100.00')},
                {'from_date': None, 'to_date': date(2024, 1, 10), 'amount': Decimal('100.00')},
                {'from_date': date(2024, 1, 6), 'to_date': date(2024, 1, 10), 'amount': None},
                {'from_date': date(2024, 1, 11), 'to_date': date(2024, 1, 31), 'amount': Decimal('50.00')},
            ]
        )

        assert FineRule.objects.filter(group=group).count() == 1

    def test_create_group_rejects_negative_fine(self):
        with pytest.raises(InvalidFineRuleError):
            create_group(
                name='Family Fund',
                base_amount=Decimal('1000.00'),
                fine_rules=[
                    {'from_date': date(2024, 1, 6), 'to_date': date(2024, 1, 10), 'amount': Decimal('-5.00')},
                ]
            )

        # Transaction rolled back
        assert not Group.objects.exists()

    def test_create_second_group_rejected(self, group):
        with pytest.raises(GroupAlreadyExistsError):
            create_group(name='Another', base_amount=Decimal('500.00'))

        assert Group.objects.count() == 1

    def test_get_active_group_returns_earliest(self, group):
        assert get_active_group() == group

    def test_get_active_group_none(self, db):
        assert get_active_group() is None

    def test_get_group_by_id_not_found(self, db):
        with pytest.raises(GroupNotFoundError):
            get_group_by_id(group_id=uuid4())

    def test_update_group_fields(self, group):
        updated = update_group(
            group_id=group.id,
            name='Renamed',
            base_amount=Decimal('1200.00'),
        )

        assert updated.name == 'Renamed'
        assert updated.base_amount == Decimal('1200.00')
        assert updated.previous_contribution == Decimal('5000.00')

    def test_update_group_replaces_fine_rules(self, group_with_fines):
        updated = update_group(
            group_id=group_with_fines.id,
            fine_rules=[
                {'from_date': date(2024, 2, 1), 'to_date': date(2024, 2, 28), 'amount': Decimal('75.00')},
            ]
        )

        rules = updated.get_fine_rules()
        assert len(rules) == 1
        assert rules[0].amount == Decimal('75.00')

    def test_update_group_keeps_rules_when_not_given(self, group_with_fines):
        updated = update_group(group_id=group_with_fines.id, name='Renamed')

        assert len(updated.get_fine_rules()) == 2

    def test_update_group_not_found(self, db):
        with pytest.raises(GroupNotFoundError):
            update_group(group_id=uuid4(), name='Nope')

    def test_delete_group_removes_members(self, member_user):
        group = member_user.group

        delete_group(group_id=group.id)

        assert not Group.objects.filter(id=group.id).exists()
        assert not User.objects.filter(id=member_user.id).exists()

    def test_delete_group_not_found(self, db):
        with pytest.raises(GroupNotFoundError):
            delete_group(group_id=uuid4())


# =============================================================================
# Payment Settings Service Tests
# =============================================================================

@pytest.mark.django_db
class TestPaymentSettings:
    """Tests for payment_settings.py service functions."""

    def test_defaults(self):
        settings_row = get_payment_settings()

        assert settings_row.gateway_enabled is True
        assert settings_row.upi_id == ''
        assert settings_row.accepts_manual_payments is False

    def test_singleton(self):
        get_payment_settings()
        get_payment_settings()

        assert PaymentSettings.objects.count() == 1

    def test_gateway_off_requires_upi_id(self):
        with pytest.raises(PaymentSettingsError) as exc_info:
            update_payment_settings(gateway_enabled=False, upi_id='  ')

        assert str(exc_info.value) == 'UPI ID is required when payment gateway is off'

    def test_manual_payments_enabled(self):
        settings_row = update_payment_settings(gateway_enabled=False, upi_id=' family@okbank ')

        assert settings_row.upi_id == 'family@okbank'
        assert settings_row.accepts_manual_payments is True

    def test_gateway_on_without_upi_id(self):
        settings_row = update_payment_settings(gateway_enabled=True)

        assert settings_row.gateway_enabled is True
        assert settings_row.accepts_manual_payments is False
