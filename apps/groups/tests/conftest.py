import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import Group, FineRule, PaymentSettings


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    """Create and return the group admin (staff user)."""
    return User.objects.create_user(
        username='admin',
        password='AdminPass123',
        name='Group Admin',
        is_staff=True,
        must_change_password=False,
    )


@pytest.fixture
def group(db):
    """Create the contribution group with a base amount of 1000."""
    return Group.objects.create(
        name='Family Fund',
        base_amount=Decimal('1000.00'),
        previous_contribution=Decimal('5000.00'),
    )


@pytest.fixture
def group_with_fines(group):
    """Group with fines of 100 from the 6th and 500 from the 11th of May."""
    FineRule.objects.create(
        group=group,
        from_date=date(2024, 5, 6),
        to_date=date(2024, 5, 10),
        amount=Decimal('100.00'),
        position=0,
    )
    FineRule.objects.create(
        group=group,
        from_date=date(2024, 5, 11),
        to_date=date(2024, 5, 31),
        amount=Decimal('500.00'),
        position=1,
    )
    return group


@pytest.fixture
def member_user(group):
    """Create and return a member who has already changed their password."""
    return User.objects.create_user(
        username='member',
        password='MemberPass123',
        name='Group Member',
        group=group,
        must_change_password=False,
    )


@pytest.fixture
def payment_settings(db):
    """Manual UPI payments enabled."""
    settings_row = PaymentSettings.load()
    settings_row.gateway_enabled = False
    settings_row.upi_id = 'family@okbank'
    settings_row.save()
    return settings_row


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return API client authenticated as the admin."""
    refresh = RefreshToken.for_user(admin_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def member_client(api_client, member_user):
    """Return API client authenticated as a member."""
    refresh = RefreshToken.for_user(member_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
