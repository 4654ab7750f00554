import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import Group, FineRule
from apps.payments.models import PaymentRequest

SCREENSHOT = 'data:image/png;base64,iVBORw0KGgo='


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def group(db):
    """Group with base 1000, fines of 100 from May 6th and 500 from May 11th."""
    group = Group.objects.create(
        name='Family Fund',
        base_amount=Decimal('1000.00'),
        previous_contribution=Decimal('5000.00'),
    )
    FineRule.objects.create(
        group=group, from_date=date(2024, 5, 6), to_date=date(2024, 5, 10),
        amount=Decimal('100.00'), position=0,
    )
    FineRule.objects.create(
        group=group, from_date=date(2024, 5, 11), to_date=date(2024, 5, 31),
        amount=Decimal('500.00'), position=1,
    )
    return group


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        username='admin',
        password='AdminPass123',
        name='Group Admin',
        is_staff=True,
        must_change_password=False,
    )


@pytest.fixture
def member(group):
    return User.objects.create_user(
        username='asha',
        password='AshaPass123',
        name='Asha',
        group=group,
        must_change_password=False,
    )


@pytest.fixture
def other_member(group):
    return User.objects.create_user(
        username='ravi',
        password='RaviPass123',
        name='Ravi',
        group=group,
        must_change_password=False,
    )


@pytest.fixture
def make_payment_request(db):
    """Factory for payment requests with a fixed payment ID."""
    counter = {'n': 1000}

    def _make(user, month, amount, **kwargs):
        counter['n'] += 1
        kwargs.setdefault('payment_id', f"PI20052024{counter['n']}")
        return PaymentRequest.objects.create(
            user=user,
            month=month,
            amount=Decimal(amount),
            upi_id='family@okbank',
            screenshot=SCREENSHOT,
            **kwargs
        )

    return _make


@pytest.fixture
def member_client(api_client, member):
    refresh = RefreshToken.for_user(member)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def admin_client(api_client, admin_user):
    refresh = RefreshToken.for_user(admin_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
