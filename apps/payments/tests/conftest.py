import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import Group, FineRule, PaymentSettings
from apps.payments.models import PaymentRequest

# Small PNG payload; screenshots are not decoded
PNG_BYTES = (
    b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06'
    b'\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f\x00\x00\x01\x01'
    b'\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82'
)
SCREENSHOT = 'data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR4nGP4DwAAAQEABRjYTgAAAABJRU5ErkJggg=='


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def group(db):
    """Group with base 1000, fines of 100 from May 6th and 500 from May 11th."""
    group = Group.objects.create(name='Family Fund', base_amount=Decimal('1000.00'))
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
def payment_settings(db):
    """Gateway off, manual UPI payments to family@okbank."""
    settings_row = PaymentSettings.load()
    settings_row.gateway_enabled = False
    settings_row.upi_id = 'family@okbank'
    settings_row.save()
    return settings_row


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
        email='asha@example.com',
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
def pending_request(member):
    """A pending request from the member for May 2024."""
    return PaymentRequest.objects.create(
        user=member,
        month='2024-05',
        amount=Decimal('1200.00'),
        upi_id='family@okbank',
        screenshot=SCREENSHOT,
        payment_id='PI200520241234',
    )


def _authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def member_client(api_client, member):
    return _authenticate(api_client, member)


@pytest.fixture
def other_member_client(other_member):
    return _authenticate(APIClient(), other_member)


@pytest.fixture
def admin_client(api_client, admin_user):
    return _authenticate(api_client, admin_user)
