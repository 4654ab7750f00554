import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import Group
from apps.notifications.models import Notification, NotificationType
from apps.payments.models import PaymentRequest


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


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
def member(db):
    group = Group.objects.create(name='Family Fund', base_amount=Decimal('1000.00'))
    return User.objects.create_user(
        username='asha',
        password='AshaPass123',
        name='Asha',
        email='asha@example.com',
        group=group,
        must_change_password=False,
    )


@pytest.fixture
def payment_request(member):
    return PaymentRequest.objects.create(
        user=member,
        month='2024-05',
        amount=Decimal('1250.50'),
        upi_id='family@okbank',
        screenshot='data:image/png;base64,iVBORw0KGgo=',
        payment_id='PI200520241234',
    )


@pytest.fixture
def notifications(member):
    """Two unread notifications and one read one, a minute apart."""
    created = []
    start = timezone.now() - timedelta(hours=1)
    for i in range(3):
        notification = Notification.objects.create(
            recipient=member, username=member.username, type=NotificationType.GENERAL,
            title=f'Notice {i}', message='Hello', read=(i == 2),
        )
        notification.created_at = start + timedelta(minutes=i)
        notification.save(update_fields=['created_at'])
        created.append(notification)
    return created


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
