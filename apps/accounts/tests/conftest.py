import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import Group


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def group(db):
    """Create the contribution group."""
    return Group.objects.create(
        name='Family Fund',
        base_amount=Decimal('1000.00'),
    )


@pytest.fixture
def admin_user(db):
    """Create and return the group admin."""
    return User.objects.create_user(
        username='admin',
        password='AdminPass123',
        name='Group Admin',
        is_staff=True,
        must_change_password=False,
    )


@pytest.fixture
def user(group):
    """Create and return a member who has changed their password."""
    return User.objects.create_user(
        username='Alice',
        password='AlicePass123',
        name='Alice',
        email='alice@example.com',
        group=group,
        must_change_password=False,
    )


@pytest.fixture
def new_user(group):
    """Create and return a member still on their initial password."""
    return User.objects.create_user(
        username='bob',
        password='initial1',
        name='Bob',
        group=group,
    )


@pytest.fixture
def user_inactive(group):
    """Create and return an inactive member."""
    return User.objects.create_user(
        username='inactive',
        password='InactivePass123',
        name='Inactive',
        group=group,
        is_active=False,
    )


def _authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as a member."""
    return _authenticate(api_client, user)


@pytest.fixture
def new_user_client(api_client, new_user):
    """Return API client authenticated as a member who must change their password."""
    return _authenticate(api_client, new_user)


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return API client authenticated as the admin."""
    return _authenticate(api_client, admin_user)
