import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import patch
from django.urls import reverse
from rest_framework import status

from apps.groups.models import Group


# =============================================================================
# Group ViewSet Tests
# =============================================================================

@pytest.mark.django_db
class TestGroupCreate:
    """Tests for POST /api/groups/"""

    def test_admin_creates_group(self, admin_client):
        url = reverse('groups:group-list')
        data = {
            'name': 'Family Fund',
            'baseAmount': '1000.00',
            'previousContribution': '2500.00',
            'fineRules': [
                {'fromDate': '2024-01-06', 'toDate': '2024-01-10', 'amount': '100.00'},
            ],
        }
        response = admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Family Fund'
        assert response.data['baseAmount'] == '1000.00'
        assert len(response.data['fineRules']) == 1
        assert response.data['fineRules'][0]['fromDate'] == '2024-01-06'

    def test_member_cannot_create_group(self, member_client):
        url = reverse('groups:group-list')
        response = member_client.post(url, {'name': 'X', 'baseAmount': '10.00'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_second_group_rejected(self, admin_client, group):
        url = reverse('groups:group-list')
        response = admin_client.post(url, {'name': 'Second', 'baseAmount': '10.00'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_blank_name_rejected(self, admin_client):
        url = reverse('groups:group-list')
        response = admin_client.post(url, {'name': '   ', 'baseAmount': '10.00'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unauthenticated(self, api_client):
        url = reverse('groups:group-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestGroupRetrieveUpdate:
    """Tests for GET/PATCH/DELETE /api/groups/{id}/"""

    def test_member_can_view_group(self, member_client, group_with_fines):
        url = reverse('groups:group-detail', kwargs={'pk': group_with_fines.id})
        response = member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['member_count'] == 1
        assert len(response.data['fineRules']) == 2

    def test_admin_updates_group(self, admin_client, group):
        url = reverse('groups:group-detail', kwargs={'pk': group.id})
        response = admin_client.patch(url, {'baseAmount': '1500.00'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['baseAmount'] == '1500.00'
        assert response.data['name'] == group.name

    def test_member_cannot_update_group(self, member_client, group):
        url = reverse('groups:group-detail', kwargs={'pk': group.id})
        response = member_client.patch(url, {'baseAmount': '1.00'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_deletes_group(self, admin_client, group):
        url = reverse('groups:group-detail', kwargs={'pk': group.id})
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Group.objects.exists()


@pytest.mark.django_db
class TestAmountDue:
    """Tests for GET /api/groups/{id}/amount_due/ and /api/groups/amount_due/"""

    @patch('apps.groups.views.timezone.localdate', return_value=date(2024, 5, 20))
    def test_amount_due_with_fines(self, mock_today, member_client, group_with_fines):
        url = reverse('groups:group-amount-due', kwargs={'pk': group_with_fines.id})
        response = member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == '1600.00'
        assert response.data['fine_amount'] == '600.00'
        assert response.data['date'] == '2024-05-20'

    @patch('apps.groups.views.timezone.localdate', return_value=date(2024, 5, 7))
    def test_current_amount_due_without_group(self, mock_today, admin_client):
        url = reverse('groups:current-amount-due')
        response = admin_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == '1100.00'


@pytest.mark.django_db
class TestPaymentSettingsEndpoint:
    """Tests for GET/PUT /api/groups/settings/"""

    def test_member_reads_settings(self, member_client, payment_settings):
        url = reverse('groups:payment-settings')
        response = member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['upiId'] == 'family@okbank'
        assert response.data['gatewayEnabled'] is False
        assert response.data['manualPayments'] is True

    def test_admin_updates_settings(self, admin_client):
        url = reverse('groups:payment-settings')
        response = admin_client.put(url, {'gatewayEnabled': False, 'upiId': 'fund@upi'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['upiId'] == 'fund@upi'

    def test_upi_required_when_gateway_off(self, admin_client):
        url = reverse('groups:payment-settings')
        response = admin_client.put(url, {'gatewayEnabled': False, 'upiId': ''}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'UPI ID is required when payment gateway is off'

    def test_member_cannot_update_settings(self, member_client):
        url = reverse('groups:payment-settings')
        response = member_client.put(url, {'gatewayEnabled': True}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
