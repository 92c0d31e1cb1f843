import pytest
from django.urls import reverse
from rest_framework import status

from apps.premium.models import ActivationCode, CodeStatus


DEVICE = {
    'user_agent': 'Mozilla/5.0 (X11; Linux x86_64)',
    'screen_width': 1920,
    'screen_height': 1080,
    'language': 'fr-FR',
    'timezone': 'Europe/Paris',
}


# =============================================================================
# Activation Tests
# =============================================================================

@pytest.mark.django_db
class TestActivate:
    """Tests for POST /api/premium/activate/"""

    def test_activate_success(self, authenticated_client, sold_code):
        url = reverse('premium:activate')
        response = authenticated_client.post(url, {'code': sold_code.code, 'device': DEVICE}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_active'] is True
        assert response.data['code_suffix'] == 'D34'
        assert response.data['device_match'] is True

    def test_malformed_code(self, authenticated_client):
        url = reverse('premium:activate')
        response = authenticated_client.post(url, {'code': 'ABC'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'remaining_attempts' not in response.data

        lockout = authenticated_client.get(reverse('premium:lockout'))
        assert lockout.data['attempts'] == 0

    def test_wrong_code_reports_remaining_attempts(self, authenticated_client):
        url = reverse('premium:activate')
        response = authenticated_client.post(url, {'code': 'SOLVIX-ZZZZZZZZ'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['remaining_attempts'] == 4

    def test_blocked_after_five_failures(self, authenticated_client, sold_code):
        url = reverse('premium:activate')
        for _ in range(5):
            response = authenticated_client.post(url, {'code': 'SOLVIX-ZZZZZZZZ'}, format='json')

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.data['remaining_hours'] == 24

        response = authenticated_client.post(url, {'code': sold_code.code}, format='json')
        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS

        lockout = authenticated_client.get(reverse('premium:lockout'))
        assert lockout.data['is_blocked'] is True

    def test_blocked_user_with_malformed_code(self, authenticated_client):
        url = reverse('premium:activate')
        for _ in range(5):
            authenticated_client.post(url, {'code': 'SOLVIX-ZZZZZZZZ'}, format='json')

        response = authenticated_client.post(url, {'code': 'abc'}, format='json')

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS

    def test_already_premium(self, api_client, premium_user, sold_code):
        api_client.force_authenticate(user=premium_user)
        response = api_client.post(reverse('premium:activate'), {'code': sold_code.code}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_unauthenticated(self, api_client, sold_code):
        response = api_client.post(reverse('premium:activate'), {'code': sold_code.code}, format='json')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Status and Quota Tests
# =============================================================================

@pytest.mark.django_db
class TestStatusAndQuota:
    """Tests for GET /api/premium/status/ and /api/premium/quota/"""

    def test_status_free_user(self, authenticated_client):
        response = authenticated_client.get(reverse('premium:status'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_active'] is False
        assert response.data['code_suffix'] is None

    def test_status_after_activation_same_device(self, authenticated_client, sold_code):
        authenticated_client.post(
            reverse('premium:activate'), {'code': sold_code.code, 'device': DEVICE}, format='json'
        )

        response = authenticated_client.get(reverse('premium:status'), DEVICE)

        assert response.data['is_active'] is True
        assert response.data['device_match'] is True

    def test_quota_free_user(self, authenticated_client):
        response = authenticated_client.get(reverse('premium:quota'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            'used': 0,
            'remaining': 3,
            'total': 3,
            'can_create_quote': True,
            'is_premium': False,
        }

    def test_quota_premium_user(self, api_client, premium_user):
        api_client.force_authenticate(user=premium_user)
        response = api_client.get(reverse('premium:quota'))

        assert response.data['is_premium'] is True
        assert response.data['remaining'] is None


# =============================================================================
# Admin Code Management Tests
# =============================================================================

@pytest.mark.django_db
class TestActivationCodeAdmin:
    """Tests for /api/premium/codes/"""

    def test_regular_user_forbidden(self, authenticated_client):
        response = authenticated_client.get(reverse('premium:activation-code-list'))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_codes(self, admin_client, available_code, sold_code):
        response = admin_client.get(reverse('premium:activation-code-list'), {'status': 'SOLD'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['code'] == sold_code.code

    def test_retrieve_is_case_insensitive(self, admin_client, sold_code):
        url = reverse('premium:activation-code-detail', args=['solvix-ab12cd34'])
        response = admin_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['code'] == 'SOLVIX-AB12CD34'

    def test_generate(self, admin_client, admin_user):
        response = admin_client.post(reverse('premium:activation-code-generate'), {'count': 5}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert len(response.data) == 5
        assert ActivationCode.objects.filter(created_by=admin_user).count() == 5

    def test_generate_too_many(self, admin_client):
        response = admin_client.post(reverse('premium:activation-code-generate'), {'count': 500}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_sell(self, admin_client, available_code):
        url = reverse('premium:activation-code-sell', args=[available_code.code])
        response = admin_client.post(url, {'customer_contact': '+2250701020304'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == CodeStatus.SOLD

    def test_sell_sold_code(self, admin_client, sold_code):
        url = reverse('premium:activation-code-sell', args=[sold_code.code])
        response = admin_client.post(url, {'customer_contact': 'x@example.com'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_revoke(self, admin_client, premium_user):
        url = reverse('premium:activation-code-revoke', args=['SOLVIX-PREM0001'])
        response = admin_client.post(url, {'reason': 'Remboursé'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == CodeStatus.REVOKED

    def test_stats(self, admin_client, available_code, sold_code):
        response = admin_client.get(reverse('premium:activation-code-stats'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == 2
        assert response.data['available'] == 1
        assert response.data['sold'] == 1

    def test_export_csv(self, admin_client, sold_code):
        response = admin_client.get(reverse('premium:activation-code-export'))

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'].startswith('text/csv')
        assert 'attachment' in response['Content-Disposition']
        assert 'SOLVIX-AB12CD34' in response.content.decode('utf-8')
