import uuid

import pytest
from django.urls import reverse
from rest_framework import status

from apps.quotes.models import Devis, QuoteStatus
from apps.quotes.services import InvalidQuoteDataError, QuoteNumberConflictError


def quote_payload(**overrides):
    payload = {
        'client': {'name': 'Jean Dupont', 'email': 'jean@dupont.example.com'},
        'currency': 'EUR',
        'template': 'classic',
        'notes': 'Paiement à 30 jours',
        'items': [
            {'designation': 'Installation électrique', 'quantity': '1', 'unit_price': '850.00', 'vat_rate': '20'},
            {'designation': '', 'quantity': '1', 'unit_price': '10'},
        ],
    }
    payload.update(overrides)
    return payload


# =============================================================================
# Create Tests
# =============================================================================

@pytest.mark.django_db
class TestCreateQuoteAPI:
    """Tests for POST /api/quotes/"""

    def test_create(self, authenticated_client, profile):
        response = authenticated_client.post(reverse('quotes:quote-list'), quote_payload(), format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['quote_number'].startswith('DEV-')
        assert response.data['client']['name'] == 'Jean Dupont'
        assert len(response.data['articles']) == 1
        assert response.data['subtotal_ht'] == '850.00'
        assert response.data['total_vat'] == '170.00'
        assert response.data['total_ttc'] == '1020.00'
        assert response.data['total_ttc_display'] == '1 020,00 €'
        assert response.data['status_label'] == 'Brouillon'

    def test_client_totals_are_ignored(self, authenticated_client, profile):
        payload = quote_payload(total_ttc='1.00', subtotal_ht='1.00')
        response = authenticated_client.post(reverse('quotes:quote-list'), payload, format='json')

        assert response.data['total_ttc'] == '1020.00'

    def test_quota_exhausted(self, authenticated_client, profile):
        url = reverse('quotes:quote-list')
        for _ in range(3):
            assert authenticated_client.post(url, quote_payload(), format='json').status_code == 201

        response = authenticated_client.post(url, quote_payload(), format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert 'Quota' in response.data['error']

    def test_premium_template_forbidden(self, authenticated_client, profile):
        response = authenticated_client.post(
            reverse('quotes:quote-list'), quote_payload(template='creatif'), format='json'
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_invalid_currency(self, authenticated_client, profile):
        response = authenticated_client.post(
            reverse('quotes:quote-list'), quote_payload(currency='XYZ'), format='json'
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_negative_quantity(self, authenticated_client, profile):
        payload = quote_payload(items=[{'designation': 'X', 'quantity': '-1', 'unit_price': '5'}])
        response = authenticated_client.post(reverse('quotes:quote-list'), payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_amount_too_large(self, authenticated_client, profile):
        payload = quote_payload(items=[
            {'designation': 'Big', 'quantity': '9999999999.99', 'unit_price': '999999999999.99', 'vat_rate': '20'},
        ])
        response = authenticated_client.post(reverse('quotes:quote-list'), payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not Devis.objects.exists()

    def test_inline_client_phone_is_validated(self, authenticated_client, profile):
        url = reverse('quotes:quote-list')
        valid = quote_payload(client={'name': 'Dupont', 'phone': '06 12 34 56 78'})
        invalid = quote_payload(client={'name': 'Martin', 'phone': 'abc'})

        assert authenticated_client.post(url, valid, format='json').status_code == status.HTTP_201_CREATED
        response = authenticated_client.post(url, invalid, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'phone' in response.data['client']

    def test_unknown_client_id(self, authenticated_client, profile):
        payload = quote_payload(client_id=str(uuid.uuid4()))
        del payload['client']
        response = authenticated_client.post(reverse('quotes:quote-list'), payload, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unauthenticated(self, api_client):
        response = api_client.post(reverse('quotes:quote-list'), quote_payload(), format='json')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Read, Update and Delete Tests
# =============================================================================

@pytest.mark.django_db
class TestQuoteDetailAPI:
    """Tests for /api/quotes/{id}/"""

    def test_list(self, authenticated_client, quote):
        response = authenticated_client.get(reverse('quotes:quote-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['client_name'] == 'Awa Traoré'
        assert 'articles' not in response.data['results'][0]

    def test_list_filters(self, authenticated_client, quote):
        url = reverse('quotes:quote-list')

        assert authenticated_client.get(url, {'status': 'accepted'}).data['count'] == 0
        assert authenticated_client.get(url, {'search': 'awa'}).data['count'] == 1
        assert authenticated_client.get(url, {'date_range': 'week'}).data['count'] == 1
        assert authenticated_client.get(url, {'status': 'archived'}).status_code == 400

    def test_retrieve(self, authenticated_client, quote):
        response = authenticated_client.get(reverse('quotes:quote-detail', args=[quote.id]))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['articles']) == 2

    def test_other_user_cannot_see_quote(self, api_client, other_user, quote):
        api_client.force_authenticate(user=other_user)

        assert api_client.get(reverse('quotes:quote-detail', args=[quote.id])).status_code == 404
        assert api_client.delete(reverse('quotes:quote-detail', args=[quote.id])).status_code == 404
        assert api_client.get(reverse('quotes:quote-list')).data['count'] == 0

    def test_partial_update(self, authenticated_client, quote):
        url = reverse('quotes:quote-detail', args=[quote.id])
        response = authenticated_client.patch(url, {'notes': 'Validité 15 jours'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['notes'] == 'Validité 15 jours'
        assert len(response.data['articles']) == 2

    def test_full_update_replaces_lines(self, authenticated_client, quote):
        url = reverse('quotes:quote-detail', args=[quote.id])
        payload = {'items': [{'designation': 'Forfait', 'quantity': '2', 'unit_price': '50', 'vat_rate': '0'}]}
        response = authenticated_client.put(url, payload, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_ttc'] == '100.00'
        assert [a['designation'] for a in response.data['articles']] == ['Forfait']

    def test_delete(self, authenticated_client, quote):
        response = authenticated_client.delete(reverse('quotes:quote-detail', args=[quote.id]))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Devis.objects.filter(id=quote.id).exists()


# =============================================================================
# Action Tests
# =============================================================================

@pytest.mark.django_db
class TestQuoteActionsAPI:
    """Tests for the quote actions."""

    def test_change_status(self, authenticated_client, quote):
        url = reverse('quotes:quote-change-status', args=[quote.id])
        response = authenticated_client.post(url, {'status': 'accepted'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == QuoteStatus.ACCEPTED
        assert response.data['status_label'] == 'Accepté'

    def test_change_status_invalid(self, authenticated_client, quote):
        url = reverse('quotes:quote-change-status', args=[quote.id])
        response = authenticated_client.post(url, {'status': 'Accepté'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_duplicate(self, authenticated_client, quote):
        response = authenticated_client.post(reverse('quotes:quote-duplicate', args=[quote.id]))

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['id'] != str(quote.id)
        assert response.data['status'] == QuoteStatus.DRAFT

    @pytest.mark.parametrize('error, expected_status', [
        (QuoteNumberConflictError('Numéro déjà utilisé'), status.HTTP_409_CONFLICT),
        (InvalidQuoteDataError('Montant total trop élevé'), status.HTTP_400_BAD_REQUEST),
    ])
    def test_duplicate_errors(self, authenticated_client, quote, monkeypatch, error, expected_status):
        def failing_duplicate(**kwargs):
            raise error

        monkeypatch.setattr('apps.quotes.views.duplicate_quote', failing_duplicate)
        url = reverse('quotes:quote-duplicate', args=[quote.id])
        response = authenticated_client.post(url)

        assert response.status_code == expected_status
        assert response.data['error'] == str(error)

    def test_pdf(self, authenticated_client, quote):
        response = authenticated_client.get(reverse('quotes:quote-pdf', args=[quote.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'application/pdf'
        assert f'Devis-{quote.quote_number}.pdf' in response['Content-Disposition']
        assert response.content.startswith(b'%PDF')

    def test_share_email(self, authenticated_client, quote, mailoutbox):
        url = reverse('quotes:quote-share-email', args=[quote.id])
        response = authenticated_client.post(
            url, {'recipient': 'achat@client.example.com', 'message': 'Voici le devis.'}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert mailoutbox[0].to == ['achat@client.example.com']
        assert mailoutbox[0].body == 'Voici le devis.'

    def test_share_whatsapp(self, authenticated_client, quote):
        response = authenticated_client.get(reverse('quotes:quote-share-whatsapp', args=[quote.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['url'].startswith('https://wa.me/?text=')

    def test_next_number(self, authenticated_client, quote):
        response = authenticated_client.get(reverse('quotes:quote-next-number'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['quote_number'].endswith('-002')

    def test_stats(self, authenticated_client, quote):
        response = authenticated_client.get(reverse('quotes:quote-stats'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_quotes'] == 1
        assert response.data['by_status']['draft'] == 1
        assert response.data['conversion_rate'] == 0
