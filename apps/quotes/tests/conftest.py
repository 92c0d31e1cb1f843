from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.clients.models import Client
from apps.premium.models import ActivationCode, CodeStatus
from apps.profiles.services import get_or_create_profile
from apps.quotes.services import create_quote


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        display_name='Test User',
        email_verified=True,
    )


@pytest.fixture
def other_user(db):
    """Create and return another test user."""
    return User.objects.create_user(
        email='otheruser@example.com',
        password='OtherPass123!',
        display_name='Other User',
        email_verified=True,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an API client authenticated as ``user``."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def premium_user(user):
    """Turn ``user`` into a premium user."""
    ActivationCode.objects.create(
        code='SOLVIX-PREM0001',
        status=CodeStatus.USED,
        activated_by=user,
        activated_at=timezone.now(),
    )
    return user


@pytest.fixture
def profile(user):
    """Company profile of ``user``: VAT 20%, EUR."""
    profile = get_or_create_profile(user=user)
    profile.company_name = 'Atelier Kouamé'
    profile.company_email = 'contact@atelier.example.com'
    profile.vat_rate = Decimal('20')
    profile.save()
    return profile


@pytest.fixture
def client_record(user):
    """A client of ``user``."""
    return Client.objects.create(
        user=user,
        name='Awa Traoré',
        company='Traoré SARL',
        email='awa@traore.example.com',
    )


@pytest.fixture
def items():
    return [
        {'designation': 'Peinture salon', 'quantity': Decimal('2'), 'unit_price': Decimal('150.00')},
        {'designation': 'Fournitures', 'quantity': Decimal('3'), 'unit_price': Decimal('19.99'), 'vat_rate': Decimal('5.5')},
    ]


@pytest.fixture
def quote(user, profile, client_record, items):
    """A draft quote of ``user``."""
    return create_quote(user=user, items=items, client_id=client_record.id)
