import pytest
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.premium.models import ActivationCode, CodeStatus


@pytest.fixture(autouse=True)
def clear_lockouts():
    """Lockout records live in the cache, which outlives a test transaction."""
    cache.clear()
    yield
    cache.clear()


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
def admin_user(db):
    """Create and return a Solvix administrator."""
    return User.objects.create_user(
        email='admin@solvix.app',
        password='AdminPass123!',
        display_name='Admin',
        email_verified=True,
        is_staff=True,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an API client authenticated as ``user``."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def admin_client(admin_user):
    """Return an API client authenticated as the administrator."""
    client = APIClient()
    refresh = RefreshToken.for_user(admin_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def available_code(admin_user):
    return ActivationCode.objects.create(code='SOLVIX-AVAIL001', created_by=admin_user)


@pytest.fixture
def sold_code(admin_user):
    return ActivationCode.objects.create(
        code='SOLVIX-AB12CD34',
        status=CodeStatus.SOLD,
        created_by=admin_user,
        sold_at=timezone.now(),
        customer_contact='+33612345678',
    )


@pytest.fixture
def premium_user(db, admin_user):
    """A user holding a USED code."""
    holder = User.objects.create_user(
        email='premium@example.com',
        password='PremiumPass123!',
        display_name='Premium User',
        email_verified=True,
    )
    ActivationCode.objects.create(
        code='SOLVIX-PREM0001',
        status=CodeStatus.USED,
        created_by=admin_user,
        activated_by=holder,
        activated_at=timezone.now(),
        device_fingerprint='a' * 32,
    )
    return holder
