import pytest
from django.urls import reverse
from rest_framework import status
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User


def registration_data(**overrides):
    data = {
        'email': 'kofi.mensah@example.com',
        'password': 'Devis2026Ok',
        'password_confirm': 'Devis2026Ok',
        'display_name': 'Kofi Mensah',
    }
    data.update(overrides)
    return data


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_returns_tokens_and_user(self, api_client):
        response = api_client.post(reverse('users:register'), registration_data())

        assert response.status_code == status.HTTP_201_CREATED
        assert set(response.data['tokens']) == {'access', 'refresh'}
        assert response.data['user']['is_premium'] is False
        assert response.data['user']['email_verified'] is False

    def test_email_is_normalized(self, api_client):
        response = api_client.post(
            reverse('users:register'),
            registration_data(email='  Kofi.Mensah@Example.COM '),
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert User.objects.filter(email='kofi.mensah@example.com').exists()

    def test_display_name_is_optional(self, api_client):
        data = registration_data()
        del data['display_name']

        response = api_client.post(reverse('users:register'), data)

        assert response.status_code == status.HTTP_201_CREATED

    def test_duplicate_email(self, api_client, user):
        response = api_client.post(reverse('users:register'), registration_data(email=user.email))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_password_mismatch(self, api_client):
        response = api_client.post(
            reverse('users:register'),
            registration_data(password_confirm='Devis2026Ko'),
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data

    @pytest.mark.parametrize('password', [
        'Ab1',                  # too short
        'devis2026ok',          # no uppercase
        'DEVIS2026OK',          # no lowercase
        'DevisSansChiffre',     # no digit
        'Devis<2026>Ok',        # forbidden characters
    ])
    def test_password_rules(self, api_client, password):
        response = api_client.post(
            reverse('users:register'),
            registration_data(password=password, password_confirm=password),
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password' in response.data
        assert not User.objects.filter(email='kofi.mensah@example.com').exists()

    def test_invalid_email(self, api_client):
        response = api_client.post(reverse('users:register'), registration_data(email='kofi@'))
        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Login / Logout Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login(self, api_client, user):
        response = api_client.post(
            reverse('users:login'),
            {'email': user.email, 'password': 'TestPass123!'},
        )

        assert response.status_code == status.HTTP_200_OK
        assert set(response.data['tokens']) == {'access', 'refresh'}
        assert response.data['user']['email'] == user.email
        user.refresh_from_db()
        assert user.last_login is not None

    @pytest.mark.parametrize('email, password', [
        ('testuser@example.com', 'WrongPass123!'),
        ('nobody@example.com', 'TestPass123!'),
    ])
    def test_bad_credentials(self, api_client, user, email, password):
        response = api_client.post(reverse('users:login'), {'email': email, 'password': password})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Invalid credentials'

    def test_inactive_user(self, api_client, user_inactive):
        response = api_client.post(
            reverse('users:login'),
            {'email': user_inactive.email, 'password': 'TestPass123!'},
        )

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)


@pytest.mark.django_db
class TestLogout:
    """Tests for POST /api/auth/logout/"""

    def test_logout(self, authenticated_client):
        response = authenticated_client.post(reverse('users:logout'), {})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Logout successful'

    def test_logout_requires_authentication(self, api_client):
        response = api_client.post(reverse('users:logout'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Current User Tests
# =============================================================================

@pytest.mark.django_db
class TestGetCurrentUser:
    """Tests for GET /api/auth/user/"""

    def test_current_user(self, authenticated_client, user):
        response = authenticated_client.get(reverse('users:current-user'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email
        assert response.data['display_name'] == 'Test User'
        assert response.data['is_admin'] is False
        assert response.data['is_premium'] is False

    def test_current_user_unauthenticated(self, api_client):
        response = api_client.get(reverse('users:current-user'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Update User Tests
# =============================================================================

@pytest.mark.django_db
class TestUpdateUser:
    """Tests for PATCH /api/auth/user/update/"""

    def test_update_display_name(self, authenticated_client, user):
        """Update user display name."""
        url = reverse('users:update-user')
        data = {'display_name': 'Updated Name'}
        response = authenticated_client.patch(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['display_name'] == 'Updated Name'
        user.refresh_from_db()
        assert user.display_name == 'Updated Name'

    def test_update_user_unauthenticated(self, api_client):
        """Cannot update the user when not authenticated."""
        url = reverse('users:update-user')
        data = {'display_name': 'Hacked'}
        response = api_client.patch(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_cannot_update_email(self, authenticated_client, user):
        """Email is read-only and cannot be updated."""
        url = reverse('users:update-user')
        original_email = user.email
        data = {'email': 'newemail@example.com'}
        authenticated_client.patch(url, data)

        user.refresh_from_db()
        assert user.email == original_email

    def test_cannot_grant_admin(self, authenticated_client, user):
        """The admin flag cannot be set through the API."""
        url = reverse('users:update-user')
        authenticated_client.patch(url, {'is_admin': True, 'is_staff': True}, format='json')

        user.refresh_from_db()
        assert user.is_staff is False


# =============================================================================
# Delete Account Tests
# =============================================================================

@pytest.mark.django_db
class TestDeleteAccount:
    """Tests for DELETE /api/auth/user/delete/"""

    def test_delete_account_success(self, authenticated_client, user):
        """Successfully delete account with GDPR anonymization."""
        url = reverse('users:delete-account')
        data = {
            'password': 'TestPass123!',
            'confirm': True,
        }
        response = authenticated_client.delete(url, data, format='json')

        assert response.status_code == status.HTTP_204_NO_CONTENT

        user.refresh_from_db()
        assert user.is_active is False
        assert user.gdpr_deleted_at is not None
        assert 'anonymized' in user.email

    def test_delete_account_wrong_password(self, authenticated_client, user):
        """Cannot delete account with wrong password."""
        url = reverse('users:delete-account')
        data = {
            'password': 'WrongPassword!',
            'confirm': True,
        }
        response = authenticated_client.delete(url, data, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        user.refresh_from_db()
        assert user.is_active is True

    def test_delete_account_without_confirmation(self, authenticated_client, user):
        """Cannot delete account without confirmation."""
        url = reverse('users:delete-account')
        data = {
            'password': 'TestPass123!',
            'confirm': False,
        }
        response = authenticated_client.delete(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        user.refresh_from_db()
        assert user.is_active is True

    def test_delete_account_unauthenticated(self, api_client):
        """Cannot delete account when not authenticated."""
        url = reverse('users:delete-account')
        response = api_client.delete(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Admin Flag Tests
# =============================================================================

@pytest.mark.django_db
class TestIsAdmin:
    """Tests for GET /api/auth/is-admin/"""

    def test_regular_user_is_not_admin(self, authenticated_client):
        response = authenticated_client.get(reverse('users:is-admin'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'is_admin': False}

    def test_staff_user_is_admin(self, api_client, admin_user):
        refresh = RefreshToken.for_user(admin_user)
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')

        response = api_client.get(reverse('users:is-admin'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'is_admin': True}

    def test_current_user_reports_premium(self, authenticated_client):
        response = authenticated_client.get(reverse('users:current-user'))

        assert response.data['is_admin'] is False
        assert response.data['is_premium'] is False


# =============================================================================
# Email Verification Tests
# =============================================================================

@pytest.mark.django_db
class TestEmailVerification:
    """Tests for POST /api/auth/verify-email/"""

    def test_verify_email(self, api_client, user_unverified):
        api_client.force_authenticate(user=user_unverified)

        response = api_client.post(reverse('users:verify-email'), {'token': 'test-verification-token'})

        assert response.status_code == status.HTTP_200_OK
        user_unverified.refresh_from_db()
        assert user_unverified.email_verified is True
        assert user_unverified.verification_token is None

    def test_token_is_single_use(self, api_client, user_unverified):
        api_client.force_authenticate(user=user_unverified)
        url = reverse('users:verify-email')
        api_client.post(url, {'token': 'test-verification-token'})

        response = api_client.post(url, {'token': 'test-verification-token'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_wrong_token(self, api_client, user_unverified):
        api_client.force_authenticate(user=user_unverified)

        response = api_client.post(reverse('users:verify-email'), {'token': 'invalid-token'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        user_unverified.refresh_from_db()
        assert user_unverified.email_verified is False

    def test_unauthenticated(self, api_client):
        response = api_client.post(reverse('users:verify-email'), {'token': 'some-token'})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Password Reset Tests
# =============================================================================

def reset_payload(token, password='Nouveau2026Ok', confirm=None):
    return {
        'token': token,
        'new_password': password,
        'new_password_confirm': confirm or password,
    }


@pytest.mark.django_db
class TestPasswordReset:
    """Tests for /api/auth/password-reset/ and /api/auth/password-reset/confirm/"""

    @pytest.mark.parametrize('email', ['resetuser@example.com', 'nobody@example.com'])
    def test_request_gives_same_answer(self, api_client, reset_user, mailoutbox, email):
        response = api_client.post(reverse('users:password-reset'), {'email': email})

        assert response.status_code == status.HTTP_200_OK
        assert 'token' not in response.data
        assert len(mailoutbox) == (1 if email == reset_user.email else 0)

    def test_request_keeps_pending_email_verification(self, api_client, user_unverified, mailoutbox):
        api_client.post(reverse('users:password-reset'), {'email': user_unverified.email})

        user_unverified.refresh_from_db()
        assert user_unverified.verification_token == 'test-verification-token'
        assert 'reset-password?token=' in mailoutbox[0].body

    def test_confirm(self, api_client, reset_user, reset_token):
        response = api_client.post(reverse('users:password-reset-confirm'), reset_payload(reset_token))

        assert response.status_code == status.HTTP_200_OK
        reset_user.refresh_from_db()
        assert reset_user.check_password('Nouveau2026Ok')

    def test_emailed_token_works(self, api_client, reset_user, mailoutbox):
        api_client.post(reverse('users:password-reset'), {'email': reset_user.email})
        token = mailoutbox[0].body.split('reset-password?token=')[1].split()[0]

        response = api_client.post(reverse('users:password-reset-confirm'), reset_payload(token))

        assert response.status_code == status.HTTP_200_OK

    def test_token_is_single_use(self, api_client, reset_token):
        url = reverse('users:password-reset-confirm')
        api_client.post(url, reset_payload(reset_token))

        response = api_client.post(url, reset_payload(reset_token, password='Encore2026Ok'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_expired_token(self, api_client, reset_user, reset_token, settings):
        settings.PASSWORD_RESET_TIMEOUT = -1

        response = api_client.post(reverse('users:password-reset-confirm'), reset_payload(reset_token))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        reset_user.refresh_from_db()
        assert reset_user.check_password('OldPass123!')

    @pytest.mark.parametrize('token', ['invalid-token', 'bm90LWEtdXVpZA.abc-def', ''])
    def test_invalid_token(self, api_client, token):
        response = api_client.post(reverse('users:password-reset-confirm'), reset_payload(token))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_password_mismatch(self, api_client, reset_token):
        response = api_client.post(
            reverse('users:password-reset-confirm'),
            reset_payload(reset_token, confirm='Autre2026Ok'),
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

# =============================================================================
# User Model Tests
# =============================================================================

@pytest.mark.django_db
class TestUserModel:
    """Tests for User model methods."""

    def test_create_user(self, db):
        """Create user with create_user method."""
        user = User.objects.create_user(
            email='model@example.com',
            password='TestPass123!',
        )

        assert user.email == 'model@example.com'
        assert user.check_password('TestPass123!')
        assert user.is_active is True
        assert user.is_staff is False

    def test_create_superuser(self, db):
        """Create superuser with create_superuser method."""
        user = User.objects.create_superuser(
            email='admin@example.com',
            password='AdminPass123!',
        )

        assert user.is_staff is True
        assert user.is_superuser is True
        assert user.email_verified is True

    def test_get_display_name(self, user):
        """get_display_name returns display_name or email prefix."""
        assert user.get_display_name() == 'Test User'

        user.display_name = ''
        user.save()
        assert user.get_display_name() == 'testuser'

    def test_anonymize(self, user):
        """Anonymize user data for GDPR compliance."""
        original_id = user.id
        user.anonymize()

        assert user.is_active is False
        assert 'anonymized' in user.email
        assert user.display_name == 'Deleted User'
        assert user.gdpr_deleted_at is not None
        assert user.id == original_id  # ID preserved

    def test_user_str(self, user):
        """User string representation is email."""
        assert str(user) == user.email


# =============================================================================
# Account Side Effects
# =============================================================================

@pytest.mark.django_db
class TestAccountSideEffects:
    """Data created at registration and removed at deletion."""

    def test_register_creates_profile_and_sends_verification(
        self, api_client, mailoutbox, django_capture_on_commit_callbacks
    ):
        url = reverse('users:register')
        data = {
            'email': 'Artisan@Example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        with django_capture_on_commit_callbacks(execute=True):
            response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        user = User.objects.get(email='artisan@example.com')
        assert user.profile.vat_enabled is True
        assert user.profile.default_currency == 'EUR'
        assert user.notification_preferences.email_notifications is True
        assert user.verification_token
        assert len(mailoutbox) == 1
        assert mailoutbox[0].to == ['artisan@example.com']
        assert user.verification_token in mailoutbox[0].body

    def test_delete_account_removes_business_data(self, authenticated_client, user):
        from apps.clients.models import Client
        from apps.notifications.models import NotificationPreferences
        from apps.profiles.models import Profile
        from apps.quotes.services import create_quote

        create_quote(
            user=user,
            items=[{'designation': 'Pose carrelage', 'quantity': 2, 'unit_price': 50}],
            client_data={'name': 'Mme Diallo'},
        )
        assert Client.objects.filter(user=user).count() == 1

        response = authenticated_client.delete(
            reverse('users:delete-account'),
            {'password': 'TestPass123!', 'confirm': True},
            format='json',
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Client.objects.filter(user=user).exists()
        assert not user.devis.exists()
        assert not Profile.objects.filter(user=user).exists()
        assert not NotificationPreferences.objects.filter(user=user).exists()
