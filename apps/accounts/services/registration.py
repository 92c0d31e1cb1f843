"""
Sign-up and email confirmation.

A Solvix account is usable right after sign-up: it comes with an empty
company profile (VAT 20%, EUR) and every notification switched on. The
address is confirmed later through the emailed link.
"""

import logging
import secrets

from django.contrib.auth import get_user_model
from django.db import transaction, IntegrityError

from apps.notifications.services import get_notification_preferences
from apps.profiles.services import get_or_create_profile

from .emails import send_verification_email
from .exceptions import EmailAlreadyRegisteredError, InvalidTokenError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(*, email: str, password: str, display_name: str = "") -> User:
    """
    Create an account with its profile and notification preferences.

    The confirmation email is sent once the transaction commits.

    Raises:
        EmailAlreadyRegisteredError: If the address is taken
    """
    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                display_name=display_name,
                verification_token=secrets.token_urlsafe(32),
            )
    except IntegrityError:
        raise EmailAlreadyRegisteredError(f"Un compte existe déjà pour {email}")

    get_or_create_profile(user=user)
    get_notification_preferences(user=user)

    transaction.on_commit(lambda: send_verification_email(user))
    logger.info("Registered user %s", user.id)
    return user


@transaction.atomic
def verify_user_email(*, user: User, token: str) -> User:
    """Confirm the address of ``user``; the token is single use."""
    user = User.objects.select_for_update().get(pk=user.pk)

    if not token or not user.verification_token or not secrets.compare_digest(
        user.verification_token, token
    ):
        raise InvalidTokenError("Lien de confirmation invalide")

    user.email_verified = True
    user.verification_token = None
    user.save(update_fields=['email_verified', 'verification_token'])
    logger.info("Email verified for user %s", user.id)
    return user
