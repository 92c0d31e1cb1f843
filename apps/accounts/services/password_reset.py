"""
Password reset by emailed link.

Tokens come from Django's ``default_token_generator``: they expire after
``PASSWORD_RESET_TIMEOUT`` and stop working once the password changes, so
nothing is stored on the user. The link carries ``<uidb64>.<token>``.
"""

import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.contrib.auth.tokens import default_token_generator
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils.encoding import force_bytes
from django.utils.http import urlsafe_base64_encode, urlsafe_base64_decode

from .emails import send_password_reset_email
from .exceptions import InvalidTokenError

User = get_user_model()
logger = logging.getLogger(__name__)

TOKEN_SEPARATOR = '.'


def make_password_reset_token(user: User) -> str:
    uidb64 = urlsafe_base64_encode(force_bytes(user.pk))
    return f"{uidb64}{TOKEN_SEPARATOR}{default_token_generator.make_token(user)}"


def _user_from_token(token: str) -> Optional[User]:
    uidb64, _, user_token = (token or '').partition(TOKEN_SEPARATOR)
    try:
        user_id = urlsafe_base64_decode(uidb64).decode()
        user = User.objects.select_for_update().get(pk=user_id, is_active=True)
    except (TypeError, ValueError, OverflowError, ValidationError, User.DoesNotExist):
        return None

    if not default_token_generator.check_token(user, user_token):
        return None
    return user


def request_password_reset(*, email: str) -> Optional[str]:
    """
    Email a reset link to the active account using ``email``.

    Returns:
        The token, or None when no active account matches. Callers answer
        the same way in both cases.
    """
    user = User.objects.filter(email__iexact=email.strip(), is_active=True).first()
    if user is None:
        logger.info("Password reset requested for an unknown address")
        return None

    token = make_password_reset_token(user)
    send_password_reset_email(user, token)
    return token


@transaction.atomic
def confirm_password_reset(*, token: str, new_password: str) -> User:
    """
    Raises:
        InvalidTokenError: If the token is malformed, expired or already used
    """
    user = _user_from_token(token)
    if user is None:
        raise InvalidTokenError("Lien de réinitialisation invalide ou expiré")

    user.set_password(new_password)
    user.save(update_fields=['password'])
    logger.info("Password reset for user %s", user.id)
    return user
