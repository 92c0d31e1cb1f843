"""Email and password sign-in."""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Check credentials and stamp ``last_login``.

    Unknown address and wrong password raise the same error so the
    response does not tell which accounts exist.

    Raises:
        InvalidCredentialsError: On a wrong address or password
        InactiveAccountError: If the account was deactivated or deleted
    """
    user = User.objects.select_for_update().filter(email__iexact=email.strip()).first()
    if user is None or not user.check_password(password):
        logger.info("Failed sign-in for %s", email)
        raise InvalidCredentialsError("Email ou mot de passe incorrect")

    if not user.is_active:
        raise InactiveAccountError("Ce compte est désactivé")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])
    return user
