"""Solvix administrators: staff users allowed to manage activation codes."""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from .exceptions import AccountNotFoundError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def set_admin_status(*, email: str, is_admin: bool) -> User:
    """
    Grant or revoke the administrator flag of an active account.

    Raises:
        AccountNotFoundError: If no active account uses ``email``
    """
    user = (
        User.objects
        .select_for_update()
        .filter(email__iexact=email.strip(), is_active=True)
        .first()
    )
    if user is None:
        raise AccountNotFoundError(f"Aucun compte actif pour {email}")

    if user.is_staff != is_admin:
        user.is_staff = is_admin
        user.save(update_fields=['is_staff'])
        logger.info("Admin flag of user %s set to %s", user.id, is_admin)
    return user
