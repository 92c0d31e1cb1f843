"""Account deletion."""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.clients.models import Client
from apps.notifications.models import NotificationPreferences
from apps.profiles.models import Profile
from apps.quotes.models import Devis

from .exceptions import PasswordConfirmationError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def delete_user_account(*, user: User, password: str) -> None:
    """
    Delete the user's business data and anonymize the account.

    Quotes, clients, the company profile and notification preferences go
    away. The user row stays, anonymized and deactivated, because used
    activation codes still point to it.

    Raises:
        PasswordConfirmationError: If ``password`` is wrong
    """
    user = User.objects.select_for_update().get(pk=user.pk)
    if not user.check_password(password):
        raise PasswordConfirmationError("Mot de passe incorrect")

    Devis.objects.filter(user=user).delete()
    Client.objects.filter(user=user).delete()
    Profile.objects.filter(user=user).delete()
    NotificationPreferences.objects.filter(user=user).delete()
    user.anonymize()
    logger.info("Account %s deleted and anonymized", user.id)
