"""
Company profile service.

A user has exactly one profile; reads create it on demand so that the
quote pipeline can always rely on a VAT configuration.
"""

import logging

from django.db import transaction, IntegrityError

from apps.accounts.models import User
from apps.core.sanitizers import sanitize_input
from apps.profiles.models import Profile
from apps.quotes.currency import is_supported_currency

from .exceptions import ProfileAlreadyExistsError, UnsupportedCurrencyError

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    'company_name',
    'company_address',
    'company_phone',
    'company_email',
    'company_rccm',
    'company_ncc',
    'company_logo',
    'company_signature',
    'signature_type',
    'vat_enabled',
    'vat_rate',
    'default_currency',
)

# Image data URLs must not be truncated
UNSANITIZED_FIELDS = ('company_logo', 'company_signature')


def _clean_fields(fields: dict) -> dict:
    cleaned = {}
    for name, value in fields.items():
        if name not in EDITABLE_FIELDS:
            continue
        if isinstance(value, str) and name not in UNSANITIZED_FIELDS:
            value = sanitize_input(value)
        cleaned[name] = value

    currency = cleaned.get('default_currency')
    if currency is not None:
        currency = currency.upper()
        if not is_supported_currency(currency):
            raise UnsupportedCurrencyError(f"Unsupported currency: {currency}")
        cleaned['default_currency'] = currency

    return cleaned


def get_or_create_profile(*, user: User) -> Profile:
    """
    Return the user's profile, creating an empty one on first access.

    Args:
        user: Profile owner

    Returns:
        Profile instance
    """
    profile, created = Profile.objects.get_or_create(user=user)
    if created:
        logger.info("Created empty profile for user %s", user.id)
    return profile


@transaction.atomic
def create_profile(*, user: User, **fields) -> Profile:
    """
    Create the user's profile with the given company fields.

    Raises:
        ProfileAlreadyExistsError: If the user already has a profile
        UnsupportedCurrencyError: If default_currency is unknown
    """
    cleaned = _clean_fields(fields)

    try:
        with transaction.atomic():
            return Profile.objects.create(user=user, **cleaned)
    except IntegrityError:
        raise ProfileAlreadyExistsError("Profile already exists for this user")


@transaction.atomic
def update_profile(*, user: User, **fields) -> Profile:
    """
    Update the user's profile; ownership is forced to ``user``.

    Unknown fields are ignored.

    Raises:
        UnsupportedCurrencyError: If default_currency is unknown
    """
    cleaned = _clean_fields(fields)

    get_or_create_profile(user=user)
    profile = Profile.objects.select_for_update().get(user=user)

    for name, value in cleaned.items():
        setattr(profile, name, value)
    profile.save()

    return profile
