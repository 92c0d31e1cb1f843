"""
Monthly quote quota.

Free users may create SOLVIX_FREE_QUOTA quotes per calendar month;
premium users are unlimited. Usage is counted for everyone.
"""

import logging

from django.conf import settings
from django.db import transaction, DatabaseError
from django.db.models import F
from django.utils import timezone

from apps.accounts.models import User
from apps.premium.models import QuotaUsage

from .exceptions import QuotaExceededError
from .status import is_premium_user

logger = logging.getLogger(__name__)


def _free_quota() -> int:
    return settings.SOLVIX_FREE_QUOTA


def _current_period():
    today = timezone.localdate()
    return today.year, today.month


def _fallback_quota_info() -> dict:
    return {
        'used': 0,
        'remaining': _free_quota(),
        'total': _free_quota(),
        'can_create_quote': True,
        'is_premium': False,
    }


def _quota_info(*, used: int, is_premium: bool) -> dict:
    if is_premium:
        return {
            'used': used,
            'remaining': None,
            'total': None,
            'can_create_quote': True,
            'is_premium': True,
        }

    total = _free_quota()
    remaining = max(0, total - used)
    return {
        'used': used,
        'remaining': remaining,
        'total': total,
        'can_create_quote': remaining > 0,
        'is_premium': False,
    }


def get_user_quota_info(*, user: User) -> dict:
    """
    Quota of the current month.

    Premium users get ``remaining`` and ``total`` set to None. When the
    quota store cannot be read the free default is returned.

    Returns:
        Dict with used, remaining, total, can_create_quote, is_premium
    """
    year, month = _current_period()
    try:
        premium = is_premium_user(user=user)
        used = (
            QuotaUsage.objects
            .filter(user=user, year=year, month=month)
            .values_list('quotes_created', flat=True)
            .first()
        ) or 0
    except DatabaseError:
        logger.exception("Quota lookup failed for user %s, using fallback", user.id)
        return _fallback_quota_info()

    return _quota_info(used=used, is_premium=premium)


def can_create_quote(*, user: User) -> bool:
    return get_user_quota_info(user=user)['can_create_quote']


@transaction.atomic
def increment_user_quota(*, user: User) -> int:
    """
    Count one more quote for the current month.

    Returns:
        The month's new quote count
    """
    year, month = _current_period()
    usage, _ = QuotaUsage.objects.get_or_create(user=user, year=year, month=month)
    QuotaUsage.objects.filter(pk=usage.pk).update(quotes_created=F('quotes_created') + 1)
    usage.refresh_from_db(fields=['quotes_created'])
    return usage.quotes_created


def consume_quote_slot(*, user: User) -> int:
    """
    Check the quota and count one quote under a row lock.

    Must run inside the transaction that creates the quote, so the check
    and the increment cannot interleave with a concurrent creation.

    Returns:
        The month's new quote count

    Raises:
        QuotaExceededError: If a free user has no quote left
    """
    year, month = _current_period()
    usage, _ = (
        QuotaUsage.objects
        .select_for_update()
        .get_or_create(user=user, year=year, month=month)
    )

    if not is_premium_user(user=user) and usage.quotes_created >= _free_quota():
        raise QuotaExceededError(
            f"Quota mensuel atteint ({_free_quota()} devis gratuits). "
            "Passez à Premium pour des devis illimités."
        )

    usage.quotes_created += 1
    usage.save(update_fields=['quotes_created', 'updated_at'])
    return usage.quotes_created
