"""Notification preferences service."""

from django.db import transaction

from apps.accounts.models import User
from apps.notifications.models import NotificationPreferences

PREFERENCE_FIELDS = (
    'email_notifications',
    'new_quotes_notifications',
    'accepted_quotes_notifications',
)


def get_notification_preferences(*, user: User) -> NotificationPreferences:
    """Return the user's preferences, creating the all-enabled default."""
    preferences, _ = NotificationPreferences.objects.get_or_create(user=user)
    return preferences


@transaction.atomic
def update_notification_preferences(*, user: User, **flags) -> NotificationPreferences:
    """
    Update some switches; unknown keys are ignored.

    Returns:
        Updated NotificationPreferences
    """
    get_notification_preferences(user=user)
    preferences = NotificationPreferences.objects.select_for_update().get(user=user)

    changed = []
    for name in PREFERENCE_FIELDS:
        if name in flags:
            setattr(preferences, name, bool(flags[name]))
            changed.append(name)

    if changed:
        preferences.save(update_fields=changed + ['updated_at'])

    return preferences
