"""Services for notification preferences and quote emails."""

from .exceptions import NotificationsServiceError, UnsupportedNotificationError
from .preferences import get_notification_preferences, update_notification_preferences
from .dispatch import (
    build_notification,
    send_notification,
    notify_on_commit,
    notify_new_quote,
    notify_status_change,
)

__all__ = [
    # Exceptions
    'NotificationsServiceError',
    'UnsupportedNotificationError',
    # Preferences
    'get_notification_preferences',
    'update_notification_preferences',
    # Dispatch
    'build_notification',
    'send_notification',
    'notify_on_commit',
    'notify_new_quote',
    'notify_status_change',
]
