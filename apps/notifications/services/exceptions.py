"""Domain-specific exceptions for notification services."""


class NotificationsServiceError(Exception):
    """Base exception for notification services."""
    pass


class UnsupportedNotificationError(NotificationsServiceError):
    """Raised for an unknown notification type."""
    pass
