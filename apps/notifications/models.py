from django.db import models
import uuid


class NotificationType(models.TextChoices):
    NEW_QUOTE = 'new_quote', 'Nouveau devis'
    QUOTE_ACCEPTED = 'quote_accepted', 'Devis accepté'
    QUOTE_STATUS_CHANGED = 'quote_status_changed', 'Statut du devis modifié'


class NotificationPreferences(models.Model):
    """Email notification switches of one user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='notification_preferences',
    )
    # Master switch
    email_notifications = models.BooleanField(default=True)
    new_quotes_notifications = models.BooleanField(default=True)
    accepted_quotes_notifications = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_notification_preferences'
        verbose_name_plural = 'notification preferences'

    def __str__(self):
        return f"Notification preferences of {self.user}"

    def allows(self, notification_type):
        """Whether an email of ``notification_type`` may be sent."""
        if not self.email_notifications:
            return False
        if notification_type == NotificationType.NEW_QUOTE:
            return self.new_quotes_notifications
        if notification_type == NotificationType.QUOTE_ACCEPTED:
            return self.accepted_quotes_notifications
        return True
