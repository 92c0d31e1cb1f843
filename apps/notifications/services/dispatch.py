"""
Quote notification emails.

send_notification() reports failures in its result instead of raising:
a failed email must never break the quote operation that triggered it.
"""

import logging
from smtplib import SMTPException
from typing import Optional

from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction, DatabaseError
from django.utils import timezone

from apps.accounts.models import User
from apps.notifications.models import NotificationType
from apps.quotes.models import QuoteStatus

from .exceptions import NotificationsServiceError, UnsupportedNotificationError
from .preferences import get_notification_preferences

logger = logging.getLogger(__name__)


def build_notification(notification_type: str, data: dict):
    """
    Subject and body of a notification.

    Raises:
        UnsupportedNotificationError: If the type is unknown
    """
    number = data.get('quote_number', '')
    client_name = data.get('client_name') or 'Client'
    amount = f"{data.get('amount', 0)} {data.get('currency', '')}".strip()

    if notification_type == NotificationType.NEW_QUOTE:
        subject = f"Nouveau devis créé - {number}"
        message = f"Nouveau devis {number} créé pour {client_name} - Montant: {amount}"
    elif notification_type == NotificationType.QUOTE_ACCEPTED:
        subject = f"Félicitations ! Devis accepté - {number}"
        message = f"Votre devis {number} a été accepté par {client_name} - Montant: {amount}"
    elif notification_type == NotificationType.QUOTE_STATUS_CHANGED:
        subject = f"Statut du devis modifié - {number}"
        message = (
            f'Le devis {number} est passé de "{data.get("old_status", "")}" '
            f'à "{data.get("new_status", "")}"'
        )
    else:
        raise UnsupportedNotificationError(
            f"Type de notification non pris en charge: {notification_type}"
        )

    return subject, message


def send_notification(*, notification_type: str, user: User, data: dict) -> dict:
    """
    Email ``user`` about a quote event, honouring their preferences.

    Args:
        notification_type: new_quote, quote_accepted or quote_status_changed
        user: Recipient
        data: quote_number, client_name, amount, currency and, for status
            changes, old_status and new_status

    Returns:
        ``{'success': True, 'sent': bool, ...}`` or
        ``{'success': False, 'error': str, 'timestamp': str}``
    """
    try:
        subject, message = build_notification(notification_type, data)

        preferences = get_notification_preferences(user=user)
        if not preferences.allows(notification_type):
            logger.info("Notification %s disabled for user %s", notification_type, user.id)
            return {
                'success': True,
                'sent': False,
                'message': 'Notification désactivée par l\'utilisateur',
            }

        send_mail(
            subject=subject,
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[user.email],
        )
    except (NotificationsServiceError, SMTPException, OSError, DatabaseError) as e:
        logger.warning("Notification %s failed for user %s: %s", notification_type, user.id, e)
        return {
            'success': False,
            'error': str(e) or 'Erreur inconnue',
            'timestamp': timezone.now().isoformat(),
        }

    logger.info("Notification %s sent to user %s", notification_type, user.id)
    return {
        'success': True,
        'sent': True,
        'message': f"Notification {notification_type} traitée avec succès",
        'details': {
            'subject': subject,
            'type': notification_type,
            'user_id': str(user.id),
            'timestamp': timezone.now().isoformat(),
        },
    }


def _quote_data(devis) -> dict:
    return {
        'quote_number': devis.quote_number,
        'client_name': devis.client.name if devis.client_id else 'Client',
        'amount': devis.total_ttc,
        'currency': devis.currency,
    }


def notify_on_commit(*, notification_type: str, user: User, data: dict) -> None:
    """Send once the current transaction commits (immediately outside one)."""
    transaction.on_commit(
        lambda: send_notification(notification_type=notification_type, user=user, data=data)
    )


def notify_new_quote(devis) -> None:
    notify_on_commit(
        notification_type=NotificationType.NEW_QUOTE,
        user=devis.user,
        data=_quote_data(devis),
    )


def notify_status_change(devis, old_status: str, new_status: Optional[str] = None) -> None:
    """
    Notify a status change; accepted quotes get the congratulation email.

    Statuses are passed as stored values and rendered with their labels.
    """
    new_status = new_status or devis.status
    if new_status == QuoteStatus.ACCEPTED:
        notify_on_commit(
            notification_type=NotificationType.QUOTE_ACCEPTED,
            user=devis.user,
            data=_quote_data(devis),
        )
        return

    data = _quote_data(devis)
    data['old_status'] = QuoteStatus(old_status).label
    data['new_status'] = QuoteStatus(new_status).label
    notify_on_commit(
        notification_type=NotificationType.QUOTE_STATUS_CHANGED,
        user=devis.user,
        data=data,
    )
