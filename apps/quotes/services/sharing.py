"""
Sending a quote to its recipient: by email with the PDF attached, or as
a WhatsApp share link.
"""

import logging
from smtplib import SMTPException
from typing import Optional
from urllib.parse import quote

from django.conf import settings
from django.core.mail import EmailMessage

from apps.accounts.models import User
from apps.core.validators import is_valid_email
from apps.quotes.models import Devis

from .exceptions import QuoteShareError, InvalidQuoteDataError
from .pdf_export import render_quote_pdf, pdf_filename
from .quote_management import get_quote

logger = logging.getLogger(__name__)

WHATSAPP_SHARE_URL = 'https://wa.me/?text='


def default_email_subject(devis: Devis) -> str:
    return f"Devis {devis.quote_number}"


def default_email_message(devis: Devis) -> str:
    return (
        "Bonjour,\n\n"
        f"Veuillez trouver ci-joint le devis {devis.quote_number} que vous avez demandé.\n\n"
        "N'hésitez pas à me contacter si vous avez des questions.\n\n"
        "Cordialement,"
    )


def default_whatsapp_message(devis: Devis) -> str:
    return (
        "Bonjour,\n\n"
        f"Voici le devis {devis.quote_number} que vous avez demandé.\n\n"
        "N'hésitez pas à me contacter si vous avez des questions.\n\n"
        "Cordialement"
    )


def share_quote_by_email(
    *,
    quote_id,
    user: User,
    recipient: Optional[str] = None,
    subject: Optional[str] = None,
    message: Optional[str] = None,
) -> Devis:
    """
    Email a quote as a PDF attachment.

    The recipient defaults to the quote's client email; replies go to
    the sender.

    Raises:
        QuoteNotFoundError: If the quote is missing or not owned by user
        InvalidQuoteDataError: If there is no valid recipient
        QuoteShareError: If the email could not be sent
    """
    devis = get_quote(quote_id=quote_id, user=user)

    recipient = recipient or (devis.client.email if devis.client_id else '')
    if not is_valid_email(recipient):
        raise InvalidQuoteDataError("Adresse email du destinataire invalide")

    email = EmailMessage(
        subject=subject or default_email_subject(devis),
        body=message or default_email_message(devis),
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[recipient],
        reply_to=[user.email],
    )
    email.attach(pdf_filename(devis), render_quote_pdf(devis), 'application/pdf')

    try:
        email.send()
    except (SMTPException, OSError) as e:
        logger.error("Sending quote %s to %s failed: %s", devis.quote_number, recipient, e)
        raise QuoteShareError("L'envoi du devis a échoué")

    logger.info("Quote %s emailed to %s", devis.quote_number, recipient)
    return devis


def whatsapp_share_url(devis: Devis, message: Optional[str] = None) -> str:
    return WHATSAPP_SHARE_URL + quote(message or default_whatsapp_message(devis), safe='')
