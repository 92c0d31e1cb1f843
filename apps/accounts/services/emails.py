"""Transactional emails of the auth flow."""

import logging

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


def send_verification_email(user) -> None:
    link = f"{settings.FRONTEND_URL}/verify-email?token={user.verification_token}"
    send_mail(
        subject='Confirmez votre adresse email - Solvix',
        message=(
            f"Bonjour {user.get_display_name()},\n\n"
            f"Bienvenue sur Solvix ! Confirmez votre adresse email :\n{link}\n\n"
            "L'équipe Solvix"
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
    )
    logger.info("Verification email sent to user %s", user.id)


def send_password_reset_email(user, reset_token: str) -> None:
    link = f"{settings.FRONTEND_URL}/reset-password?token={reset_token}"
    send_mail(
        subject='Réinitialisation de votre mot de passe - Solvix',
        message=(
            f"Bonjour {user.get_display_name()},\n\n"
            f"Pour choisir un nouveau mot de passe, suivez ce lien :\n{link}\n\n"
            "Si vous n'êtes pas à l'origine de cette demande, ignorez cet email.\n\n"
            "L'équipe Solvix"
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
    )
    logger.info("Password reset email sent to user %s", user.id)
