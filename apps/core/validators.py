"""Format validators reused by serializers and services."""

import re

from django.core.exceptions import ValidationError
from django.core.validators import EmailValidator
from django.utils.translation import gettext as _

ACTIVATION_CODE_RE = re.compile(r'^SOLVIX-[A-Z0-9]{8}$')
# International (+33 6..., 2250707...) or national with a trunk 0 (06 12 34 56 78)
PHONE_RE = re.compile(r'^(?:\+?[1-9]\d{7,14}|0\d{8,14})$')
PASSWORD_FORBIDDEN_RE = re.compile(r'[<>"\'&]')

_email_validator = EmailValidator()


def normalize_activation_code(code):
    """Trim and upper-case a user supplied activation code."""
    if not isinstance(code, str):
        return ''
    return code.strip().upper()


def is_valid_activation_code(code):
    """True when ``code`` matches SOLVIX-XXXXXXXX once normalized."""
    return bool(ACTIVATION_CODE_RE.match(normalize_activation_code(code)))


def is_valid_email(email):
    if not email or not isinstance(email, str) or len(email) > 254:
        return False
    if '..' in email or email.startswith('.') or email.endswith('.'):
        return False
    try:
        _email_validator(email)
    except ValidationError:
        return False
    return True


def clean_phone_number(phone):
    """Keep digits and '+' only."""
    return re.sub(r'[^\d+]', '', phone or '')


def is_valid_phone_number(phone):
    if not phone or not isinstance(phone, str):
        return False
    return bool(PHONE_RE.match(clean_phone_number(phone)))


def validate_phone_number(value):
    """Model/serializer validator; blank values are allowed."""
    if value and not is_valid_phone_number(value):
        raise ValidationError(_('Format de téléphone invalide'), code='invalid_phone')


class SolvixPasswordValidator:
    """
    Password strength rules of the sign-up form.

    At least one lowercase letter, one uppercase letter and one digit,
    8 to 128 characters, and none of the characters < > " ' &.
    """

    min_length = 8
    max_length = 128

    def validate(self, password, user=None):
        errors = []
        if len(password) < self.min_length:
            errors.append(_('Au moins 8 caractères'))
        if len(password) > self.max_length:
            errors.append(_('Maximum 128 caractères'))
        if not re.search(r'[a-z]', password):
            errors.append(_('Au moins une minuscule'))
        if not re.search(r'[A-Z]', password):
            errors.append(_('Au moins une majuscule'))
        if not re.search(r'\d', password):
            errors.append(_('Au moins un chiffre'))
        if PASSWORD_FORBIDDEN_RE.search(password):
            errors.append(_('Caractères non autorisés détectés'))
        if errors:
            raise ValidationError(
                [ValidationError(message, code='password_rule') for message in errors]
            )

    def get_help_text(self):
        return _(
            'Votre mot de passe doit contenir 8 à 128 caractères, '
            'une minuscule, une majuscule et un chiffre.'
        )
