"""Account services: sign-up, sign-in, password reset, admins, deletion."""

from .exceptions import (
    AccountsServiceError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
    PasswordConfirmationError,
    AccountNotFoundError,
)
from .registration import register_user, verify_user_email
from .authentication import authenticate_user
from .password_reset import (
    make_password_reset_token,
    request_password_reset,
    confirm_password_reset,
)
from .administration import set_admin_status
from .account_management import delete_user_account

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'EmailAlreadyRegisteredError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidTokenError',
    'PasswordConfirmationError',
    'AccountNotFoundError',
    # Sign-up and sign-in
    'register_user',
    'verify_user_email',
    'authenticate_user',
    # Password reset
    'make_password_reset_token',
    'request_password_reset',
    'confirm_password_reset',
    # Administration
    'set_admin_status',
    'delete_user_account',
]
