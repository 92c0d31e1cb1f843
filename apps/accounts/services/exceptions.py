"""Domain-specific exceptions for account services."""


class AccountsServiceError(Exception):
    """Base exception for account services."""
    pass


class EmailAlreadyRegisteredError(AccountsServiceError):
    pass


class InvalidCredentialsError(AccountsServiceError):
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when a deactivated or anonymized account tries to sign in."""
    pass


class InvalidTokenError(AccountsServiceError):
    """Raised for a wrong email verification or password reset token."""
    pass


class PasswordConfirmationError(AccountsServiceError):
    pass


class AccountNotFoundError(AccountsServiceError):
    pass
