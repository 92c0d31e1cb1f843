"""Domain-specific exceptions for profile services."""


class ProfilesServiceError(Exception):
    """Base exception for profile services."""
    pass


class ProfileAlreadyExistsError(ProfilesServiceError):
    """Raised when creating a second profile for the same user."""
    pass


class UnsupportedCurrencyError(ProfilesServiceError):
    """Raised when the default currency is not a supported one."""
    pass
