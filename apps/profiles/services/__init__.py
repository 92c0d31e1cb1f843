"""Services for company profiles."""

from .exceptions import (
    ProfilesServiceError,
    ProfileAlreadyExistsError,
    UnsupportedCurrencyError,
)
from .profile_management import (
    get_or_create_profile,
    create_profile,
    update_profile,
)

__all__ = [
    # Exceptions
    'ProfilesServiceError',
    'ProfileAlreadyExistsError',
    'UnsupportedCurrencyError',
    # Services
    'get_or_create_profile',
    'create_profile',
    'update_profile',
]
