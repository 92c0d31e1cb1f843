"""Services for clients."""

from .exceptions import ClientsServiceError, ClientNotFoundError
from .client_management import (
    get_user_clients,
    get_client,
    create_client,
    update_client,
    delete_client,
    find_or_create_client,
)

__all__ = [
    # Exceptions
    'ClientsServiceError',
    'ClientNotFoundError',
    # Services
    'get_user_clients',
    'get_client',
    'create_client',
    'update_client',
    'delete_client',
    'find_or_create_client',
]
