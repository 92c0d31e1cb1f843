"""Domain-specific exceptions for client services."""


class ClientsServiceError(Exception):
    """Base exception for client services."""
    pass


class ClientNotFoundError(ClientsServiceError):
    """Raised when a client does not exist or belongs to another user."""
    pass
