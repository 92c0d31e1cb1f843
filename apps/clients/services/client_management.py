"""
Client management service.

Every lookup is scoped to the owner: another user's client ID behaves
exactly like a missing one.
"""

from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.clients.models import Client
from apps.core.sanitizers import sanitize_input

from .exceptions import ClientNotFoundError

CLIENT_FIELDS = ('name', 'company', 'email', 'phone', 'address')


def _clean(fields: dict) -> dict:
    return {
        name: sanitize_input(value) if isinstance(value, str) else value
        for name, value in fields.items()
        if name in CLIENT_FIELDS
    }


def get_user_clients(*, user: User, search: Optional[str] = None) -> QuerySet:
    """
    List the user's clients ordered by name.

    Args:
        user: Owner
        search: Optional case-insensitive match on name, company or email

    Returns:
        QuerySet of Client
    """
    queryset = Client.objects.filter(user=user)

    if search:
        term = search.strip()
        queryset = queryset.filter(
            Q(name__icontains=term) |
            Q(company__icontains=term) |
            Q(email__icontains=term)
        )

    return queryset.order_by('name')


def get_client(*, client_id: UUID, user: User) -> Client:
    """
    Raises:
        ClientNotFoundError: If the client is missing or not owned by user
    """
    try:
        return Client.objects.get(id=client_id, user=user)
    except Client.DoesNotExist:
        raise ClientNotFoundError(f"Client with ID {client_id} not found")


@transaction.atomic
def create_client(*, user: User, name: str, **fields) -> Client:
    """Create a client owned by ``user``."""
    cleaned = _clean(fields)
    return Client.objects.create(user=user, name=sanitize_input(name), **cleaned)


@transaction.atomic
def update_client(*, client_id: UUID, user: User, **fields) -> Client:
    """
    Update a client; the owner cannot be changed.

    Raises:
        ClientNotFoundError: If the client is missing or not owned by user
    """
    try:
        client = Client.objects.select_for_update().get(id=client_id, user=user)
    except Client.DoesNotExist:
        raise ClientNotFoundError(f"Client with ID {client_id} not found")

    for name, value in _clean(fields).items():
        setattr(client, name, value)
    client.save()

    return client


@transaction.atomic
def delete_client(*, client_id: UUID, user: User) -> None:
    """
    Delete a client. Its quotes are kept without a client.

    Raises:
        ClientNotFoundError: If the client is missing or not owned by user
    """
    deleted, _ = Client.objects.filter(id=client_id, user=user).delete()
    if not deleted:
        raise ClientNotFoundError(f"Client with ID {client_id} not found")


@transaction.atomic
def find_or_create_client(*, user: User, name: str, **fields) -> Client:
    """
    Reuse the user's client with this exact name, or create it.

    Used when a quote is created with an inline client.
    """
    name = sanitize_input(name)
    client = (
        Client.objects
        .filter(user=user, name=name)
        .order_by('created_at')
        .first()
    )
    if client is not None:
        return client

    return Client.objects.create(user=user, name=name, **_clean(fields))
