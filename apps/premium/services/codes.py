"""
Activation code lifecycle.

AVAILABLE -> SOLD -> USED; REVOKED is reachable from every other state.
Codes are created, sold and revoked by administrators; any signed-in user
may activate one.
"""

import csv
import io
import logging
import secrets
import string
from typing import List, Optional

from django.db import transaction, IntegrityError
from django.db.models import Count, Q, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.core.validators import normalize_activation_code, is_valid_activation_code
from apps.premium.models import ActivationCode, CodeStatus

from .exceptions import (
    InsufficientPermissionsError,
    InvalidBatchSizeError,
    InvalidCodeFormatError,
    CodeNotFoundError,
    InvalidCodeTransitionError,
    CustomerContactRequiredError,
    InvalidActivationCodeError,
    ActivationBlockedError,
    AlreadyPremiumError,
)
from .lockout import get_block_status, record_failed_attempt, clear_attempts
from .status import is_premium_user

logger = logging.getLogger(__name__)

CODE_PREFIX = 'SOLVIX-'
CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_RANDOM_LENGTH = 8
MAX_BATCH_SIZE = 100

ORDERING_FIELDS = {
    'date': 'created_at',
    'status': 'status',
    'code': 'code',
}


def _require_admin(user: User) -> None:
    if user is None or not user.is_admin:
        raise InsufficientPermissionsError("Administrator access required")


def _random_code() -> str:
    suffix = ''.join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_RANDOM_LENGTH))
    return f"{CODE_PREFIX}{suffix}"


@transaction.atomic
def generate_activation_codes(
    *,
    count: int,
    created_by: User,
    max_retries: int = 5
) -> List[ActivationCode]:
    """
    Create ``count`` AVAILABLE codes.

    Each insert runs in its own savepoint so a collision on the unique
    code only retries that code.

    Args:
        count: Number of codes, 1 to 100
        created_by: Administrator generating the batch
        max_retries: Attempts per code before giving up

    Returns:
        List of created ActivationCode

    Raises:
        InsufficientPermissionsError: If created_by is not an admin
        InvalidBatchSizeError: If count is out of range
        RuntimeError: If a unique code cannot be generated
    """
    _require_admin(created_by)

    if not 1 <= count <= MAX_BATCH_SIZE:
        raise InvalidBatchSizeError(f"Count must be between 1 and {MAX_BATCH_SIZE}")

    created = []
    for _ in range(count):
        for attempt in range(max_retries):
            try:
                with transaction.atomic():
                    created.append(
                        ActivationCode.objects.create(code=_random_code(), created_by=created_by)
                    )
                break
            except IntegrityError:
                if attempt == max_retries - 1:
                    raise RuntimeError(
                        f"Failed to generate unique activation code after {max_retries} attempts"
                    )

    logger.info("Generated %d activation code(s) by %s", len(created), created_by.id)
    return created


def _get_locked_code(code: str) -> ActivationCode:
    try:
        return ActivationCode.objects.select_for_update().get(code=normalize_activation_code(code))
    except ActivationCode.DoesNotExist:
        raise CodeNotFoundError(f"Activation code {code} not found")


@transaction.atomic
def mark_code_as_sold(
    *,
    code: str,
    customer_contact: str,
    sold_by: User,
    customer_name: str = ''
) -> ActivationCode:
    """
    Record the sale of an AVAILABLE code.

    Raises:
        InsufficientPermissionsError: If sold_by is not an admin
        CustomerContactRequiredError: If the contact is blank
        CodeNotFoundError: If the code does not exist
        InvalidCodeTransitionError: If the code is not AVAILABLE
    """
    _require_admin(sold_by)

    customer_contact = (customer_contact or '').strip()
    if not customer_contact:
        raise CustomerContactRequiredError("Le contact client est requis")

    activation = _get_locked_code(code)
    if activation.status != CodeStatus.AVAILABLE:
        raise InvalidCodeTransitionError(
            f"Code {activation.code} cannot be sold from status {activation.status}"
        )

    activation.status = CodeStatus.SOLD
    activation.sold_at = timezone.now()
    activation.customer_contact = customer_contact
    activation.customer_name = (customer_name or '').strip()
    activation.save(update_fields=['status', 'sold_at', 'customer_contact', 'customer_name'])

    logger.info("Activation code %s sold", activation.code)
    return activation


def activate_premium_code(*, user: User, code: str, device_fingerprint: str) -> ActivationCode:
    """
    Activate premium for ``user`` with a SOLD (or directly sold AVAILABLE) code.

    A locked out user is refused before anything else. A malformed code
    does not count as an attempt; unknown, used or revoked codes do.

    Args:
        user: Activating user
        code: Code as typed by the user
        device_fingerprint: Fingerprint the code gets bound to

    Returns:
        The USED ActivationCode

    Raises:
        ActivationBlockedError: If the user is locked out
        InvalidCodeFormatError: If the code is malformed
        AlreadyPremiumError: If the user already holds a code
        InvalidActivationCodeError: If the code cannot be activated
    """
    block = get_block_status(user=user)
    if block['is_blocked']:
        raise ActivationBlockedError(
            f"Trop de tentatives. Réessayez dans {block['remaining_hours']}h ou contactez le support.",
            remaining_hours=block['remaining_hours'],
        )

    normalized = normalize_activation_code(code)
    if not is_valid_activation_code(normalized):
        raise InvalidCodeFormatError(
            "Format de code invalide. Format attendu: SOLVIX-XXXXXXXX"
        )

    with transaction.atomic():
        # Serialize activations of the same user
        User.objects.select_for_update().get(pk=user.pk)

        if is_premium_user(user=user):
            raise AlreadyPremiumError("Premium est déjà actif sur ce compte")

        activation = (
            ActivationCode.objects
            .select_for_update()
            .filter(code=normalized, status__in=[CodeStatus.SOLD, CodeStatus.AVAILABLE])
            .first()
        )
        if activation is not None:
            activation.status = CodeStatus.USED
            activation.activated_at = timezone.now()
            activation.activated_by = user
            activation.device_fingerprint = device_fingerprint or ''
            activation.save(update_fields=[
                'status', 'activated_at', 'activated_by', 'device_fingerprint',
            ])

    if activation is None:
        block = record_failed_attempt(user=user)
        logger.warning(
            "Failed activation attempt %d for user %s", block['attempts'], user.id
        )
        if block['is_blocked']:
            raise ActivationBlockedError(
                "Trop de tentatives incorrectes. Accès bloqué pendant 24h.",
                remaining_hours=block['remaining_hours'],
            )
        raise InvalidActivationCodeError(
            f"Code invalide ou déjà utilisé. "
            f"{block['remaining_attempts']} tentatives restantes.",
            remaining_attempts=block['remaining_attempts'],
        )

    clear_attempts(user=user)
    logger.info("Premium activated for user %s with code %s", user.id, activation.masked_code)
    return activation


@transaction.atomic
def revoke_activation_code(*, code: str, revoked_by: User, reason: str = '') -> ActivationCode:
    """
    Revoke a code; a USED code stops granting premium to its holder.

    Raises:
        InsufficientPermissionsError: If revoked_by is not an admin
        CodeNotFoundError: If the code does not exist
        InvalidCodeTransitionError: If the code is already revoked
    """
    _require_admin(revoked_by)

    activation = _get_locked_code(code)
    if activation.status == CodeStatus.REVOKED:
        raise InvalidCodeTransitionError(f"Code {activation.code} is already revoked")

    previous_status = activation.status
    activation.status = CodeStatus.REVOKED
    activation.revoked_at = timezone.now()
    activation.revoked_by = revoked_by
    activation.revocation_reason = (reason or '').strip()
    activation.save(update_fields=['status', 'revoked_at', 'revoked_by', 'revocation_reason'])

    logger.info("Activation code %s revoked (was %s)", activation.code, previous_status)
    return activation


def get_activation_code_stats() -> dict:
    """Number of codes per status and in total."""
    return ActivationCode.objects.aggregate(
        total=Count('id'),
        available=Count('id', filter=Q(status=CodeStatus.AVAILABLE)),
        sold=Count('id', filter=Q(status=CodeStatus.SOLD)),
        used=Count('id', filter=Q(status=CodeStatus.USED)),
        revoked=Count('id', filter=Q(status=CodeStatus.REVOKED)),
    )


def list_activation_codes(
    *,
    search: Optional[str] = None,
    status: Optional[str] = None,
    sort_by: str = 'date',
    direction: str = 'desc'
) -> QuerySet:
    """
    Admin listing of codes.

    Args:
        search: Case-insensitive match on the code or customer contact
        status: Restrict to one CodeStatus
        sort_by: 'date', 'status' or 'code'
        direction: 'asc' or 'desc'
    """
    queryset = ActivationCode.objects.select_related('activated_by')

    if search:
        term = search.strip()
        queryset = queryset.filter(
            Q(code__icontains=term) | Q(customer_contact__icontains=term)
        )

    if status:
        queryset = queryset.filter(status=status)

    field = ORDERING_FIELDS.get(sort_by, 'created_at')
    if direction != 'asc':
        field = f"-{field}"

    return queryset.order_by(field)


def export_activation_codes_csv(*, codes) -> str:
    """Render codes as CSV for the admin export."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow([
        'Code', 'Statut', 'Créé le', 'Vendu le', 'Client', 'Contact', 'Activé le', 'Révoqué le',
    ])

    for code in codes:
        writer.writerow([
            code.code,
            code.status,
            code.created_at.isoformat() if code.created_at else '',
            code.sold_at.isoformat() if code.sold_at else '',
            code.customer_name,
            code.customer_contact,
            code.activated_at.isoformat() if code.activated_at else '',
            code.revoked_at.isoformat() if code.revoked_at else '',
        ])

    return buffer.getvalue()
