"""
Quote management service.

A quote header and its lines are always written in one transaction, and
totals are recomputed from the lines on every write. Every lookup is
scoped to the owner.
"""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction, IntegrityError
from django.db.models import Q, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.clients.services import get_client, find_or_create_client
from apps.core.sanitizers import sanitize_input
from apps.notifications.services import notify_new_quote, notify_status_change
from apps.premium.services import consume_quote_slot, check_template_access
from apps.profiles.services import get_or_create_profile
from apps.quotes.currency import is_supported_currency
from apps.quotes.models import Devis, ArticleDevis, QuoteStatus, QuoteTemplate

from .exceptions import QuoteNotFoundError, InvalidQuoteDataError, QuoteNumberConflictError
from .numbering import generate_quote_number
from .totals import compute_totals, line_total, to_decimal

logger = logging.getLogger(__name__)

# Days back from today for each date filter
DATE_RANGES = {
    'week': 7,
    'month': 30,
    'quarter': 90,
}

ORDERING_FIELDS = {
    'quote_number': 'quote_number',
    'client': 'client__name',
    'date_creation': 'date_creation',
    'date_expiration': 'date_expiration',
    'subtotal_ht': 'subtotal_ht',
    'total_ttc': 'total_ttc',
    'status': 'status',
    'created_at': 'created_at',
}

HEADER_FIELDS = ('date_creation', 'date_expiration', 'currency', 'template', 'notes', 'status')

# Largest amount the 14-digit money columns can store
MAX_AMOUNT = Decimal('999999999999.99')

_UNSET = object()


# =============================================================================
# Lines
# =============================================================================

def prepare_items(items: Iterable[dict], *, default_vat_rate: Decimal) -> list:
    """
    Normalize raw lines: blank designations are dropped and a missing VAT
    rate falls back to ``default_vat_rate``.

    Raises:
        InvalidQuoteDataError: On negative amounts, a VAT rate outside 0..100
            or totals too large to be stored
    """
    prepared = []
    subtotal = Decimal('0')
    for item in items:
        designation = sanitize_input(item.get('designation', ''))
        if not designation:
            continue

        quantity = to_decimal(item.get('quantity'), Decimal('1'))
        unit_price = to_decimal(item.get('unit_price'))
        vat_rate = item.get('vat_rate')
        vat_rate = default_vat_rate if vat_rate is None else to_decimal(vat_rate)

        if quantity < 0 or unit_price < 0:
            raise InvalidQuoteDataError(f"Montants négatifs interdits: {designation}")
        if not Decimal('0') <= vat_rate <= Decimal('100'):
            raise InvalidQuoteDataError(f"Taux de TVA invalide: {vat_rate}")

        total = line_total(quantity, unit_price)
        subtotal += total
        if total > MAX_AMOUNT or subtotal > MAX_AMOUNT:
            raise InvalidQuoteDataError(f"Montant trop élevé: {designation}")

        prepared.append({
            'designation': designation[:500],
            'quantity': quantity,
            'unit_price': unit_price,
            'vat_rate': vat_rate,
        })

    if compute_totals(prepared).total_ttc > MAX_AMOUNT:
        raise InvalidQuoteDataError("Montant total trop élevé")
    return prepared


def _write_items(devis: Devis, items: list, *, vat_enabled: bool) -> None:
    """Replace the quote's lines and set its totals. The caller saves the quote."""
    devis.articles.all().delete()
    ArticleDevis.objects.bulk_create([
        ArticleDevis(
            devis=devis,
            designation=item['designation'],
            quantity=item['quantity'],
            unit_price=item['unit_price'],
            vat_rate=item['vat_rate'],
            total_ht=line_total(item['quantity'], item['unit_price']),
            order_index=index,
        )
        for index, item in enumerate(items)
    ])

    totals = compute_totals(items, vat_enabled=vat_enabled)
    devis.subtotal_ht = totals.subtotal_ht
    devis.total_vat = totals.total_vat
    devis.total_ttc = totals.total_ttc


# =============================================================================
# Validation helpers
# =============================================================================

def _check_currency(currency: str) -> str:
    currency = (currency or '').upper()
    if not is_supported_currency(currency):
        raise InvalidQuoteDataError(f"Devise non prise en charge: {currency}")
    return currency


def _check_status(status: str) -> str:
    if status not in QuoteStatus.values:
        raise InvalidQuoteDataError(f"Statut invalide: {status}")
    return status


def _check_template(user: User, template: str) -> str:
    if template not in QuoteTemplate.values:
        raise InvalidQuoteDataError(f"Modèle inconnu: {template}")
    check_template_access(user=user, template=template)
    return template


def _check_dates(date_creation: date, date_expiration: date) -> None:
    if date_expiration < date_creation:
        raise InvalidQuoteDataError("La date d'expiration précède la date de création")


def _resolve_client(user: User, client_id: Optional[UUID], client_data: Optional[dict]):
    if client_id:
        return get_client(client_id=client_id, user=user)
    if client_data and (client_data.get('name') or '').strip():
        data = dict(client_data)
        return find_or_create_client(user=user, name=data.pop('name'), **data)
    return None


def _create_numbered_quote(*, user: User, max_retries: int = 5, **fields) -> Devis:
    """Insert a quote under the next free number, retrying on collision."""
    for attempt in range(max_retries):
        quote_number = generate_quote_number(user=user)
        try:
            with transaction.atomic():
                return Devis.objects.create(user=user, quote_number=quote_number, **fields)
        except IntegrityError:
            logger.warning(
                "Quote number %s already taken for user %s (attempt %d)",
                quote_number, user.id, attempt + 1,
            )

    raise QuoteNumberConflictError("Impossible d'attribuer un numéro de devis")


# =============================================================================
# Queries
# =============================================================================

def get_user_quotes(
    *,
    user: User,
    search: Optional[str] = None,
    status: Optional[str] = None,
    date_range: Optional[str] = None,
    ordering: Optional[str] = None,
) -> QuerySet:
    """
    List the user's quotes.

    Args:
        user: Owner
        search: Case-insensitive match on number, client name or company
        status: Stored status value
        date_range: today, week, month or quarter, on the creation date
        ordering: One of ORDERING_FIELDS, '-' prefixed for descending

    Returns:
        QuerySet of Devis
    """
    queryset = Devis.objects.filter(user=user).select_related('client')

    if search:
        term = search.strip()
        queryset = queryset.filter(
            Q(quote_number__icontains=term) |
            Q(client__name__icontains=term) |
            Q(client__company__icontains=term)
        )

    if status:
        queryset = queryset.filter(status=status)

    today = timezone.localdate()
    if date_range == 'today':
        queryset = queryset.filter(date_creation=today)
    elif date_range in DATE_RANGES:
        queryset = queryset.filter(date_creation__gte=today - timedelta(days=DATE_RANGES[date_range]))

    if ordering:
        descending = ordering.startswith('-')
        field = ORDERING_FIELDS.get(ordering.lstrip('-'))
        if field:
            return queryset.order_by(f"-{field}" if descending else field, '-created_at')

    return queryset.order_by('-created_at')


def get_quote(*, quote_id: UUID, user: User) -> Devis:
    """
    Raises:
        QuoteNotFoundError: If the quote is missing or not owned by user
    """
    try:
        return (
            Devis.objects
            .select_related('client')
            .prefetch_related('articles')
            .get(id=quote_id, user=user)
        )
    except Devis.DoesNotExist:
        raise QuoteNotFoundError(f"Devis {quote_id} introuvable")


def _lock_quote(quote_id: UUID, user: User) -> Devis:
    try:
        return Devis.objects.select_for_update().select_related('client').get(id=quote_id, user=user)
    except Devis.DoesNotExist:
        raise QuoteNotFoundError(f"Devis {quote_id} introuvable")


# =============================================================================
# Commands
# =============================================================================

def create_quote(
    *,
    user: User,
    items: Iterable[dict],
    client_id: Optional[UUID] = None,
    client_data: Optional[dict] = None,
    currency: Optional[str] = None,
    template: str = QuoteTemplate.CLASSIC,
    notes: str = '',
    status: str = QuoteStatus.DRAFT,
    date_creation: Optional[date] = None,
    date_expiration: Optional[date] = None,
) -> Devis:
    """
    Create a quote with its lines.

    The monthly quota is checked and counted under a row lock in the same
    transaction, so a rejected or failed creation consumes nothing.

    Args:
        user: Owner
        items: Lines with designation, quantity, unit_price and optional vat_rate
        client_id: Existing client of the user
        client_data: Inline client, reused by exact name or created
        currency: Defaults to the profile currency
        template: Free templates for everyone, the others for premium users
        notes: Free text printed under the totals
        status: Initial status, draft by default
        date_creation: Defaults to today
        date_expiration: Defaults to date_creation + SOLVIX_QUOTE_VALIDITY_DAYS

    Returns:
        The created Devis

    Raises:
        QuotaExceededError: If a free user has used the month's quota
        PremiumTemplateError: If a free user picks a premium template
        ClientNotFoundError: If client_id is not one of the user's clients
        InvalidQuoteDataError: On invalid currency, status, dates or lines
    """
    profile = get_or_create_profile(user=user)

    template = _check_template(user, template)
    status = _check_status(status)
    currency = _check_currency(currency or profile.default_currency)

    date_creation = date_creation or timezone.localdate()
    date_expiration = date_expiration or date_creation + timedelta(days=settings.SOLVIX_QUOTE_VALIDITY_DAYS)
    _check_dates(date_creation, date_expiration)

    prepared = prepare_items(items, default_vat_rate=profile.effective_vat_rate)

    with transaction.atomic():
        consume_quote_slot(user=user)

        client = _resolve_client(user, client_id, client_data)
        devis = _create_numbered_quote(
            user=user,
            client=client,
            date_creation=date_creation,
            date_expiration=date_expiration,
            currency=currency,
            template=template,
            notes=sanitize_input(notes),
            status=status,
        )

        _write_items(devis, prepared, vat_enabled=profile.vat_enabled)
        devis.save(update_fields=['subtotal_ht', 'total_vat', 'total_ttc', 'updated_at'])

        notify_new_quote(devis)

    logger.info("Quote %s created for user %s", devis.quote_number, user.id)
    return devis


@transaction.atomic
def update_quote(
    *,
    quote_id: UUID,
    user: User,
    items: Optional[Iterable[dict]] = None,
    client_id=_UNSET,
    client_data: Optional[dict] = None,
    **fields
) -> Devis:
    """
    Update a quote header and, when ``items`` is given, replace its lines.

    Passing ``client_id=None`` detaches the client.

    Raises:
        QuoteNotFoundError: If the quote is missing or not owned by user
        PremiumTemplateError: If a free user switches to a premium template
        InvalidQuoteDataError: On invalid currency, status, dates or lines
    """
    devis = _lock_quote(quote_id, user)
    old_status = devis.status

    fields = {name: value for name, value in fields.items() if name in HEADER_FIELDS and value is not None}
    if 'template' in fields and fields['template'] != devis.template:
        _check_template(user, fields['template'])
    if 'status' in fields:
        _check_status(fields['status'])
    if 'currency' in fields:
        fields['currency'] = _check_currency(fields['currency'])
    if 'notes' in fields:
        fields['notes'] = sanitize_input(fields['notes'])

    for name, value in fields.items():
        setattr(devis, name, value)
    _check_dates(devis.date_creation, devis.date_expiration)

    if client_data:
        devis.client = _resolve_client(user, None, client_data)
    elif client_id is not _UNSET:
        devis.client = _resolve_client(user, client_id, None)

    if items is not None:
        profile = get_or_create_profile(user=user)
        prepared = prepare_items(items, default_vat_rate=profile.effective_vat_rate)
        _write_items(devis, prepared, vat_enabled=profile.vat_enabled)

    devis.save()

    if devis.status != old_status:
        notify_status_change(devis, old_status, devis.status)

    return devis


@transaction.atomic
def change_quote_status(*, quote_id: UUID, user: User, status: str) -> Devis:
    """
    Move a quote to ``status``; setting the current status is a no-op.

    Raises:
        QuoteNotFoundError: If the quote is missing or not owned by user
        InvalidQuoteDataError: If the status is unknown
    """
    _check_status(status)
    devis = _lock_quote(quote_id, user)

    old_status = devis.status
    if old_status == status:
        return devis

    devis.status = status
    devis.save(update_fields=['status', 'updated_at'])
    notify_status_change(devis, old_status, status)

    logger.info("Quote %s moved from %s to %s", devis.quote_number, old_status, status)
    return devis


@transaction.atomic
def delete_quote(*, quote_id: UUID, user: User) -> None:
    """
    Delete a quote and its lines. The month's quota is not given back.

    Raises:
        QuoteNotFoundError: If the quote is missing or not owned by user
    """
    deleted, _ = Devis.objects.filter(id=quote_id, user=user).delete()
    if not deleted:
        raise QuoteNotFoundError(f"Devis {quote_id} introuvable")


def duplicate_quote(*, quote_id: UUID, user: User) -> Devis:
    """
    Copy a quote as a new draft dated today, with a new number.

    The copy counts against the quota like any new quote.
    """
    source = get_quote(quote_id=quote_id, user=user)
    items = [
        {
            'designation': article.designation,
            'quantity': article.quantity,
            'unit_price': article.unit_price,
            'vat_rate': article.vat_rate,
        }
        for article in source.articles.all()
    ]

    return create_quote(
        user=user,
        items=items,
        client_id=source.client_id,
        currency=source.currency,
        template=source.template,
        notes=source.notes,
        status=QuoteStatus.DRAFT,
    )
