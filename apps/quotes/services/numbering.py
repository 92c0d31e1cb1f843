import re
from typing import Optional

from django.utils import timezone

from apps.accounts.models import User
from apps.quotes.models import Devis

QUOTE_NUMBER_PREFIX = 'DEV'


def parse_sequence(quote_number: str, year: int) -> Optional[int]:
    """Sequence part of ``DEV-<year>-<n>``, or None for other formats."""
    match = re.fullmatch(rf'{QUOTE_NUMBER_PREFIX}-{year}-(\d+)', quote_number or '')
    return int(match.group(1)) if match else None


def format_quote_number(year: int, sequence: int) -> str:
    return f'{QUOTE_NUMBER_PREFIX}-{year}-{sequence:03d}'


def generate_quote_number(*, user: User, year: Optional[int] = None) -> str:
    """
    Next quote number of the user for ``year``.

    Numbers compare numerically, so DEV-2025-1000 follows DEV-2025-999.
    """
    year = year or timezone.localdate().year
    numbers = (
        Devis.objects
        .filter(user=user, quote_number__startswith=f'{QUOTE_NUMBER_PREFIX}-{year}-')
        .values_list('quote_number', flat=True)
    )
    sequences = [s for s in (parse_sequence(n, year) for n in numbers) if s is not None]
    return format_quote_number(year, max(sequences, default=0) + 1)
