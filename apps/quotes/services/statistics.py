from decimal import Decimal, ROUND_HALF_UP

from django.db.models import Count, Sum
from django.utils import timezone

from apps.accounts.models import User
from apps.profiles.services import get_or_create_profile
from apps.quotes.models import Devis, QuoteStatus


def conversion_rate(accepted: int, non_draft: int) -> int:
    """Accepted quotes as a whole percentage of the quotes that left draft."""
    rate = Decimal(accepted) * 100 / max(1, non_draft)
    return int(rate.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def get_dashboard_stats(*, user: User) -> dict:
    """
    Dashboard figures of a user.

    Revenue sums the accepted quotes' totals as-is, whatever their
    currency, and is reported in the profile's default currency.

    Returns:
        Dict with total_quotes, quotes_this_month, by_status, revenue,
        currency, active_clients, conversion_rate
    """
    quotes = Devis.objects.filter(user=user)
    today = timezone.localdate()

    by_status = {status: 0 for status in QuoteStatus.values}
    for row in quotes.values('status').annotate(count=Count('id')):
        by_status[row['status']] = row['count']

    total = sum(by_status.values())
    accepted = by_status[QuoteStatus.ACCEPTED]
    non_draft = total - by_status[QuoteStatus.DRAFT]

    revenue = (
        quotes
        .filter(status=QuoteStatus.ACCEPTED)
        .aggregate(total=Sum('total_ttc'))['total']
    ) or Decimal('0.00')

    return {
        'total_quotes': total,
        'quotes_this_month': quotes.filter(
            date_creation__year=today.year,
            date_creation__month=today.month,
        ).count(),
        'by_status': by_status,
        'revenue': revenue,
        'currency': get_or_create_profile(user=user).default_currency,
        'active_clients': quotes.exclude(client=None).values('client').distinct().count(),
        'conversion_rate': conversion_rate(accepted, non_draft),
    }
