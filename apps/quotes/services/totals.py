"""
Quote arithmetic.

Every line total is rounded to the cent; VAT is summed unrounded and
rounded once, so the subtotal is exactly the sum of the line totals and
the total is exactly subtotal plus VAT.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Iterable, Mapping, NamedTuple

CENT = Decimal('0.01')
ZERO = Decimal('0')


class QuoteTotals(NamedTuple):
    subtotal_ht: Decimal
    total_vat: Decimal
    total_ttc: Decimal


def to_decimal(value, default: Decimal = ZERO) -> Decimal:
    """Coerce input numbers; None and garbage become ``default``."""
    if value is None or value == '':
        return default
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default


def quantize(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(quantity, unit_price) -> Decimal:
    """Total excluding tax of one line, rounded to the cent."""
    return quantize(to_decimal(quantity) * to_decimal(unit_price))


def line_vat(total_ht, vat_rate) -> Decimal:
    """Unrounded VAT of one line."""
    return to_decimal(total_ht) * to_decimal(vat_rate) / Decimal('100')


def compute_totals(items: Iterable[Mapping], vat_enabled: bool = True) -> QuoteTotals:
    """
    Totals of a quote.

    Args:
        items: Mappings with quantity, unit_price and vat_rate
        vat_enabled: False when the issuer does not charge VAT

    Returns:
        QuoteTotals(subtotal_ht, total_vat, total_ttc)
    """
    subtotal = ZERO
    vat = ZERO

    for item in items:
        total_ht = line_total(item.get('quantity'), item.get('unit_price'))
        subtotal += total_ht
        if vat_enabled:
            vat += line_vat(total_ht, item.get('vat_rate'))

    subtotal = quantize(subtotal)
    vat = quantize(vat)
    return QuoteTotals(subtotal, vat, subtotal + vat)
