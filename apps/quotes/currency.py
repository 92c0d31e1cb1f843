"""
Currencies a quote can be issued in, and how amounts are printed.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import NamedTuple, Optional


class Currency(NamedTuple):
    code: str
    name: str
    symbol: str
    position: str  # 'before' or 'after' the number
    decimals: int
    thousands_separator: str
    decimal_separator: str


CURRENCIES = (
    Currency('EUR', 'Euro', '€', 'after', 2, ' ', ','),
    Currency('USD', 'Dollar américain', '$', 'before', 2, ',', '.'),
    Currency('XAF', 'Franc CFA', 'FCFA', 'after', 0, ' ', ','),
    Currency('GBP', 'Livre sterling', '£', 'before', 2, ',', '.'),
    Currency('CHF', 'Franc suisse', 'CHF', 'after', 2, ' ', '.'),
    Currency('CAD', 'Dollar canadien', 'CAD', 'before', 2, ',', '.'),
    Currency('JPY', 'Yen japonais', '¥', 'before', 0, ',', '.'),
    Currency('CNY', 'Yuan chinois', '¥', 'before', 2, ',', '.'),
    Currency('MAD', 'Dirham marocain', 'MAD', 'after', 2, ' ', ','),
    Currency('TND', 'Dinar tunisien', 'TND', 'after', 3, ' ', ','),
)

CURRENCIES_BY_CODE = {currency.code: currency for currency in CURRENCIES}
SUPPORTED_CURRENCIES = frozenset(CURRENCIES_BY_CODE)


def get_currency(code: str) -> Optional[Currency]:
    return CURRENCIES_BY_CODE.get(code)


def is_supported_currency(code: str) -> bool:
    return code in CURRENCIES_BY_CODE


def _group_thousands(digits: str, separator: str) -> str:
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return separator.join(groups)


def format_currency(amount, code: str) -> str:
    """
    Format ``amount`` the way quotes print it.

    >>> format_currency(Decimal('1234.5'), 'EUR')
    '1 234,50 €'
    >>> format_currency(1234.5, 'USD')
    '$1,234.50'

    Unknown currency codes fall back to the bare number.
    """
    currency = CURRENCIES_BY_CODE.get(code)
    if currency is None:
        return str(amount)

    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        return str(amount)

    exponent = Decimal(1).scaleb(-currency.decimals)
    value = value.quantize(exponent, rounding=ROUND_HALF_UP)

    sign = '-' if value < 0 else ''
    integer_part, _, decimal_part = f"{abs(value):f}".partition('.')

    number = _group_thousands(integer_part, currency.thousands_separator)
    if currency.decimals > 0 and decimal_part:
        number += currency.decimal_separator + decimal_part

    if currency.position == 'before':
        return f"{sign}{currency.symbol}{number}"
    return f"{sign}{number} {currency.symbol}"
