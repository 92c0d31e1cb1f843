"""Services for quotes."""

from .exceptions import (
    QuotesServiceError,
    QuoteNotFoundError,
    InvalidQuoteDataError,
    QuoteNumberConflictError,
    QuoteShareError,
)
from .totals import QuoteTotals, line_total, line_vat, compute_totals
from .numbering import generate_quote_number
from .quote_management import (
    prepare_items,
    get_user_quotes,
    get_quote,
    create_quote,
    update_quote,
    change_quote_status,
    delete_quote,
    duplicate_quote,
)
from .statistics import get_dashboard_stats
from .pdf_export import render_quote_pdf, pdf_filename
from .sharing import share_quote_by_email, whatsapp_share_url

__all__ = [
    # Exceptions
    'QuotesServiceError',
    'QuoteNotFoundError',
    'InvalidQuoteDataError',
    'QuoteNumberConflictError',
    'QuoteShareError',
    # Totals
    'QuoteTotals',
    'line_total',
    'line_vat',
    'compute_totals',
    # Quotes
    'generate_quote_number',
    'prepare_items',
    'get_user_quotes',
    'get_quote',
    'create_quote',
    'update_quote',
    'change_quote_status',
    'delete_quote',
    'duplicate_quote',
    # Statistics
    'get_dashboard_stats',
    # Export and sharing
    'render_quote_pdf',
    'pdf_filename',
    'share_quote_by_email',
    'whatsapp_share_url',
]
