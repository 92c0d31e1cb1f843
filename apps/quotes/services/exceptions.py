"""Domain-specific exceptions for quote services."""


class QuotesServiceError(Exception):
    """Base exception for quote services."""
    pass


class QuoteNotFoundError(QuotesServiceError):
    """Raised when a quote does not exist or belongs to another user."""
    pass


class InvalidQuoteDataError(QuotesServiceError):
    """Raised when quote header or lines are invalid."""
    pass


class QuoteNumberConflictError(QuotesServiceError):
    """Raised when no free quote number could be allocated."""
    pass


class QuoteShareError(QuotesServiceError):
    """Raised when a quote could not be shared."""
    pass
