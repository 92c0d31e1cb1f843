"""Domain-specific exceptions for premium services."""


class PremiumServiceError(Exception):
    """Base exception for premium services."""
    pass


class InsufficientPermissionsError(PremiumServiceError):
    """Raised when a non-admin manages activation codes."""
    pass


class InvalidBatchSizeError(PremiumServiceError):
    """Raised when generating fewer than 1 or more than 100 codes."""
    pass


class InvalidCodeFormatError(PremiumServiceError):
    """Raised when a code does not look like SOLVIX-XXXXXXXX."""
    pass


class CodeNotFoundError(PremiumServiceError):
    """Raised when an activation code does not exist."""
    pass


class InvalidCodeTransitionError(PremiumServiceError):
    """Raised when a code is not in a state allowing the operation."""
    pass


class CustomerContactRequiredError(PremiumServiceError):
    """Raised when selling a code without a customer contact."""
    pass


class InvalidActivationCodeError(PremiumServiceError):
    """Raised when activation fails on an unknown, used or revoked code."""

    def __init__(self, message, remaining_attempts):
        super().__init__(message)
        self.remaining_attempts = remaining_attempts


class ActivationBlockedError(PremiumServiceError):
    """Raised when too many activation attempts failed recently."""

    def __init__(self, message, remaining_hours):
        super().__init__(message)
        self.remaining_hours = remaining_hours


class AlreadyPremiumError(PremiumServiceError):
    """Raised when a premium user activates a second code."""
    pass


class QuotaExceededError(PremiumServiceError):
    """Raised when a free user has used up the monthly quota."""
    pass


class PremiumTemplateError(PremiumServiceError):
    """Raised when a free user picks a premium-only template."""
    pass
