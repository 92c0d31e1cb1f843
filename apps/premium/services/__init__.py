"""Services for premium licensing and quota."""

from .exceptions import (
    PremiumServiceError,
    InsufficientPermissionsError,
    InvalidBatchSizeError,
    InvalidCodeFormatError,
    CodeNotFoundError,
    InvalidCodeTransitionError,
    CustomerContactRequiredError,
    InvalidActivationCodeError,
    ActivationBlockedError,
    AlreadyPremiumError,
    QuotaExceededError,
    PremiumTemplateError,
)
from .status import get_active_code, is_premium_user, get_premium_status
from .lockout import get_block_status, record_failed_attempt, clear_attempts
from .fingerprint import compute_device_fingerprint, fingerprint_from_request
from .codes import (
    generate_activation_codes,
    mark_code_as_sold,
    activate_premium_code,
    revoke_activation_code,
    get_activation_code_stats,
    list_activation_codes,
    export_activation_codes_csv,
)
from .quota import (
    get_user_quota_info,
    can_create_quote,
    increment_user_quota,
    consume_quote_slot,
)
from .templates import (
    FREE_TEMPLATES,
    PREMIUM_TEMPLATES,
    is_premium_template,
    check_template_access,
)

__all__ = [
    # Exceptions
    'PremiumServiceError',
    'InsufficientPermissionsError',
    'InvalidBatchSizeError',
    'InvalidCodeFormatError',
    'CodeNotFoundError',
    'InvalidCodeTransitionError',
    'CustomerContactRequiredError',
    'InvalidActivationCodeError',
    'ActivationBlockedError',
    'AlreadyPremiumError',
    'QuotaExceededError',
    'PremiumTemplateError',
    # Status
    'get_active_code',
    'is_premium_user',
    'get_premium_status',
    # Lockout
    'get_block_status',
    'record_failed_attempt',
    'clear_attempts',
    # Fingerprint
    'compute_device_fingerprint',
    'fingerprint_from_request',
    # Activation codes
    'generate_activation_codes',
    'mark_code_as_sold',
    'activate_premium_code',
    'revoke_activation_code',
    'get_activation_code_stats',
    'list_activation_codes',
    'export_activation_codes_csv',
    # Quota
    'get_user_quota_info',
    'can_create_quote',
    'increment_user_quota',
    'consume_quote_slot',
    # Templates
    'FREE_TEMPLATES',
    'PREMIUM_TEMPLATES',
    'is_premium_template',
    'check_template_access',
]
