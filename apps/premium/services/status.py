"""Premium status of a user."""

from typing import Optional

from apps.premium.models import ActivationCode, CodeStatus


def get_active_code(*, user) -> Optional[ActivationCode]:
    """The USED code held by ``user``, if any."""
    if user is None or not user.is_authenticated:
        return None
    return (
        ActivationCode.objects
        .filter(activated_by=user, status=CodeStatus.USED)
        .order_by('-activated_at')
        .first()
    )


def is_premium_user(*, user) -> bool:
    """A user is premium while holding a USED activation code."""
    if user is None or not user.is_authenticated:
        return False
    return ActivationCode.objects.filter(activated_by=user, status=CodeStatus.USED).exists()


def get_premium_status(*, user, device_fingerprint: Optional[str] = None) -> dict:
    """
    Premium information shown in the account settings.

    Only the last 3 characters of the code are exposed.

    Returns:
        Dict with is_active, activated_at, code_suffix and device_match
    """
    code = get_active_code(user=user)
    if code is None:
        return {
            'is_active': False,
            'activated_at': None,
            'code_suffix': None,
            'device_match': False,
        }

    return {
        'is_active': True,
        'activated_at': code.activated_at,
        'code_suffix': code.code[-3:],
        'device_match': bool(device_fingerprint) and device_fingerprint == code.device_fingerprint,
    }
