"""Device fingerprint bound to an activated code."""

import hashlib

FINGERPRINT_LENGTH = 32


def compute_device_fingerprint(
    *,
    user_agent: str = '',
    screen_width='',
    screen_height='',
    language: str = '',
    timezone_name: str = '',
) -> str:
    """
    Stable 32-character digest of the device hints.

    The same hints always give the same fingerprint.
    """
    raw = '|'.join(
        str(part) for part in (user_agent, screen_width, screen_height, language, timezone_name)
    )
    return hashlib.sha256(raw.encode('utf-8')).hexdigest()[:FINGERPRINT_LENGTH]


def fingerprint_from_request(request, hints=None) -> str:
    """
    Fingerprint of the calling device.

    ``hints`` are the values the front-end reads from the browser
    (user_agent, screen_width, screen_height, language, timezone);
    missing ones fall back to request headers.
    """
    hints = hints or {}
    meta = request.META
    accept_language = meta.get('HTTP_ACCEPT_LANGUAGE', '')

    return compute_device_fingerprint(
        user_agent=hints.get('user_agent') or meta.get('HTTP_USER_AGENT', ''),
        screen_width=hints.get('screen_width', ''),
        screen_height=hints.get('screen_height', ''),
        language=hints.get('language') or accept_language.split(',')[0].strip(),
        timezone_name=hints.get('timezone') or meta.get('HTTP_X_TIMEZONE', ''),
    )
