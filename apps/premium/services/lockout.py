"""
Brute-force protection of code activation.

Each user has at most one record ``{timestamp, attempts}`` in the cache.
Every failed attempt rewrites the timestamp; the user is blocked while
attempts >= MAX_ATTEMPTS and less than BLOCK_HOURS have passed since the
last failure. An older record is dropped.
"""

import math
import time
from typing import Optional

from django.conf import settings
from django.core.cache import cache

BLOCK_KEY_PREFIX = 'solvix_activation_block'


def _max_attempts() -> int:
    return settings.SOLVIX_ACTIVATION_MAX_ATTEMPTS


def _block_seconds() -> int:
    return settings.SOLVIX_ACTIVATION_BLOCK_HOURS * 3600


def block_key(user_id) -> str:
    return f"{BLOCK_KEY_PREFIX}:{user_id}"


def get_block_status(*, user, now: Optional[float] = None) -> dict:
    """
    Current lockout state of ``user``.

    Returns:
        Dict with is_blocked, attempts, remaining_attempts and
        remaining_hours (hours left, rounded up, 0 when not blocked)
    """
    now = time.time() if now is None else now
    key = block_key(user.id)
    record = cache.get(key)
    attempts = 0
    remaining_hours = 0

    if record:
        hours_since = (now - record['timestamp']) / 3600
        window_hours = _block_seconds() / 3600

        if hours_since >= window_hours:
            cache.delete(key)
        else:
            attempts = record['attempts']
            if attempts >= _max_attempts():
                remaining_hours = math.ceil(window_hours - hours_since)

    return {
        'is_blocked': remaining_hours > 0,
        'attempts': attempts,
        'remaining_attempts': max(0, _max_attempts() - attempts),
        'remaining_hours': remaining_hours,
    }


def record_failed_attempt(*, user, now: Optional[float] = None) -> dict:
    """Count one failed activation and return the new lockout state."""
    now = time.time() if now is None else now
    attempts = get_block_status(user=user, now=now)['attempts'] + 1

    cache.set(
        block_key(user.id),
        {'timestamp': now, 'attempts': attempts},
        timeout=_block_seconds(),
    )
    return get_block_status(user=user, now=now)


def clear_attempts(*, user) -> None:
    cache.delete(block_key(user.id))
