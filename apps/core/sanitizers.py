"""
Input sanitizing shared by every app.

Free text coming from the front-end is stripped of markup and clamped
before it reaches a model or a PDF.
"""

from django.utils.html import strip_tags

MAX_INPUT_LENGTH = 1000


def sanitize_input(value):
    """Return ``value`` trimmed, without HTML tags, at most 1000 chars."""
    if not isinstance(value, str):
        return ''
    return strip_tags(value.strip())[:MAX_INPUT_LENGTH]
