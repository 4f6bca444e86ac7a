"""
Input Cleaning Module

Normalizes user input and externally parsed recipe data before storage.
Output is JSON, so text is kept literal rather than HTML-escaped.
"""

import re
from urllib.parse import urlparse

_CONTROL_CHARS_RE = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')
_ALL_CONTROL_CHARS_RE = re.compile(r'[\x00-\x1f\x7f-\x9f]')


def clean_text(text, max_length=10000):
    """
    Strip control characters (newlines and tabs survive) and surrounding
    whitespace, then truncate.

    Returns '' for None.
    """
    if text is None:
        return ''
    if not isinstance(text, str):
        text = str(text)
    text = _CONTROL_CHARS_RE.sub('', text).strip()
    return text[:max_length]


def clean_name(name, max_length=200):
    """Single-line name: no control characters, whitespace collapsed."""
    if name is None:
        return ''
    if not isinstance(name, str):
        name = str(name)
    name = _ALL_CONTROL_CHARS_RE.sub(' ', name)
    name = re.sub(r'\s+', ' ', name).strip()
    return name[:max_length]


def clean_optional(text, max_length=10000):
    """Like clean_text, but blank input becomes None."""
    cleaned = clean_text(text, max_length)
    return cleaned or None


def sanitize_url(url, max_length=500):
    """
    Return the URL if it is http(s), otherwise None.

    Rejects javascript:, data: and other schemes that could execute when
    rendered as a link.
    """
    if not url or not isinstance(url, str):
        return None
    url = url.strip()
    if len(url) > max_length:
        return None
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    if parsed.scheme.lower() not in ('http', 'https') or not parsed.netloc:
        return None
    return url


def to_int(value, default=None, min_val=None, max_val=None):
    """Safely parse an integer with optional bounds."""
    if value is None or value == '' or isinstance(value, bool):
        return default
    try:
        result = int(value)
    except (ValueError, TypeError):
        return default
    if min_val is not None:
        result = max(min_val, result)
    if max_val is not None:
        result = min(max_val, result)
    return result
