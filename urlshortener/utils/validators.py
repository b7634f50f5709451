"""Validation utilities for client supplied values."""

import re
import ipaddress
from urllib.parse import urlparse

from urlshortener.utils.shortener import ALPHABET


MAX_URL_LENGTH = 2048
MAX_SHORTCODE_LENGTH = 32

_HOSTNAME_LABEL = re.compile(r'^(?!-)[a-z0-9-]{1,63}(?<!-)$')


def _is_valid_hostname(hostname: str | None) -> bool:
    if not hostname:
        return False
    try:
        ipaddress.ip_address(hostname)
    except ValueError:
        pass
    else:
        return True
    return len(hostname) <= 253 and all(_HOSTNAME_LABEL.match(label) for label in hostname.rstrip('.').split('.'))


def is_valid_url(url: str) -> tuple[bool, str]:
    """Validate a target URL.

    The raw string is stored and later sent back in the redirect's Location
    header, so whitespace and control characters are rejected outright.

    Returns:
        tuple[bool, str]: (is_valid, error_message)

    Example:
        >>> is_valid_url('https://example.com/page')
        (True, '')
        >>> is_valid_url('ftp://example.com')
        (False, 'URL must use http or https protocol')
    """
    if not url or not isinstance(url, str):
        return False, 'URL is required'

    if len(url) > MAX_URL_LENGTH:
        return False, f'URL is too long (max {MAX_URL_LENGTH} characters)'

    if any(c.isspace() or ord(c) < 32 or ord(c) == 127 for c in url):
        return False, 'URL must not contain whitespace or control characters'

    try:
        result = urlparse(url)
        result.port  # raises ValueError on a malformed port
    except ValueError as e:
        return False, f'Invalid URL format: {e}'

    if result.scheme not in ('http', 'https'):
        return False, 'URL must use http or https protocol'
    if not _is_valid_hostname(result.hostname):
        return False, 'URL must have a valid domain'

    return True, ''


def is_valid_shortcode(shortcode: str, max_length: int = MAX_SHORTCODE_LENGTH) -> bool:
    """Return True if `shortcode` could have been issued by generate_shortcode()."""
    return isinstance(shortcode, str) and 0 < len(shortcode) <= max_length and all(c in ALPHABET for c in shortcode)
