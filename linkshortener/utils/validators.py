"""Input validation for shorten requests.

Functions:
    is_valid_url(url) -> bool
        True if `url` is an absolute URL with a scheme and an authority.
    normalize_alias(alias) -> str | None
        Strip a custom alias, returning None when nothing is left.
    is_valid_alias(alias) -> bool
        True if `alias` is 1-15 alphanumeric characters.
    duration_minutes(value, default=30) -> int
        Interpret a caller supplied link lifetime in minutes.
"""

import re
import math
from typing import Any
from urllib.parse import urlsplit

from linkshortener.utils.constants import ALIAS_PATTERN, DEFAULT_DURATION_MINUTES


_ALIAS_RE = re.compile(ALIAS_PATTERN)
_LEADING_INT_RE = re.compile(r'[+-]?[0-9]+')


def is_valid_url(url: Any) -> bool:
    """Check that `url` parses as an absolute URL (scheme + authority).

    Surrounding whitespace is ignored and whitespace in the path, query or
    fragment is accepted. The authority must
    not contain whitespace.

    Example:
        >>> is_valid_url('https://example.com/page?q=1')
        True
        >>> is_valid_url('not a url')
        False
        >>> is_valid_url('example.com')
        False
    """
    if not isinstance(url, str):
        return False
    try:
        parts = urlsplit(url.strip())
        # .port raises ValueError for out of range or non-numeric ports
        parts.port
    except ValueError:
        return False
    if any(c.isspace() for c in parts.netloc):
        return False
    return bool(parts.scheme) and bool(parts.hostname)


def normalize_alias(alias: str | None) -> str | None:
    if alias is None:
        return None
    alias = alias.strip()
    return alias or None


def is_valid_alias(alias: str) -> bool:
    return _ALIAS_RE.fullmatch(alias) is not None


def duration_minutes(value: Any, default: int = DEFAULT_DURATION_MINUTES) -> int:
    """Interpret a link lifetime in minutes, falling back to `default`.

    Integers are taken as-is, floats are truncated and strings are read up to
    the first non-digit (" 15 min" -> 15). Anything else, and any result that
    is not strictly positive, yields `default`.

    Example:
        >>> duration_minutes(5)
        5
        >>> duration_minutes('90')
        90
        >>> duration_minutes('abc')
        30
        >>> duration_minutes(-4)
        30
    """
    minutes = None
    if isinstance(value, bool):
        minutes = None
    elif isinstance(value, int):
        minutes = value
    elif isinstance(value, float):
        minutes = int(value) if math.isfinite(value) else None
    elif isinstance(value, str):
        match = _LEADING_INT_RE.match(value.strip())
        minutes = int(match.group()) if match else None

    if minutes is None or minutes <= 0:
        return default
    return minutes
