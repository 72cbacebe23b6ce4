"""Helper utilities shared by the services and the registry backends.

Functions:
    utcnow() -> datetime
        Default clock: current timezone-aware UTC time
    expiration_time(created_at: datetime, minutes: int) -> datetime
        Add a lifetime in minutes, saturating at datetime.max
    get_short_url(shortcode: str, base_url: str) -> str
        Get string representation of short URL for a given shortcode
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present

Example:
    >>> from linkshortener.utils.helpers import get_short_url
    >>> get_short_url('abc123', 'https://sho.rt/')
    'https://sho.rt/abc123'
"""

import os
import functools
from datetime import datetime, timedelta, UTC
from collections.abc import Callable

from linkshortener.exceptions import MissingEnvironmentVariableError


type Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Return the current moment as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def expiration_time(created_at: datetime, minutes: int) -> datetime:
    """Return `created_at` plus `minutes`, capped at the latest representable datetime.

    Lifetimes reaching past year 9999 saturate instead of raising OverflowError.

    Example:
        >>> expiration_time(datetime(2026, 10, 19, tzinfo=UTC), 10**12)
        datetime.datetime(9999, 12, 31, 23, 59, 59, 999999, tzinfo=datetime.timezone.utc)
    """
    try:
        return created_at + timedelta(minutes=minutes)
    except OverflowError:
        return datetime.max.replace(tzinfo=created_at.tzinfo)


def get_short_url(shortcode: str, base_url: str) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        base_url (str): public base URL of the service, with or without trailing slash

    Returns:
        str: short url string representation
    """
    return f'{base_url.rstrip("/")}/{shortcode}'


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator
