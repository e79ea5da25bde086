"""Helper utilities shared by the mapping service, DAOs and entry points.

Functions:
    is_valid_url(url) -> bool
        Check that a string is a syntactically valid absolute URL
    utc_now() -> datetime
        Current UTC time truncated to millisecond precision
    to_iso8601(dt) -> str
        Serialize a datetime as an ISO-8601 UTC string ending in 'Z'
    from_iso8601(value) -> datetime
        Parse an ISO-8601 string into a timezone-aware UTC datetime
    ttl_seconds(expires_at, now) -> int
        Remaining lifetime in whole seconds, rounded up
    get_short_url(shortcode, base_url) -> str
        Get string representation of short URL for a given shortcode
    require_environment(*names) -> Callable
        Decorator ensuring required environment variables are set

Example:
    >>> from ephemurl.utils.helpers import is_valid_url, ttl_seconds
    >>> is_valid_url('https://example.com/a')
    True
    >>> is_valid_url('not-a-url')
    False
    >>> ttl_seconds(expires_at, now)  # 1.2 seconds left
    2
"""

import os
import math
import functools
from datetime import datetime, UTC
from urllib.parse import urlsplit
from collections.abc import Callable

from ephemurl.exceptions import MissingEnvironmentVariableError


def is_valid_url(url: str) -> bool:
    """Check whether a string is a syntactically valid absolute URL

    An absolute URL needs both a scheme and a network location, e.g.
    'https://example.com/a'. Relative references ('/a', 'example.com') and
    bare words ('not-a-url') are rejected. No network access is performed.

    Args:
        url (str): candidate URL

    Returns:
        bool: True if the URL is absolute and well formed, False otherwise.
    """
    if not isinstance(url, str) or not url or url != url.strip():
        return False
    try:
        components = urlsplit(url)
        # Accessing .port validates the port range and raises on garbage
        components.port
    except ValueError:
        return False
    return bool(components.scheme) and bool(components.netloc) and bool(components.hostname)


def utc_now() -> datetime:
    """Return the current UTC time truncated to millisecond precision.

    Persisted timestamps only carry milliseconds, so truncating up front
    keeps in-memory models equal to their stored form.

    Example:
        >>> utc_now()
        datetime.datetime(2026, 10, 16, 12, 0, 0, 123000, tzinfo=datetime.timezone.utc)
    """
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def to_iso8601(dt: datetime) -> str:
    """Serialize a datetime as 'YYYY-MM-DDTHH:MM:SS.sssZ' in UTC."""
    # fmt: off
    return dt.astimezone(UTC) \
             .isoformat(timespec='milliseconds') \
             .replace('+00:00', 'Z')
    # fmt: on


def from_iso8601(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into a timezone-aware UTC datetime.

    Naive timestamps are assumed to be UTC.

    Raises:
        ValueError: If the value is not a valid ISO-8601 timestamp.
    """
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def ttl_seconds(expires_at: datetime, now: datetime) -> int:
    """Return the remaining lifetime between now and expires_at in seconds

    Fractions of a second are rounded up so a key never expires in the data
    store before the mapping's own deadline.

    Args:
        expires_at (datetime): mapping deadline
        now (datetime): reference time

    Returns:
        int: remaining whole seconds (may be <= 0 if the deadline has passed)

    Example:
        >>> ttl_seconds(datetime(2026, 1, 3, tzinfo=UTC), datetime(2026, 1, 1, tzinfo=UTC))
        172800
    """
    return math.ceil((expires_at - now).total_seconds())


def get_short_url(shortcode: str, base_url: str | None) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        base_url (str | None): public base URL of the redirect endpoint

    Returns:
        str: short url string representation, or the bare shortcode when no
             base URL is configured
    """
    if not base_url:
        return shortcode
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
        >>> @require_environment('REDIS_HOST')
        ... def redis_host():
        ...     return os.environ['REDIS_HOST']
        >>> redis_host()
        MissingEnvironmentVariableError: Missing required environment variables: 'REDIS_HOST'
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
