"""Utility functions for application configuration management.

Configuration is read from environment variables once, by the process entry
point, and handed to the components that need it. Nothing in the library
reads the environment on first use.

The assembled configuration has this structure:

    {
        "redis": {
            "url": "redis://localhost:6379/0",     # only when REDIS_URL is set
            "host": "localhost",
            "port": 6379,
            "db": 0,
            "username": None,
            "password": None,
            "socket_timeout": None
        },
        "service": {
            "lifetime": timedelta(hours=48),
            "max_attempts": 10,
            "code_length": 5
        },
        "base_url": None
    }

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    load_config() -> dict
        Assemble Redis, service and presentation settings from the environment.

Example:
    Typical usage inside an entry point:

        >>> from ephemurl.utils.config import load_config, app_prefix
        >>> config = load_config()
        >>> redis_config = {f'redis_{k}': v for k, v in config['redis'].items()}
        >>> dao = MappingRedisDAO(**redis_config, prefix=app_prefix())
        >>> service = MappingService(dao, **config['service'])
"""

import os
import logging
from datetime import timedelta

from ephemurl.exceptions import BadConfigurationError
from ephemurl.utils.helpers import require_environment
from ephemurl.utils.constants import (
    APP_ENV_ENV,
    APP_NAME_ENV,
    REDIS_URL_ENV,
    REDIS_HOST_ENV,
    REDIS_PORT_ENV,
    REDIS_DB_ENV,
    REDIS_USERNAME_ENV,
    REDIS_PASSWORD_ENV,
    REDIS_SOCKET_TIMEOUT_ENV,
    LINK_LIFETIME_HOURS_ENV,
    SHORTCODE_LENGTH_ENV,
    MAX_CODE_ATTEMPTS_ENV,
    BASE_URL_ENV,
    DEFAULT_LINK_LIFETIME,
    DEFAULT_MAX_CODE_ATTEMPTS,
    DEFAULT_SHORTCODE_LENGTH,
)


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(APP_ENV_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'ephemurl'
        >>> app_name()
        'ephemurl'
    """
    return os.environ.get(APP_NAME_ENV) or None


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'ephemurl'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'ephemurl:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _env_number(name: str, default: int | float | None, cast: type, minimum: int | float | None = None) -> int | float | None:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default

    try:
        value = cast(raw)
    except ValueError as e:
        raise BadConfigurationError(f"Environment variable '{name}' must be a number (given value: '{raw}').") from e

    if minimum is not None and value < minimum:
        raise BadConfigurationError(f"Environment variable '{name}' must be >= {minimum} (given value: {value}).")
    return value


@require_environment(REDIS_HOST_ENV)
def _deployed_redis_host() -> str:
    return os.environ[REDIS_HOST_ENV]


def _redis_host() -> str:
    # Outside local development Redis must be configured explicitly
    if app_env() == 'local' or os.environ.get(REDIS_URL_ENV):
        return os.environ.get(REDIS_HOST_ENV) or 'localhost'
    return _deployed_redis_host()


def load_config() -> dict:
    """Load configuration for the mapping service from the environment

    Environment variables used:
        REDIS_URL                      – Redis connection URL; overrides host/port/db/credentials.
        REDIS_HOST, REDIS_PORT         – Redis server (default: localhost:6379).
                                         REDIS_HOST is required outside APP_ENV=local unless REDIS_URL is set.
        REDIS_DB                       – Redis database index (default: 0).
        REDIS_USERNAME, REDIS_PASSWORD – Optional Redis ACL credentials.
        REDIS_SOCKET_TIMEOUT           – Optional socket timeout in seconds.
        EPHEMURL_LINK_LIFETIME_HOURS   – Mapping lifetime and renewal step (default: 48).
        EPHEMURL_SHORTCODE_LENGTH      – Generated short code length (default: 5).
        EPHEMURL_MAX_CODE_ATTEMPTS     – Candidate codes tried per create (default: 10).
        EPHEMURL_BASE_URL              – Optional public base URL for printing short URLs.

    Returns:
        dict: configuration with 'redis', 'service' and 'base_url' sections.

    Raises:
        BadConfigurationError:
            If a numeric variable is not a number or is out of range.
        MissingEnvironmentVariableError:
            If REDIS_HOST and REDIS_URL are both unset outside local development.

    Example:
        >>> os.environ['REDIS_HOST'] = 'redis.internal'
        >>> load_config()['redis']['host']
        'redis.internal'
    """
    redis_config = {
        'host': _redis_host(),
        'port': _env_number(REDIS_PORT_ENV, 6379, int, minimum=1),
        'db': _env_number(REDIS_DB_ENV, 0, int, minimum=0),
        'username': os.environ.get(REDIS_USERNAME_ENV) or None,
        'password': os.environ.get(REDIS_PASSWORD_ENV) or None,
        'socket_timeout': _env_number(REDIS_SOCKET_TIMEOUT_ENV, None, float, minimum=0.0),
    }
    if os.environ.get(REDIS_URL_ENV):
        redis_config['url'] = os.environ[REDIS_URL_ENV]

    lifetime_hours = _env_number(LINK_LIFETIME_HOURS_ENV, None, float, minimum=0.0)
    if lifetime_hours == 0:
        raise BadConfigurationError(f"Environment variable '{LINK_LIFETIME_HOURS_ENV}' must be positive.")

    service_config = {
        'lifetime': DEFAULT_LINK_LIFETIME if lifetime_hours is None else timedelta(hours=lifetime_hours),
        'max_attempts': _env_number(MAX_CODE_ATTEMPTS_ENV, DEFAULT_MAX_CODE_ATTEMPTS, int, minimum=1),
        'code_length': _env_number(SHORTCODE_LENGTH_ENV, DEFAULT_SHORTCODE_LENGTH, int, minimum=1),
    }

    logger.debug(
        'Loaded configuration from environment.',
        extra={'redisHost': redis_config['host'], 'redisDb': redis_config['db'], 'prefix': app_prefix()},
    )
    return {
        'redis': redis_config,
        'service': service_config,
        'base_url': os.environ.get(BASE_URL_ENV) or None,
    }
