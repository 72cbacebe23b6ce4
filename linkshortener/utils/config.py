"""Utility functions for application configuration management.

Configuration is a single JSON document. In deployed environments it is
stored in **AWS AppConfig** (one AppConfig *Environment* per `APP_ENV`), when
running locally it is assembled from defaults and environment variables.

The configuration JSON follows this structure:

    {
        "active_backend": "redis",
        "base_url": "https://sho.rt",
        "default_duration_minutes": 30,
        "shortcode_length": 6,
        "redis": {
            "host": "redis.internal",
            "port": 6379,
            "db": 0
        }
    }

Missing keys are filled in with defaults, so an AppConfig document only needs
to carry what differs from them. Keys of the "redis" section are passed to
RedisClientMixin as `redis_<key>`, so "url", "username", "password" and
"socket_timeout" are accepted as well.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    default_config() -> dict
        Return the configuration used when nothing overrides it.

    load_config() -> dict
        Load the configuration document. Locally, from environment variables,
        otherwise from AWS AppConfig.

Example:
    >>> from linkshortener.utils.config import load_config
    >>> config = load_config()
    >>> config['active_backend']
    'memory'
"""

import os
import json
import copy
import functools
import logging
from collections.abc import Callable

import boto3

from linkshortener.exceptions import BadConfigurationError
from linkshortener.utils.helpers import require_environment
from linkshortener.utils.runtime import running_locally
from linkshortener.utils.constants import (
    APP_ENV_ENV,
    APP_NAME_ENV,
    BASE_URL_ENV,
    ACTIVE_BACKEND_ENV,
    REDIS_HOST_ENV,
    REDIS_PORT_ENV,
    REDIS_DB_ENV,
    APPCONFIG_APP_ID_ENV,
    APPCONFIG_ENV_ID_ENV,
    APPCONFIG_PROFILE_ID_ENV,
    DEFAULT_BASE_URL,
    DEFAULT_DURATION_MINUTES,
    SHORTCODE_LENGTH,
    MEMORY_BACKEND,
    SUPPORTED_BACKENDS,
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
    """
    return os.environ.get(APP_NAME_ENV)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'linkshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'linkshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def default_config() -> dict:
    return {
        'active_backend': MEMORY_BACKEND,
        'base_url': DEFAULT_BASE_URL,
        'default_duration_minutes': DEFAULT_DURATION_MINUTES,
        'shortcode_length': SHORTCODE_LENGTH,
        'redis': {
            'host': 'localhost',
            'port': 6379,
            'db': 0,
        },
    }


def merge_defaults(document: dict) -> dict:
    """Fill missing keys of `document` with defaults and validate the backend."""
    config = default_config()
    for key, value in document.items():
        if isinstance(value, dict) and isinstance(config.get(key), dict):
            config[key] = {**config[key], **value}
        else:
            config[key] = copy.deepcopy(value)

    if config['active_backend'] not in SUPPORTED_BACKENDS:
        raise BadConfigurationError(
            f"Unsupported backend '{config['active_backend']}' (expected one of: {', '.join(sorted(SUPPORTED_BACKENDS))})."
        )
    return config


def _load_local_config(func: Callable[[], dict]) -> Callable[[], dict]:
    """Decorator: build the configuration from environment variables when running locally

    Behavior:
        - If the application is running locally, read overrides from the
          environment and merge them over the defaults.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        BASE_URL       : Public base URL of short links.
        ACTIVE_BACKEND : 'memory' (default) or 'redis'.
        REDIS_HOST, REDIS_PORT, REDIS_DB: Redis connection parameters.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> dict:
        if not running_locally():
            return merge_defaults(func(*args, **kwargs))

        document = {}
        if os.getenv(BASE_URL_ENV):
            document['base_url'] = os.environ[BASE_URL_ENV]
        if os.getenv(ACTIVE_BACKEND_ENV):
            document['active_backend'] = os.environ[ACTIVE_BACKEND_ENV].lower()

        redis_config = {}
        if os.getenv(REDIS_HOST_ENV):
            redis_config['host'] = os.environ[REDIS_HOST_ENV]
        try:
            if os.getenv(REDIS_PORT_ENV):
                redis_config['port'] = int(os.environ[REDIS_PORT_ENV])
            if os.getenv(REDIS_DB_ENV):
                redis_config['db'] = int(os.environ[REDIS_DB_ENV])
        except ValueError as e:
            raise BadConfigurationError(f'Redis port and db must be integers ({e}).') from e
        if redis_config:
            document['redis'] = redis_config

        logger.debug('Loaded configuration from local environment.', extra={'appEnv': app_env()})
        return merge_defaults(document)

    return wrapper


@_load_local_config
@require_environment(APPCONFIG_APP_ID_ENV, APPCONFIG_ENV_ID_ENV, APPCONFIG_PROFILE_ID_ENV)
def load_config() -> dict:
    """Load the application configuration from AWS AppConfig

    Environment variables required:
        APPCONFIG_APP_ID      : AppConfig Application ID
        APPCONFIG_ENV_ID      : AppConfig Environment ID
        APPCONFIG_PROFILE_ID  : AppConfig Configuration Profile ID

    Returns:
        dict: The configuration document as a Python dictionary.

    Raises:
        MissingEnvironmentVariableError:
            If an AppConfig identifier is not set.
        BadConfigurationError:
            If the document names an unsupported backend.

    Example:
        >>> app_config = load_config()
        >>> app_config['redis']['host']
        'redis.internal'
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.')

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[APPCONFIG_APP_ID_ENV],
        EnvironmentIdentifier=os.environ[APPCONFIG_ENV_ID_ENV],
        ConfigurationProfileIdentifier=os.environ[APPCONFIG_PROFILE_ID_ENV],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    config = json.loads(content.decode('utf-8'))

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'build': config.get('build')})
    return config
