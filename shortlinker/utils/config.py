"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to
access configuration data stored in **AWS AppConfig**. Each environment
(`APP_ENV`) has a dedicated AppConfig *Environment* within the shared
AppConfig *Application* identified by `APP_NAME`. Configuration data is
stored as a JSON document under a configuration profile and deployed to
the corresponding environment.

The configuration JSON follows this structure:

    {
        "build": 42,
        "active_backend": "redis",
        "configs": {
            "shorten_url": {
                "redis": {"host": "...", "port": 6379, "db": 0, "socket_timeout": 2.5},
                "engine": {"atomic_writes": false}
            },
            "redirect_url": { ... },
            "shortlink_info": { ... }
        }
    }

Each Lambda loads its own section (e.g., `"shorten_url"`) from this
AppConfig document. When running locally (SAM or plain `APP_ENV=local`),
the same structure is built from `REDIS_*` environment variables instead.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    load_config(lambda_name: str) -> dict
        Load configuration for a given Lambda and return it as a Python
        dictionary: {"redis": {...}, "engine": {...}}.

Example:
    Typical usage inside a Lambda handler:

        >>> from shortlinker.utils.config import load_config
        >>> config = load_config('shorten_url')
        >>> print(config['redis']['host'])
        redis-15501.host.docker.internal
"""

import os
import json
import functools
import logging
from collections.abc import Callable
from typing import Any

import boto3

from shortlinker.constants import ENV
from shortlinker.exceptions import BadConfigurationError
from shortlinker.utils.helpers import require_environment
from shortlinker.utils.runtime import env_flag, running_locally


logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = frozenset({'redis'})


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
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'shortlinker'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'shortlinker:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _local_config_from_environment() -> dict[str, Any]:
    """Build the lambda configuration from REDIS_* environment variables"""
    # fmt: off
    casts = {
        'host':           (ENV.Redis.HOST, str),
        'port':           (ENV.Redis.PORT, int),
        'db':             (ENV.Redis.DB, int),
        'username':       (ENV.Redis.USERNAME, str),
        'password':       (ENV.Redis.PASSWORD, str),
        'socket_timeout': (ENV.Redis.SOCKET_TIMEOUT, float),
    }
    # fmt: on

    redis_config = {}
    for option, (name, cast) in casts.items():
        raw = os.environ.get(name)
        if raw is None:
            continue
        try:
            redis_config[option] = cast(raw)
        except ValueError as e:
            raise BadConfigurationError(f'Invalid value for {name} (given value: {raw!r}).') from e

    atomic_writes = env_flag(ENV.App.ATOMIC_WRITES)
    return {'redis': redis_config, 'engine': {'atomic_writes': atomic_writes}}


def _extract_lambda_config(document: dict[str, Any], lambda_name: str) -> dict[str, Any]:
    """Select the active backend's configuration for one lambda from an AppConfig document"""
    try:
        backend = document['active_backend']
        lambda_config = document['configs'][lambda_name]
        backend_config = lambda_config[backend]
    except (KeyError, TypeError) as e:
        raise BadConfigurationError(f"AppConfig document has no '{lambda_name}' configuration for the active backend.") from e

    if backend not in SUPPORTED_BACKENDS:
        raise BadConfigurationError(f'Unsupported backend {backend!r} (supported: {sorted(SUPPORTED_BACKENDS)}).')

    return {backend: backend_config, 'engine': lambda_config.get('engine', {})}


def _load_local_config(func: Callable[[str], dict]) -> Callable[[str], dict]:
    """Decorator: build the configuration from environment variables when running locally

    Behavior:
        - If the application is running locally, read `REDIS_HOST`, `REDIS_PORT`,
          `REDIS_DB`, `REDIS_USERNAME`, `REDIS_PASSWORD`, `REDIS_SOCKET_TIMEOUT`
          and `SHORTLINKER_ATOMIC_WRITES`. Unset variables fall back to defaults.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Args:
        func (Callable[[str], dict]):
            load_config()

    Returns:
        Callable[[str], dict]:
            A compatible function with load_config() which prefers the local
            environment when running locally.
    """

    @functools.wraps(func)
    def wrapper(lambda_name: str, *args, **kwargs) -> dict:
        if not running_locally():
            return func(lambda_name, *args, **kwargs)

        config = _local_config_from_environment()
        logger.debug('Loaded configuration from local environment.', extra={'lambdaName': lambda_name})
        return config

    return wrapper


@_load_local_config
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> dict:
    """Load configuration for a given Lambda from AWS AppConfig

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'shorten_url', 'redirect_url').

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "shorten_url" or "redirect_url").

    Returns:
        dict: {"redis": {...}, "engine": {...}} for the requested lambda.

    Raises:
        MissingEnvironmentVariableError:
            If a required environment variable is missing.
        BadConfigurationError:
            If the AppConfig document is malformed or selects an unsupported backend.

    Example:
        >>> app_config = load_config('shorten_url')
        >>> app_config['redis']['host']
        'redis-15501.host.docker.internal'
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    try:
        document = json.loads(content.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BadConfigurationError('AppConfig document is not valid JSON.') from e

    data = _extract_lambda_config(document, lambda_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
    return data
